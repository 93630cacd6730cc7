# catalog/sa/models/edition.py
from sqlalchemy import String, Integer, Text, Index
from sqlalchemy.dialects.postgresql import TSVECTOR
from sqlalchemy.orm import relationship, Mapped, mapped_column
from catalog.config import settings
from .base import Base

columns = settings.columns

class Edition(Base):
    """One catalog record (a printing or circulating copy of a work)."""
    __tablename__ = 'ebook'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str | None] = mapped_column(columns.title, String, nullable=True)
    author: Mapped[str | None] = mapped_column(columns.author, String, nullable=True)
    data_edition: Mapped[str | None] = mapped_column(columns.data_edition, String, nullable=True)
    language: Mapped[str | None] = mapped_column(columns.language, String, nullable=True)
    index_catalogue: Mapped[str | None] = mapped_column(columns.index_catalogue, String, nullable=True)
    volume: Mapped[str | None] = mapped_column(columns.volume, String, nullable=True)
    copy_count: Mapped[str | None] = mapped_column(columns.copy_count, String, nullable=True)
    level_id: Mapped[int | None] = mapped_column('b_level_id', Integer, nullable=True)

    # Derived by the backfill job
    work_key: Mapped[str | None] = mapped_column(String(32), nullable=True)
    title_norm: Mapped[str | None] = mapped_column(Text, nullable=True)
    author_norm: Mapped[str | None] = mapped_column(Text, nullable=True)
    search_tsv: Mapped[str | None] = mapped_column(TSVECTOR().with_variant(Text(), 'sqlite'), nullable=True)

    # Relationships
    inventory = relationship('InventoryItem', back_populates='edition')

    __table_args__ = (
        Index('idx_ebook_work_key', 'work_key'),
        Index('idx_ebook_b_level_id', 'b_level_id'),
    )
