# catalog/sa/models/inventory.py
from sqlalchemy import Integer, String, ForeignKey, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base

class InventoryItem(Base):
    """Inventory row placing an edition in a storage location (department)."""
    __tablename__ = 'ebook_inv'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    edition_id: Mapped[int] = mapped_column('ebook_id', ForeignKey('ebook.id'), nullable=False)
    location: Mapped[str | None] = mapped_column('lib_depart_name', String, nullable=True)

    # Relationships
    edition = relationship('Edition', back_populates='inventory')

    __table_args__ = (
        Index('idx_ebook_inv_ebook_id', 'ebook_id'),
    )
