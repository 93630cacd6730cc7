# tests/conftest.py
import os
import sys
import pytest
from pathlib import Path
from sqlalchemy.sql import text

# Add project root to Python path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from sqlalchemy.orm import Session
from catalog.backfill import CatalogBackfill
from catalog.sa.database import Database
from catalog.sa.models import Base, Edition, InventoryItem

@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory):
    """Create a temporary directory for the test database."""
    test_dir = tmp_path_factory.mktemp("test_db")
    return str(test_dir / "test_catalog.db")

@pytest.fixture(scope="session")
def database(test_db_path):
    """Create a test database instance"""
    db = Database(f"sqlite:///{test_db_path}")

    # Drop all tables and recreate schema
    Base.metadata.drop_all(db.engine)
    Base.metadata.create_all(db.engine)

    yield db

    db.engine.dispose()
    try:
        os.remove(test_db_path)
    except OSError:
        pass

@pytest.fixture(scope="function")
def db_session(database):
    """Create a new database session for a test"""
    session: Session = database.get_session()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture(autouse=True)
def cleanup_db(request):
    """Empty the catalog tables before each test that uses the database"""
    if "database" not in request.fixturenames:
        yield
        return
    db_session = request.getfixturevalue("db_session")
    db_session.execute(text("DELETE FROM ebook_inv"))
    db_session.execute(text("DELETE FROM ebook"))
    db_session.commit()
    yield
    db_session.rollback()

@pytest.fixture
def add_edition(db_session):
    """Factory adding one edition, with optional inventory locations."""
    def _add(id, title, author, locations=(), **fields):
        edition = Edition(id=id, title=title, author=author, **fields)
        db_session.add(edition)
        for location in locations:
            db_session.add(InventoryItem(edition_id=id, location=location))
        db_session.commit()
        return edition
    return _add

@pytest.fixture
def run_backfill(database, db_session):
    """Run the backfill job and refresh the test session afterwards."""
    def _run(batch_size=1000):
        processed = CatalogBackfill(database, batch_size=batch_size).run()
        db_session.expire_all()
        return processed
    return _run

@pytest.fixture
def sample_catalog(add_edition, run_backfill):
    """A small backfilled catalog.

    "Война и мир" by Толстой has four editions (IDs 1, 2, 3, 5), one of them
    (5) in the excluded catalog level.
    """
    add_edition(1, "Война и мир", "Толстой Л.Н.", locations=["Абонемент", "ЧЗ"],
                language="503", data_edition="М.: Эксмо, 2010", index_catalogue="84(2Рос)1", copy_count="2")
    add_edition(2, "Война и мир.", "Толстой Л. Н.", locations=["Абонемент", "Абонемент"], language="999")
    add_edition(3, "Война и мир, издание", "Толстой Л.Н.")
    add_edition(4, "Анна Каренина", "Толстой Л.Н.", locations=["ЧЗ"], language="501")
    add_edition(5, "Война и мир", "Толстой Л.Н.", level_id=5, locations=["Хранилище"])
    add_edition(6, "Ёлка", "Чуковский К.", level_id=1)
    add_edition(7, "Тихий Дон", "Шолохов М.", level_id=2, volume="1", copy_count="3")
    run_backfill()
    return database
