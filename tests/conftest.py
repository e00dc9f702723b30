"""
conftest.py
-----------
Shared pytest fixtures for bannerdb tests.

Provides fixtures for:
- Database setup and teardown on a temporary SQLite file
- Sessions and managers bound to one transaction
- A seeded two-banner dataset
"""
import pytest
from pathlib import Path
from tempfile import TemporaryDirectory


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_db_path(tmp_dir):
    """Create temporary test database path."""
    return tmp_dir / "test.db"


@pytest.fixture
def test_db_url(test_db_path):
    """SQLAlchemy URL of the temporary database."""
    return f"sqlite:///{test_db_path}"


# ----- Database Fixtures -----

@pytest.fixture
def test_db(test_db_url):
    """
    Create test database instance with schema.

    Returns a BannerDB instance with an initialized schema and no logger.
    Connections are disposed after the test.
    """
    from bannerdb.database import BannerDB

    db = BannerDB(test_db_url)
    db.initialize_schema()

    yield db

    db.dispose()


@pytest.fixture
def logged_db(test_db_url, tmp_dir):
    """BannerDB writing logs under a temporary directory."""
    from bannerdb.database import BannerDB

    db = BannerDB(test_db_url, log_dir=tmp_dir / "logs", env="prod")
    db.initialize_schema()

    yield db

    db.dispose()


@pytest.fixture
def db_session(test_db):
    """
    Create a database session for tests.

    The session's work is committed when the test returns normally.
    """
    with test_db.session_scope() as session:
        yield session


# ----- Manager Fixtures -----

@pytest.fixture
def banner_manager(db_session):
    """Create BannerManager instance for tests."""
    from bannerdb.database.managers import BannerManager
    return BannerManager(db_session)


@pytest.fixture
def banner_resolver(db_session):
    """Create BannerResolver instance for tests."""
    from bannerdb.database.managers import BannerResolver
    return BannerResolver(db_session)


@pytest.fixture
def cascade_deleter(db_session):
    """Create CascadeDeleter instance for tests."""
    from bannerdb.database.managers import CascadeDeleter
    return CascadeDeleter(db_session)


# ----- Data Fixtures -----

@pytest.fixture
def seeded_db(test_db):
    """
    Database holding two banners:

    - A: feature 1, tags {10, 20}
    - B: feature 2, tags {10}

    Returns:
        (db, ids) where ids maps "A" and "B" to banner ids
    """
    a = test_db.create_banner({"content": "banner A"}, feature_id=1, tag_ids=[10, 20])
    b = test_db.create_banner({"content": "banner B"}, feature_id=2, tag_ids=[10])
    return test_db, {"A": a, "B": b}
