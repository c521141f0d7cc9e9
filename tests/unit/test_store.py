"""
Unit tests for store location and connection lifecycle.

Tests cover:
- Path construction under the storage root
- Injectivity and rejection of unvalidated identifiers
- Lazy creation on open
- Connection release on normal and failing exits
- StoreUnavailableError for environment failures
"""

import sqlite3
import tempfile
from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from sqlegend.errors import InvalidIdentifierError, StoreUnavailableError
from sqlegend.store import StoreLocator, open_store


class TestStoreLocator:
    """Tests for StoreLocator."""

    @pytest.fixture
    def data_dir(self):
        """Create temporary data directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            yield tmpdir

    @pytest.fixture
    def locator(self, data_dir):
        return StoreLocator(data_dir)

    def test_locate_is_direct_child(self, locator):
        """Store file sits directly under the root."""
        path = locator.locate("deadbeef")

        assert path.parent == locator.storage_root
        assert path.name == "deadbeef.db"

    def test_locate_is_deterministic(self, locator):
        assert locator.locate("abc123") == locator.locate("abc123")

    def test_distinct_identifiers_distinct_paths(self, locator):
        """Different identifiers never share a file."""
        paths = {locator.locate(i) for i in ["a", "aa", "a0", "0a", "A", "ab"]}
        assert len(paths) == 6

    @pytest.mark.parametrize("bad", ["", "..", "../x", "a/b", "a\\b", "x.db", "a\x00"])
    def test_locate_rejects_invalid(self, locator, bad):
        """Unvalidated identifiers never produce a path."""
        with pytest.raises(InvalidIdentifierError):
            locator.locate(bad)

    def test_locate_does_not_create_files(self, locator):
        """Locating is pure path arithmetic."""
        path = locator.locate("cafe")
        assert not path.exists()

    def test_root_is_absolute(self):
        """Relative roots are resolved once at construction."""
        locator = StoreLocator("relative/data")
        assert locator.storage_root.is_absolute()

    def test_ensure_root_creates_directory(self, data_dir):
        root = Path(data_dir) / "nested" / "data"
        locator = StoreLocator(root)

        locator.ensure_root()
        assert root.is_dir()

        # Second call is a no-op
        locator.ensure_root()
        assert root.is_dir()


@given(value=st.text())
def test_property_located_paths_stay_under_root(value):
    """Property: any string that locates lands directly under the root."""
    locator = StoreLocator("/srv/sqlegend-data")
    try:
        path = locator.locate(value)
    except InvalidIdentifierError:
        return
    assert path.parent == locator.storage_root
    assert ".." not in path.parts


class TestOpenStore:
    """Tests for open_store."""

    @pytest.fixture
    def data_dir(self):
        """Create temporary data directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            yield Path(tmpdir)

    def test_creates_missing_store(self, data_dir):
        """Opening an absent store creates it."""
        location = data_dir / "abc.db"

        with open_store(location) as conn:
            conn.execute("CREATE TABLE t (x INT)")

        assert location.exists()

    def test_reopen_sees_data(self, data_dir):
        """Writes persist across connections."""
        location = data_dir / "abc.db"

        with open_store(location) as conn:
            conn.execute("CREATE TABLE t (x INT)")
            conn.execute("INSERT INTO t VALUES (7)")

        with open_store(location) as conn:
            assert conn.execute("SELECT x FROM t").fetchall() == [(7,)]

    def test_closes_on_normal_exit(self, data_dir):
        with open_store(data_dir / "abc.db") as conn:
            pass

        with pytest.raises(sqlite3.ProgrammingError):
            conn.execute("SELECT 1")

    def test_closes_on_exception(self, data_dir):
        """Connection is released even when the block raises."""
        with pytest.raises(RuntimeError):
            with open_store(data_dir / "abc.db") as conn:
                raise RuntimeError("boom")

        with pytest.raises(sqlite3.ProgrammingError):
            conn.execute("SELECT 1")

    def test_autocommit(self, data_dir):
        """Writes are visible to other connections without commit()."""
        location = data_dir / "abc.db"

        with open_store(location) as writer:
            writer.execute("CREATE TABLE t (x INT)")
            writer.execute("INSERT INTO t VALUES (1)")
            with open_store(location) as reader:
                assert reader.execute("SELECT COUNT(*) FROM t").fetchone() == (1,)

    def test_wal_mode(self, data_dir):
        location = data_dir / "abc.db"

        with open_store(location, wal_mode=True) as conn:
            mode = conn.execute("PRAGMA journal_mode").fetchone()[0]

        assert mode == "wal"

    def test_missing_root_is_unavailable(self, data_dir):
        """A storage root that does not exist is an environment failure."""
        location = data_dir / "missing" / "abc.db"

        with pytest.raises(StoreUnavailableError) as exc_info:
            with open_store(location):
                pass

        assert exc_info.value.location == str(location)
        assert not location.exists()

    def test_non_database_file_is_unavailable(self, data_dir):
        location = data_dir / "abc.db"
        location.write_bytes(b"this is not a sqlite database, just some bytes" * 4)

        with pytest.raises(StoreUnavailableError):
            with open_store(location):
                pass
