"""
Tests for TuioSessionTable add/update/delete semantics and locking.
"""

import threading

from PixelTUIO_toolkit.core.TuioEntities import TuioCursor, TuioObject
from PixelTUIO_toolkit.core.TuioSessionTable import TuioSessionTable


class TestCursors:
    """Cursor table operations."""

    def test_add_cursor(self):
        """A new cursor is stored under its session ID."""
        table = TuioSessionTable()

        table.add_cursor(5, (0.2, 0.3))

        assert table.get_cursor_ids() == [5]
        assert table.get_cursor(5) == TuioCursor(5, (0.2, 0.3))

    def test_add_existing_cursor_is_ignored(self):
        """Adding an ID twice keeps the first cursor."""
        table = TuioSessionTable()

        table.add_cursor(5, (0.2, 0.3))
        table.add_cursor(5, (0.9, 0.9))

        assert table.get_cursor_ids() == [5]
        assert table.get_cursor(5).location == (0.2, 0.3)

    def test_add_twice_equals_add_once(self):
        """Same ID and location added twice gives the same table as once."""
        once = TuioSessionTable()
        once.add_cursor(1, (0.5, 0.5))

        twice = TuioSessionTable()
        twice.add_cursor(1, (0.5, 0.5))
        twice.add_cursor(1, (0.5, 0.5))

        assert once.cursors == twice.cursors

    def test_update_cursor(self):
        """Update moves an existing cursor."""
        table = TuioSessionTable()
        table.add_cursor(5, (0.2, 0.3))

        table.update_cursor(5, (0.4, 0.6))

        assert table.get_cursor(5).location == (0.4, 0.6)

    def test_update_unknown_cursor_does_not_create(self):
        """Updating an unknown ID is a no-op."""
        table = TuioSessionTable()

        table.update_cursor(5, (0.4, 0.6))

        assert table.get_cursor_ids() == []
        assert table.get_cursor(5) is None

    def test_delete_cursor_is_idempotent(self):
        """Deleting twice or deleting an unknown ID does not fail."""
        table = TuioSessionTable()
        table.add_cursor(5, (0.2, 0.3))

        table.delete_cursor(5)
        table.delete_cursor(5)
        table.delete_cursor(42)

        assert table.get_cursor_ids() == []

    def test_get_cursor_returns_copy(self):
        """Changing a returned cursor does not change the table."""
        table = TuioSessionTable()
        table.add_cursor(5, (0.2, 0.3))

        cursor = table.get_cursor(5)
        cursor.location = (1.0, 1.0)

        assert table.get_cursor(5).location == (0.2, 0.3)


class TestObjects:
    """Object table operations."""

    def test_add_object(self):
        """A new object keeps class ID, location and orientation."""
        table = TuioSessionTable()

        table.add_object(7, 12, (0.5, 0.25), 1.5)

        tuio_object = table.get_object(7)
        assert tuio_object == TuioObject(7, 12, (0.5, 0.25), 1.5)
        assert tuio_object.speed == (0.0, 0.0)
        assert tuio_object.motion_acceleration == 0.0

    def test_update_object_keeps_class_id(self):
        """Class ID is fixed, location and orientation change."""
        table = TuioSessionTable()
        table.add_object(7, 12, (0.5, 0.25), 1.5)

        table.update_object(7, 99, (0.1, 0.2), 3.0)

        tuio_object = table.get_object(7)
        assert tuio_object.class_id == 12
        assert tuio_object.location == (0.1, 0.2)
        assert tuio_object.orientation == 3.0

    def test_update_unknown_object_is_ignored(self):
        """Updating an unknown object does not create it."""
        table = TuioSessionTable()

        table.update_object(7, 12, (0.1, 0.2), 3.0)

        assert table.get_object_ids() == []

    def test_delete_object(self):
        """Delete removes the object, a second delete is a no-op."""
        table = TuioSessionTable()
        table.add_object(7, 12, (0.5, 0.25), 1.5)

        table.delete_object(7)
        table.delete_object(7)

        assert table.get_object_ids() == []

    def test_cursor_and_object_tables_are_independent(self):
        """The same ID may exist in both tables."""
        table = TuioSessionTable()

        table.add_cursor(3, (0.1, 0.1))
        table.add_object(3, 1, (0.2, 0.2), 0.0)
        table.delete_cursor(3)

        assert table.get_cursor_ids() == []
        assert table.get_object_ids() == [3]


class TestLocking:
    """Exclusive access per table."""

    def test_cursor_operations_do_not_wait_for_object_lock(self):
        """A held object lock does not block cursor updates."""
        table = TuioSessionTable()
        done = threading.Event()

        def add_cursor():
            table.add_cursor(1, (0.5, 0.5))
            done.set()

        with table.object_lock:
            thread = threading.Thread(target=add_cursor)
            thread.start()
            assert done.wait(timeout=2)
        thread.join()

        assert table.get_cursor_ids() == [1]

    def test_cursor_lock_blocks_cursor_updates(self):
        """A reader holding the cursor lock sees no change until it releases it."""
        table = TuioSessionTable()
        done = threading.Event()

        def add_cursor():
            table.add_cursor(1, (0.5, 0.5))
            done.set()

        with table.cursor_lock:
            thread = threading.Thread(target=add_cursor)
            thread.start()
            assert not done.wait(timeout=0.2)
            assert len(table.cursors) == 0
        thread.join()

        assert done.is_set()
        assert table.get_cursor_ids() == [1]

    def test_concurrent_add_and_delete(self):
        """Concurrent writers leave a consistent table."""
        table = TuioSessionTable()

        def worker(offset):
            for i in range(200):
                table.add_cursor(offset + i, (0.1, 0.1))
                table.update_cursor(offset + i, (0.2, 0.2))
            for i in range(0, 200, 2):
                table.delete_cursor(offset + i)

        threads = [threading.Thread(target=worker, args=(offset,)) for offset in (0, 1000, 2000)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        cursor_ids = table.get_cursor_ids()
        assert len(cursor_ids) == 300
        assert all(s_id % 2 == 1 for s_id in cursor_ids)
