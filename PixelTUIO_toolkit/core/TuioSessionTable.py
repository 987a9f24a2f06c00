#!/usr/bin/env python
# -*- coding: utf-8 -*-

import logging
import threading

from PixelTUIO_toolkit.core.TuioEntities import TuioCursor, TuioObject

logger = logging.getLogger(__name__)


class TuioSessionTable:
    """ TuioSessionTable

        Holds all currently alive TUIO cursors and objects, each mapped by their session ID.

        Cursors and objects are guarded by two independent locks, so a cursor update never waits for an object update
        and vice versa. Whoever builds TUIO messages from the table has to hold the matching lock for the whole
        read pass (see TUIOServer).

        Adding an ID that is already present, updating an unknown ID or deleting an unknown ID are no-ops. They are
        expected to happen when input and frame processing race each other and are not treated as errors.
    """

    def __init__(self):
        self.cursors = {}
        self.objects = {}

        self.cursor_lock = threading.Lock()
        self.object_lock = threading.Lock()

    def add_cursor(self, session_id, location):
        with self.cursor_lock:
            if session_id not in self.cursors:
                self.cursors[session_id] = TuioCursor(session_id, location)
                logger.debug('Added cursor %s at %s', session_id, location)

    def update_cursor(self, session_id, location):
        with self.cursor_lock:
            cursor = self.cursors.get(session_id)
            if cursor is not None:
                cursor.location = location

    def delete_cursor(self, session_id):
        with self.cursor_lock:
            if self.cursors.pop(session_id, None) is not None:
                logger.debug('Removed cursor %s', session_id)

    def add_object(self, session_id, class_id, location, orientation):
        with self.object_lock:
            if session_id not in self.objects:
                self.objects[session_id] = TuioObject(session_id, class_id, location, orientation)
                logger.debug('Added object %s (class %s) at %s', session_id, class_id, location)

    # The class ID of an object is fixed, the argument is accepted so that add and update can be called the same way
    def update_object(self, session_id, class_id, location, orientation):
        with self.object_lock:
            tuio_object = self.objects.get(session_id)
            if tuio_object is not None:
                tuio_object.location = location
                tuio_object.orientation = orientation

    def delete_object(self, session_id):
        with self.object_lock:
            if self.objects.pop(session_id, None) is not None:
                logger.debug('Removed object %s', session_id)

    # Read access for status and diagnostics. Returns copies, so callers never see a half updated entry.
    def get_cursor_ids(self):
        with self.cursor_lock:
            return list(self.cursors.keys())

    def get_object_ids(self):
        with self.object_lock:
            return list(self.objects.keys())

    def get_cursor(self, session_id):
        with self.cursor_lock:
            cursor = self.cursors.get(session_id)
            return cursor.copy() if cursor is not None else None

    def get_object(self, session_id):
        with self.object_lock:
            tuio_object = self.objects.get(session_id)
            return tuio_object.copy() if tuio_object is not None else None
