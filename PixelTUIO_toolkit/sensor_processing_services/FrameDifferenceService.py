#!/usr/bin/env python
# -*- coding: utf-8 -*-

import logging

from PixelTUIO_toolkit.sensors.TouchPoint import TouchCursor, TouchTag

logger = logging.getLogger(__name__)


class FrameDifferenceService:
    """ FrameDifferenceService

        Compares the touches of the current polling tick with the ones of the previous tick and translates the
        result into add, update and delete calls on the TUIO server. Every call of process_touches() produces exactly
        one committed TUIO frame, also if no touches were detected.

        An ID is known per kind: an ID that was a cursor in the last frame and is a tag now is removed from the
        cursors and added to the objects within the same frame.
    """

    def __init__(self, tuio_server):
        self.tuio_server = tuio_server

        self.known_cursor_ids = set()
        self.known_object_ids = set()

    def get_known_ids(self):
        return self.known_cursor_ids | self.known_object_ids

    def process_touches(self, touches):
        """ Processes the classified touches (TouchCursor or TouchTag) of one polling tick

            Returns:
                int: The frame ID that was committed
        """
        touches = list(touches)
        for touch in touches:
            if not isinstance(touch, (TouchCursor, TouchTag)):
                raise TypeError('Expected TouchCursor or TouchTag, got {!r}'.format(touch))

        frame_id = self.tuio_server.init_frame()

        # Entries that were put into a shared session table from outside count as known as well
        session_table = self.tuio_server.session_table
        self.known_cursor_ids |= set(session_table.get_cursor_ids())
        self.known_object_ids |= set(session_table.get_object_ids())

        if len(touches) > 0:
            self.apply_touches(touches)
        else:
            self.remove_all()

        self.tuio_server.commit_frame()

        return frame_id

    def apply_touches(self, touches):
        current_cursor_ids = set()
        current_object_ids = set()

        session_table = self.tuio_server.session_table

        # Add or update depends on the session table, which may also be changed by others between two ticks
        for touch in touches:
            if isinstance(touch, TouchCursor):
                current_cursor_ids.add(touch.id)
                if session_table.get_cursor(touch.id) is not None:
                    self.tuio_server.update_tuio_cursor(touch.id, touch.location)
                else:
                    self.tuio_server.add_tuio_cursor(touch.id, touch.location)

            else:
                current_object_ids.add(touch.id)
                if session_table.get_object(touch.id) is not None:
                    self.tuio_server.update_tuio_object(touch.id, touch.class_id, touch.location, touch.orientation)
                else:
                    self.tuio_server.add_tuio_object(touch.id, touch.class_id, touch.location, touch.orientation)

        # Known but not observed anymore. This is a plain set difference: IDs added in this frame must stay.
        obsolete_ids = self.get_known_ids() - (current_cursor_ids | current_object_ids)
        for s_id in obsolete_ids:
            self.tuio_server.delete_tuio_cursor(s_id)
            self.tuio_server.delete_tuio_object(s_id)

        # Still present, but reclassified since the last frame
        for s_id in (self.known_cursor_ids - current_cursor_ids) & current_object_ids:
            self.tuio_server.delete_tuio_cursor(s_id)
        for s_id in (self.known_object_ids - current_object_ids) & current_cursor_ids:
            self.tuio_server.delete_tuio_object(s_id)

        if obsolete_ids:
            logger.debug('Frame %s: removed %s', self.tuio_server.current_frame_id, sorted(obsolete_ids))

        self.known_cursor_ids = current_cursor_ids
        self.known_object_ids = current_object_ids

    # No touches in this tick: everything that was on the surface is gone
    def remove_all(self):
        for s_id in self.get_known_ids():
            self.tuio_server.delete_tuio_cursor(s_id)
            self.tuio_server.delete_tuio_object(s_id)

        self.known_cursor_ids = set()
        self.known_object_ids = set()
