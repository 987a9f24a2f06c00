#!/usr/bin/env python
# -*- coding: utf-8 -*-

import logging
import threading

from pythonosc import osc_bundle_builder
from pythonosc import osc_message_builder

from PixelTUIO_toolkit.core.TuioSessionTable import TuioSessionTable
from PixelTUIO_toolkit.data_transportation.UDPTransport import UDPTransport

logger = logging.getLogger(__name__)

CURSOR_ADDRESS_PATTERN = '/tuio/2Dcur'
OBJECT_ADDRESS_PATTERN = '/tuio/2Dobj'

ARG_TYPE_INT = osc_message_builder.OscMessageBuilder.ARG_TYPE_INT
ARG_TYPE_FLOAT = osc_message_builder.OscMessageBuilder.ARG_TYPE_FLOAT
ARG_TYPE_STRING = osc_message_builder.OscMessageBuilder.ARG_TYPE_STRING

INT32_MAX = 2 ** 31 - 1


def to_int32(value):
    """ Wraps an integer into the signed 32bit range, like a cast to int32 would """
    return (int(value) + 2 ** 31) % 2 ** 32 - 2 ** 31


class TUIOServer:
    """ Basic python implementation of a TUIO 1.1 server for the 2Dcur and 2Dobj profiles

        The TUIO server keeps track of all alive cursors and objects and sends their state as TUIO messages via UDP
        to the defined IP address and port using the python-osc library: https://github.com/attwad/python-osc

        Based upon the TUIO 1.1 C++ Reference Implementation by Martin Kaltenbrunner
        https://github.com/mkalten/TUIO11_CPP/blob/master/TUIO/TuioServer.cpp

        Documentation of this class mainly taken from the TUIO 1.1 Protocol Specification by Martin Kaltenbrunner
        http://www.tuio.org/?specification

        Usage: every frame is bracketed by init_frame() and commit_frame(). In between, cursors and objects are added,
        updated or removed. commit_frame() always sends one bundle for cursors and one for objects, even if nothing
        changed, so that the alive lists of the clients stay in sync.
    """

    def __init__(self, ip='127.0.0.1', port=3333, source=None, session_table=None, transport=None):
        """ Create a new instance of the TUIO server.

            Parameters:
                ip (str): IP address of the target computer
                port (int): Port of the target computer that should be used
                source (str): Optional name of this tracker. If set, every bundle starts with a TUIO 1.1 source
                              message ("name@address")
                session_table (TuioSessionTable): Table of alive cursors and objects. A new one is created if omitted
                transport: Object with a send(bundle) method. By default a UDPTransport to ip:port is created

            Raises:
                ValueError: If ip or port can not be used as target
        """
        if transport is None:
            transport = UDPTransport(ip, port)
        self.transport = transport

        self.session_table = session_table if session_table is not None else TuioSessionTable()

        self.source = None
        if source:
            self.source = source if '@' in source else '{}@{}'.format(source, ip)

        self.current_frame_id = 0
        self.frame_lock = threading.Lock()

    def init_frame(self):
        """ Starts a new frame and increments the frame counter

            The counter is never decreased. It is sent as int32, so after INT32_MAX frames it starts over at 1.
        """
        with self.frame_lock:
            self.current_frame_id += 1
            if self.current_frame_id > INT32_MAX:
                self.current_frame_id = 1
            return self.current_frame_id

    def commit_frame(self):
        """ Commits the current frame.

            Generates and sends the TUIO bundles of all currently alive TuioCursors and TuioObjects.
            Send errors are handled (and logged) by the transport and never interrupt the caller.
        """
        self.transport.send(self.get_cursor_frame_bundle())
        self.transport.send(self.get_object_frame_bundle())

    def add_tuio_cursor(self, s_id, location):
        """ Adds a TUIO cursor. Nothing happens if a cursor with this session ID already exists. """
        self.session_table.add_cursor(s_id, location)

    def update_tuio_cursor(self, s_id, location):
        """ Moves an existing TUIO cursor. Unknown session IDs are ignored. """
        self.session_table.update_cursor(s_id, location)

    def delete_tuio_cursor(self, s_id):
        self.session_table.delete_cursor(s_id)

    def add_tuio_object(self, s_id, class_id, location, orientation):
        """ Adds a TUIO object. Nothing happens if an object with this session ID already exists. """
        self.session_table.add_object(s_id, class_id, location, orientation)

    def update_tuio_object(self, s_id, class_id, location, orientation):
        """ Moves and rotates an existing TUIO object. Unknown session IDs are ignored. """
        self.session_table.update_object(s_id, class_id, location, orientation)

    def delete_tuio_object(self, s_id):
        self.session_table.delete_object(s_id)

    def get_cursor_frame_bundle(self):
        """ 2Dcur bundle of the current frame: [source] alive, set (one per cursor), fseq """
        bundle = osc_bundle_builder.OscBundleBuilder(osc_bundle_builder.IMMEDIATELY)

        if self.source is not None:
            bundle.add_content(self.get_source_message(CURSOR_ADDRESS_PATTERN))

        with self.session_table.cursor_lock:
            cursors = list(self.session_table.cursors.values())
            bundle.add_content(self.get_alive_message(CURSOR_ADDRESS_PATTERN, cursors))
            for cursor in cursors:
                bundle.add_content(self.get_cursor_message(cursor))

        bundle.add_content(self.get_sequence_message(CURSOR_ADDRESS_PATTERN))

        return bundle.build()

    def get_object_frame_bundle(self):
        """ 2Dobj bundle of the current frame: [source] alive, set (one per object), fseq """
        bundle = osc_bundle_builder.OscBundleBuilder(osc_bundle_builder.IMMEDIATELY)

        if self.source is not None:
            bundle.add_content(self.get_source_message(OBJECT_ADDRESS_PATTERN))

        with self.session_table.object_lock:
            tuio_objects = list(self.session_table.objects.values())
            bundle.add_content(self.get_alive_message(OBJECT_ADDRESS_PATTERN, tuio_objects))
            for tuio_object in tuio_objects:
                bundle.add_content(self.get_object_message(tuio_object))

        bundle.add_content(self.get_sequence_message(OBJECT_ADDRESS_PATTERN))

        return bundle.build()

    # /tuio/2D* source application@address
    def get_source_message(self, address_pattern):
        """ SOURCE message (TUIO 1.1)

            /tuio/[profileName] source application@address

            The optional source message identifies the tracker that sent the bundle, so that clients can tell apart
            multiple TUIO sources. It is placed before the alive message.

            (Source: http://www.tuio.org/?specification)
        """
        source_message = osc_message_builder.OscMessageBuilder(address=address_pattern)
        source_message.add_arg('source', ARG_TYPE_STRING)
        source_message.add_arg(self.source, ARG_TYPE_STRING)
        return source_message.build()

    # /tuio/2D* alive s_id0 ... s_idN
    def get_alive_message(self, address_pattern, entities):
        """ ALIVE message

            /tuio/[profileName] alive [list of active sessionIDs]

            The alive message contains the session IDs of all objects/cursors that are currently present on the
            surface. A client removes every object/cursor that is no longer listed.

            (Source: http://www.tuio.org/?specification)
        """
        alive_message = osc_message_builder.OscMessageBuilder(address=address_pattern)
        alive_message.add_arg('alive', ARG_TYPE_STRING)
        for entity in entities:
            alive_message.add_arg(to_int32(entity.session_id), ARG_TYPE_INT)
        return alive_message.build()

    # /tuio/2Dcur set s x y X Y m
    def get_cursor_message(self, cursor):
        x_pos, y_pos = cursor.location

        cursor_message = osc_message_builder.OscMessageBuilder(address=CURSOR_ADDRESS_PATTERN)
        cursor_message.add_arg('set', ARG_TYPE_STRING)
        cursor_message.add_arg(to_int32(cursor.session_id), ARG_TYPE_INT)  # s
        cursor_message.add_arg(x_pos, ARG_TYPE_FLOAT)  # x
        cursor_message.add_arg(y_pos, ARG_TYPE_FLOAT)  # y
        cursor_message.add_arg(0.0, ARG_TYPE_FLOAT)  # X
        cursor_message.add_arg(0.0, ARG_TYPE_FLOAT)  # Y
        cursor_message.add_arg(0.0, ARG_TYPE_FLOAT)  # m
        cursor_message.add_arg(0.0, ARG_TYPE_FLOAT)  # reserved
        return cursor_message.build()

    # /tuio/2Dobj set s i x y a X Y A m r
    def get_object_message(self, tuio_object):
        x_pos, y_pos = tuio_object.location
        x_speed, y_speed = tuio_object.speed

        object_message = osc_message_builder.OscMessageBuilder(address=OBJECT_ADDRESS_PATTERN)
        object_message.add_arg('set', ARG_TYPE_STRING)
        object_message.add_arg(to_int32(tuio_object.session_id), ARG_TYPE_INT)  # s
        object_message.add_arg(to_int32(tuio_object.class_id), ARG_TYPE_INT)  # i
        object_message.add_arg(x_pos, ARG_TYPE_FLOAT)  # x
        object_message.add_arg(y_pos, ARG_TYPE_FLOAT)  # y
        object_message.add_arg(tuio_object.orientation, ARG_TYPE_FLOAT)  # a
        object_message.add_arg(x_speed, ARG_TYPE_FLOAT)  # X
        object_message.add_arg(y_speed, ARG_TYPE_FLOAT)  # Y
        object_message.add_arg(0.0, ARG_TYPE_FLOAT)  # A
        object_message.add_arg(tuio_object.motion_acceleration, ARG_TYPE_FLOAT)  # m
        object_message.add_arg(0.0, ARG_TYPE_FLOAT)  # r
        return object_message.build()

    # /tuio/2D* fseq f_id
    def get_sequence_message(self, address_pattern):
        """ FSEQ message

            /tuio/[profileName] fseq int32

            Each bundle is closed by a frame sequence message with a unique, increasing frame ID. Clients can use it
            to drop bundles that arrive late.

            (Source: http://www.tuio.org/?specification)
        """
        sequence_message = osc_message_builder.OscMessageBuilder(address=address_pattern)
        sequence_message.add_arg('fseq', ARG_TYPE_STRING)
        sequence_message.add_arg(self.current_frame_id, ARG_TYPE_INT)
        return sequence_message.build()
