#!/usr/bin/env python
# -*- coding: utf-8 -*-

# TUIO 1.1 profile attributes, see the TUIO 1.1 Protocol Specification by Martin Kaltenbrunner
# http://www.tuio.org/?specification
#
# s        session ID, temporary object ID, int32
# i        class ID, fiducial ID number, int32
# x, y     position, float32, range 0...1
# a        angle, float32, range 0..2PI
# X, Y     movement vector (motion speed & direction), float32
# A        rotation vector (rotation speed & direction), float32
# m        motion acceleration, float32
# r        rotation acceleration, float32


class TuioCursor:
    """ TuioCursor

        A single finger touch on the surface (/tuio/2Dcur set s x y X Y m)

        The session ID is fixed when the cursor is created, only the location changes during its lifetime.
    """

    def __init__(self, session_id, location):
        self._session_id = int(session_id)
        self.location = location

    @property
    def session_id(self):
        return self._session_id

    @property
    def location(self):
        return self._location

    @location.setter
    def location(self, location):
        x, y = location
        self._location = (float(x), float(y))

    def copy(self):
        return TuioCursor(self._session_id, self._location)

    def __eq__(self, other):
        if not isinstance(other, TuioCursor):
            return NotImplemented
        return self._session_id == other.session_id and self._location == other.location

    def __repr__(self):
        return 'TuioCursor(s_id={}, location={})'.format(self._session_id, self._location)


class TuioObject:
    """ TuioObject

        A tagged physical object on the surface (/tuio/2Dobj set s i x y a X Y A m r)

        Session ID and class ID (the fiducial/tag number) never change. Location and orientation are updated every
        frame. Speed and acceleration are not measured and stay zero.
    """

    def __init__(self, session_id, class_id, location, orientation):
        self._session_id = int(session_id)
        self._class_id = int(class_id)
        self.location = location
        self.orientation = orientation

        self.speed = (0.0, 0.0)
        self.motion_acceleration = 0.0

    @property
    def session_id(self):
        return self._session_id

    @property
    def class_id(self):
        return self._class_id

    @property
    def location(self):
        return self._location

    @location.setter
    def location(self, location):
        x, y = location
        self._location = (float(x), float(y))

    @property
    def orientation(self):
        return self._orientation

    @orientation.setter
    def orientation(self, orientation):
        self._orientation = float(orientation)

    def copy(self):
        return TuioObject(self._session_id, self._class_id, self._location, self._orientation)

    def __eq__(self, other):
        if not isinstance(other, TuioObject):
            return NotImplemented
        return (self._session_id == other.session_id and self._class_id == other.class_id and
                self._location == other.location and self._orientation == other.orientation)

    def __repr__(self):
        return 'TuioObject(s_id={}, class_id={}, location={}, orientation={})'.format(
            self._session_id, self._class_id, self._location, self._orientation)
