#!/usr/bin/env python
# -*- coding: utf-8 -*-

import math
import logging

logger = logging.getLogger(__name__)

TWO_PI = 2 * math.pi


# Raw touch as delivered by a touch source once per polling tick. Coordinates are in sensor pixels.
class TouchPoint:

    def __init__(self, touch_id, x, y, is_finger_recognized=True, is_tag_recognized=False, tag_value=None,
                 orientation=0.0):
        self.id = int(touch_id)
        self.x = x
        self.y = y
        self.is_finger_recognized = is_finger_recognized
        self.is_tag_recognized = is_tag_recognized
        self.tag_value = tag_value
        self.orientation = orientation

    # Recorded touches without explicit flags count as tag if they carry a tag value, otherwise as finger
    @classmethod
    def from_dict(cls, data):
        has_tag_value = data.get('tag_value') is not None
        return cls(touch_id=data['id'], x=data['x'], y=data['y'],
                   is_finger_recognized=data.get('finger', not has_tag_value),
                   is_tag_recognized=data.get('tag', has_tag_value),
                   tag_value=data.get('tag_value'),
                   orientation=data.get('orientation') or 0.0)

    def __repr__(self):
        return 'TouchPoint(id={}, x={}, y={}, finger={}, tag={}, tag_value={}, orientation={})'.format(
            self.id, self.x, self.y, self.is_finger_recognized, self.is_tag_recognized, self.tag_value,
            self.orientation)


# A touch that has been classified as finger. Location is normalized to [0, 1].
class TouchCursor:

    def __init__(self, touch_id, location):
        self.id = touch_id
        self.location = location

    def __eq__(self, other):
        if not isinstance(other, TouchCursor):
            return NotImplemented
        return self.id == other.id and self.location == other.location

    def __repr__(self):
        return 'TouchCursor(id={}, location={})'.format(self.id, self.location)


# A touch that has been classified as tagged object. Location is normalized to [0, 1], orientation to [0, 2PI).
class TouchTag:

    def __init__(self, touch_id, class_id, location, orientation):
        self.id = touch_id
        self.class_id = class_id
        self.location = location
        self.orientation = orientation

    def __eq__(self, other):
        if not isinstance(other, TouchTag):
            return NotImplemented
        return (self.id == other.id and self.class_id == other.class_id and self.location == other.location and
                self.orientation == other.orientation)

    def __repr__(self):
        return 'TouchTag(id={}, class_id={}, location={}, orientation={})'.format(self.id, self.class_id,
                                                                                  self.location, self.orientation)


class TouchClassifier:
    """ TouchClassifier

        Turns the raw touch points of a touch source into TouchCursor and TouchTag records that can be handed over to
        the FrameDifferenceService.

        A touch counts as cursor if a finger was recognized, or if the device can not recognize fingers at all.
        Otherwise it counts as tagged object if a tag was recognized, or if the device can not recognize tags.
        Touches that are neither are dropped.

        Parameters:
            surface_width (float): Width of the sensor in the unit of the raw touch coordinates
            surface_height (float): Height of the sensor in the unit of the raw touch coordinates
            finger_recognition_supported (bool): False if the device can not tell fingers apart from other blobs
            tag_recognition_supported (bool): False if the device can not read tags
    """

    def __init__(self, surface_width, surface_height, finger_recognition_supported=True,
                 tag_recognition_supported=True):
        if surface_width <= 0 or surface_height <= 0:
            raise ValueError('Surface dimensions must be positive, got {}x{}'.format(surface_width, surface_height))

        self.surface_width = surface_width
        self.surface_height = surface_height
        self.finger_recognition_supported = finger_recognition_supported
        self.tag_recognition_supported = tag_recognition_supported

    def classify(self, touch_points):
        classified_touches = []

        for touch_point in touch_points:
            classified_touch = self.classify_touch_point(touch_point)
            if classified_touch is not None:
                classified_touches.append(classified_touch)

        return classified_touches

    def classify_touch_point(self, touch_point):
        # A touch without a usable position can not be placed on the surface
        if not (math.isfinite(touch_point.x) and math.isfinite(touch_point.y)):
            logger.warning('Dropping touch %s with invalid position (%s, %s)', touch_point.id, touch_point.x,
                           touch_point.y)
            return None

        location = self.normalize(touch_point.x, touch_point.y)

        if touch_point.is_finger_recognized or not self.finger_recognition_supported:
            return TouchCursor(touch_point.id, location)

        if touch_point.is_tag_recognized or not self.tag_recognition_supported:
            tag_value = touch_point.tag_value if touch_point.tag_value is not None else 0
            orientation = touch_point.orientation
            if orientation is None or not math.isfinite(orientation):
                orientation = 0.0
            return TouchTag(touch_point.id, int(tag_value), location, orientation % TWO_PI)

        return None

    def normalize(self, x, y):
        x = min(max(x / self.surface_width, 0.0), 1.0)
        y = min(max(y / self.surface_height, 0.0), 1.0)
        return x, y
