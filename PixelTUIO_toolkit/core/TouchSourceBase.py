#!/usr/bin/env python
# -*- coding: utf-8 -*-


class TouchSourceBase:
    """ Base class of all touch sources (touch tables, trackers, recordings)

        A touch source is polled once per tick by the PixelTUIOSensorProcessingController and returns the list of
        TouchPoints that are currently on the surface.
    """

    def __init__(self, source_name, surface_width, surface_height, finger_recognition_supported=True,
                 tag_recognition_supported=True):
        self.source_name = source_name
        self.surface_width = surface_width
        self.surface_height = surface_height
        self.finger_recognition_supported = finger_recognition_supported
        self.tag_recognition_supported = tag_recognition_supported

        self.started = False

    def get_name(self):
        return self.source_name

    def get_surface_dimensions(self):
        return self.surface_width, self.surface_height

    def is_finger_recognition_supported(self):
        return self.finger_recognition_supported

    def is_tag_recognition_supported(self):
        return self.tag_recognition_supported

    def start(self):
        self.started = True
        return self

    def stop(self):
        self.started = False

    def get_touch_points(self):
        """ Returns the list of TouchPoints detected in the current tick """
        raise NotImplementedError
