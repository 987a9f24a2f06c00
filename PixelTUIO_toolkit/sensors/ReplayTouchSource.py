#!/usr/bin/env python
# -*- coding: utf-8 -*-

import json
import logging
import threading

from PixelTUIO_toolkit.core.TouchSourceBase import TouchSourceBase
from PixelTUIO_toolkit.sensors.TouchPoint import TouchPoint

logger = logging.getLogger(__name__)

RES_X = 1920
RES_Y = 1080


class ReplayTouchSource(TouchSourceBase):
    """ ReplayTouchSource

        Plays back recorded touches, one batch per tick. Useful to test TUIO clients without a touch table.

        A recording is a list of batches, each batch a list of touches:

            [
                [{"id": 5, "x": 384, "y": 324}],
                [{"id": 5, "x": 400, "y": 330}, {"id": 7, "x": 960, "y": 540, "tag_value": 12, "orientation": 1.57}],
                []
            ]

        Touches with a tag_value are replayed as recognized tags, all others as fingers. Once the recording is over,
        get_touch_points() returns empty batches, unless loop is set.
    """

    def __init__(self, batches, surface_width=RES_X, surface_height=RES_Y, loop=False):
        super().__init__('Replay', surface_width, surface_height)

        self.batches = self.parse_batches(batches)
        self.loop = loop

        self.next_batch_index = 0
        self.read_lock = threading.Lock()

    @classmethod
    def from_file(cls, path, surface_width=RES_X, surface_height=RES_Y, loop=False):
        with open(path) as json_file:
            batches = json.load(json_file)
        logger.info('Loaded %s recorded frames from %s', len(batches), path)
        return cls(batches, surface_width, surface_height, loop)

    @staticmethod
    def parse_batches(batches):
        if not isinstance(batches, list):
            raise ValueError('A touch recording has to be a list of batches')

        parsed_batches = []
        for batch in batches:
            if not isinstance(batch, list):
                raise ValueError('Every batch of a touch recording has to be a list, got {!r}'.format(batch))
            parsed_batches.append([touch if isinstance(touch, TouchPoint) else TouchPoint.from_dict(touch)
                                   for touch in batch])

        return parsed_batches

    def is_finished(self):
        with self.read_lock:
            return not self.loop and self.next_batch_index >= len(self.batches)

    def get_touch_points(self):
        with self.read_lock:
            if self.next_batch_index >= len(self.batches):
                if not self.loop or len(self.batches) == 0:
                    return []
                self.next_batch_index = 0

            batch = self.batches[self.next_batch_index]
            self.next_batch_index += 1
            return list(batch)
