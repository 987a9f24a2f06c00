#!/usr/bin/env python
# -*- coding: utf-8 -*-

import sys
import time
import argparse
import logging
import threading

from PixelTUIO_toolkit.data_transportation.TUIOServer import TUIOServer
from PixelTUIO_toolkit.sensors.TouchPoint import TouchClassifier
from PixelTUIO_toolkit.sensors.ReplayTouchSource import ReplayTouchSource
from PixelTUIO_toolkit.sensor_processing_services.FrameDifferenceService import FrameDifferenceService
from PixelTUIO_toolkit.utility.config_reader import PixelTUIOConfig
from PixelTUIO_toolkit.utility.logging_setup import setup_logging

logger = logging.getLogger(__name__)


class PixelTUIOSensorProcessingController:
    """ PixelTUIOSensorProcessingController

        Polls the touch source once per tick, turns the touches into TUIO cursors and objects and sends one TUIO
        frame per tick to the target computer.

        The loop runs in its own thread (start/stop). get_status() can be called from any other thread while the
        loop is running.
    """

    def __init__(self, touch_source, config=None, tuio_server=None):
        self.config = config if config is not None else PixelTUIOConfig()
        self.touch_source = touch_source

        self.started = False
        self.thread = None
        self.frames_per_second = 0.0

        self.init_tuio_server(tuio_server)
        self.init_sensor_data_processing_services()

    def init_tuio_server(self, tuio_server):
        if tuio_server is None:
            tuio_server = TUIOServer(self.config.host, self.config.port, source=self.config.source)
            logger.info('Sending TUIO frames to %s:%s', self.config.host, self.config.port)
        self.tuio_server = tuio_server

    def init_sensor_data_processing_services(self):
        surface_width, surface_height = self.touch_source.get_surface_dimensions()
        logger.info('Dimension of touch source %s: %sx%s', self.touch_source.get_name(), surface_width,
                    surface_height)

        self.touch_classifier = TouchClassifier(surface_width, surface_height,
                                                self.touch_source.is_finger_recognition_supported(),
                                                self.touch_source.is_tag_recognition_supported())
        self.frame_difference_service = FrameDifferenceService(self.tuio_server)

    def start(self, max_frames=None):
        if self.started:
            logger.warning('Already running')
            return None

        self.started = True
        self.touch_source.start()
        self.thread = threading.Thread(target=self.loop, args=(max_frames,), daemon=True)
        self.thread.start()
        return self

    def stop(self):
        self.started = False
        if self.thread is not None and self.thread is not threading.current_thread():
            self.thread.join()
        self.touch_source.stop()

    def wait(self, timeout=None):
        if self.thread is not None:
            self.thread.join(timeout)

    def process_tick(self):
        """ Runs the pipeline for one tick. Returns the ID of the committed frame. """
        touch_points = self.touch_source.get_touch_points()
        touches = self.touch_classifier.classify(touch_points)
        return self.frame_difference_service.process_touches(touches)

    # The main loop. One TUIO frame per tick, the rest of the tick is spent sleeping.
    # Code parts for fps counter from
    # https://stackoverflow.com/questions/43761004/fps-how-to-divide-count-by-time-function-to-determine-fps
    def loop(self, max_frames=None):
        tick_period = self.config.get_tick_period()
        num_frames = 0

        # Variables for fps counter
        start_time = time.monotonic()
        counter = 0

        try:
            while self.started:
                tick_start = time.monotonic()

                self.process_tick()
                num_frames += 1

                # FPS Counter
                counter += 1
                if (time.monotonic() - start_time) > 1:
                    self.frames_per_second = round(counter / (time.monotonic() - start_time), 1)
                    logger.debug('FPS: %s', self.frames_per_second)
                    counter = 0
                    start_time = time.monotonic()

                if max_frames is not None and num_frames >= max_frames:
                    break

                time.sleep(max(0.0, tick_period - (time.monotonic() - tick_start)))
        finally:
            self.started = False

    def get_status(self):
        session_table = self.tuio_server.session_table
        return {
            'running': self.started,
            'frame_id': self.tuio_server.current_frame_id,
            'fps': self.frames_per_second,
            'cursor_ids': sorted(session_table.get_cursor_ids()),
            'object_ids': sorted(session_table.get_object_ids()),
        }


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(description='Send touches as TUIO 1.1 cursors and objects')
    parser.add_argument('--config', default=None, help='Path of the config.ini file')
    parser.add_argument('--replay', required=True, help='JSON file with recorded touch batches')
    parser.add_argument('--loop', action='store_true', help='Start the recording over when it is finished')
    parser.add_argument('--host', default=None, help='IP address of the target computer')
    parser.add_argument('--port', type=int, default=None, help='Port of the target computer')
    parser.add_argument('--frames', type=int, default=None, help='Stop after this number of frames')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_arguments(argv)

    config = PixelTUIOConfig(args.config)
    if args.host is not None:
        config.host = args.host
    if args.port is not None:
        config.port = args.port

    setup_logging(config.log_level, config.log_file)

    touch_source = ReplayTouchSource.from_file(args.replay, config.surface_width, config.surface_height,
                                               loop=args.loop)
    touch_source.finger_recognition_supported = config.finger_recognition_supported
    touch_source.tag_recognition_supported = config.tag_recognition_supported

    max_frames = args.frames
    if max_frames is None and not args.loop:
        max_frames = len(touch_source.batches) + 1  # One more frame to clear the surface

    controller = PixelTUIOSensorProcessingController(touch_source, config)
    controller.start(max_frames)
    try:
        controller.wait()
    except KeyboardInterrupt:
        logger.info('Stopping')
    finally:
        controller.stop()

    sys.exit()


if __name__ == '__main__':
    main()
