#!/usr/bin/env python
# -*- coding: utf-8 -*-

# The TUIO 1.1 client decodes received 2Dcur and 2Dobj messages
# using the python-osc library: https://github.com/attwad/python-osc

# Based upon the TUIO 1.1 C++ Reference Implementation by Martin Kaltenbrunner
# https://github.com/mkalten/TUIO11_CPP/blob/master/TUIO/TuioClient.cpp
# and the TUIO 1.1 Protocol Specification by Martin Kaltenbrunner
# http://www.tuio.org/?specification

import sys
import argparse
import logging
from collections import deque

from pythonosc.osc_server import BlockingOSCUDPServer
from pythonosc.dispatcher import Dispatcher

from PixelTUIO_toolkit.data_transportation.TUIOServer import CURSOR_ADDRESS_PATTERN, OBJECT_ADDRESS_PATTERN
from PixelTUIO_toolkit.utility.logging_setup import setup_logging

logger = logging.getLogger(__name__)

IP = '127.0.0.1'
PORT = 3333

# Frames that are older than this are still accepted, the sender has most likely been restarted
MAX_FRAME_AGE = 100

MAX_STORED_FRAMES = 1000


class TuioFrame:
    """ All data of one profile (2Dcur or 2Dobj) received between an alive and a fseq message """

    def __init__(self, address_pattern, frame_id, alive_ids, set_arguments, source=None):
        self.address_pattern = address_pattern
        self.frame_id = frame_id
        self.alive_ids = alive_ids
        self.set_arguments = set_arguments
        self.source = source

    def get_cursors(self):
        """ Returns {s_id: (x, y)} """
        return {s_id: (args[0], args[1]) for s_id, args in self.set_arguments.items()}

    def get_objects(self):
        """ Returns {s_id: (class_id, x, y, angle)} """
        return {s_id: (args[0], args[1], args[2], args[3]) for s_id, args in self.set_arguments.items()}

    def __repr__(self):
        return 'TuioFrame({}, fseq={}, alive={}, set={})'.format(self.address_pattern, self.frame_id,
                                                                 self.alive_ids, self.set_arguments)


class TuioProfileState:

    def __init__(self):
        self.current_frame_id = 0
        self.source = None
        self.alive_ids = []

        # Collected until the fseq message of the frame arrives
        self.pending_alive_ids = []
        self.pending_set_arguments = {}
        self.num_late_frames = 0


class TUIOClient:
    """ Minimal TUIO 1.1 client

        Receives the bundles of a TUIO server and collects the alive, set and fseq messages of each profile into one
        TuioFrame. Late frames (fseq lower than the last one received) are dropped.

        Parameters:
            ip (str): IP address to listen on
            port (int): Port to listen on, 0 picks a free port
            on_frame (callable): Called with every completed TuioFrame
    """

    def __init__(self, ip=IP, port=PORT, on_frame=None):
        self.on_frame = on_frame
        self.frames = deque(maxlen=MAX_STORED_FRAMES)

        self.profiles = {
            CURSOR_ADDRESS_PATTERN: TuioProfileState(),
            OBJECT_ADDRESS_PATTERN: TuioProfileState(),
        }

        dispatcher = Dispatcher()
        dispatcher.map(CURSOR_ADDRESS_PATTERN, self.handle_tuio_message)
        dispatcher.map(OBJECT_ADDRESS_PATTERN, self.handle_tuio_message)
        dispatcher.set_default_handler(self.handle_unknown_message)

        self.osc_udp_server = BlockingOSCUDPServer((ip, port), dispatcher)

    @property
    def server_address(self):
        return self.osc_udp_server.server_address

    def serve_forever(self):
        logger.info('Listening on %s', self.server_address)
        self.osc_udp_server.serve_forever()

    # Handles a single datagram (one TUIO bundle). Returns after timeout seconds if nothing arrives.
    def handle_request(self, timeout=None):
        self.osc_udp_server.timeout = timeout
        self.osc_udp_server.handle_request()

    def close(self):
        self.osc_udp_server.server_close()

    def get_alive_ids(self, address_pattern):
        return list(self.profiles[address_pattern].alive_ids)

    def get_last_frame(self, address_pattern):
        for frame in reversed(self.frames):
            if frame.address_pattern == address_pattern:
                return frame
        return None

    def handle_tuio_message(self, address, *args):
        if len(args) == 0:
            return

        profile = self.profiles[address]
        command = args[0]

        if command == 'source':
            profile.source = args[1]
        elif command == 'alive':
            profile.pending_alive_ids = list(args[1:])
            profile.pending_set_arguments = {}
        elif command == 'set':
            profile.pending_set_arguments[args[1]] = list(args[2:])
        elif command == 'fseq':
            self.finish_frame(address, profile, args[1])
        else:
            logger.debug('Ignoring unknown TUIO command %s on %s', command, address)

    def handle_unknown_message(self, address, *args):
        logger.debug('Ignoring OSC message %s %s', address, args)

    def finish_frame(self, address, profile, frame_id):
        if frame_id < profile.current_frame_id and profile.current_frame_id - frame_id <= MAX_FRAME_AGE:
            profile.num_late_frames += 1
            logger.debug('Dropping late frame %s on %s (current: %s)', frame_id, address, profile.current_frame_id)
            return

        profile.current_frame_id = frame_id
        profile.alive_ids = profile.pending_alive_ids

        frame = TuioFrame(address, frame_id, list(profile.pending_alive_ids), dict(profile.pending_set_arguments),
                          profile.source)
        self.frames.append(frame)

        if self.on_frame is not None:
            self.on_frame(frame)


def main():
    parser = argparse.ArgumentParser(description='Print the frames received from a TUIO 1.1 server')
    parser.add_argument('--ip', default=IP, help='IP address to listen on (default: %(default)s)')
    parser.add_argument('--port', type=int, default=PORT, help='Port to listen on (default: %(default)s)')
    args = parser.parse_args()

    setup_logging('INFO')

    tuio_client = TUIOClient(args.ip, args.port, on_frame=print)
    try:
        tuio_client.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        tuio_client.close()

    sys.exit()


if __name__ == '__main__':
    main()
