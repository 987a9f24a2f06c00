#!/usr/bin/env python
# -*- coding: utf-8 -*-

import ipaddress
import logging

from pythonosc import udp_client

logger = logging.getLogger(__name__)

DEFAULT_HOST = '127.0.0.1'
DEFAULT_PORT = 3333


class UDPTransport:
    """ UDPTransport

        Sends OSC bundles to a single target computer using the python-osc library:
        https://github.com/attwad/python-osc

        Delivery is best effort, exactly like TUIO over UDP is meant to be: the socket is non-blocking, nothing is
        retried and failed sends are only logged. A receiver that cares about ordering has to drop bundles with an
        outdated fseq value itself.

        Parameters:
            host (str): IP address of the target computer
            port (int): Port of the target computer that should be used

        Raises:
            ValueError: If the host is not a valid IP address or the port is out of range. Without a valid target
                        no frame could ever be delivered, so this is checked right away.
    """

    def __init__(self, host=DEFAULT_HOST, port=DEFAULT_PORT):
        self.host, self.port = self.parse_endpoint(host, port)

        self.num_bundles_sent = 0
        self.num_send_errors = 0

        self.udp_client = udp_client.SimpleUDPClient(self.host, self.port)

    @staticmethod
    def parse_endpoint(host, port):
        try:
            host = str(ipaddress.ip_address(str(host).strip()))
        except ValueError:
            raise ValueError('Invalid TUIO target address: {!r}'.format(host)) from None

        try:
            port = int(port)
        except (TypeError, ValueError):
            raise ValueError('Invalid TUIO target port: {!r}'.format(port)) from None
        if not 0 < port < 65536:
            raise ValueError('TUIO target port out of range: {}'.format(port))

        return host, port

    def get_endpoint(self):
        return self.host, self.port

    def send(self, bundle):
        try:
            self.udp_client.send(bundle)
        except OSError as error:
            self.num_send_errors += 1
            logger.warning('Could not send TUIO bundle to %s:%s: %s', self.host, self.port, error)
            return False

        self.num_bundles_sent += 1
        return True
