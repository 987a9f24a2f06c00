"""
Pytest configuration and shared fixtures.
"""

import pytest
from pythonosc.osc_bundle import OscBundle

from PixelTUIO_toolkit.data_transportation.TUIOServer import TUIOServer


class RecordingTransport:
    """Transport stand-in that keeps every bundle instead of sending it."""

    def __init__(self):
        self.bundles = []

    def send(self, bundle):
        self.bundles.append(bundle)
        return True


def decode_bundle(bundle):
    """Parse the raw datagram of a bundle back into (address, params) tuples."""
    return [(message.address, list(message.params)) for message in OscBundle(bundle.dgram)]


def messages_with_command(messages, address, command):
    return [params for msg_address, params in messages if msg_address == address and params[0] == command]


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def tuio_server(transport):
    return TUIOServer(transport=transport)


@pytest.fixture
def last_frame(transport):
    """Returns the decoded (cursor messages, object messages) of the last committed frame."""

    def _last_frame():
        assert len(transport.bundles) >= 2
        return decode_bundle(transport.bundles[-2]), decode_bundle(transport.bundles[-1])

    return _last_frame
