"""
Tests for the ReplayTouchSource.
"""

import json

import pytest

from PixelTUIO_toolkit.sensors.ReplayTouchSource import ReplayTouchSource
from PixelTUIO_toolkit.sensors.TouchPoint import TouchPoint

RECORDING = [
    [{'id': 5, 'x': 384, 'y': 324}],
    [{'id': 5, 'x': 400, 'y': 330}, {'id': 7, 'x': 960, 'y': 540, 'tag_value': 12, 'orientation': 1.57}],
    [],
]


class TestReplayTouchSource:
    """Playback of recorded batches."""

    def test_batches_in_order(self):
        """One batch per call, empty batches once the recording is over."""
        source = ReplayTouchSource(RECORDING)

        assert [touch.id for touch in source.get_touch_points()] == [5]
        assert [touch.id for touch in source.get_touch_points()] == [5, 7]
        assert source.get_touch_points() == []
        assert source.is_finished()
        assert source.get_touch_points() == []

    def test_loop(self):
        """With loop the recording starts over."""
        source = ReplayTouchSource(RECORDING[:2], loop=True)

        ids = [[touch.id for touch in source.get_touch_points()] for _ in range(4)]

        assert ids == [[5], [5, 7], [5], [5, 7]]
        assert not source.is_finished()

    def test_tag_touch(self):
        """Recorded touches with tag value are tags."""
        source = ReplayTouchSource(RECORDING)
        source.get_touch_points()

        tag = source.get_touch_points()[1]

        assert tag.is_tag_recognized
        assert tag.tag_value == 12

    def test_accepts_touch_points(self):
        source = ReplayTouchSource([[TouchPoint(1, 10, 10)]])

        assert source.get_touch_points()[0].id == 1

    def test_surface_dimensions(self):
        source = ReplayTouchSource(RECORDING, surface_width=1024, surface_height=768)

        assert source.get_surface_dimensions() == (1024, 768)
        assert source.get_name() == 'Replay'

    def test_from_file(self, tmp_path):
        path = tmp_path / 'recording.json'
        path.write_text(json.dumps(RECORDING))

        source = ReplayTouchSource.from_file(str(path))

        assert len(source.batches) == 3

    @pytest.mark.parametrize('recording', [{'id': 1}, [{'id': 1, 'x': 0, 'y': 0}], 'touches'])
    def test_invalid_recording(self, recording):
        """A recording has to be a list of lists."""
        with pytest.raises(ValueError):
            ReplayTouchSource(recording)
