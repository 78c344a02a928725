import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pytest

from lightsaber.config import Settings

TARGET_BGR = (93, 107, 54)


class FakeVideoSource:
    """Liefert vorbereitete BGR-Frames statt einer echten Kamera."""

    def __init__(self, frames, fail_start=False):
        self.frames = list(frames)
        self.fail_start = fail_start
        self.started = False
        self.stopped = False
        self.width = 0
        self.height = 0

    def start(self):
        if self.fail_start:
            raise RuntimeError("Kamera konnte nicht geöffnet werden")
        self.started = True
        self.height, self.width = self.frames[0].shape[:2]

    def stop(self):
        self.stopped = True

    def read(self):
        if not self.frames:
            raise RuntimeError("Frame konnte nicht gelesen werden")
        return self.frames.pop(0)


def make_frame(width, height, points=(), color=TARGET_BGR):
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    for x, y in points:
        frame[y, x] = color
    return frame


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def two_point_frame():
    return make_frame(5, 11, points=[(0, 0), (0, 10)])
