from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .geometry import Color

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageData:
    width: int
    height: int
    # RGBA, zeilenweise, 4 * width * height Bytes
    data: np.ndarray

    @classmethod
    def from_rgba(cls, rgba: np.ndarray) -> "ImageData":
        height, width = rgba.shape[:2]
        data = np.ascontiguousarray(rgba, dtype=np.uint8).reshape(-1).copy()
        data.setflags(write=False)
        return cls(width=width, height=height, data=data)


@dataclass(frozen=True)
class FrameSnapshot:
    version: int
    image: ImageData
    captured_at: float


class SnapshotStore:
    """Hält den zuletzt gelesenen Bildpuffer für die Pixel-Inspektion.

    Pro Tick wird die Referenz einmal ersetzt. Leser sehen immer einen
    vollständigen Snapshot, höchstens einen Frame alt.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._latest: Optional[FrameSnapshot] = None

    def publish(self, image: ImageData) -> FrameSnapshot:
        with self._lock:
            version = self._latest.version + 1 if self._latest else 1
            snapshot = FrameSnapshot(version=version, image=image, captured_at=time.time())
            self._latest = snapshot
        return snapshot

    def latest(self) -> Optional[FrameSnapshot]:
        with self._lock:
            return self._latest

    def pixel_at(self, x: int, y: int) -> Optional[Color]:
        snapshot = self.latest()
        if snapshot is None:
            return None
        image = snapshot.image
        if x < 0 or y < 0 or y >= image.height:
            LOGGER.debug("Pixel (%s, %s) außerhalb des Bildes", x, y)
            return None
        index = (image.width * y + (x % image.width)) * 4
        data = image.data
        return int(data[index]), int(data[index + 1]), int(data[index + 2])
