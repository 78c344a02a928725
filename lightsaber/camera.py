from __future__ import annotations

import logging
import sys
from typing import Optional

import cv2
import numpy as np

from .config import CameraConfig

LOGGER = logging.getLogger(__name__)


class VideoSource:
    def __init__(self, config: CameraConfig):
        self.config = config
        self.cap: Optional[cv2.VideoCapture] = None
        self.width = 0
        self.height = 0
        self._pending: Optional[np.ndarray] = None

    def start(self) -> None:
        cam = self.config
        backend = cv2.CAP_DSHOW if sys.platform.startswith("win") else cv2.CAP_ANY
        self.cap = cv2.VideoCapture(cam.device_index, backend)
        if not self.cap.isOpened():
            self.cap = None
            raise RuntimeError(f"Kamera {cam.device_index} konnte nicht geöffnet werden")
        if cam.width and cam.height:
            self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, cam.width)
            self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, cam.height)
        self.cap.set(cv2.CAP_PROP_FPS, cam.fps)

        # Die Größe des ersten Frames ist die tatsächlich gelieferte Auflösung
        ret, frame = self.cap.read()
        if not ret or frame is None:
            self.stop()
            raise RuntimeError("Kamera liefert keine Bilder")
        self.height, self.width = frame.shape[:2]
        self._pending = frame
        LOGGER.info("Kamera gestartet (%s x %s @ %sfps)", self.width, self.height, cam.fps)

    def stop(self) -> None:
        if self.cap:
            self.cap.release()
            self.cap = None
            LOGGER.info("Kamera gestoppt")
        self._pending = None

    def read(self) -> np.ndarray:
        if self.cap is None:
            raise RuntimeError("Kamera nicht initialisiert")
        if self._pending is not None:
            frame, self._pending = self._pending, None
            return frame
        ret, frame = self.cap.read()
        if not ret:
            raise RuntimeError("Frame konnte nicht gelesen werden")
        return frame
