from __future__ import annotations

import enum
import logging
from typing import Optional

import pygame

from .canvas import Canvas
from .config import Settings
from .geometry import Color
from .renderer import BeamGeometry, draw_lightsaber
from .snapshot import SnapshotStore
from .tracking import SaberDetection, SaberTracker
from .ui import render_debug_overlay

LOGGER = logging.getLogger(__name__)


class DriverState(enum.Enum):
    IDLE = "idle"
    CAPTURING = "capturing"
    RUNNING = "running"
    ERROR = "error"
    STOPPED = "stopped"


class FrameDriver:
    """Steuert den Ablauf pro Frame: Aufnahme, Tracking, Zeichnen."""

    def __init__(self, settings: Settings, source, snapshots: Optional[SnapshotStore] = None):
        self.settings = settings
        self.source = source
        self.snapshots = snapshots or SnapshotStore()
        self.tracker = SaberTracker(settings)
        self.canvas: Optional[Canvas] = None
        self.state = DriverState.IDLE
        self.error: Optional[str] = None
        self.last_detection: Optional[SaberDetection] = None
        self.last_beam: Optional[BeamGeometry] = None
        self.last_inspected: Optional[Color] = None

    def start(self) -> bool:
        if self.state is not DriverState.IDLE:
            raise RuntimeError(f"Start nur aus IDLE möglich, nicht aus {self.state.name}")
        self.state = DriverState.CAPTURING
        try:
            self.source.start()
        except RuntimeError as exc:
            LOGGER.error("Kamera-Start fehlgeschlagen: %s", exc)
            self.state = DriverState.ERROR
            self.error = str(exc)
            return False
        self.canvas = Canvas(self.source.width, self.source.height)
        self.state = DriverState.RUNNING
        LOGGER.info("Canvas auf %s x %s gesetzt", self.source.width, self.source.height)
        return True

    def tick(self) -> SaberDetection:
        if self.state is not DriverState.RUNNING:
            raise RuntimeError(f"Tick im Zustand {self.state.name} nicht möglich")
        frame = self.source.read()
        canvas = self.canvas
        canvas.clear()
        canvas.draw_image(frame)
        image = canvas.get_image_data()
        self.snapshots.publish(image)
        detection = self.tracker.process(image)
        self.last_beam = draw_lightsaber(canvas, detection.tips, self.settings.beam)
        self.last_detection = detection
        return detection

    def inspect_pixel(self, x: int, y: int) -> Optional[Color]:
        color = self.snapshots.pixel_at(x, y)
        if color is not None:
            r, g, b = color
            LOGGER.info("Pixel (%s, %s): r=%s g=%s b=%s", x, y, r, g, b)
            self.last_inspected = color
        return color

    def stop(self) -> None:
        self.source.stop()
        if self.state is not DriverState.ERROR:
            self.state = DriverState.STOPPED

    def run(self, screen: pygame.Surface) -> DriverState:
        clock = pygame.time.Clock()
        running = self.state is DriverState.RUNNING
        try:
            while running:
                clock.tick(self.settings.fps)
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.type == pygame.MOUSEBUTTONDOWN:
                        self.inspect_pixel(*event.pos)
                if not running:
                    break

                try:
                    self.tick()
                except Exception as exc:
                    LOGGER.exception("Kamera-Feed Fehler: %s", exc)
                    self.state = DriverState.ERROR
                    self.error = str(exc)
                    break

                screen.fill((0, 0, 0))
                screen.blit(self.canvas.to_surface(), (0, 0))
                if self.settings.debug_overlay:
                    render_debug_overlay(screen, self.last_detection, clock.get_fps(), self.last_inspected)
                pygame.display.flip()
        except Exception:
            self.state = DriverState.ERROR
            raise
        finally:
            self.stop()
        return self.state
