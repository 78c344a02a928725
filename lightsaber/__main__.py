from __future__ import annotations

import logging
import os
import sys

import pygame

from .camera import VideoSource
from .config import Settings, load_settings
from .driver import DriverState, FrameDriver
from .logging_utils import setup_logging


LOGGER = logging.getLogger(__name__)


def init_display(width: int, height: int) -> pygame.Surface:
    os.environ.setdefault("SDL_VIDEO_CENTERED", "1")
    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption("Lightsaber")
    return screen


def _run() -> int:
    setup_logging()
    settings: Settings = load_settings()
    pygame.init()
    pygame.font.init()

    driver = FrameDriver(settings, VideoSource(settings.camera))
    try:
        if not driver.start():
            # Ohne Kamera wird nichts weiter gerendert
            return 1
        screen = init_display(*driver.canvas.get_size())
        state = driver.run(screen)
    finally:
        pygame.quit()
    LOGGER.info("Beendet (%s)", state.name)
    return 0 if state is DriverState.STOPPED else 1


def main() -> int:
    try:
        return _run()
    except Exception as exc:
        if not logging.getLogger().handlers:
            logging.basicConfig(level=logging.ERROR)
        LOGGER.exception("Fehler im Hauptprogramm: %s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
