from __future__ import annotations

from pathlib import Path

FPS = 60
DEFAULT_FONT_SIZE = 20

HOME_DIR = Path.home()
APP_DIR = HOME_DIR / ".lightsaber"
CONFIG_FILE = APP_DIR / "settings.json"
LOG_DIR = APP_DIR / "logs"

# Zielfarbe (RGB) des Schwertgriffs und Schwelle auf die quadrierte Farbdistanz
TARGET_COLOR = (54, 107, 93)
MATCH_THRESHOLD = 80
STABILIZE_ITERATIONS = 1

BEAM_PROFILE = {
    "color": (255, 255, 255),
    "width_factor": 0.03,
    "blur_factor": 0.01,
    "tip_factor": 0.2,
    "tip_min": 2.0,
    "tip_max": 8.0,
}
