from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import (
    BEAM_PROFILE,
    CONFIG_FILE,
    FPS,
    MATCH_THRESHOLD,
    STABILIZE_ITERATIONS,
    TARGET_COLOR,
)


LOGGER = logging.getLogger(__name__)


@dataclass
class CameraConfig:
    device_index: int = 0
    # None = native Auflösung der Kamera übernehmen
    width: Optional[int] = None
    height: Optional[int] = None
    fps: int = 30


@dataclass
class TrackingProfile:
    target_color: tuple[int, int, int] = TARGET_COLOR
    threshold: float = MATCH_THRESHOLD
    stabilize_iterations: int = STABILIZE_ITERATIONS

    def __post_init__(self) -> None:
        self.target_color = tuple(int(c) for c in self.target_color)
        if len(self.target_color) != 3 or any(c < 0 or c > 255 for c in self.target_color):
            raise ValueError(f"Ungültige Zielfarbe: {self.target_color}")
        if self.threshold < 0:
            raise ValueError(f"Schwelle muss >= 0 sein, nicht {self.threshold}")
        if self.stabilize_iterations < 1:
            raise ValueError("Mindestens eine Stabilisierungs-Iteration erforderlich")


@dataclass
class BeamStyle:
    color: tuple[int, int, int] = field(default_factory=lambda: BEAM_PROFILE["color"])
    width_factor: float = BEAM_PROFILE["width_factor"]
    blur_factor: float = BEAM_PROFILE["blur_factor"]
    tip_factor: float = BEAM_PROFILE["tip_factor"]
    tip_min: float = BEAM_PROFILE["tip_min"]
    tip_max: float = BEAM_PROFILE["tip_max"]

    def __post_init__(self) -> None:
        self.color = tuple(int(c) for c in self.color)


@dataclass
class Settings:
    camera: CameraConfig = field(default_factory=CameraConfig)
    tracking: TrackingProfile = field(default_factory=TrackingProfile)
    beam: BeamStyle = field(default_factory=BeamStyle)
    fps: int = FPS
    debug_overlay: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "camera": vars(self.camera),
            "tracking": {
                "target_color": list(self.tracking.target_color),
                "threshold": self.tracking.threshold,
                "stabilize_iterations": self.tracking.stabilize_iterations,
            },
            "beam": {**vars(self.beam), "color": list(self.beam.color)},
            "fps": self.fps,
            "debug_overlay": self.debug_overlay,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        camera_cfg = data.get("camera", {})
        tracking_cfg = data.get("tracking", {})
        beam_cfg = data.get("beam", {})
        return cls(
            camera=CameraConfig(**camera_cfg),
            tracking=TrackingProfile(**tracking_cfg),
            beam=BeamStyle(**beam_cfg),
            fps=data.get("fps", FPS),
            debug_overlay=data.get("debug_overlay", False),
        )


def load_settings(path: Path = CONFIG_FILE) -> Settings:
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.exists():
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"Einstellungen müssen ein JSON-Objekt sein, nicht {type(data).__name__}")
            return Settings.from_dict(data)
        except (json.JSONDecodeError, OSError, AttributeError, TypeError, ValueError) as exc:
            LOGGER.warning("Einstellungen defekt, lade Defaults: %s", exc)
            quarantine_settings(path)
    settings = Settings()
    save_settings(settings, path)
    return settings


def save_settings(settings: Settings, path: Path = CONFIG_FILE) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(settings.to_dict(), f, indent=2)


def quarantine_settings(path: Path) -> Optional[Path]:
    """Benenne eine unlesbare Einstellungsdatei um, z. B. ``settings.20261018-120000.broken.json``."""

    if not path.exists():
        return None
    stamp = time.strftime("%Y%m%d-%H%M%S")
    target = path.with_name(f"{path.stem}.{stamp}.broken{path.suffix}")
    suffix = 2
    while target.exists():
        target = path.with_name(f"{path.stem}.{stamp}-{suffix}.broken{path.suffix}")
        suffix += 1
    try:
        path.replace(target)
    except OSError as exc:
        LOGGER.warning("Konnte %s nicht beiseitelegen: %s", path, exc)
        return None
    LOGGER.info("Unlesbare Einstellungen liegen jetzt unter %s", target.name)
    return target
