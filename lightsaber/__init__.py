"""
Lightsaber
==========

Verfolgt eine Farbregion im Kamerabild und zeichnet darüber eine leuchtende Klinge.
"""

__all__ = [
    "constants",
    "config",
    "logging_utils",
    "geometry",
    "locator",
    "tracking",
    "snapshot",
    "canvas",
    "renderer",
    "camera",
    "ui",
    "driver",
]
