from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass
from typing import Optional

import pygame

logger = logging.getLogger(__name__)

# Display settings (minimums when read from the settings file)
DISPLAY_WIDTH = 640
DISPLAY_HEIGHT = 480
DISPLAY_FPS = 60
WINDOW_TITLE = "Sprite Viewer"
# Key bindings (pygame key codes, matched on key release)
QUIT_KEY = pygame.K_ESCAPE
EXPORT_KEY = pygame.K_SPACE
# Optional settings file, looked up in the working directory
SETTINGS_FILE = "viewer_settings.json"

# Colors
BACKGROUND_COLOR = (255, 255, 255)
# Sheet background when the sprite has no color key
SHEET_FILL_COLOR = (255, 255, 255)

# Export settings
# Image format of exported sprite sheets (lossless)
SHEET_IMAGE_EXTENSION = ".png"
# Extension of the descriptor written next to an exported sheet
DESCRIPTOR_EXTENSION = ".ini"
# Largest sheet edge in pixels that the exporter will allocate
MAX_SHEET_SIZE = 16384

# Descriptor layout
FILES_SECTION = "FILES"
SIZE_SECTION = "SIZE"
ALPHA_SECTION = "ALPHA"


@dataclass(frozen=True)
class ViewerSettings:
    """Display settings read once at startup."""

    display_width: int = DISPLAY_WIDTH
    display_height: int = DISPLAY_HEIGHT
    display_fps: int = DISPLAY_FPS


def load_settings(path: Optional[str] = None) -> ViewerSettings:
    """
    Read viewer settings from a JSON file. Each value is raised to at least
    its default; a missing or malformed file yields the defaults.
    """
    path = path or SETTINGS_FILE
    if not os.path.exists(path):
        return ViewerSettings()
    try:
        with open(path, "r") as f:
            data = json.load(f)
        width = int(data.get("display_width", DISPLAY_WIDTH))
        height = int(data.get("display_height", DISPLAY_HEIGHT))
        fps = int(data.get("display_fps", DISPLAY_FPS))
    except (OSError, ValueError, TypeError, AttributeError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", path, e)
        return ViewerSettings()
    return ViewerSettings(
        display_width=max(width, DISPLAY_WIDTH),
        display_height=max(height, DISPLAY_HEIGHT),
        display_fps=max(fps, DISPLAY_FPS),
    )
