"""
Pack a frame-list sprite into a single horizontal sprite sheet and write the
descriptor that loads it back.
"""

from __future__ import annotations
import logging
import math
import os
from typing import Tuple

import pygame

from .bitmap_utils import normalized_color, save_bitmap
from .config import (
    ALPHA_SECTION,
    DESCRIPTOR_EXTENSION,
    FILES_SECTION,
    MAX_SHEET_SIZE,
    SHEET_FILL_COLOR,
    SHEET_IMAGE_EXTENSION,
    SIZE_SECTION,
)
from .errors import AllocationFailure, IOFailure, UnsupportedConversion
from .sprite import SpriteResource

logger = logging.getLogger(__name__)


def pack_sheet(
    sprite: SpriteResource, max_size: int = MAX_SHEET_SIZE
) -> pygame.Surface:
    """
    Blit every frame, in order, side by side onto a new surface.
    Raises UnsupportedConversion for sheet sprites and AllocationFailure when
    the sheet cannot be created.
    """
    if sprite.is_sheet:
        logger.error(
            "Saving of sprite sheets has been disabled. Only sprites made of "
            "individual frames can be exported to a sheet."
        )
        raise UnsupportedConversion()

    width = sprite.frame_width * sprite.frame_count
    height = sprite.frame_height
    if width > max_size or height > max_size:
        logger.error(
            "Unable to export a %dx%d sprite sheet. Perhaps the images are too big?",
            width,
            height,
        )
        raise AllocationFailure(width, height)
    try:
        sheet = pygame.Surface((width, height), 0, 32)
    except (pygame.error, MemoryError, ValueError) as e:
        logger.error("Unable to allocate a %dx%d sprite sheet: %s", width, height, e)
        raise AllocationFailure(width, height) from e

    # Fill with the color key so transparent areas key out again on reload
    sheet.fill(sprite.alpha_key if sprite.use_alpha else SHEET_FILL_COLOR)
    for i, frame in enumerate(sprite.frames):
        sheet.blit(frame, (i * sprite.frame_width, 0))
    return sheet


def _channel(value: float) -> int:
    return int(math.floor(255.0 * value + 0.5))


def sheet_descriptor_text(sprite: SpriteResource, image_filename: str) -> str:
    """Descriptor text that loads ``image_filename`` as a sheet of ``sprite``."""
    r, g, b = normalized_color(sprite.alpha_key)
    return (
        f"use_alpha={int(sprite.use_alpha)}\n"
        "is_sheet=1\n"
        f"frame_delay={sprite.frame_delay}\n"
        f"num_frames={sprite.frame_count}\n"
        "\n"
        f"[{ALPHA_SECTION}]\n"
        f"r={_channel(r)}\n"
        f"g={_channel(g)}\n"
        f"b={_channel(b)}\n"
        "\n"
        f"[{SIZE_SECTION}]\n"
        f"width={sprite.frame_width}\n"
        f"height={sprite.frame_height}\n"
        "\n"
        f"[{FILES_SECTION}]\n"
        f"file0={image_filename}\n"
    )


def export_to_sheet(
    sprite: SpriteResource, image_filename: str
) -> Tuple[pygame.Surface, str]:
    """Return the packed sheet and the descriptor naming it ``image_filename``."""
    sheet = pack_sheet(sprite)
    return sheet, sheet_descriptor_text(sprite, image_filename)


def sheet_paths(dest_path: str) -> Tuple[str, str]:
    """Image and descriptor paths derived from an export destination."""
    stem, _ext = os.path.splitext(dest_path)
    return stem + SHEET_IMAGE_EXTENSION, stem + DESCRIPTOR_EXTENSION


def _remove_stale(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        return
    except OSError as e:
        logger.error("Unable to remove the old descriptor %s: %s", path, e)
        raise IOFailure(path, str(e)) from e


def save_sheet(sprite: SpriteResource, dest_path: str) -> Tuple[str, str]:
    """
    Write the sheet image and then its descriptor next to ``dest_path``.
    Existing files are overwritten. Any previous descriptor is removed before
    the image is written, so a failed image write leaves no descriptor behind.
    Returns (image_path, descriptor_path).
    """
    image_path, descriptor_path = sheet_paths(dest_path)
    sheet, text = export_to_sheet(sprite, os.path.basename(image_path))
    _remove_stale(descriptor_path)
    save_bitmap(image_path, sheet)
    try:
        with open(descriptor_path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        logger.error(
            "Unable to save a descriptor for the sprite sheet to %s: %s",
            descriptor_path,
            e,
        )
        raise IOFailure(descriptor_path, str(e)) from e
    logger.info("Successfully saved the sprite sheet to %s.", image_path)
    return image_path, descriptor_path
