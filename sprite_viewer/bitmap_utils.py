"""
Helper functions for decoding, encoding and color-keying sprite bitmaps.
"""

from __future__ import annotations
import logging
import numpy as np
import pygame
from typing import Tuple

from .errors import FrameLoadFailure, IOFailure

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


def load_bitmap(path: str) -> pygame.Surface:
    """
    Decode an image file via Pygame.
    Raises FrameLoadFailure if the file is missing or cannot be decoded.
    """
    try:
        return pygame.image.load(path)
    except (pygame.error, OSError) as e:
        logger.error("Unable to load sprite image %s: %s", path, e)
        raise FrameLoadFailure(path, str(e)) from e


def save_bitmap(path: str, surf: pygame.Surface) -> None:
    """
    Encode a surface to ``path``; the format follows the file extension.
    Raises IOFailure on any encode or write error.
    """
    try:
        pygame.image.save(surf, path)
    except (pygame.error, OSError) as e:
        logger.error(
            "An I/O error occurred while saving the image %s. Please check "
            "the file name and ensure that the disk is not write protected "
            "or out of space: %s",
            path,
            e,
        )
        raise IOFailure(path, str(e)) from e


def convert_mask_to_alpha(surf: pygame.Surface, key: RGB) -> pygame.Surface:
    """
    Return a per-pixel-alpha copy of ``surf`` where every pixel matching
    ``key`` is fully transparent black. Other pixels keep their color and
    alpha.
    """
    w, h = surf.get_size()
    rgb = pygame.surfarray.array3d(surf)
    if surf.get_flags() & pygame.SRCALPHA:
        alpha = pygame.surfarray.array_alpha(surf)
    else:
        alpha = np.full((w, h), 255, dtype=np.uint8)
    mask = np.all(rgb == np.array(key, dtype=rgb.dtype), axis=-1)
    rgb[mask] = 0
    alpha[mask] = 0
    out = pygame.Surface((w, h), pygame.SRCALPHA, 32)
    # Views lock the surface; drop them before returning
    px = pygame.surfarray.pixels3d(out)
    px[...] = rgb
    del px
    pa = pygame.surfarray.pixels_alpha(out)
    pa[...] = alpha
    del pa
    return out


def normalized_color(color: RGB) -> Tuple[float, float, float]:
    """Return ``color`` as floats in [0, 1]."""
    r, g, b, _ = pygame.Color(*color).normalize()
    return (r, g, b)
