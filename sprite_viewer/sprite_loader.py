"""
Sprite loading: build a SpriteResource from a descriptor and the images it
names.
"""

from __future__ import annotations
import logging
import os
from typing import Callable, Optional, Tuple

import pygame

from .bitmap_utils import convert_mask_to_alpha, load_bitmap
from .config import ALPHA_SECTION, FILES_SECTION, SIZE_SECTION
from .descriptor import Descriptor
from .errors import InvalidDimensions, MissingFiles, SheetSizeMismatch
from .frame_set import FrameSet
from .sprite import SpriteResource

logger = logging.getLogger(__name__)

Decoder = Callable[[str], pygame.Surface]


def _clamp_channel(value: int) -> int:
    return max(0, min(255, value))


def _decode(
    path: str, alpha_key: Optional[Tuple[int, int, int]], decoder: Decoder
) -> pygame.Surface:
    surf = decoder(path)
    if alpha_key is not None:
        surf = convert_mask_to_alpha(surf, alpha_key)
    return surf


def load_sprite(
    base_path: str, descriptor: Descriptor, decoder: Decoder = load_bitmap
) -> SpriteResource:
    """
    Load the sprite described by ``descriptor``; image paths resolve against
    ``base_path``.
    Raises InvalidDimensions, MissingFiles, SheetSizeMismatch or
    FrameLoadFailure. On failure no bitmap stays alive.
    """
    is_sheet = descriptor.get_int(None, "is_sheet") != 0
    frame_delay = max(0, descriptor.get_int(None, "frame_delay"))
    use_alpha = descriptor.get_int(None, "use_alpha") > 0
    width = descriptor.get_int(SIZE_SECTION, "width")
    height = descriptor.get_int(SIZE_SECTION, "height")
    if width < 1 or height < 1:
        logger.error(
            "The sprite width and/or height values are invalid (%dx%d). "
            "Please ensure that the sprite sizes are greater than zero.",
            width,
            height,
        )
        raise InvalidDimensions(width, height)

    alpha_key = (0, 0, 0)
    if use_alpha:
        alpha_key = (
            _clamp_channel(descriptor.get_int(ALPHA_SECTION, "r")),
            _clamp_channel(descriptor.get_int(ALPHA_SECTION, "g")),
            _clamp_channel(descriptor.get_int(ALPHA_SECTION, "b")),
        )
    key = alpha_key if use_alpha else None

    if is_sheet:
        frames, frame_count = _load_sheet(
            base_path, descriptor, width, height, key, decoder
        )
    else:
        frames, frame_count = _load_frames(base_path, descriptor, key, decoder)

    return SpriteResource(
        is_sheet=is_sheet,
        use_alpha=use_alpha,
        frame_width=width,
        frame_height=height,
        frame_count=frame_count,
        frames=frames,
        frame_delay=frame_delay,
        alpha_key=alpha_key,
    )


def _load_sheet(
    base_path: str,
    descriptor: Descriptor,
    width: int,
    height: int,
    key: Optional[Tuple[int, int, int]],
    decoder: Decoder,
) -> Tuple[FrameSet, int]:
    """Decode the first [FILES] entry as a horizontal strip."""
    first = next(descriptor.entries(FILES_SECTION), None)
    if first is None:
        logger.error(
            "No file name for a sprite sheet was listed under the "
            "[FILES] section of the descriptor."
        )
        raise MissingFiles()
    path = os.path.join(base_path, first[1])
    frame_count = descriptor.get_int(None, "num_frames")

    frames = FrameSet()
    with frames.guard():
        sheet = frames.add(_decode(path, key, decoder))
        sheet_w, sheet_h = sheet.get_size()
        if frame_count < 1 or width * frame_count > sheet_w or height > sheet_h:
            logger.error(
                "Sprite sheet %s (%dx%d) cannot hold %d frame(s) of %dx%d.",
                path,
                sheet_w,
                sheet_h,
                frame_count,
                width,
                height,
            )
            raise SheetSizeMismatch(
                path, width, height, frame_count, (sheet_w, sheet_h)
            )
    return frames, frame_count


def _load_frames(
    base_path: str,
    descriptor: Descriptor,
    key: Optional[Tuple[int, int, int]],
    decoder: Decoder,
) -> Tuple[FrameSet, int]:
    """Decode every [FILES] entry, in declaration order, as one frame each."""
    frame_count = sum(1 for _ in descriptor.entries(FILES_SECTION))
    if frame_count == 0:
        logger.error(
            "No image files were listed under the [FILES] section of the "
            "descriptor."
        )
        raise MissingFiles()

    frames = FrameSet()
    with frames.guard():
        for _name, filename in descriptor.entries(FILES_SECTION):
            frames.add(_decode(os.path.join(base_path, filename), key, decoder))
    return frames, frame_count


def load_sprite_file(
    descriptor_path: str, decoder: Decoder = load_bitmap
) -> SpriteResource:
    """Load a descriptor file; its images resolve relative to its directory."""
    descriptor = Descriptor.from_file(descriptor_path)
    base_path = os.path.dirname(os.path.abspath(descriptor_path))
    sprite = load_sprite(base_path, descriptor, decoder)
    sprite.source = descriptor_path
    logger.info(
        "Loaded %s: %d frame(s) of %dx%d%s",
        descriptor_path,
        sprite.frame_count,
        sprite.frame_width,
        sprite.frame_height,
        " (sheet)" if sprite.is_sheet else "",
    )
    return sprite
