"""Sprite resource: decoded frame bitmaps plus how to interpret them."""

from __future__ import annotations
import pygame
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .frame_set import FrameSet


@dataclass
class SpriteResource:
    """
    A loaded sprite, owning every bitmap in ``frames``.
    Attributes:
        is_sheet (bool): Backed by one horizontal strip instead of one
            bitmap per frame.
        use_alpha (bool): The color key was turned into transparency at load.
        alpha_key (tuple): Color treated as transparent (only if use_alpha).
        frame_width, frame_height (int): Pixel size of one frame.
        frame_count (int): Number of animation frames.
        frame_delay (int): Extra ticks each frame is held for.
        frames (FrameSet): One strip bitmap, or one bitmap per frame in
            descriptor order.
    """

    is_sheet: bool
    use_alpha: bool
    frame_width: int
    frame_height: int
    frame_count: int
    frames: FrameSet
    frame_delay: int = 0
    alpha_key: Tuple[int, int, int] = (0, 0, 0)
    source: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.frame_width <= 0 or self.frame_height <= 0:
            raise ValueError("Sprite frame width and height must be positive")
        if self.frame_count < 1:
            raise ValueError("Sprite must have at least one frame")
        if self.frame_delay < 0:
            raise ValueError("Frame delay cannot be negative")
        expected = 1 if self.is_sheet else self.frame_count
        if len(self.frames) != expected:
            raise ValueError(
                f"Expected {expected} bitmap(s) for this sprite, "
                f"got {len(self.frames)}"
            )

    @property
    def size(self) -> Tuple[int, int]:
        return (self.frame_width, self.frame_height)

    def frame_source(self, index: int) -> Tuple[pygame.Surface, pygame.Rect]:
        """
        Return the bitmap holding frame ``index`` and the area to draw from it.
        """
        if not 0 <= index < self.frame_count:
            raise IndexError(f"Frame {index} out of range 0..{self.frame_count - 1}")
        if self.is_sheet:
            area = pygame.Rect(
                self.frame_width * index, 0, self.frame_width, self.frame_height
            )
            return self.frames[0], area
        return self.frames[index], pygame.Rect(
            0, 0, self.frame_width, self.frame_height
        )

    @property
    def destroyed(self) -> bool:
        return self.frames.released

    def destroy(self) -> None:
        """Release every owned bitmap. Safe to call more than once."""
        self.frames.release()

    def __enter__(self) -> "SpriteResource":
        return self

    def __exit__(self, *exc) -> None:
        self.destroy()
