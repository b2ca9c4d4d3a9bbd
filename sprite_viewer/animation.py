"""
Tick-driven frame selection for looping sprite playback.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .sprite import SpriteResource


class AnimationClock:
    """
    Advances a frame index on externally delivered ticks.
    Attributes:
        frame_count (int): Frames in the loop.
        frame_delay (int): Ticks a frame is held before the advancing tick,
            so each frame shows for frame_delay + 1 ticks.
        current_frame (int): Frame to draw, in [0, frame_count).
        tick_accumulator (int): Ticks spent holding the current frame.
    """

    def __init__(self, frame_count: int, frame_delay: int = 0) -> None:
        if frame_count < 1:
            raise ValueError("Animation needs at least one frame")
        if frame_delay < 0:
            raise ValueError("Frame delay cannot be negative")
        self.frame_count = frame_count
        self.frame_delay = frame_delay
        self.current_frame = 0
        self.tick_accumulator = 0

    @classmethod
    def for_sprite(cls, sprite: SpriteResource) -> "AnimationClock":
        return cls(sprite.frame_count, sprite.frame_delay)

    def tick(self) -> int:
        """Process one tick and return the frame to draw. Wraps silently."""
        if self.tick_accumulator >= self.frame_delay:
            self.current_frame = (self.current_frame + 1) % self.frame_count
            self.tick_accumulator = 0
        else:
            self.tick_accumulator += 1
        return self.current_frame

    def reset(self) -> None:
        self.current_frame = 0
        self.tick_accumulator = 0
