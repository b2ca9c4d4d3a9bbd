from __future__ import annotations

import contextlib
import pygame
from typing import Callable, Iterator, List, Optional


def _drop(surf: pygame.Surface) -> None:
    """Default releaser: Pygame frees the pixels once no reference is left."""


class FrameSet:
    """
    Owns every bitmap decoded for one sprite and releases each exactly once.

    Usage:
        frames = FrameSet()
        frames.add(pygame.image.load(path))
        ...
        frames.release()
    """

    def __init__(
        self, releaser: Optional[Callable[[pygame.Surface], None]] = None
    ) -> None:
        self._surfaces: List[pygame.Surface] = []
        self._releaser = releaser or _drop
        self._released = False

    def add(self, surf: pygame.Surface) -> pygame.Surface:
        """Take ownership of ``surf``."""
        if self._released:
            raise RuntimeError("Cannot add frames to a released FrameSet")
        self._surfaces.append(surf)
        return surf

    @property
    def released(self) -> bool:
        return self._released

    def __len__(self) -> int:
        return len(self._surfaces)

    def __getitem__(self, index: int) -> pygame.Surface:
        if self._released:
            raise RuntimeError("Sprite frames have already been released")
        return self._surfaces[index]

    def __iter__(self) -> Iterator[pygame.Surface]:
        if self._released:
            raise RuntimeError("Sprite frames have already been released")
        return iter(list(self._surfaces))

    @contextlib.contextmanager
    def guard(self):
        """Context-manager that releases every frame if the body raises."""
        try:
            yield self
        except BaseException:
            self.release()
            raise

    def release(self) -> None:
        """Release all owned bitmaps. Later calls do nothing."""
        if self._released:
            return
        surfaces, self._surfaces = self._surfaces, []
        self._released = True
        for surf in surfaces:
            self._releaser(surf)
