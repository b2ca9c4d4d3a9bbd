import os

# Surfaces and image I/O only; never open a real window in tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest


@pytest.fixture
def make_png(tmp_path):
    """Write a solid-color PNG into tmp_path and return its file name."""

    def _make(name, size=(32, 32), color=(255, 0, 0), patch=None):
        surf = pygame.Surface(size, 0, 32)
        surf.fill(color)
        if patch is not None:
            # patch: (rect, color) painted over the fill
            rect, patch_color = patch
            surf.fill(patch_color, rect)
        pygame.image.save(surf, str(tmp_path / name))
        return name

    return _make


@pytest.fixture
def write_descriptor(tmp_path):
    """Write descriptor text into tmp_path and return its path."""

    def _write(text, name="sprite.ini"):
        path = tmp_path / name
        path.write_text(text)
        return str(path)

    return _write
