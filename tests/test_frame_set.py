import pygame
import pytest

from sprite_viewer.frame_set import FrameSet


def test_release_calls_releaser_once_per_frame():
    released = []
    frames = FrameSet(releaser=released.append)
    surfs = [pygame.Surface((2, 2)) for _ in range(3)]
    for s in surfs:
        frames.add(s)
    assert len(frames) == 3

    frames.release()
    assert released == surfs
    # Second release is a no-op
    frames.release()
    assert len(released) == 3
    assert frames.released


def test_access_after_release_raises():
    frames = FrameSet()
    frames.add(pygame.Surface((1, 1)))
    frames.release()
    with pytest.raises(RuntimeError):
        frames[0]
    with pytest.raises(RuntimeError):
        list(frames)
    with pytest.raises(RuntimeError):
        frames.add(pygame.Surface((1, 1)))


def test_guard_releases_on_error():
    released = []
    frames = FrameSet(releaser=released.append)
    with pytest.raises(ValueError):
        with frames.guard():
            frames.add(pygame.Surface((1, 1)))
            frames.add(pygame.Surface((1, 1)))
            raise ValueError("boom")
    assert len(released) == 2
    assert frames.released


def test_guard_keeps_frames_on_success():
    frames = FrameSet()
    with frames.guard():
        frames.add(pygame.Surface((1, 1)))
    assert not frames.released
    assert len(frames) == 1
