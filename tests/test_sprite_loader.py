import os

import pygame
import pytest

from sprite_viewer import sprite_loader
from sprite_viewer.bitmap_utils import load_bitmap
from sprite_viewer.descriptor import Descriptor
from sprite_viewer.errors import (
    FrameLoadFailure,
    InvalidDimensions,
    MissingFiles,
    SheetSizeMismatch,
)
from sprite_viewer.sprite_loader import load_sprite, load_sprite_file

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)
MAGENTA = (255, 0, 255)


def frame_list_text(files, delay=0, width=32, height=32, alpha=None):
    lines = [
        f"use_alpha={1 if alpha else 0}",
        "is_sheet=0",
        f"frame_delay={delay}",
        "num_frames=99",
        "",
    ]
    if alpha:
        lines += ["[ALPHA]", f"r={alpha[0]}", f"g={alpha[1]}", f"b={alpha[2]}", ""]
    lines += ["[SIZE]", f"width={width}", f"height={height}", "", "[FILES]"]
    lines += [f"file{i}={name}" for i, name in enumerate(files)]
    return "\n".join(lines) + "\n"


class CountingDecoder:
    """Records decoded paths and can fail on a chosen file."""

    def __init__(self, fail_on=None):
        self.paths = []
        self.fail_on = fail_on

    def __call__(self, path):
        self.paths.append(path)
        if self.fail_on and os.path.basename(path) == self.fail_on:
            raise FrameLoadFailure(path)
        return load_bitmap(path)


def test_frame_list_loads_in_files_order(tmp_path, make_png):
    make_png("a.png", color=RED)
    make_png("b.png", color=GREEN)
    make_png("c.png", color=BLUE)
    desc = Descriptor.from_string(frame_list_text(["c.png", "a.png", "b.png"]))

    sprite = load_sprite(str(tmp_path), desc)
    # Count comes from FILES, not num_frames
    assert sprite.frame_count == 3
    assert len(sprite.frames) == 3
    assert not sprite.is_sheet
    assert [f.get_at((0, 0))[:3] for f in sprite.frames] == [BLUE, RED, GREEN]


def test_scenario_two_frame_descriptor(tmp_path, make_png):
    make_png("a.png")
    make_png("b.png")
    desc = Descriptor.from_string(frame_list_text(["a.png", "b.png"], delay=2))
    sprite = load_sprite(str(tmp_path), desc)
    assert sprite.frame_count == 2
    assert sprite.frame_delay == 2
    assert (sprite.frame_width, sprite.frame_height) == (32, 32)


@pytest.mark.parametrize("width,height", [(0, 32), (32, 0), (-4, 32), (32, -1)])
def test_invalid_dimensions_open_no_bitmaps(tmp_path, make_png, width, height):
    make_png("a.png")
    decoder = CountingDecoder()
    desc = Descriptor.from_string(frame_list_text(["a.png"], width=width, height=height))
    with pytest.raises(InvalidDimensions):
        load_sprite(str(tmp_path), desc, decoder=decoder)
    assert decoder.paths == []


def test_missing_size_section_is_invalid(tmp_path):
    desc = Descriptor.from_string("is_sheet=0\n[FILES]\nfile0=a.png\n")
    with pytest.raises(InvalidDimensions):
        load_sprite(str(tmp_path), desc)


def test_frame_list_without_files(tmp_path):
    desc = Descriptor.from_string(frame_list_text([]))
    with pytest.raises(MissingFiles):
        load_sprite(str(tmp_path), desc)


def test_frame_failure_releases_decoded_frames(tmp_path, make_png, monkeypatch):
    make_png("a.png")
    make_png("b.png")
    released = []
    original_init = sprite_loader.FrameSet.__init__

    def tracking_init(self, releaser=None):
        original_init(self, releaser=released.append)

    monkeypatch.setattr(sprite_loader.FrameSet, "__init__", tracking_init)
    decoder = CountingDecoder(fail_on="b.png")
    desc = Descriptor.from_string(frame_list_text(["a.png", "b.png", "c.png"]))

    with pytest.raises(FrameLoadFailure) as exc:
        load_sprite(str(tmp_path), desc, decoder=decoder)
    assert exc.value.file.endswith("b.png")
    # a.png was decoded and then released; c.png was never attempted
    assert len(released) == 1
    assert [os.path.basename(p) for p in decoder.paths] == ["a.png", "b.png"]


def test_missing_image_file(tmp_path, make_png):
    make_png("a.png")
    desc = Descriptor.from_string(frame_list_text(["a.png", "gone.png"]))
    with pytest.raises(FrameLoadFailure) as exc:
        load_sprite(str(tmp_path), desc)
    assert exc.value.file == os.path.join(str(tmp_path), "gone.png")


def test_alpha_key_applied_to_each_frame(tmp_path, make_png):
    make_png("a.png", color=RED, patch=(pygame.Rect(0, 0, 4, 4), MAGENTA))
    make_png("b.png", color=MAGENTA)
    desc = Descriptor.from_string(frame_list_text(["a.png", "b.png"], alpha=MAGENTA))
    sprite = load_sprite(str(tmp_path), desc)
    assert sprite.use_alpha
    assert sprite.alpha_key == MAGENTA
    a, b = sprite.frames
    assert a.get_at((0, 0)).a == 0
    assert a.get_at((10, 10)) == pygame.Color(*RED, 255)
    assert b.get_at((31, 31)).a == 0


def test_alpha_channels_are_clamped(tmp_path, make_png):
    make_png("a.png")
    desc = Descriptor.from_string(frame_list_text(["a.png"], alpha=(300, -5, 12)))
    sprite = load_sprite(str(tmp_path), desc)
    assert sprite.alpha_key == (255, 0, 12)


def test_alpha_section_ignored_without_use_alpha(tmp_path, make_png):
    make_png("a.png", color=MAGENTA)
    text = frame_list_text(["a.png"]) + "[ALPHA]\nr=255\ng=0\nb=255\n"
    sprite = load_sprite(str(tmp_path), Descriptor.from_string(text))
    assert not sprite.use_alpha
    assert sprite.alpha_key == (0, 0, 0)
    assert sprite.frames[0].get_at((0, 0)).a == 255


def sheet_text(files, num_frames, width=16, height=16):
    return (
        "use_alpha=0\nis_sheet=1\nframe_delay=0\n"
        f"num_frames={num_frames}\n\n"
        f"[SIZE]\nwidth={width}\nheight={height}\n\n[FILES]\n"
        + "".join(f"file{i}={f}\n" for i, f in enumerate(files))
    )


def test_sheet_decodes_exactly_one_bitmap(tmp_path, make_png):
    make_png("sheet.png", size=(64, 16))
    make_png("ignored.png", size=(64, 16))
    decoder = CountingDecoder()
    desc = Descriptor.from_string(sheet_text(["sheet.png", "ignored.png"], 4))
    sprite = load_sprite(str(tmp_path), desc, decoder=decoder)
    assert sprite.is_sheet
    assert sprite.frame_count == 4
    assert len(sprite.frames) == 1
    assert [os.path.basename(p) for p in decoder.paths] == ["sheet.png"]


def test_sheet_decode_failure(tmp_path):
    desc = Descriptor.from_string(sheet_text(["absent.png"], 2))
    with pytest.raises(FrameLoadFailure):
        load_sprite(str(tmp_path), desc)


def test_sheet_without_files(tmp_path):
    with pytest.raises(MissingFiles):
        load_sprite(str(tmp_path), Descriptor.from_string(sheet_text([], 2)))


@pytest.mark.parametrize("num_frames,height", [(5, 16), (0, 16), (4, 17)])
def test_sheet_geometry_must_fit_image(tmp_path, make_png, num_frames, height):
    make_png("sheet.png", size=(64, 16))
    desc = Descriptor.from_string(sheet_text(["sheet.png"], num_frames, height=height))
    with pytest.raises(SheetSizeMismatch):
        load_sprite(str(tmp_path), desc)


def test_sheet_wider_than_needed_is_accepted(tmp_path, make_png):
    make_png("sheet.png", size=(80, 16))
    sprite = load_sprite(str(tmp_path), Descriptor.from_string(sheet_text(["sheet.png"], 4)))
    assert sprite.frame_count == 4


def test_absolute_file_entry(tmp_path, make_png):
    make_png("a.png")
    abs_path = str(tmp_path / "a.png")
    desc = Descriptor.from_string(frame_list_text([abs_path]))
    sprite = load_sprite("/somewhere/else", desc)
    assert sprite.frame_count == 1


def test_load_sprite_file_resolves_next_to_descriptor(tmp_path, make_png, write_descriptor):
    make_png("a.png")
    make_png("b.png")
    path = write_descriptor(frame_list_text(["a.png", "b.png"]))
    sprite = load_sprite_file(path)
    assert sprite.frame_count == 2
    assert sprite.source == path
