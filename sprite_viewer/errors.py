"""
Exception types raised while loading and exporting sprites.
"""

from __future__ import annotations
from typing import Optional


class SpriteError(Exception):
    """Base class for every sprite load/export failure."""


class ConfigError(SpriteError):
    """The descriptor describes a sprite that cannot be loaded."""


class InvalidDimensions(ConfigError):
    def __init__(self, width: int, height: int) -> None:
        super().__init__(
            f"Invalid sprite size {width}x{height}: "
            "width and height must be greater than zero"
        )
        self.width = width
        self.height = height


class MissingFiles(ConfigError):
    def __init__(self) -> None:
        super().__init__("No image files listed under the [FILES] section")


class SheetSizeMismatch(ConfigError):
    """Frame geometry does not fit inside the decoded sheet image."""

    def __init__(
        self,
        file: str,
        frame_width: int,
        frame_height: int,
        frame_count: int,
        image_size: tuple,
    ) -> None:
        super().__init__(
            f"Sheet {file} is {image_size[0]}x{image_size[1]} but "
            f"{frame_count} frames of {frame_width}x{frame_height} were requested"
        )
        self.file = file
        self.frame_width = frame_width
        self.frame_height = frame_height
        self.frame_count = frame_count
        self.image_size = image_size


class DescriptorError(ConfigError):
    def __init__(self, path: str, reason: Optional[str] = None) -> None:
        msg = f"Unable to read sprite descriptor {path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.path = path


class LoadError(SpriteError):
    """An image referenced by the descriptor could not be decoded."""


class FrameLoadFailure(LoadError):
    def __init__(self, file: str, reason: Optional[str] = None) -> None:
        msg = f"Unable to load sprite image {file}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.file = file


class ExportError(SpriteError):
    """Exporting a sprite to a sheet failed; the sprite itself is untouched."""


class UnsupportedConversion(ExportError):
    def __init__(self) -> None:
        super().__init__(
            "Only sprites made of individual frames can be exported to a sheet"
        )


class AllocationFailure(ExportError):
    def __init__(self, width: int, height: int) -> None:
        super().__init__(
            f"Unable to allocate a {width}x{height} sprite sheet. "
            "Perhaps the images are too big?"
        )
        self.width = width
        self.height = height


class IOFailure(ExportError):
    def __init__(self, path: str, reason: Optional[str] = None) -> None:
        msg = f"An I/O error occurred while writing {path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.path = path
