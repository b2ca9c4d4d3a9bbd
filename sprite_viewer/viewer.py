from __future__ import annotations
import logging
import os
import pygame
from typing import Optional, Tuple

from .animation import AnimationClock
from .config import BACKGROUND_COLOR, ViewerSettings, WINDOW_TITLE
from .errors import ExportError
from .input_handler import InputHandler
from .sheet_exporter import save_sheet, sheet_paths
from .sprite import SpriteResource

logger = logging.getLogger(__name__)


def fit_frame(
    display_size: Tuple[int, int], frame_size: Tuple[int, int]
) -> Tuple[int, int]:
    """
    Size to draw a frame at: as large as the display allows, keeping the
    frame's aspect ratio, and never smaller than the frame itself.
    """
    dw, dh = display_size
    fw, fh = frame_size
    scale = max(1.0, min(dw / fw, dh / fh))
    return max(fw, int(fw * scale)), max(fh, int(fh * scale))


def min_display_size(
    display_size: Tuple[int, int], frame_size: Tuple[int, int]
) -> Tuple[int, int]:
    """Grow ``display_size`` so one full frame always fits."""
    return max(display_size[0], frame_size[0]), max(display_size[1], frame_size[1])


def default_export_path(sprite: SpriteResource) -> str:
    """Export target next to the sprite's descriptor, or in the cwd."""
    if sprite.source:
        stem, _ext = os.path.splitext(sprite.source)
        return stem + "_sheet"
    return os.path.join(os.getcwd(), "sprite_sheet")


def draw_sprite(
    screen: pygame.Surface, sprite: SpriteResource, frame: int
) -> None:
    """Draw ``frame`` scaled to the screen at its top-left corner."""
    bitmap, area = sprite.frame_source(frame)
    image = bitmap.subsurface(area) if sprite.is_sheet else bitmap
    size = fit_frame(screen.get_size(), sprite.size)
    if size != image.get_size():
        image = pygame.transform.scale(image, size)
    screen.blit(image, (0, 0))


class Viewer:
    """Plays a sprite in a window; Space exports it, Escape quits."""

    def __init__(
        self,
        sprite: SpriteResource,
        settings: Optional[ViewerSettings] = None,
        export_path: Optional[str] = None,
        overwrite: bool = False,
        clock: Optional[pygame.time.Clock] = None,
    ) -> None:
        self.sprite = sprite
        self.settings = settings or ViewerSettings()
        self.export_path = export_path or default_export_path(sprite)
        self.overwrite = overwrite
        pygame.init()
        self.screen = pygame.display.set_mode(
            min_display_size(
                (self.settings.display_width, self.settings.display_height),
                sprite.size,
            ),
            pygame.RESIZABLE,
        )
        pygame.display.set_caption(WINDOW_TITLE)
        # Clock drives the animation: one tick per displayed frame
        self.clock = clock or pygame.time.Clock()
        self.animation = AnimationClock.for_sprite(sprite)
        self.input = InputHandler()
        self.running = True

    def handle_events(self) -> None:
        """Process input: quit, export on request, and keep the window usable."""
        self.input.process_events()
        if self.input.should_quit():
            self.running = False
        size = self.input.resized_to()
        if size is not None:
            fixed = min_display_size(size, self.sprite.size)
            self.screen = pygame.display.set_mode(fixed, pygame.RESIZABLE)
        if self.input.export_pressed():
            self.export()

    def export(self) -> Optional[Tuple[str, str]]:
        """
        Save the sprite as a sheet. Refuses to replace an existing image
        unless overwriting was allowed. Returns the written paths, or None.
        """
        image_path, _ = sheet_paths(self.export_path)
        if os.path.exists(image_path) and not self.overwrite:
            logger.warning(
                "An image named %s already exists; not overwriting it.",
                image_path,
            )
            return None
        try:
            return save_sheet(self.sprite, self.export_path)
        except ExportError as e:
            logger.error("Sprite sheet export failed: %s", e)
            return None

    def update(self) -> None:
        """Advance the animation by one tick."""
        self.animation.tick()

    def render(self) -> None:
        self.screen.fill(BACKGROUND_COLOR)
        draw_sprite(self.screen, self.sprite, self.animation.current_frame)
        pygame.display.flip()

    def run(self) -> None:
        """Main loop: handle events, tick, and render until quit."""
        while self.running:
            self.clock.tick(self.settings.display_fps)
            self.handle_events()
            self.update()
            self.render()
        pygame.quit()
