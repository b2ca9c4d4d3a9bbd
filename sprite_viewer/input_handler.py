"""
Input handling abstraction to decouple Pygame input from viewer logic.
"""

from __future__ import annotations
import pygame
from typing import Optional, Tuple

from .config import EXPORT_KEY, QUIT_KEY


class InputHandler:
    """
    Processes Pygame events once per frame and exposes the viewer actions
    they triggered.
    """

    def __init__(self) -> None:
        self._quit = False
        self._export = False
        # New window size if the display was resized this frame
        self._resize: Optional[Tuple[int, int]] = None

    def process_events(self) -> None:
        """Poll Pygame events and record quit, export and resize actions."""
        self._quit = False
        self._export = False
        self._resize = None
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit = True
            elif event.type == pygame.KEYUP:
                if event.key == QUIT_KEY:
                    self._quit = True
                elif event.key == EXPORT_KEY:
                    self._export = True
            elif event.type == pygame.VIDEORESIZE:
                self._resize = (event.w, event.h)

    def should_quit(self) -> bool:
        """Return True if Escape or the window close button was used."""
        return self._quit

    def export_pressed(self) -> bool:
        """Return True if Space was released this frame."""
        return self._export

    def resized_to(self) -> Optional[Tuple[int, int]]:
        """Return the new window size if the display was resized this frame."""
        return self._resize
