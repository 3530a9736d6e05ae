"""
core/scene.py — Scene interface

The app holds a stack of scenes and only the top one is updated and
drawn.  The arena sandbox is a single scene; subclasses override what
they need:

    class ArenaScene(Scene):
        def on_enter(self, app):       # build the world
        def handle_event(self, event, app):
        def update(self, dt, app):     # dt in seconds
        def draw(self, surface, app):
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pygame
    from core.app import App


class Scene:
    def on_enter(self, app: App):
        """Called when this scene becomes active (pushed or revealed)."""
        pass

    def on_exit(self, app: App):
        """Called when this scene is removed or covered."""
        pass

    def handle_event(self, event: pygame.event.Event, app: App):
        pass

    def update(self, dt: float, app: App):
        pass

    def draw(self, surface: pygame.Surface, app: App):
        pass
