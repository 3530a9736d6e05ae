"""scenes/arena_scene.py — Enemy AI sandbox.

A flat arena with a keyboard-driven player and a handful of enemies.
Watch them idle, patrol, chase, swing, flinch and die.

Controls:
    WASD         — move the player
    Space        — strike enemies in front of the player
    1-3          — spawn a grunt / brute / scout at a random spot
    F1           — toggle gizmos (detect radius, sight cone, destination)
    F5           — hot-reload data/tuning.toml
    R            — reset the arena
    Escape       — quit
"""

from __future__ import annotations
import random
import pygame
from core.scene import Scene
from core.app import App
from core.constants import PIXELS_PER_METRE, ARENA_BG
from core.events import EventBus
from core import tuning
from components import Position, Sprite, Identity, DevLog, GameClock
from logic.tick import new_world, enemies, tick_systems
from logic.entity_factory import spawn_enemy, archetype_names
from logic.targets import PlayerAvatar
from scenes.gizmos import world_to_screen, draw_enemy_gizmos, draw_facing_tick

ARENA_W = 30.0      # m
ARENA_H = 20.0      # m

_SPAWN_KEYS = {pygame.K_1: "grunt", pygame.K_2: "brute", pygame.K_3: "scout"}


class ArenaScene(Scene):
    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)
        self.show_gizmos = True
        self.player: PlayerAvatar | None = None

    def on_enter(self, app: App):
        self._reset(app)

    def _reset(self, app: App):
        app.world = new_world()
        app.world.res(EventBus).subscribe(
            "EnemyDied", lambda ev: print(f"[EVENT] enemy {ev.eid} died"))
        self.player = PlayerAvatar(app.world,
                                   Position(ARENA_W / 2, ARENA_H / 2))
        for name in archetype_names():
            self._spawn(app, name)

    def _spawn(self, app: App, archetype: str):
        x = self.rng.uniform(2.0, ARENA_W - 2.0)
        y = self.rng.uniform(2.0, ARENA_H - 2.0)
        spawn_enemy(app.world, archetype, x, y,
                    yaw=self.rng.uniform(0, 360), rng=self.rng)

    # ── Input ────────────────────────────────────────────────────────

    def handle_event(self, event, app: App):
        if event.type != pygame.KEYDOWN:
            return
        if event.key == pygame.K_ESCAPE:
            app.running = False
        elif event.key == pygame.K_SPACE:
            hits = self.player.strike()
            if hits == 0:
                print("[COMBAT] Player swings at nothing")
        elif event.key == pygame.K_F1:
            self.show_gizmos = not self.show_gizmos
        elif event.key == pygame.K_F5:
            tuning.reload()
        elif event.key == pygame.K_r:
            self._reset(app)
        elif event.key in _SPAWN_KEYS:
            self._spawn(app, _SPAWN_KEYS[event.key])

    # ── Update ───────────────────────────────────────────────────────

    def update(self, dt: float, app: App):
        keys = pygame.key.get_pressed()
        dx = (keys[pygame.K_d] - keys[pygame.K_a])
        dy = (keys[pygame.K_s] - keys[pygame.K_w])
        self.player.walk(dx, dy, dt)
        pos = self.player.position
        pos.x = max(0.0, min(ARENA_W, pos.x))
        pos.y = max(0.0, min(ARENA_H, pos.y))
        tick_systems(app.world, dt)

    # ── Draw ─────────────────────────────────────────────────────────

    def draw(self, surface: pygame.Surface, app: App):
        surface.fill(ARENA_BG)
        scale = PIXELS_PER_METRE
        to_screen = lambda p: world_to_screen(p, scale=scale)
        radius = scale // 3

        for enemy in enemies(app.world):
            cx, cy = to_screen(enemy.position)
            if self.show_gizmos and enemy.alive:
                draw_enemy_gizmos(surface, enemy, to_screen, scale)
            sprite = app.world.get(enemy.eid, Sprite) or Sprite("e")
            alpha = 1.0 - enemy.material.cutoff
            color = tuple(int(c * alpha) for c in sprite.color)
            pygame.draw.circle(surface, color, (cx, cy), radius)
            draw_facing_tick(surface, (230, 230, 230), cx, cy,
                             enemy.facing.yaw, radius + 4)
            enemy.hp_bar.draw(surface, cx, cy - radius - 8)
            app.draw_text(surface, enemy.current_state.name,
                          cx - radius, cy + radius + 2,
                          color=(200, 200, 200), font=app.font_sm)

        p = self.player
        px, py = to_screen(p.position)
        pygame.draw.circle(surface, (255, 255, 100), (px, py), radius)
        draw_facing_tick(surface, (255, 255, 255), px, py,
                         p.facing.yaw, radius + 6)

        self._draw_hud(surface, app)

    def _draw_hud(self, surface: pygame.Surface, app: App):
        clock = app.world.res(GameClock)
        ident = app.world.get(self.player.eid, Identity)
        app.draw_text_bg(surface,
                         f"t={clock.time:6.1f}s  {ident.name} HP "
                         f"{self.player.health.current}/{self.player.health.maximum}"
                         f"  enemies={len(enemies(app.world))}",
                         8, 8)
        log = app.world.res(DevLog)
        y = surface.get_height() - 14 * 8 - 8
        for entry in log.recent(8):
            app.draw_text(surface,
                          f"{entry['t']:6.1f} {entry['name']:<6} "
                          f"[{entry['cat']}] {entry['msg']}",
                          8, y, color=(180, 180, 180), font=app.font_sm)
            y += 14
