"""
Arcade window: renders the simulation and feeds it keyboard input
"""

from __future__ import annotations

import arcade

from .configs.game_config import WINDOW_CONFIG
from .difficulty import DIFFICULTY_NAMES
from .frame_loop import FrameLoop
from .simulation import Simulation

KEY_CONTROLS = {
    arcade.key.LEFT: "left",
    arcade.key.A: "left",
    arcade.key.RIGHT: "right",
    arcade.key.D: "right",
    arcade.key.UP: "up",
    arcade.key.W: "up",
    arcade.key.DOWN: "down",
    arcade.key.S: "down",
    arcade.key.SPACE: "fire",
}

DIFFICULTY_KEYS = {
    arcade.key.KEY_1: "easy",
    arcade.key.KEY_2: "normal",
    arcade.key.KEY_3: "hard",
}


class ShooterWindow(arcade.Window):
    """Arcade window hosting one Starfall session at a time"""

    def __init__(self, simulation: Simulation, difficulty: str = "normal"):
        super().__init__(simulation.width, simulation.height, WINDOW_CONFIG["title"],
                         update_rate=WINDOW_CONFIG["update_rate"])
        self.loop = FrameLoop(simulation)
        self.difficulty = difficulty
        # menu -> playing -> game_over -> menu; "external" while an agent drives the simulation
        self.state = "menu"

        self.BULLET_C = WINDOW_CONFIG["bullet_color"]
        self.PLAYER_C = WINDOW_CONFIG["player_color"]
        self.ENEMY_C = WINDOW_CONFIG["enemy_color"]
        self.ENEMY_BULLET_C = WINDOW_CONFIG["enemy_bullet_color"]
        self.HUD_C = WINDOW_CONFIG["hud_color"]
        self.background_color = WINDOW_CONFIG["background"]

    # ----------------------------
    # UI transitions
    # ----------------------------

    def start_game(self, difficulty: str):
        self.difficulty = difficulty
        self.loop.start(difficulty)
        self.state = "playing"
        print(f"Starting game on {difficulty}")

    def reset_game(self):
        self.loop.reset()
        self.state = "menu"

    def show(self, snapshot):
        """Draw a snapshot produced by someone else (e.g. an agent stepping the simulation)"""
        self.loop.last_snapshot = snapshot
        # Display only: no ticking, no menu or reset transitions
        self.state = "external"
        self.dispatch_events()
        self.on_draw()
        self.flip()

    # ----------------------------
    # Arcade callbacks
    # ----------------------------

    def on_update(self, delta_time: float):
        if self.state != "playing":
            return
        if not self.loop.tick():
            snap = self.loop.last_snapshot
            if snap.game_over:
                self.state = "game_over"
                print(f"Game over - score {snap.score}, level {snap.level}")

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.ESCAPE:
            self.close()
        elif self.state == "external":
            return
        elif self.state == "menu":
            if symbol in DIFFICULTY_KEYS:
                self.difficulty = DIFFICULTY_KEYS[symbol]
            elif symbol == arcade.key.ENTER:
                self.start_game(self.difficulty)
        elif self.state == "game_over":
            if symbol == arcade.key.R:
                self.reset_game()
        elif symbol in KEY_CONTROLS:
            self.loop.inputs.press(KEY_CONTROLS[symbol])

    def on_key_release(self, symbol: int, modifiers: int):
        if self.state != "external" and symbol in KEY_CONTROLS:
            self.loop.inputs.release(KEY_CONTROLS[symbol])

    def on_draw(self):
        self.clear()
        snap = self.loop.last_snapshot

        if self.state == "menu":
            self._draw_menu()
            return

        for b in snap.projectiles:
            self._draw_rect(b, self.BULLET_C)
        for e in snap.enemies:
            self._draw_rect(e, self.ENEMY_C)
        for b in snap.enemy_projectiles:
            self._draw_rect(b, self.ENEMY_BULLET_C)
        self._draw_rect(snap.player, self.PLAYER_C)

        txt = f"Score: {snap.score}  Level: {snap.level}  Health: {snap.health}"
        arcade.draw_text(txt, 12, self.height - 30, self.HUD_C, 16)

        if snap.game_over:
            cx, cy = self.width / 2, self.height / 2
            arcade.draw_text("GAME OVER", cx, cy + 30, self.HUD_C, 36, anchor_x="center")
            arcade.draw_text(f"Final score: {snap.score}", cx, cy - 10, self.HUD_C, 18, anchor_x="center")
            arcade.draw_text("Press R to reset", cx, cy - 40, self.HUD_C, 14, anchor_x="center")

    # ----------------------------
    # Drawing helpers
    # ----------------------------

    def _draw_rect(self, ent, color):
        # Simulation y grows downward, arcade's grows upward
        top = self.height - ent.y
        arcade.draw_lrbt_rectangle_filled(ent.x, ent.x + ent.width, top - ent.height, top, color)

    def _draw_menu(self):
        cx, cy = self.width / 2, self.height / 2
        arcade.draw_text("STARFALL", cx, cy + 60, self.HUD_C, 40, anchor_x="center")
        options = "  ".join(
            f"[{i + 1}] {'>' if name == self.difficulty else ''}{name}"
            for i, name in enumerate(DIFFICULTY_NAMES)
        )
        arcade.draw_text(options, cx, cy, self.HUD_C, 16, anchor_x="center")
        arcade.draw_text("Press ENTER to start", cx, cy - 40, self.HUD_C, 14, anchor_x="center")


def run_window(difficulty: str = "normal"):
    window = ShooterWindow(Simulation(difficulty), difficulty)
    arcade.run()
    return window
