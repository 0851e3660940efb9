from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Tuple

try:
    import pygame  # type: ignore
except Exception:
    pygame = None

from config import CELL, CONVEYOR, EMPTY, FACTORY, GRID_SIZE, MINER, PROCESSED, RESOURCE, RULES_FILE
from game import Direction, FactorySim, Tile, TickScheduler
from rules_catalog import load_rules_catalog

ARROW_KEYS = {
    "K_UP": Direction.UP,
    "K_DOWN": Direction.DOWN,
    "K_LEFT": Direction.LEFT,
    "K_RIGHT": Direction.RIGHT,
}


def build_demo_line(sim: FactorySim) -> Optional[Tuple[int, int]]:
    """Put a miner on the first deposit with room for a belt and factory to its right."""
    for row, col, tile in list(sim.board.cells()):
        if tile.kind != RESOURCE or col + 2 >= sim.grid_size:
            continue
        belt = sim.tile_at(row, col + 1)
        sink = sim.tile_at(row, col + 2)
        if RESOURCE in (belt.kind, sink.kind):
            continue
        sim.place_miner(row, col)
        sim.place_conveyor(row, col + 1, Direction.RIGHT)
        sim.place_factory(row, col + 2)
        return row, col
    return None


def run_headless(ticks: int, grid_size: int, seed: Optional[int], rules_path: Path) -> None:
    rules = load_rules_catalog(rules_path)
    sim = FactorySim(grid_size=grid_size, seed=seed, rules=rules)
    origin = build_demo_line(sim)

    sim.start_processing()
    TickScheduler(sim, rules.tick_interval).run_for(ticks)
    sim.stop_processing()

    stats = sim.summary()
    line = "none" if origin is None else f"{origin[0]},{origin[1]}"
    print(
        f"headless_done ticks={stats['ticks']} line={line} "
        f"tiles[res={stats[RESOURCE]},min={stats[MINER]},conv={stats[CONVEYOR]},fac={stats[FACTORY]}]"
        f" units={stats['units']} score={stats['score']} max={stats['max_score']}"
    )


class GameUI:
    def __init__(self, sim: FactorySim):
        if pygame is None:
            raise RuntimeError("pygame is required for graphical mode. Relaunch with --headless.")
        pygame.init()
        if not pygame.display.get_init():
            raise RuntimeError("Display subsystem is unavailable. Relaunch with --headless.")
        self.sim = sim
        self.panel_h = 110
        size = sim.grid_size * CELL
        self.screen = pygame.display.set_mode((size, size + self.panel_h))
        pygame.display.set_caption("Crapptorio")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("arial", 22)
        self.small = pygame.font.SysFont("arial", 15)
        self.running = True
        self.selected = FACTORY
        self.direction = Direction.RIGHT
        self.tick_acc = 0.0

        self.palette = {
            "bg": (12, 15, 24),
            "text": (230, 236, 248),
            "badge": (245, 245, 245),
            "badge_text": (20, 20, 20),
        }

    def handle_input(self) -> None:
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                self.running = False
            if ev.type == pygame.KEYDOWN:
                for name, direction in ARROW_KEYS.items():
                    if ev.key == getattr(pygame, name):
                        self.selected = CONVEYOR
                        self.direction = direction
                if ev.key == pygame.K_f:
                    self.selected = FACTORY
                elif ev.key == pygame.K_m:
                    self.selected = MINER
                elif ev.key == pygame.K_d:
                    self.selected = EMPTY
                elif ev.key == pygame.K_SPACE:
                    self.sim.toggle_processing()
                elif ev.key == pygame.K_t:
                    self.sim.tick()
                elif ev.key == pygame.K_r:
                    self.sim.reroll()
                elif ev.key == pygame.K_n:
                    self.sim.reset()
            if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
                x, y = pygame.mouse.get_pos()
                self.sim.place_tile(y // CELL, x // CELL, self.selected, self.direction)

    def _tile_base_color(self, kind: str) -> Tuple[int, int, int]:
        colors = {
            EMPTY: (128, 128, 128),
            RESOURCE: (255, 149, 0),
            MINER: (255, 204, 0),
            CONVEYOR: (52, 199, 89),
            FACTORY: (0, 122, 255),
            PROCESSED: (175, 82, 222),
        }
        return colors[kind]

    def _badge(self, text: str, center: Tuple[int, int]) -> None:
        label = self.small.render(text, True, self.palette["badge_text"])
        rect = label.get_rect(center=center).inflate(6, 2)
        pygame.draw.rect(self.screen, self.palette["badge"], rect, border_radius=5)
        self.screen.blit(label, label.get_rect(center=center))

    def draw_tile(self, row: int, col: int, tile: Tile) -> None:
        rect = pygame.Rect(col * CELL + 1, row * CELL + 1, CELL - 2, CELL - 2)
        pygame.draw.rect(self.screen, self._tile_base_color(tile.kind), rect)
        cx, cy = rect.center
        if tile.kind == CONVEYOR:
            glyph = self.font.render(tile.direction.arrow, True, self.palette["text"])
            self.screen.blit(glyph, glyph.get_rect(center=(cx, cy)))
        if tile.resource_count > 0:
            self._badge(str(tile.resource_count), (cx, cy + CELL // 4))
        if tile.kind == FACTORY:
            self._badge(str(tile.processed_count), (cx, cy - CELL // 4))

    def draw(self) -> None:
        self.screen.fill(self.palette["bg"])
        size = self.sim.grid_size
        for row in range(size):
            for col in range(size):
                self.draw_tile(row, col, self.sim.tile_at(row, col))

        panel_y = size * CELL + 8
        tool = "DEL" if self.selected == EMPTY else self.selected.upper()
        if self.selected == CONVEYOR:
            tool = f"{tool} {self.direction.arrow}"
        state = "RUNNING" if self.sim.is_processing else "IDLE"
        lines = [
            f"Tool: {tool} | {state} | Score: {self.sim.current_score} | Max: {self.sim.max_score}",
            "F factory, M miner, arrows conveyor, D delete",
            "SPACE start/stop, T step, R reroll, N new game",
        ]
        for i, text in enumerate(lines):
            self.screen.blit(self.small.render(text, True, self.palette["text"]), (8, panel_y + i * 22))

        pygame.display.flip()

    def run(self) -> None:
        interval = self.sim.rules.tick_interval
        while self.running:
            self.tick_acc += self.clock.tick(60) / 1000.0
            self.handle_input()
            while self.tick_acc >= interval:
                self.tick_acc -= interval
                self.sim.advance()
            self.draw()
        pygame.quit()


def main() -> None:
    parser = argparse.ArgumentParser(description="Crapptorio resource factory")
    parser.add_argument("--headless", action="store_true", help="run simulation without graphics")
    parser.add_argument("--ticks", type=int, default=20, help="headless ticks to run")
    parser.add_argument("--size", type=int, default=None, help="board side length")
    parser.add_argument("--seed", type=int, default=None, help="random seed for cluster generation")
    parser.add_argument("--rules", type=Path, default=RULES_FILE, help="JSON rule overrides")
    args = parser.parse_args()

    grid_size = args.size if args.size and args.size > 0 else GRID_SIZE
    if args.headless:
        run_headless(args.ticks, grid_size, args.seed, args.rules)
        return

    sim = FactorySim(grid_size=grid_size, seed=args.seed, rules=load_rules_catalog(args.rules))
    try:
        ui = GameUI(sim)
    except RuntimeError as exc:
        print(f"Startup error: {exc}", file=sys.stderr)
        sys.exit(1)
    ui.run()


if __name__ == "__main__":
    main()
