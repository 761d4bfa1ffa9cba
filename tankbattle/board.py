"""The toroidal battle board: its objects, file loading and text rendering."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Union

from .direction import Direction
from .objects import GameObject, Mine, Shell, Tank, Wall

PathLike = Union[str, Path]

_HEADER = re.compile(r"\A\s*([+-]?\d+)\s+([+-]?\d+)")
_VALID_CELLS = frozenset("12#@ ")

LEGEND = (
    "\nLegend:\n"
    "  #: Wall\n"
    "  @: Mine\n"
    "  o: Shell\n"
    "  1: Player 1 Tank\n"
    "  2: Player 2 Tank\n"
)


class BoardLoadError(Exception):
    """The board file cannot be used to start a game."""


def _parse_header(text: str) -> tuple[int, int, str]:
    """Split a board file into its declared dimensions and the rows after them."""
    match = _HEADER.match(text)
    if match is None:
        raise BoardLoadError("Invalid board dimensions in file")
    width, height = int(match.group(1)), int(match.group(2))
    line_end = text.find("\n", match.end())
    rest = "" if line_end == -1 else text[line_end + 1:]
    return width, height, rest


def _split_rows(text: str) -> list[str]:
    if not text:
        return []
    rows = text.split("\n")
    if text.endswith("\n"):
        rows.pop()
    return rows


def read_dimensions(path: PathLike) -> tuple[int, int]:
    """Read the declared (width, height) at the start of a board file."""
    try:
        text = Path(path).read_text()
    except OSError as exc:
        raise BoardLoadError(f"Could not open input file: {path}") from exc
    width, height, _ = _parse_header(text)
    if width <= 0 or height <= 0:
        raise BoardLoadError("Invalid board dimensions in file")
    return width, height


class GameBoard:
    """A width x height board whose edges wrap around."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Board dimensions must be positive")
        self.width = width
        self.height = height
        self.tanks: list[Tank] = []
        self.shells: list[Shell] = []
        self.mines: list[Mine] = []
        self.walls: list[Wall] = []

    def load_file(
        self, path: PathLike, errors_path: Optional[PathLike] = "input_errors.txt"
    ) -> list[str]:
        """Fill the board from a file and return the recoverable warnings.

        Warnings are written to ``errors_path`` when any cell-level problem
        was found. A board without both tanks raises BoardLoadError.
        """
        self.clear()
        try:
            text = Path(path).read_text()
        except OSError as exc:
            raise BoardLoadError(f"Failed to open file: {path}") from exc

        file_width, file_height, rest = _parse_header(text)
        warnings: list[str] = []
        has_warnings = False

        if file_width != self.width or file_height != self.height:
            warnings.append(
                f"Warning: File dimensions ({file_width}x{file_height}) don't match "
                f"board dimensions ({self.width}x{self.height})"
            )

        has_player = {1: False, 2: False}
        start_direction = {1: Direction.LEFT, 2: Direction.RIGHT}
        rows = _split_rows(rest)[: self.height]

        for y, line in enumerate(rows):
            padded = line[: self.width].ljust(self.width)
            for x, cell in enumerate(padded):
                if cell not in _VALID_CELLS:
                    warnings.append(
                        f"Warning: Invalid character '{cell}' at ({x},{y}), "
                        "treated as space"
                    )
                    has_warnings = True
                    continue
                if cell in "12":
                    player_id = int(cell)
                    if has_player[player_id]:
                        warnings.append(
                            f"Warning: Duplicate player {player_id} tank at ({x},{y}), "
                            "keeping first occurrence"
                        )
                        has_warnings = True
                    else:
                        self.tanks.append(Tank(player_id, x, y, start_direction[player_id]))
                        has_player[player_id] = True
                elif cell == "#":
                    self.walls.append(Wall(x, y))
                elif cell == "@":
                    self.mines.append(Mine(x, y))

        for y in range(len(rows), self.height):
            warnings.append(f"Warning: Missing row {y}, filled with spaces")
            has_warnings = True

        if not (has_player[1] and has_player[2]):
            raise BoardLoadError("Board must contain a tank for each player")

        if has_warnings and warnings and errors_path is not None:
            Path(errors_path).write_text("".join(f"{w}\n" for w in warnings))

        return warnings

    def clear(self) -> None:
        """Remove every object from the board."""
        self.tanks.clear()
        self.shells.clear()
        self.mines.clear()
        self.walls.clear()

    def objects_at(self, x: int, y: int) -> list[GameObject]:
        """Objects in a cell: tanks, shells, mines, then standing walls."""
        x, y = self.wrap(x, y)
        found: list[GameObject] = [t for t in self.tanks if t.position == (x, y)]
        found += [s for s in self.shells if s.position == (x, y)]
        found += [m for m in self.mines if m.position == (x, y)]
        found += [w for w in self.walls if w.position == (x, y) and not w.destroyed]
        return found

    def player_tank(self, player_id: int) -> Optional[Tank]:
        """The tank belonging to a player, or None once it is gone."""
        return next((t for t in self.tanks if t.player_id == player_id), None)

    def add_shell(self, shell: Shell) -> None:
        self.shells.append(shell)

    def remove_shell(self, shell: Shell) -> None:
        self.shells = [s for s in self.shells if s is not shell]

    def remove_wall(self, wall: Wall) -> None:
        self.walls = [w for w in self.walls if w is not wall]

    def remove_mine(self, mine: Mine) -> None:
        self.mines = [m for m in self.mines if m is not mine]

    def remove_tank(self, tank: Tank) -> None:
        self.tanks = [t for t in self.tanks if t is not tank]

    def contains_shell(self, shell: Shell) -> bool:
        return any(s is shell for s in self.shells)

    def wrap(self, x: int, y: int) -> tuple[int, int]:
        """Bring coordinates that are at most one board off back onto the board."""
        if x < 0:
            x += self.width
        if x >= self.width:
            x -= self.width
        if y < 0:
            y += self.height
        if y >= self.height:
            y -= self.height
        return x, y

    def cell_has_obstacle(self, x: int, y: int) -> bool:
        """Whether the cell holds something other than tanks and mines."""
        return any(not o.is_tank and not o.is_mine for o in self.objects_at(x, y))

    def is_cell_empty(self, x: int, y: int) -> bool:
        """Whether nothing collidable occupies the cell."""
        return not any(o.collidable for o in self.objects_at(x, y))

    def cell_has_wall(self, x: int, y: int) -> bool:
        return any(o.is_wall for o in self.objects_at(x, y))

    def grid_lines(self) -> list[str]:
        """One string per row; tanks are drawn over shells, shells over mines and walls."""
        grid = [[" "] * self.width for _ in range(self.height)]
        layers: list[tuple[list, object]] = [
            (self.walls, "#"),
            (self.mines, "@"),
            (self.shells, "o"),
            (self.tanks, None),
        ]
        for items, mark in layers:
            for obj in items:
                x, y = obj.position
                if 0 <= x < self.width and 0 <= y < self.height:
                    grid[y][x] = mark if mark is not None else str(obj.player_id)
        return ["".join(row) for row in grid]

    def _direction_lines(self) -> list[str]:
        return [f"{t.player_id}: {t.direction.code()}" for t in self.tanks]

    def render(self) -> str:
        """A human-readable picture of the board with coordinates and a legend."""
        parts = [
            f"\nCurrent Board ({self.width}x{self.height}):\n",
            "-------------------------\n",
            "   " + "".join(f" {x}" for x in range(self.width)) + "\n",
        ]
        for y, row in enumerate(self.grid_lines()):
            parts.append(f"{y:>2} " + "".join(f" {c}" for c in row) + "\n")
        parts.append(LEGEND)
        return "".join(parts)

    def write_to_file(self, path: PathLike) -> None:
        """Save the dimensions, the grid and the tank directions to a file."""
        lines = [f"{self.width}x{self.height}", *self.grid_lines(), "Directions:"]
        lines += self._direction_lines()
        Path(path).write_text("".join(f"{line}\n" for line in lines))

    def step_log(self, step_number: int) -> str:
        """The game-flow log entry describing the board after a step."""
        lines = [f"Step {step_number}:", *self.grid_lines(), "Directions:"]
        lines += self._direction_lines()
        return "".join(f"{line}\n" for line in lines) + "\n"