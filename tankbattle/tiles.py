"""A per-cell view of the battlefield: walls, mines, shells and tanks by tile."""

from __future__ import annotations

from dataclasses import dataclass, field

from .objects import Shell, Tank

WALL_HITS = 2


@dataclass
class Tile:
    """The contents of one board cell."""

    has_wall: bool = False
    wall_hits: int = WALL_HITS
    has_mine: bool = False
    mine_detected: bool = False
    shells: list[Shell] = field(default_factory=list)
    tanks: set[Tank] = field(default_factory=set)


class TileGrid:
    """A width x height grid of tiles; positions off the grid are ignored."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("Grid dimensions must not be negative")
        self.width = width
        self.height = height
        self._tiles = [[Tile() for _ in range(width)] for _ in range(height)]

    def _valid(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def add_shell(self, x: int, y: int, shell: Shell) -> None:
        """Append a shell to a tile, keeping insertion order."""
        if self._valid(x, y):
            self._tiles[y][x].shells.append(shell)

    def remove_shell(self, x: int, y: int, shell: Shell) -> None:
        """Remove every occurrence of the shell from a tile."""
        if self._valid(x, y):
            tile = self._tiles[y][x]
            tile.shells = [s for s in tile.shells if s is not shell]

    def add_tank(self, x: int, y: int, tank: Tank) -> None:
        if self._valid(x, y):
            self._tiles[y][x].tanks.add(tank)

    def remove_tank(self, x: int, y: int, tank: Tank) -> None:
        if self._valid(x, y):
            self._tiles[y][x].tanks.discard(tank)

    def add_mine(self, x: int, y: int) -> None:
        """Place an undetected mine on a tile."""
        if self._valid(x, y):
            tile = self._tiles[y][x]
            tile.has_mine = True
            tile.mine_detected = False

    def add_wall(self, x: int, y: int) -> None:
        """Place a fresh wall on a tile."""
        if self._valid(x, y):
            tile = self._tiles[y][x]
            tile.has_wall = True
            tile.wall_hits = WALL_HITS

    def update(self, delta_time: float) -> list[str]:
        """Advance the grid by one tick and return the detection messages."""
        return self.detect_entities()

    def detect_entities(self) -> list[str]:
        """Mark new mines as detected and report mines and shells, row by row."""
        messages: list[str] = []
        for y, row in enumerate(self._tiles):
            for x, tile in enumerate(row):
                if tile.has_mine and not tile.mine_detected:
                    tile.mine_detected = True
                    messages.append(f"Mine detected at ({x}, {y})")
                messages.extend(f"Processing shell at ({x}, {y})" for _ in tile.shells)
        return messages

    def tile(self, x: int, y: int) -> Tile:
        """The tile at (x, y); raises IndexError off the grid."""
        if not self._valid(x, y):
            raise IndexError(f"No tile at ({x}, {y})")
        return self._tiles[y][x]

    def render_state(self) -> str:
        """A text dump of every tile's walls, mines, shell and tank counts."""
        lines = []
        for row in self._tiles:
            cells = []
            for tile in row:
                text = "["
                if tile.has_wall:
                    text += f"W{tile.wall_hits}"
                if tile.has_mine:
                    text += "M" if tile.mine_detected else "m"
                text += f"s{len(tile.shells)}t{len(tile.tanks)}] "
                cells.append(text)
            lines.append("".join(cells) + "\n")
        return "".join(lines)