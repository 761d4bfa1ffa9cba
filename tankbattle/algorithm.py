"""The base class shared by tank-driving algorithms."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .board import GameBoard
from .direction import Action
from .objects import Tank


class TankAlgorithm(ABC):
    """Chooses one action per step for a player's tank."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The algorithm's display name."""

    @abstractmethod
    def next_action(self, board: GameBoard, player_id: int) -> Action:
        """The action the player's tank takes this step."""

    def is_shell_approaching(self, board: GameBoard, tank: Tank) -> bool:
        """Whether any shell is travelling straight towards the tank."""
        mx, my = tank.position
        for shell in board.shells:
            sx, sy = shell.position
            dx, dy = shell.direction.movement()
            if dy == 0 and sy == my:
                if (dx > 0 and sx < mx) or (dx < 0 and sx > mx):
                    return True
            elif dx == 0 and sx == mx:
                if (dy > 0 and sy < my) or (dy < 0 and sy > my):
                    return True
            elif abs(sx - mx) == abs(sy - my):
                delta_x = mx - sx
                delta_y = my - sy
                x_ok = (dx > 0 and delta_x > 0) or (dx < 0 and delta_x < 0)
                y_ok = (dy > 0 and delta_y > 0) or (dy < 0 and delta_y < 0)
                if x_ok and y_ok:
                    return True
        return False

    def find_safe_direction(self, board: GameBoard, player_id: int) -> Action:
        """The base algorithm knows no safe move."""
        return Action.NONE

    def is_in_direction(
        self,
        board: GameBoard,
        start: tuple[int, int],
        end: tuple[int, int],
        dx: int,
        dy: int,
    ) -> bool:
        """Whether walking from start along (dx, dy), wrapping, reaches end."""
        if start == end or (dx == 0 and dy == 0):
            return False
        if dy == 0 and start[1] == end[1]:
            return True
        if dx == 0 and start[0] == end[0]:
            return True

        x, y = start
        for _ in range(board.width * board.height):
            x = (x + dx + board.width) % board.width
            y = (y + dy + board.height) % board.height
            if (x, y) == end:
                return True
            if (x, y) == start:
                break
        return False