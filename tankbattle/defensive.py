"""A cautious tank algorithm that dodges shells and only shoots on a clear line."""

from __future__ import annotations

from collections.abc import Iterator

from .algorithm import TankAlgorithm
from .board import GameBoard
from .direction import Action, Direction, all_directions
from .objects import Tank

_DIAGONALS = frozenset(
    {Direction.UP_RIGHT, Direction.DOWN_RIGHT, Direction.DOWN_LEFT, Direction.UP_LEFT}
)


def _cells_between(
    from_x: int, from_y: int, to_x: int, to_y: int
) -> Iterator[tuple[int, int]]:
    """Yield the cells strictly between two points on a straight or diagonal line."""
    step_x = 1 if from_x < to_x else -1
    step_y = 1 if from_y < to_y else -1
    if from_y == to_y:
        yield from ((x, from_y) for x in range(from_x + step_x, to_x, step_x))
    elif from_x == to_x:
        yield from ((from_x, y) for y in range(from_y + step_y, to_y, step_y))
    else:
        yield from zip(
            range(from_x + step_x, to_x, step_x),
            range(from_y + step_y, to_y, step_y),
        )


class DefensiveAlgorithm(TankAlgorithm):
    """Escapes incoming shells first, shoots only when safe, otherwise keeps moving."""

    @property
    def name(self) -> str:
        return "DefensiveAlgorithm"

    def next_action(self, board: GameBoard, player_id: int) -> Action:
        """Handle danger, then take a safe shot, then make a safe move."""
        tank = board.player_tank(player_id)
        if tank is None:
            return Action.NONE

        if self.is_in_immediate_danger(board, tank.x, tank.y):
            response = self.handle_immediate_danger(board, tank)
            if response != Action.NONE:
                return response

        if self.can_safely_shoot_opponent(board, tank):
            return Action.SHOOT

        return self.default_safe_move(board, tank)

    def is_in_immediate_danger(self, board: GameBoard, x: int, y: int) -> bool:
        """Whether a shell will pass through (x, y) during its next two-cell move."""
        for shell in board.shells:
            dx, dy = shell.direction.movement()
            first = board.wrap(shell.x + dx, shell.y + dy)
            second = board.wrap(first[0] + dx, first[1] + dy)
            if (x, y) in (first, second):
                return True
        return False

    def handle_immediate_danger(self, board: GameBoard, tank: Tank) -> Action:
        """Shoot the threat, step forward, step back, or turn as a last resort."""
        x, y = tank.position
        direction = tank.direction

        if tank.shoot_cooldown == 0 and self.can_shoot_shell(
            board, x, y, direction, tank.player_id
        ):
            return Action.SHOOT

        dx, dy = direction.movement()
        if self.is_tile_safe(board, *board.wrap(x + dx, y + dy)):
            return Action.MOVE_FORWARD
        if self.is_tile_safe(board, *board.wrap(x - dx, y - dy)):
            return Action.MOVE_BACKWARD
        return Action.ROTATE_RIGHT

    def can_shoot_shell(
        self,
        board: GameBoard,
        x: int,
        y: int,
        direction: Direction,
        player_id: int,
    ) -> bool:
        """Whether an enemy shell lies straight ahead on a horizontal or vertical line."""
        for shell in board.shells:
            if shell.player_id == player_id:
                continue
            sx, sy = shell.position
            if direction == Direction.LEFT and sy == y and sx < x:
                return True
            if direction == Direction.RIGHT and sy == y and sx > x:
                return True
            if direction == Direction.UP and sx == x and sy < y:
                return True
            if direction == Direction.DOWN and sx == x and sy > y:
                return True
        return False

    def can_safely_shoot_opponent(self, board: GameBoard, tank: Tank) -> bool:
        """Whether the tank is loaded, aimed at the opponent and has a clear shot."""
        if tank.shoot_cooldown > 0:
            return False
        opponent = board.player_tank(2 if tank.player_id == 1 else 1)
        if opponent is None:
            return False

        x, y = tank.position
        ox, oy = opponent.position
        direction = tank.direction

        if direction in (Direction.LEFT, Direction.RIGHT) and y == oy:
            aimed = (direction == Direction.LEFT and x > ox) or (
                direction == Direction.RIGHT and x < ox
            )
        elif direction in (Direction.UP, Direction.DOWN) and x == ox:
            aimed = (direction == Direction.UP and y > oy) or (
                direction == Direction.DOWN and y < oy
            )
        elif direction in _DIAGONALS and abs(x - ox) == abs(y - oy):
            aimed = (
                (direction == Direction.UP_RIGHT and ox > x and oy < y)
                or (direction == Direction.DOWN_RIGHT and ox > x and oy > y)
                or (direction == Direction.DOWN_LEFT and ox < x and oy > y)
                or (direction == Direction.UP_LEFT and ox < x and oy < y)
            )
        else:
            aimed = False

        return aimed and self.has_clear_shot(board, x, y, ox, oy)

    def has_clear_shot(
        self, board: GameBoard, from_x: int, from_y: int, to_x: int, to_y: int
    ) -> bool:
        """Whether every cell strictly between the two points is empty.

        Horizontal, vertical and diagonal lines are walked without wrapping.
        """
        return not any(
            not (obj.is_tank and obj.is_mine)
            for cx, cy in _cells_between(from_x, from_y, to_x, to_y)
            for obj in board.objects_at(cx, cy)
        )

    def default_safe_move(self, board: GameBoard, tank: Tank) -> Action:
        """Move forward when safe, otherwise turn towards a safe neighbouring cell."""
        enemy = board.player_tank(2 if tank.player_id == 1 else 1)
        if enemy is None:
            return Action.NONE

        x, y = tank.position
        direction = tank.direction
        dx, dy = direction.movement()
        forward_safe = self.is_tile_safe(board, *board.wrap(x + dx, y + dy))

        enemy_dx, enemy_dy = enemy.direction.movement()
        if self.is_in_direction(board, enemy.position, tank.position, enemy_dx, enemy_dy):
            return Action.MOVE_FORWARD if forward_safe else Action.NONE

        if forward_safe:
            return Action.MOVE_FORWARD

        rotations = (
            (direction.rotate_left(), Action.ROTATE_LEFT),
            (direction.rotate_right(), Action.ROTATE_RIGHT),
            (direction.rotate_left_quarter(), Action.ROTATE_LEFT_QUARTER),
            (direction.rotate_right_quarter(), Action.ROTATE_RIGHT_QUARTER),
        )
        for new_dir in all_directions():
            ndx, ndy = new_dir.movement()
            if not self.is_tile_safe(board, *board.wrap(x + ndx, y + ndy)):
                continue
            for rotated, action in rotations:
                if rotated == new_dir:
                    return action
        return Action.NONE

    def is_tile_safe(self, board: GameBoard, x: int, y: int) -> bool:
        """Whether nothing collidable occupies the cell."""
        return board.is_cell_empty(x, y)