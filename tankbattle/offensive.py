"""An aggressive tank algorithm that hunts down the opposing tank."""

from __future__ import annotations

import dataclasses
from collections import deque
from typing import Optional, Union

from .algorithm import TankAlgorithm
from .board import GameBoard
from .direction import Action, Direction, all_directions, direction_from_delta
from .objects import Tank

Position = tuple[int, int]
_State = tuple[int, int, Direction]

LOOKAHEAD_TICKS = 3

_DELTA_DIRECTIONS: dict[Position, Direction] = {
    (1, 0): Direction.RIGHT,
    (1, 1): Direction.DOWN_RIGHT,
    (0, 1): Direction.DOWN,
    (-1, 1): Direction.DOWN_LEFT,
    (-1, 0): Direction.LEFT,
    (-1, -1): Direction.UP_LEFT,
    (0, -1): Direction.UP,
    (1, -1): Direction.UP_RIGHT,
}


class OffensiveAlgorithm(TankAlgorithm):
    """Shoots when the enemy is in sight, otherwise aims at it or chases it."""

    def __init__(self) -> None:
        self._cached_path: list[Position] = []
        self._cached_enemy_pos: Position = (-1, -1)

    @property
    def name(self) -> str:
        return "OffensiveAlgorithm"

    def next_action(self, board: GameBoard, player_id: int) -> Action:
        """Evade shells, shoot, close in, aim, or chase, in that order."""
        enemy_id = 2 if player_id == 1 else 1
        my_tank = board.player_tank(player_id)
        enemy_tank = board.player_tank(enemy_id)
        if my_tank is None or enemy_tank is None:
            return Action.NONE

        if self.is_shell_approaching(board, my_tank):
            return self.evasion_action(board, my_tank)

        if self.can_shoot_now(my_tank) and self.enemy_in_sight(board, my_tank, enemy_tank):
            return Action.SHOOT

        dx, dy = my_tank.direction.movement()
        if self.is_in_direction(board, my_tank.position, enemy_tank.position, dx, dy):
            next_x, next_y = board.wrap(my_tank.x + dx, my_tank.y + dy)
            if self.can_shoot_now(my_tank):
                return Action.SHOOT
            if not board.objects_at(next_x, next_y):
                return Action.MOVE_FORWARD

        can_see_enemy, desired = self.best_rotation_to_enemy(board, my_tank, enemy_tank)
        if my_tank.direction != desired:
            action = self.rotation_action(my_tank, desired)
            if can_see_enemy and action != Action.NONE:
                return action

        return self.chase_action(board, my_tank, enemy_tank)

    def evasion_action(self, board: GameBoard, tank: Tank) -> Action:
        """A move out of the way of an approaching shell, or NONE."""
        if self.is_shell_approaching(board, tank):
            move = self.safe_move(board, tank.x, tank.y, tank.direction, tank.player_id)
            if move != Action.NONE:
                return move
        return Action.NONE

    def safe_move(
        self,
        board: GameBoard,
        x: int,
        y: int,
        current_dir: Direction,
        player_id: int,
    ) -> Action:
        """The safest action for a tank at (x, y) given the shells in flight."""
        tank = board.player_tank(player_id)
        if tank is None:
            return Action.NONE

        immediate_danger = False
        near_danger = False
        for shell in board.shells:
            sx, sy = shell.position
            sdx, sdy = shell.direction.movement()
            for tick in range(1, LOOKAHEAD_TICKS + 1):
                steps = (2 * tick - 1, 2 * tick)
                hit = any(
                    ((sx + sdx * s) % board.width, (sy + sdy * s) % board.height) == (x, y)
                    for s in steps
                )
                if hit:
                    if tick == 1:
                        immediate_danger = True
                    else:
                        near_danger = True
                    break
            if immediate_danger:
                break

        dx, dy = current_dir.movement()
        forward = board.wrap(x + dx, y + dy)
        backward = board.wrap(x - dx, y - dy)

        if immediate_danger:
            if self.can_shoot_now(tank) and self.can_shoot_shell(board, x, y, current_dir):
                return Action.SHOOT
            if self.is_tile_safe(board, *forward):
                return Action.MOVE_FORWARD
            if tank.in_backward_move and self.is_tile_safe(board, *backward):
                return Action.MOVE_BACKWARD
            rotation = self._rotation_towards_safe_tile(board, tank, x, y, current_dir)
            return rotation if rotation is not None else Action.ROTATE_RIGHT

        if near_danger:
            rotation = self._rotation_towards_safe_tile(board, tank, x, y, current_dir)
            if rotation is not None:
                return rotation

        if self.is_tile_safe(board, *forward):
            return Action.MOVE_FORWARD
        if tank.in_backward_move and self.is_tile_safe(board, *backward):
            return Action.MOVE_BACKWARD
        return Action.ROTATE_RIGHT

    def _rotation_towards_safe_tile(
        self, board: GameBoard, tank: Tank, x: int, y: int, current_dir: Direction
    ) -> Optional[Action]:
        for direction in all_directions():
            if direction == current_dir:
                continue
            dx, dy = direction.movement()
            if self.is_tile_safe(board, *board.wrap(x + dx, y + dy)):
                rotation = self.rotation_action(tank, direction)
                if rotation != Action.NONE:
                    return rotation
        return None

    def can_shoot_shell(self, board: GameBoard, x: int, y: int, direction: Direction) -> bool:
        """Whether a shell lies straight ahead along a horizontal or vertical line."""
        for shell in board.shells:
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

    def enemy_in_sight(self, board: GameBoard, my_tank: Tank, enemy_tank: Tank) -> bool:
        """Whether the enemy lies along the facing direction with no wall between."""
        dx, dy = my_tank.direction.movement()
        if not self.is_in_direction(board, my_tank.position, enemy_tank.position, dx, dy):
            return False
        return self.has_clear_path(board, my_tank.position, enemy_tank.position)

    def has_clear_path(self, board: GameBoard, start: Position, end: Position) -> bool:
        """Whether the straight line from start to end crosses no wall."""
        x0, y0 = start
        x1, y1 = end
        if (x0, y0) == (x1, y1):
            return True

        dx = abs(x1 - x0)
        dy = abs(y1 - y0)
        sx = 1 if x0 < x1 else -1
        sy = 1 if y0 < y1 else -1
        err = dx - dy

        while True:
            if (x0, y0) != tuple(start):
                if board.cell_has_wall(x0 % board.width, y0 % board.height):
                    return False
            if (x0, y0) == (x1, y1):
                return True
            e2 = 2 * err
            if e2 > -dy:
                err -= dy
                x0 += sx
            if e2 < dx:
                err += dx
                y0 += sy

    def can_shoot_now(self, tank: Tank) -> bool:
        """Whether the tank has shells and its cooldown has run out."""
        return tank.shoot_cooldown == 0 and tank.shells_left > 0

    def best_rotation_to_enemy(
        self, board: GameBoard, my_tank: Tank, enemy_tank: Tank
    ) -> tuple[bool, Direction]:
        """The direction towards the enemy and whether it would be in sight from there."""
        dx = enemy_tank.x - my_tank.x
        dy = enemy_tank.y - my_tank.y
        if abs(dx) > board.width // 2:
            dx += -board.width if dx > 0 else board.width
        if abs(dy) > board.height // 2:
            dy += -board.height if dy > 0 else board.height

        best = direction_from_delta(dx, dy)
        simulated = dataclasses.replace(my_tank, direction=best)
        return self.enemy_in_sight(board, simulated, enemy_tank), best

    def rotation_action(self, my_tank: Tank, target: Direction) -> Action:
        """The single rotation that turns the tank to target, or NONE."""
        current = my_tank.direction
        if current == target:
            return Action.NONE
        if current.rotate_right() == target:
            return Action.ROTATE_RIGHT
        if current.rotate_right_quarter() == target:
            return Action.ROTATE_RIGHT_QUARTER
        if current.rotate_left() == target:
            return Action.ROTATE_LEFT
        if current.rotate_left_quarter() == target:
            return Action.ROTATE_LEFT_QUARTER
        return Action.NONE

    def is_aimed_after_rotation(
        self,
        board: GameBoard,
        my_tank: Tank,
        enemy_tank: Tank,
        rotation: Union[Action, str],
    ) -> bool:
        """Whether the enemy is in sight; judged from the tank's present heading."""
        return self.enemy_in_sight(board, my_tank, enemy_tank)

    def bfs_path(
        self,
        board: GameBoard,
        tank: Tank,
        goal: Position,
        max_steps: int = 5,
    ) -> list[Position]:
        """Cells leading from the tank to goal through empty cells.

        The search turns at most 90 degrees per step and gives up after
        ``max_steps`` levels (-1 for no limit). The tank's own cell is not
        part of the path; an empty list means no path was found.
        """
        goal = tuple(goal)
        start: _State = (tank.x, tank.y, tank.direction)
        came_from: dict[_State, Optional[_State]] = {start: None}
        queue: deque[_State] = deque([start])
        found: Optional[_State] = None
        steps_taken = 0

        while queue and (max_steps == -1 or steps_taken < max_steps):
            for _ in range(len(queue)):
                x, y, direction = state = queue.popleft()
                if (x, y) == goal:
                    found = state
                    break
                for new_dir in (
                    direction.rotate_left_quarter(),
                    direction.rotate_left(),
                    direction,
                    direction.rotate_right(),
                    direction.rotate_right_quarter(),
                ):
                    dx, dy = new_dir.movement()
                    nx = (x + dx) % board.width
                    ny = (y + dy) % board.height
                    successor = (nx, ny, new_dir)
                    if board.objects_at(nx, ny) or successor in came_from:
                        continue
                    came_from[successor] = state
                    queue.append(successor)
            if found is not None:
                break
            steps_taken += 1

        if found is None:
            return []

        path: list[Position] = []
        current: Optional[_State] = found
        while current is not None:
            path.append((current[0], current[1]))
            current = came_from[current]
        path.pop()
        path.reverse()
        return path

    def chase_action(self, board: GameBoard, my_tank: Tank, enemy_tank: Tank) -> Action:
        """Follow a cached path towards the enemy, recomputing it when the enemy moves."""
        enemy_pos = enemy_tank.position
        if not self._cached_path or self._cached_enemy_pos != enemy_pos:
            self._cached_path = self.bfs_path(board, my_tank, enemy_pos)
            self._cached_enemy_pos = enemy_pos

        if len(self._cached_path) < 2:
            dx, dy = my_tank.direction.movement()
            nx, ny = board.wrap(my_tank.x + dx, my_tank.y + dy)
            if self.is_tile_safe(board, nx, ny):
                return Action.MOVE_FORWARD
            if self.can_shoot_now(my_tank):
                if any(o.is_wall or o.is_tank for o in board.objects_at(nx, ny)):
                    return Action.SHOOT
            return Action.ROTATE_RIGHT

        next_x, next_y = self._cached_path[1]
        dx = (next_x - my_tank.x) % board.width
        dy = (next_y - my_tank.y) % board.height
        if dx > board.width // 2:
            dx -= board.width
        if dy > board.height // 2:
            dy -= board.height

        desired = _DELTA_DIRECTIONS.get((dx, dy))
        if desired is None:
            return Action.NONE

        rotation = self.rotation_action(my_tank, desired)
        if rotation != Action.NONE:
            return rotation
        return Action.MOVE_FORWARD

    def is_tile_safe(self, board: GameBoard, x: int, y: int) -> bool:
        """Whether the cell is free of solid objects and of shells about to arrive."""
        x, y = board.wrap(x, y)
        if any(not o.is_shell for o in board.objects_at(x, y)):
            return False
        for shell in board.shells:
            sx, sy = shell.position
            sdx, sdy = shell.direction.movement()
            if (sx + sdx == x and sy + sdx == y) or (sx + 2 * sdx == x and sy + 2 * sdy == y):
                return False
        return True