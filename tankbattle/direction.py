"""Compass directions, rotations and the actions a tank may request."""

from __future__ import annotations

from enum import Enum


class Direction(Enum):
    """One of the eight directions a tank or shell can face, clockwise from up."""

    UP = 0
    UP_RIGHT = 1
    RIGHT = 2
    DOWN_RIGHT = 3
    DOWN = 4
    DOWN_LEFT = 5
    LEFT = 6
    UP_LEFT = 7

    def movement(self) -> tuple[int, int]:
        """The (dx, dy) step taken when moving one cell in this direction."""
        return _MOVEMENT[self]

    def rotate_left(self) -> Direction:
        """This direction turned 45 degrees counter-clockwise."""
        return Direction((self.value - 1) % 8)

    def rotate_right(self) -> Direction:
        """This direction turned 45 degrees clockwise."""
        return Direction((self.value + 1) % 8)

    def rotate_left_quarter(self) -> Direction:
        """This direction turned 90 degrees counter-clockwise."""
        return self.rotate_left().rotate_left()

    def rotate_right_quarter(self) -> Direction:
        """This direction turned 90 degrees clockwise."""
        return self.rotate_right().rotate_right()

    def code(self) -> str:
        """The short textual code of this direction, such as "UR"."""
        return _CODES[self]


class Action(str, Enum):
    """An action requested by a tank algorithm for one game step."""

    MOVE_FORWARD = "MOVE_FORWARD"
    MOVE_BACKWARD = "MOVE_BACKWARD"
    ROTATE_LEFT = "ROTATE_LEFT"
    ROTATE_RIGHT = "ROTATE_RIGHT"
    ROTATE_LEFT_QUARTER = "ROTATE_LEFT_QUARTER"
    ROTATE_RIGHT_QUARTER = "ROTATE_RIGHT_QUARTER"
    SHOOT = "SHOOT"
    NONE = "NONE"

    def __str__(self) -> str:
        return self.value


_MOVEMENT: dict[Direction, tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.UP_RIGHT: (1, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN_RIGHT: (1, 1),
    Direction.DOWN: (0, 1),
    Direction.DOWN_LEFT: (-1, 1),
    Direction.LEFT: (-1, 0),
    Direction.UP_LEFT: (-1, -1),
}

_CODES: dict[Direction, str] = {
    Direction.UP: "U",
    Direction.UP_RIGHT: "UR",
    Direction.RIGHT: "R",
    Direction.DOWN_RIGHT: "DR",
    Direction.DOWN: "D",
    Direction.DOWN_LEFT: "DL",
    Direction.LEFT: "L",
    Direction.UP_LEFT: "UL",
}

_BY_CODE: dict[str, Direction] = {code: direction for direction, code in _CODES.items()}


def direction_from_code(code: str) -> Direction:
    """Parse a direction code; an unknown code yields UP."""
    return _BY_CODE.get(code, Direction.UP)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def direction_from_delta(dx: int, dy: int) -> Direction:
    """The direction pointing along (dx, dy) by sign; UP when both are zero."""
    key = (_sign(dx), _sign(dy))
    for direction, step in _MOVEMENT.items():
        if step == key:
            return direction
    return Direction.UP


def action_to_move(current: Direction, dx: int, dy: int) -> Action:
    """The single action that brings a tank facing `current` towards (dx, dy)."""
    target = direction_from_delta(dx, dy)
    if current == target:
        return Action.MOVE_FORWARD
    if current.rotate_left() == target:
        return Action.ROTATE_LEFT
    if current.rotate_right() == target:
        return Action.ROTATE_RIGHT
    return Action.ROTATE_LEFT


def all_directions() -> list[Direction]:
    """All eight directions in the order the algorithms search them."""
    return [
        Direction.UP,
        Direction.LEFT,
        Direction.RIGHT,
        Direction.DOWN_LEFT,
        Direction.UP_LEFT,
        Direction.UP_RIGHT,
        Direction.DOWN_RIGHT,
        Direction.DOWN,
    ]