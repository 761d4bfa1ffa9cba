"""The objects that occupy cells of the battle board."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from .direction import Direction

INITIAL_SHELLS = 16
SHOOT_COOLDOWN = 5
MAX_BACKWARD_STEP = 5
WALL_HITS_TO_DESTROY = 2


class GameObject(ABC):
    """Something placed on the board at integer coordinates (x, y)."""

    x: int
    y: int

    collidable = True
    destroyable = False
    is_tank = False
    is_shell = False
    is_mine = False
    is_wall = False

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)

    @position.setter
    def position(self, value: tuple[int, int]) -> None:
        self.x, self.y = value

    @abstractmethod
    def symbol(self) -> str:
        """The character drawn for this object."""


@dataclass(eq=False)
class Mine(GameObject):
    """A mine that destroys any tank stepping onto it."""

    x: int
    y: int

    is_mine = True

    def symbol(self) -> str:
        return "@"


@dataclass(eq=False)
class Shell(GameObject):
    """A shell fired by a player, travelling in a fixed direction."""

    x: int
    y: int
    direction: Direction
    player_id: int

    is_shell = True

    def symbol(self) -> str:
        return "*"


@dataclass(eq=False)
class Wall(GameObject):
    """A wall that falls after two hits."""

    x: int
    y: int
    hits: int = 0

    is_wall = True
    destroyable = True

    def symbol(self) -> str:
        return "#"

    def hit(self) -> None:
        """Register one shell hit."""
        self.hits += 1

    @property
    def destroyed(self) -> bool:
        return self.hits >= WALL_HITS_TO_DESTROY


@dataclass(eq=False)
class Tank(GameObject):
    """A player's tank with its ammunition, cooldown and backward-move state.

    ``backward_step`` is 0 when no backward move is pending, 1-2 while
    waiting and 3 when the move happens; it never exceeds 5.
    """

    player_id: int
    x: int
    y: int
    direction: Direction
    shells_left: int = field(default=INITIAL_SHELLS)
    shoot_cooldown: int = 0
    backward_step: int = 0

    is_tank = True

    def symbol(self) -> str:
        return str(self.player_id)

    @property
    def in_backward_move(self) -> bool:
        return self.backward_step > 0

    def decrease_shoot_cooldown(self) -> None:
        """Count one step off the shooting cooldown."""
        if self.shoot_cooldown > 0:
            self.shoot_cooldown -= 1

    def shoot(self) -> None:
        """Spend a shell and start the cooldown, if shooting is possible."""
        if self.shells_left > 0 and self.shoot_cooldown == 0:
            self.shells_left -= 1
            self.shoot_cooldown = SHOOT_COOLDOWN

    def start_backward_move(self) -> None:
        """Begin waiting for a backward move unless one is already pending."""
        if self.backward_step == 0:
            self.backward_step = 1

    def cancel_backward_move(self) -> None:
        self.backward_step = 0

    def increase_wait_time(self) -> None:
        """Advance the backward-move counter by one step, up to its limit."""
        if self.backward_step < MAX_BACKWARD_STEP:
            self.backward_step += 1