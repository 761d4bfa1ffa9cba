"""Runs a two-player tank battle step by step and records what happens."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, TextIO, Union

from .algorithm import TankAlgorithm
from .board import BoardLoadError, GameBoard, read_dimensions
from .defensive import DefensiveAlgorithm
from .direction import Action
from .objects import Mine, Shell, Tank, Wall
from .offensive import OffensiveAlgorithm

PathLike = Union[str, Path]

MAX_STEPS = 1000
NO_SHELLS_STEP_LIMIT = 40
BACKWARD_MOVE_STEP = 3

_ROTATIONS = {
    Action.ROTATE_LEFT.value: lambda d: d.rotate_left(),
    Action.ROTATE_RIGHT.value: lambda d: d.rotate_right(),
    Action.ROTATE_LEFT_QUARTER.value: lambda d: d.rotate_left_quarter(),
    Action.ROTATE_RIGHT_QUARTER.value: lambda d: d.rotate_right_quarter(),
}


class GameInitError(Exception):
    """The game cannot start because the input is unusable."""


class GameManager:
    """Owns the board and both players' algorithms and plays the game out.

    The game record is written to ``output_file`` once ``initialize`` has
    succeeded; use the manager as a context manager or call ``close``.
    """

    def __init__(
        self,
        input_file: PathLike,
        output_file: PathLike,
        *,
        errors_path: Optional[PathLike] = "input_errors.txt",
        algorithm1: Optional[TankAlgorithm] = None,
        algorithm2: Optional[TankAlgorithm] = None,
    ) -> None:
        self.input_file = Path(input_file)
        self.output_file = Path(output_file)
        self.errors_path = errors_path
        self.algorithm1 = algorithm1
        self.algorithm2 = algorithm2
        self.steps = 0
        self.no_shells_steps = 0
        self.game_over = False
        self.result = ""
        self._board: Optional[GameBoard] = None
        self._out: Optional[TextIO] = None

    def __enter__(self) -> GameManager:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def board(self) -> GameBoard:
        if self._board is None:
            raise RuntimeError("Game is not initialized")
        return self._board

    def initialize(self) -> None:
        """Load the board, open the output file and set up both algorithms."""
        try:
            width, height = read_dimensions(self.input_file)
            board = GameBoard(width, height)
            board.load_file(self.input_file, self.errors_path)
        except BoardLoadError as exc:
            raise GameInitError(str(exc)) from exc

        self.close()
        try:
            self._out = self.output_file.open("w")
        except OSError as exc:
            raise GameInitError(f"Could not open output file: {self.output_file}") from exc

        self._board = board
        if self.algorithm1 is None:
            self.algorithm1 = OffensiveAlgorithm()
        if self.algorithm2 is None:
            self.algorithm2 = DefensiveAlgorithm()

        self._write(
            "Game initialized with:\n"
            f"Board size: {width}x{height}\n"
            f"Player 1 algorithm: {self.algorithm1.name}\n"
            f"Player 2 algorithm: {self.algorithm2.name}\n\n"
        )

    def close(self) -> None:
        """Close the output file; safe to call more than once."""
        if self._out is not None:
            self._out.close()
            self._out = None

    def _write(self, text: str) -> None:
        if self._out is None:
            raise RuntimeError("Game output is not open")
        self._out.write(text)

    def _write_action(self, player_id: int, action: str, bad: bool = False) -> None:
        suffix = " [BAD STEP]" if bad else ""
        self._write(f"Player {player_id}: {action}{suffix}\n")

    def run(self, flow_path: PathLike = "game_flow.txt") -> str:
        """Play until the game ends or the step limit is reached; return the result."""
        board = self.board
        self._write("Starting game...\n")
        with Path(flow_path).open("w") as log:
            while not self.game_over and self.steps < MAX_STEPS:
                print(f"\nStep {self.steps}:")
                log.write(f"Board size: {board.width}x{board.height}\n\n")
                self.process_step()
                log.write(board.step_log(self.steps))
                self.steps += 1
                print(f"board state at the end of the step {self.steps}:")
                print(board.render(), end="")
                print("__________________________")
        self._write(f"\nGame ended after {self.steps} steps.\n")
        self._write(f"Result: {self.result}\n")
        return self.result

    def process_step(self) -> None:
        """Let both tanks act, move the shells, resolve collisions and check the end."""
        board = self.board
        self._write(f"\nStep {self.steps}:\n")
        tank1 = board.player_tank(1)
        tank2 = board.player_tank(2)
        if tank1 is not None:
            self.process_tank_action(tank1, self.algorithm1.next_action(board, 1))
        if tank2 is not None:
            self.process_tank_action(tank2, self.algorithm2.next_action(board, 2))
        self.process_shells()
        self.check_collisions()
        self.check_game_end()

    def process_tank_action(self, tank: Tank, action: Union[Action, str]) -> None:
        """Carry out one requested action for a tank and log it."""
        name = action.value if isinstance(action, Action) else str(action)
        player_id = tank.player_id
        x, y = tank.position
        direction = tank.direction

        if tank.backward_step > BACKWARD_MOVE_STEP and name != Action.MOVE_BACKWARD:
            tank.cancel_backward_move()

        if (
            tank.in_backward_move
            and tank.backward_step <= BACKWARD_MOVE_STEP
            and name != Action.MOVE_FORWARD
        ):
            if tank.backward_step == BACKWARD_MOVE_STEP:
                self._perform_backward_move(tank)
            else:
                self._write_action(
                    player_id,
                    f"{name} :while waiting for moving backward- can't perform any other move",
                )
            self._end_tank_turn(tank)
            return

        if name == Action.MOVE_FORWARD:
            tank.cancel_backward_move()
            dx, dy = direction.movement()
            self._move_tank(tank, x + dx, y + dy, Action.MOVE_FORWARD.value)
        elif name == Action.MOVE_BACKWARD:
            if not tank.in_backward_move:
                tank.start_backward_move()
                self._write_action(player_id, "MOVE_BACKWARD (start waiting time)")
            elif tank.backward_step >= BACKWARD_MOVE_STEP:
                self._perform_backward_move(tank)
        elif name in _ROTATIONS:
            tank.cancel_backward_move()
            tank.direction = _ROTATIONS[name](direction)
            self._write_action(player_id, f"{name} to {tank.direction.code()}")
        elif name == Action.SHOOT:
            tank.cancel_backward_move()
            if tank.shoot_cooldown == 0 and tank.shells_left > 0:
                tank.shoot()
                self.board.add_shell(Shell(x, y, direction, player_id))
                self._write_action(player_id, Action.SHOOT.value)
            else:
                self._write_action(player_id, Action.SHOOT.value, bad=True)
        elif name == Action.NONE:
            self._write_action(player_id, Action.NONE.value)

        self._end_tank_turn(tank)

    def _end_tank_turn(self, tank: Tank) -> None:
        if tank.backward_step <= BACKWARD_MOVE_STEP and tank.in_backward_move:
            tank.increase_wait_time()
        tank.decrease_shoot_cooldown()

    def _move_tank(self, tank: Tank, x: int, y: int, label: str) -> None:
        nx, ny = self.board.wrap(x, y)
        if any(obj.is_wall for obj in self.board.objects_at(nx, ny)):
            self._write_action(tank.player_id, label, bad=True)
        else:
            tank.position = (nx, ny)
            self._write_action(tank.player_id, label)

    def _perform_backward_move(self, tank: Tank) -> None:
        dx, dy = tank.direction.movement()
        self._move_tank(tank, tank.x - dx, tank.y - dy, Action.MOVE_BACKWARD.value)

    def _move_shell(self, shell: Shell) -> None:
        dx, dy = shell.direction.movement()
        shell.position = self.board.wrap(shell.x + dx, shell.y + dy)

    def process_shells(self) -> None:
        """Move every shell two cells, resolving collisions after each cell."""
        for _ in range(2):
            for shell in list(self.board.shells):
                self._move_shell(shell)
            for shell in list(self.board.shells):
                self._check_shell_collisions(shell, shell.x, shell.y)

    def _check_shell_collisions(self, shell: Shell, x: int, y: int) -> None:
        board = self.board
        objects = board.objects_at(x, y)
        if len(objects) <= 1:
            return

        tank: Optional[Tank] = None
        wall: Optional[Wall] = None
        has_mine = has_shell = False
        for obj in objects:
            if not obj.collidable:
                continue
            if obj.is_tank:
                tank = obj
            elif obj.is_mine:
                has_mine = True
            elif obj.is_wall:
                wall = obj
            elif obj.is_shell:
                has_shell = True
        has_tank = tank is not None
        has_wall = wall is not None

        if len(objects) == 2:
            if has_shell and has_tank:
                board.remove_shell(shell)
                board.remove_tank(tank)
                self._write(f"Shell and Tank {tank.player_id} destroyed at ({x},{y})\n")
            elif has_shell and not has_tank and not has_wall and not has_mine:
                other = next((o for o in objects if o.is_shell and o is not shell), None)
                if other is not None:
                    board.remove_shell(shell)
                    board.remove_shell(other)
                    self._write(f"Two shells destroyed each other at ({x},{y})\n")
            elif has_shell and has_wall:
                wall.hit()
                if wall.destroyed:
                    board.remove_wall(wall)
                board.remove_shell(shell)
                self._write(f"Shell hit wall at ({x},{y})\n")
            return

        if has_mine and has_tank:
            for obj in objects:
                if isinstance(obj, Tank):
                    board.remove_tank(obj)
                elif isinstance(obj, Shell):
                    board.remove_shell(obj)
                elif isinstance(obj, Mine):
                    board.remove_mine(obj)
            self._write(
                f"Multiple objects including tank and mine destroyed at ({x},{y})\n"
            )
        elif has_mine:
            for obj in objects:
                if obj.collidable and isinstance(obj, Shell):
                    board.remove_shell(obj)
            self._write(f"Shells hit objects (mine unaffected) at ({x},{y})\n")
        elif has_tank:
            for obj in objects:
                if isinstance(obj, Shell):
                    board.remove_shell(obj)
                if isinstance(obj, Tank):
                    board.remove_tank(obj)
            self._write(f"Shells hit tank at ({x},{y})\n")

    def check_collisions(self) -> None:
        """Destroy tanks standing on mines, then tanks sharing a cell."""
        board = self.board
        for tank in board.tanks:
            for mine in board.mines:
                if tank.position == mine.position:
                    board.remove_tank(tank)
                    board.remove_mine(mine)
                    self._write(
                        f"Tank {tank.player_id} hit a mine at ({tank.x},{tank.y})\n"
                    )
                    return

        tanks = list(board.tanks)
        if len(tanks) >= 2:
            first, second = tanks[0], tanks[1]
            if first.position == second.position:
                board.remove_tank(first)
                board.remove_tank(second)
                self._write(f"Tanks collided at ({first.x},{first.y})\n")

    def check_game_end(self) -> None:
        """Decide whether a player has won or the game is a tie."""
        tanks = self.board.tanks
        player1_alive = any(t.player_id == 1 for t in tanks)
        player2_alive = any(t.player_id == 2 for t in tanks)
        shells_left = sum(t.shells_left for t in tanks)

        if not player1_alive and not player2_alive:
            self.game_over = True
            self.result = "Tie - both tanks destroyed"
        elif not player1_alive:
            self.game_over = True
            self.result = "Player 2 wins - Player 1 tank destroyed"
        elif not player2_alive:
            self.game_over = True
            self.result = "Player 1 wins - Player 2 tank destroyed"
        elif shells_left == 0:
            self.no_shells_steps += 1
            if self.no_shells_steps >= NO_SHELLS_STEP_LIMIT:
                self.game_over = True
                self.result = "Tie - no shells left and 40 steps passed"
        else:
            self.no_shells_steps = 0