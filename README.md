# tankbattle

A turn-based battle between two tanks on a rectangular board whose edges wrap
around. By default player 1 is driven by an offensive algorithm that hunts the
enemy. Player 2 is driven by a defensive algorithm that dodges shells and fires
only when the shot is clear.

## Installing

    pip install .

## Board files

The first line holds the board's width and height. Each following line is one
row of the board:

| Character | Meaning                               |
|-----------|---------------------------------------|
| `1`       | player 1 tank (starts facing left)    |
| `2`       | player 2 tank (starts facing right)   |
| `#`       | wall (destroyed after two hits)       |
| `@`       | mine                                  |
| space     | empty cell                            |

Example `arena.txt`:

    8 5
    ########
    #1     #
    #  @   #
    #     2#
    ########

Short rows and missing rows are filled with spaces. Unknown characters and
duplicate tanks are treated as spaces. When any of these cell problems occurs,
every warning is written to an errors file, `input_errors.txt` by default. A
board without both tanks cannot be played.

## Running a game

    from tankbattle.manager import GameManager, GameInitError

    with GameManager("arena.txt", "output_arena.txt") as game:
        game.initialize()          # raises GameInitError for an unusable board
        result = game.run("game_flow.txt")
    print(result)

`GameManager` takes the following keyword arguments:

- `errors_path`: where the load warnings go. The default is
  `"input_errors.txt"`. Pass `None` to write no warnings file.
- `algorithm1` and `algorithm2`: any `TankAlgorithm` instances. They replace
  the default offensive and defensive players.

The game runs until one or both tanks are destroyed, until 40 steps have
passed after both tanks run out of shells, or until 1000 steps. It writes two
files:

- The output file holds every player's action, step by step, with invalid
  actions marked `[BAD STEP]`. It ends with the number of steps and the
  result.
- The flow file given to `run` holds a picture of the board after every step.

`run` also prints the board to standard output after each step.

## Rules in brief

- Tanks move forward or backward one cell per step, or rotate 45° or 90°.
- A backward move is carried out after two steps of waiting. Further backward
  moves straight after it take effect at once.
- A tank has 16 shells and must wait several steps between shots.
- Shells travel two cells per step. A shell destroys the tank it hits. Two
  shells that meet destroy each other. A wall disappears after its second hit.
- A tank that drives onto a mine is destroyed along with the mine. Two tanks
  that meet in one cell are both destroyed.

## Parts of the package

- `tankbattle.direction`: `Direction` with its rotations and movement steps, and
  `Action`, the actions a tank may request.
- `tankbattle.objects`: `Tank`, `Shell`, `Wall` and `Mine`.
- `tankbattle.board`: `GameBoard`. It loads board files and renders the board
  as text with `render`, `step_log` and `write_to_file`.
- `tankbattle.algorithm`: `TankAlgorithm`, the base class for strategies.
- `tankbattle.offensive` and `tankbattle.defensive`: the two built-in
  strategies.
- `tankbattle.tiles`: `TileGrid`, a per-cell record of walls, mines, shells
  and tanks.
- `tankbattle.manager`: `GameManager`, which plays a whole game.

## What it does not do

The package installs no command-line program. A game is started from Python
with `GameManager`, as shown above.