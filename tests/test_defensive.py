import pytest

from tankbattle.board import GameBoard
from tankbattle.defensive import DefensiveAlgorithm
from tankbattle.direction import Action, Direction
from tankbattle.objects import Mine, Shell, Tank, Wall


def make_board(me, enemy, width=10, height=10):
    board = GameBoard(width, height)
    board.tanks.extend([enemy, me])
    return board


@pytest.fixture
def algo():
    return DefensiveAlgorithm()


def test_name(algo):
    assert algo.name == "DefensiveAlgorithm"


def test_no_tank_returns_none(algo):
    board = GameBoard(5, 5)
    assert algo.next_action(board, 2) == Action.NONE


def test_immediate_danger_detected(algo):
    me = Tank(2, 5, 5, Direction.RIGHT)
    board = make_board(me, Tank(1, 0, 0, Direction.LEFT))
    board.add_shell(Shell(3, 5, Direction.RIGHT, 1))
    assert algo.is_in_immediate_danger(board, 5, 5) is True
    assert algo.is_in_immediate_danger(board, 6, 5) is False


def test_immediate_danger_wraps(algo):
    me = Tank(2, 1, 0, Direction.UP)
    board = make_board(me, Tank(1, 3, 3, Direction.LEFT), 5, 5)
    board.add_shell(Shell(4, 0, Direction.RIGHT, 1))
    assert algo.is_in_immediate_danger(board, 1, 0) is True


def test_danger_shoots_incoming_shell(algo):
    me = Tank(2, 5, 5, Direction.LEFT)
    board = make_board(me, Tank(1, 0, 0, Direction.LEFT))
    board.add_shell(Shell(3, 5, Direction.RIGHT, 1))
    assert algo.next_action(board, 2) == Action.SHOOT


def test_danger_ignores_own_shell_for_shooting(algo):
    me = Tank(2, 5, 5, Direction.LEFT)
    board = make_board(me, Tank(1, 0, 0, Direction.LEFT))
    board.add_shell(Shell(3, 5, Direction.RIGHT, 2))
    assert algo.can_shoot_shell(board, 5, 5, Direction.LEFT, 2) is False
    assert algo.handle_immediate_danger(board, me) == Action.MOVE_FORWARD


def test_danger_moves_forward_when_cannot_shoot(algo):
    me = Tank(2, 5, 5, Direction.RIGHT)
    board = make_board(me, Tank(1, 0, 0, Direction.LEFT))
    board.add_shell(Shell(3, 5, Direction.RIGHT, 1))
    assert algo.next_action(board, 2) == Action.MOVE_FORWARD


def test_danger_moves_backward_when_forward_blocked(algo):
    me = Tank(2, 5, 5, Direction.UP)
    board = make_board(me, Tank(1, 0, 0, Direction.LEFT))
    board.walls.append(Wall(5, 4))
    board.add_shell(Shell(3, 5, Direction.RIGHT, 1))
    assert algo.handle_immediate_danger(board, me) == Action.MOVE_BACKWARD


def test_danger_trapped_rotates_right(algo):
    me = Tank(2, 5, 5, Direction.UP)
    board = make_board(me, Tank(1, 0, 0, Direction.LEFT))
    board.walls.append(Wall(5, 4))
    board.mines.append(Mine(5, 6))
    board.add_shell(Shell(3, 5, Direction.RIGHT, 1))
    assert algo.handle_immediate_danger(board, me) == Action.ROTATE_RIGHT


def test_shoots_opponent_in_clear_line(algo):
    me = Tank(2, 5, 5, Direction.RIGHT)
    board = make_board(me, Tank(1, 8, 5, Direction.LEFT))
    assert algo.can_safely_shoot_opponent(board, me) is True
    assert algo.next_action(board, 2) == Action.SHOOT


def test_wall_blocks_shot(algo):
    me = Tank(2, 5, 5, Direction.RIGHT)
    board = make_board(me, Tank(1, 8, 5, Direction.LEFT))
    board.walls.append(Wall(6, 5))
    assert algo.can_safely_shoot_opponent(board, me) is False


def test_cooldown_prevents_shot(algo):
    me = Tank(2, 5, 5, Direction.RIGHT, shoot_cooldown=2)
    board = make_board(me, Tank(1, 8, 5, Direction.LEFT))
    assert algo.can_safely_shoot_opponent(board, me) is False


def test_facing_away_prevents_shot(algo):
    me = Tank(2, 5, 5, Direction.LEFT)
    board = make_board(me, Tank(1, 8, 5, Direction.LEFT))
    assert algo.can_safely_shoot_opponent(board, me) is False


def test_diagonal_shot(algo):
    me = Tank(2, 2, 2, Direction.DOWN_RIGHT)
    board = make_board(me, Tank(1, 5, 5, Direction.LEFT))
    assert algo.can_safely_shoot_opponent(board, me) is True
    board.walls.append(Wall(3, 3))
    assert algo.has_clear_shot(board, 2, 2, 5, 5) is False


def test_vertical_clear_shot(algo):
    me = Tank(2, 4, 7, Direction.UP)
    board = make_board(me, Tank(1, 4, 1, Direction.LEFT))
    assert algo.has_clear_shot(board, 4, 7, 4, 1) is True
    board.mines.append(Mine(4, 3))
    assert algo.has_clear_shot(board, 4, 7, 4, 1) is False


def test_default_moves_forward_when_safe(algo):
    me = Tank(2, 5, 5, Direction.RIGHT)
    board = make_board(me, Tank(1, 0, 0, Direction.LEFT))
    assert algo.default_safe_move(board, me) == Action.MOVE_FORWARD


def test_default_rotates_towards_safe_cell(algo):
    me = Tank(2, 5, 5, Direction.RIGHT)
    board = make_board(me, Tank(1, 0, 0, Direction.LEFT))
    board.walls.append(Wall(6, 5))
    assert algo.default_safe_move(board, me) == Action.ROTATE_LEFT_QUARTER


def test_default_when_enemy_aims_and_forward_blocked(algo):
    me = Tank(2, 5, 5, Direction.RIGHT)
    board = make_board(me, Tank(1, 0, 5, Direction.RIGHT))
    board.walls.append(Wall(6, 5))
    assert algo.default_safe_move(board, me) == Action.NONE


def test_default_when_enemy_aims_and_forward_free(algo):
    me = Tank(2, 5, 5, Direction.UP)
    board = make_board(me, Tank(1, 0, 5, Direction.RIGHT))
    assert algo.default_safe_move(board, me) == Action.MOVE_FORWARD


def test_tile_safety(algo):
    me = Tank(2, 5, 5, Direction.UP)
    board = make_board(me, Tank(1, 0, 0, Direction.LEFT))
    board.mines.append(Mine(2, 2))
    assert algo.is_tile_safe(board, 2, 2) is False
    assert algo.is_tile_safe(board, 3, 3) is True
    assert algo.is_tile_safe(board, 5, 5) is False