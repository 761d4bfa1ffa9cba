import copy

import pytest

from tankbattle.direction import Direction
from tankbattle.objects import (
    INITIAL_SHELLS,
    MAX_BACKWARD_STEP,
    SHOOT_COOLDOWN,
    Mine,
    Shell,
    Tank,
    Wall,
)


def test_symbols():
    assert Mine(0, 0).symbol() == "@"
    assert Wall(0, 0).symbol() == "#"
    assert Shell(0, 0, Direction.UP, 1).symbol() == "*"
    assert Tank(2, 0, 0, Direction.RIGHT).symbol() == "2"


def test_kind_flags():
    tank = Tank(1, 0, 0, Direction.LEFT)
    wall = Wall(1, 1)
    mine = Mine(2, 2)
    shell = Shell(3, 3, Direction.DOWN, 1)
    assert (tank.is_tank, tank.is_wall, tank.is_mine, tank.is_shell) == (True, False, False, False)
    assert (wall.is_wall, wall.destroyable) == (True, True)
    assert (mine.is_mine, mine.destroyable) == (True, False)
    assert (shell.is_shell, shell.is_tank) == (True, False)
    assert all(obj.collidable for obj in (tank, wall, mine, shell))


def test_position_get_and_set():
    tank = Tank(1, 3, 4, Direction.LEFT)
    assert tank.position == (3, 4)
    tank.position = (7, 1)
    assert (tank.x, tank.y) == (7, 1)


def test_objects_compare_by_identity():
    assert Mine(1, 1) != Mine(1, 1)
    mine = Mine(1, 1)
    assert [mine].count(mine) == 1


def test_new_tank_state():
    tank = Tank(1, 0, 0, Direction.LEFT)
    assert tank.shells_left == INITIAL_SHELLS
    assert tank.shoot_cooldown == 0
    assert tank.in_backward_move is False


def test_shoot_spends_shell_and_sets_cooldown():
    tank = Tank(1, 0, 0, Direction.LEFT)
    tank.shoot()
    assert tank.shells_left == INITIAL_SHELLS - 1
    assert tank.shoot_cooldown == SHOOT_COOLDOWN


def test_shoot_blocked_during_cooldown():
    tank = Tank(1, 0, 0, Direction.LEFT)
    tank.shoot()
    tank.shoot()
    assert tank.shells_left == INITIAL_SHELLS - 1


def test_cooldown_counts_down_to_zero_and_stays():
    tank = Tank(1, 0, 0, Direction.LEFT)
    tank.shoot()
    for _ in range(SHOOT_COOLDOWN + 3):
        tank.decrease_shoot_cooldown()
    assert tank.shoot_cooldown == 0
    tank.shoot()
    assert tank.shells_left == INITIAL_SHELLS - 2


def test_no_shot_without_shells():
    tank = Tank(1, 0, 0, Direction.LEFT, shells_left=0)
    tank.shoot()
    assert (tank.shells_left, tank.shoot_cooldown) == (0, 0)


def test_backward_move_start_and_cancel():
    tank = Tank(2, 0, 0, Direction.RIGHT)
    tank.start_backward_move()
    assert tank.backward_step == 1
    tank.increase_wait_time()
    tank.start_backward_move()
    assert tank.backward_step == 2
    tank.cancel_backward_move()
    assert tank.in_backward_move is False


def test_wait_time_is_capped():
    tank = Tank(2, 0, 0, Direction.RIGHT)
    tank.start_backward_move()
    for _ in range(MAX_BACKWARD_STEP * 2):
        tank.increase_wait_time()
    assert tank.backward_step == MAX_BACKWARD_STEP


def test_copy_is_independent():
    tank = Tank(1, 0, 0, Direction.LEFT)
    simulated = copy.copy(tank)
    simulated.direction = Direction.UP
    assert tank.direction == Direction.LEFT


@pytest.mark.parametrize("hits, destroyed", [(0, False), (1, False), (2, True), (3, True)])
def test_wall_destroyed_after_two_hits(hits, destroyed):
    wall = Wall(0, 0)
    for _ in range(hits):
        wall.hit()
    assert wall.destroyed is destroyed
    assert wall.hits == hits


def test_shell_keeps_direction_and_owner():
    shell = Shell(1, 2, Direction.DOWN_LEFT, 2)
    shell.position = (5, 6)
    assert (shell.position, shell.direction, shell.player_id) == ((5, 6), Direction.DOWN_LEFT, 2)