from __future__ import annotations

from src.snake.grid import Direction, Grid


def test_reversal_pairs() -> None:
    assert Direction.UP.opposite is Direction.DOWN
    assert Direction.DOWN.opposite is Direction.UP
    assert Direction.LEFT.opposite is Direction.RIGHT
    assert Direction.RIGHT.opposite is Direction.LEFT
    assert Direction.LEFT.is_opposite(Direction.RIGHT)
    assert not Direction.LEFT.is_opposite(Direction.UP)


def test_next_cell_is_plain_translation_without_wraparound() -> None:
    g = Grid(10, 10)
    assert g.wrap_or_bound((5, 5), Direction.UP) == (5, 4)
    assert g.wrap_or_bound((5, 5), Direction.DOWN) == (5, 6)

    off = g.wrap_or_bound((0, 5), Direction.LEFT)
    assert off == (-1, 5)
    assert not g.in_bounds(off)
    assert not g.in_bounds(g.wrap_or_bound((9, 9), Direction.RIGHT))


def test_in_bounds_edges() -> None:
    g = Grid(4, 3)
    assert g.in_bounds((0, 0))
    assert g.in_bounds((3, 2))
    assert not g.in_bounds((4, 0))
    assert not g.in_bounds((0, 3))
    assert not g.in_bounds((0, -1))


def test_cells_cover_grid_once() -> None:
    g = Grid(4, 3)
    cells = list(g.cells())
    assert len(cells) == g.capacity == 12
    assert len(set(cells)) == 12
    assert all(g.in_bounds(c) for c in cells)
