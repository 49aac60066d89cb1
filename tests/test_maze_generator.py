import itertools
import math

import numpy as np
import pytest

from maze_generator import (
    DIRECTIONS,
    InvalidDimension,
    MazeGenerator,
    MazeGrid,
    shuffle,
)
from tests.conftest import assert_perfect, reachable_cells, sequence_source


def recursive_reference(rows, columns, random):
    """Plain recursive backtracker used to check the stack-based traversal"""
    grid = MazeGrid(rows, columns)

    def step(row, col):
        if grid.is_visited(row, col):
            return
        grid.mark_visited(row, col)
        for next_row, next_col, direction in shuffle(
                [(row + dr, col + dc, d) for dr, dc, d in DIRECTIONS], random):
            if not grid.in_bounds(next_row, next_col) or grid.is_visited(next_row, next_col):
                continue
            if direction == "left":
                grid.open_vertical(row, col - 1)
            elif direction == "right":
                grid.open_vertical(row, col)
            elif direction == "up":
                grid.open_horizontal(row - 1, col)
            else:
                grid.open_horizontal(row, col)
            step(next_row, next_col)

    start = (math.floor(random() * rows), math.floor(random() * columns))
    step(*start)
    return grid


class TestGrid:
    def test_initial_state(self):
        grid = MazeGrid(3, 4)
        assert grid.visited.shape == (3, 4)
        assert grid.verticals.shape == (3, 3)
        assert grid.horizontals.shape == (2, 4)
        assert not grid.visited.any()
        assert grid.open_edge_count() == 0

    def test_mark_visited_is_idempotent(self):
        grid = MazeGrid(2, 2)
        grid.mark_visited(1, 0)
        grid.mark_visited(1, 0)
        assert grid.is_visited(1, 0)
        assert grid.visited.sum() == 1

    def test_open_edges(self):
        grid = MazeGrid(2, 3)
        grid.open_vertical(1, 1)
        grid.open_horizontal(0, 2)
        assert grid.verticals[1, 1]
        assert grid.horizontals[0, 2]
        assert grid.open_edge_count() == 2

    def test_cell_grid(self):
        grid = MazeGrid(2, 2)
        grid.open_vertical(0, 0)
        grid.open_horizontal(0, 1)
        image = grid.to_cell_grid()
        assert image.shape == (5, 5)
        assert image[1, 2] == 0
        assert image[2, 3] == 0
        assert image[3, 2] == 1
        assert image[2, 1] == 1
        # Cell centres are always passages, corners always walls
        assert (image[1::2, 1::2] == 0).all()
        assert (image[::2, ::2] == 1).all()


class TestShuffle:
    def test_zero_source_rotates_left(self):
        assert shuffle(["a", "b", "c", "d"], lambda: 0.0) == ["b", "c", "d", "a"]

    def test_top_source_keeps_order(self):
        assert shuffle(["a", "b", "c", "d"], lambda: 0.999) == ["a", "b", "c", "d"]

    def test_short_lists(self):
        assert shuffle([], lambda: 0.5) == []
        assert shuffle([1], lambda: 0.5) == [1]

    def test_uniformity(self):
        random = np.random.RandomState(0).random_sample
        trials = 24000
        counts = {}
        for _ in range(trials):
            order = tuple(shuffle([0, 1, 2, 3], random))
            counts[order] = counts.get(order, 0) + 1
        assert set(counts) == set(itertools.permutations(range(4)))
        expected = trials / 24
        for count in counts.values():
            assert abs(count - expected) < 0.15 * expected


class TestGenerator:
    @pytest.mark.parametrize("rows,columns", [(1, 1), (1, 7), (7, 1), (2, 2), (5, 5), (4, 11), (13, 3)])
    @pytest.mark.parametrize("seed", range(5))
    def test_spanning_tree(self, rows, columns, seed):
        maze = MazeGenerator(rows, columns, seed=seed).generate_maze()
        assert_perfect(maze)

    @pytest.mark.parametrize("start", [(0, 0), (0, 8), (5, 0), (5, 8), (2, 4)])
    def test_edges_stay_inside_grid(self, start):
        generator = MazeGenerator(6, 9, seed=11)
        grid = MazeGrid(6, 9)
        generator.visit_cell(grid, *start)
        assert grid.verticals.shape == (6, 8)
        assert grid.horizontals.shape == (5, 9)
        assert grid.visited.all()
        assert grid.open_edge_count() == 6 * 9 - 1
        # The outer frame of the cell image is solid wall
        image = grid.to_cell_grid()
        assert (image[0, :] == 1).all()
        assert (image[-1, :] == 1).all()
        assert (image[:, 0] == 1).all()
        assert (image[:, -1] == 1).all()

    def test_single_cell(self):
        maze = MazeGenerator(1, 1, seed=3).generate_maze()
        assert maze.start == (0, 0)
        assert maze.open_edge_count() == 0
        assert maze.verticals.shape == (1, 0)
        assert maze.horizontals.shape == (0, 1)
        assert reachable_cells(maze) == {(0, 0)}

    def test_zero_source_example(self, small_maze):
        assert small_maze.start == (0, 0)
        assert small_maze.verticals.tolist() == [[True], [True]]
        assert small_maze.horizontals.tolist() == [[False, True]]
        assert small_maze.open_edge_count() == 3

    def test_same_seed_same_maze(self):
        first = MazeGenerator(8, 8, seed=42).generate_maze()
        second = MazeGenerator(8, 8, seed=42).generate_maze()
        assert np.array_equal(first.verticals, second.verticals)
        assert np.array_equal(first.horizontals, second.horizontals)
        assert first.start == second.start

    def test_same_draws_same_maze(self):
        draws = [0.13, 0.72, 0.05, 0.91, 0.44, 0.38, 0.66, 0.27, 0.83]
        first = MazeGenerator(5, 6, random=sequence_source(draws)).generate_maze()
        second = MazeGenerator(5, 6, random=sequence_source(draws)).generate_maze()
        assert np.array_equal(first.verticals, second.verticals)
        assert np.array_equal(first.horizontals, second.horizontals)

    def test_different_seeds_vary(self):
        mazes = {MazeGenerator(6, 6, seed=seed).generate_maze().to_cell_grid().tobytes() for seed in range(10)}
        assert len(mazes) > 1

    @pytest.mark.parametrize("seed", range(8))
    def test_matches_recursive_traversal(self, seed):
        stacked = MazeGenerator(6, 7, random=np.random.RandomState(seed).random_sample).generate_maze()
        reference = recursive_reference(6, 7, np.random.RandomState(seed).random_sample)
        assert np.array_equal(stacked.verticals, reference.verticals)
        assert np.array_equal(stacked.horizontals, reference.horizontals)

    def test_visit_cell_skips_visited_start(self):
        generator = MazeGenerator(2, 2, seed=0)
        grid = MazeGrid(2, 2)
        grid.mark_visited(0, 0)
        generator.visit_cell(grid, 0, 0)
        assert grid.open_edge_count() == 0
        assert grid.visited.sum() == 1

    def test_large_grid_exceeds_recursion_limit(self):
        maze = MazeGenerator(60, 60, seed=1).generate_maze()
        assert_perfect(maze)

    def test_result_is_read_only(self, seeded_maze):
        with pytest.raises(ValueError):
            seeded_maze.verticals[0, 0] = True

    def test_start_cell_uses_draw_order(self):
        generator = MazeGenerator(4, 10, random=sequence_source([0.5, 0.25]))
        assert generator.start_cell() == (2, 2)

    @pytest.mark.parametrize("rows,columns", [(0, 3), (3, 0), (-1, 2), (2.5, 2), (2, "3"), (True, 2), (None, 2)])
    def test_invalid_dimensions(self, rows, columns):
        with pytest.raises(InvalidDimension):
            MazeGenerator(rows, columns)

    def test_invalid_dimension_is_value_error(self):
        with pytest.raises(ValueError):
            MazeGenerator(0, 0)

    def test_numpy_integer_dimensions(self):
        maze = MazeGenerator(np.int64(3), np.int32(4), seed=0).generate_maze()
        assert_perfect(maze)


class TestMaze:
    def test_is_open(self, small_maze):
        assert small_maze.is_open((0, 0), (0, 1))
        assert small_maze.is_open((0, 1), (0, 0))
        assert small_maze.is_open((1, 1), (0, 1))
        assert not small_maze.is_open((0, 0), (1, 0))
        # Non-adjacent cells are never connected
        assert not small_maze.is_open((0, 0), (1, 1))

    def test_neighbors(self, small_maze):
        assert small_maze.neighbors(0, 0) == [(0, 1)]
        assert sorted(small_maze.neighbors(1, 1)) == [(0, 1), (1, 0)]

    def test_cells_outside_grid_are_never_open(self, small_maze):
        assert not small_maze.is_open((0, 0), (-1, 0))
        assert not small_maze.is_open((0, 0), (0, -1))
        assert not small_maze.is_open((1, 1), (1, 2))
        assert not small_maze.is_open((1, 1), (2, 1))
