"""Shared fixtures for the maze test suite."""

from collections import deque

import pytest

from maze_generator import MazeGenerator


def reachable_cells(maze, start=(0, 0)):
    """Cells reachable from start through open edges"""
    seen = {start}
    queue = deque([start])
    while queue:
        cell = queue.popleft()
        for neighbor in maze.neighbors(*cell):
            if neighbor not in seen:
                seen.add(neighbor)
                queue.append(neighbor)
    return seen


def assert_perfect(maze):
    cells = maze.rows * maze.columns
    assert maze.open_edge_count() == cells - 1
    assert len(reachable_cells(maze)) == cells


def sequence_source(values):
    """Random source replaying a fixed list of draws, cycling when exhausted"""
    state = {"i": 0}

    def draw():
        value = values[state["i"] % len(values)]
        state["i"] += 1
        return value

    return draw


@pytest.fixture
def zero_source():
    return lambda: 0.0


@pytest.fixture
def small_maze(zero_source):
    """The 2x2 maze produced when every draw is 0"""
    return MazeGenerator(2, 2, random=zero_source).generate_maze()


@pytest.fixture
def seeded_maze():
    return MazeGenerator(6, 9, seed=7).generate_maze()
