import logging
import math
import numpy as np

logger = logging.getLogger(__name__)

# Neighbour offsets in the order they are offered before shuffling
DIRECTIONS = [(-1, 0, "up"), (0, 1, "right"), (1, 0, "down"), (0, -1, "left")]


class MazeError(Exception):
    """Base class for maze errors"""


class InvalidDimension(MazeError, ValueError):
    """Rows or columns are not positive integers"""


class InvalidGeometry(MazeError, ValueError):
    """A width, height or thickness is not strictly positive"""


def check_dimension(name, value):
    """Raise InvalidDimension unless value is an integer >= 1"""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidDimension(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise InvalidDimension(f"{name} must be at least 1, got {value}")
    return int(value)


def shuffle(items, random):
    """Shuffle a list in place (Fisher-Yates) using a [0, 1) random source"""
    for i in range(len(items) - 1, 0, -1):
        j = math.floor(random() * (i + 1))
        items[i], items[j] = items[j], items[i]
    return items


class MazeGrid:
    """Visitation and wall state for one generation run.

    ``verticals[r, c]`` is True when the edge between (r, c) and (r, c + 1)
    is open, ``horizontals[r, c]`` when the edge between (r, c) and
    (r + 1, c) is open.
    """

    def __init__(self, rows, columns):
        self.rows = rows
        self.columns = columns
        self.visited = np.zeros((rows, columns), dtype=bool)
        self.verticals = np.zeros((rows, columns - 1), dtype=bool)
        self.horizontals = np.zeros((rows - 1, columns), dtype=bool)

    def in_bounds(self, row, col):
        return 0 <= row < self.rows and 0 <= col < self.columns

    def is_visited(self, row, col):
        return bool(self.visited[row, col])

    def mark_visited(self, row, col):
        self.visited[row, col] = True

    def open_vertical(self, row, col):
        self.verticals[row, col] = True

    def open_horizontal(self, row, col):
        self.horizontals[row, col] = True

    def open_edge_count(self):
        return int(self.verticals.sum() + self.horizontals.sum())

    def to_cell_grid(self):
        return cell_grid(self.verticals, self.horizontals)


def cell_grid(verticals, horizontals):
    """Expand wall matrices into a (2R+1, 2C+1) image: 1 = wall, 0 = passage"""
    rows, columns = verticals.shape[0], horizontals.shape[1]
    grid = np.ones((rows * 2 + 1, columns * 2 + 1))
    grid[1::2, 1::2] = 0
    # Open edges become passages between cell centres
    grid[1::2, 2:-1:2][verticals] = 0
    grid[2:-1:2, 1::2][horizontals] = 0
    return grid


class Maze:
    """A finished perfect maze. The wall matrices are read-only."""

    def __init__(self, rows, columns, verticals, horizontals, start):
        self.rows = rows
        self.columns = columns
        self.verticals = verticals
        self.horizontals = horizontals
        self.verticals.flags.writeable = False
        self.horizontals.flags.writeable = False
        self.start = start

    def __repr__(self):
        return f"Maze({self.rows}x{self.columns}, start={self.start})"

    def open_edge_count(self):
        return int(self.verticals.sum() + self.horizontals.sum())

    def is_open(self, cell_a, cell_b):
        """True when two adjacent cells share an open edge"""
        (r1, c1), (r2, c2) = sorted([tuple(cell_a), tuple(cell_b)])
        if not (0 <= r1 and 0 <= c1 and r2 < self.rows and c2 < self.columns):
            return False
        if r1 == r2 and c2 == c1 + 1:
            return bool(self.verticals[r1, c1])
        if c1 == c2 and r2 == r1 + 1:
            return bool(self.horizontals[r1, c1])
        return False

    def neighbors(self, row, col):
        """Cells reachable from (row, col) through one open edge"""
        result = []
        for dr, dc, _ in DIRECTIONS:
            nr, nc = row + dr, col + dc
            if 0 <= nr < self.rows and 0 <= nc < self.columns and self.is_open((row, col), (nr, nc)):
                result.append((nr, nc))
        return result

    def to_cell_grid(self):
        return cell_grid(self.verticals, self.horizontals)


class MazeGenerator:
    def __init__(self, rows, columns, seed=None, random=None):
        self.rows = check_dimension("rows", rows)
        self.columns = check_dimension("columns", columns)
        if random is None:
            random = np.random.RandomState(seed).random_sample
        self.random = random

    def start_cell(self):
        """Pick the starting cell uniformly at random"""
        row = math.floor(self.random() * self.rows)
        col = math.floor(self.random() * self.columns)
        return row, col

    def _shuffled_neighbors(self, row, col):
        return shuffle([(row + dr, col + dc, d) for dr, dc, d in DIRECTIONS], self.random)

    def visit_cell(self, grid, row, col):
        """Randomized depth-first traversal from (row, col).

        Each stack entry holds a cell and the iterator over its shuffled
        candidates, so resuming an entry continues where the recursive
        form would after returning from a child.
        """
        if grid.is_visited(row, col):
            return
        grid.mark_visited(row, col)
        stack = [(row, col, iter(self._shuffled_neighbors(row, col)))]

        while stack:
            row, col, candidates = stack[-1]
            for next_row, next_col, direction in candidates:
                if not grid.in_bounds(next_row, next_col):
                    continue
                if grid.is_visited(next_row, next_col):
                    continue

                # Remove the wall between the current cell and its neighbour
                if direction == "left":
                    grid.open_vertical(row, col - 1)
                elif direction == "right":
                    grid.open_vertical(row, col)
                elif direction == "up":
                    grid.open_horizontal(row - 1, col)
                elif direction == "down":
                    grid.open_horizontal(row, col)

                grid.mark_visited(next_row, next_col)
                stack.append((next_row, next_col, iter(self._shuffled_neighbors(next_row, next_col))))
                break
            else:
                stack.pop()

    def generate_maze(self):
        """Generate a perfect maze with the recursive backtracker"""
        grid = MazeGrid(self.rows, self.columns)
        start = self.start_cell()
        self.visit_cell(grid, *start)
        logger.debug("Generated %dx%d maze from %s with %d open edges",
                     self.rows, self.columns, start, grid.open_edge_count())
        # Only the wall matrices outlive the run
        return Maze(self.rows, self.columns, grid.verticals, grid.horizontals, start)
