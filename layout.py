"""Turn a generated maze into wall, goal and ball descriptors.

All positions are rectangle or circle centres in playfield coordinates,
with (0, 0) at the top-left corner and y growing downwards. A physics or
drawing layer instantiates static rectangles for the walls and the goal
and a dynamic circle for the ball.
"""

import logging
from dataclasses import asdict, dataclass
from typing import List

from maze_generator import InvalidGeometry

logger = logging.getLogger(__name__)

HORIZONTAL = "horizontal"
VERTICAL = "vertical"
GOAL_SCALE = 0.7
BALL_SCALE = 0.25


@dataclass
class WallSegment:
    x: float
    y: float
    width: float
    height: float
    orientation: str
    is_static: bool = True

    def as_dict(self):
        return asdict(self)


@dataclass
class GoalMarker:
    x: float
    y: float
    width: float
    height: float

    def as_dict(self):
        return asdict(self)


@dataclass
class BallMarker:
    x: float
    y: float
    radius: float

    def as_dict(self):
        return asdict(self)


@dataclass
class MazeLayout:
    width: float
    height: float
    unit_width: float
    unit_height: float
    borders: List[WallSegment]
    walls: List[WallSegment]
    goal: GoalMarker
    ball: BallMarker

    def cell_center(self, row, col):
        return (col * self.unit_width + self.unit_width / 2,
                row * self.unit_height + self.unit_height / 2)


def _check_positive(**values):
    for name, value in values.items():
        if not value > 0:
            raise InvalidGeometry(f"{name} must be positive, got {value!r}")


def derive_walls(maze, unit_width, unit_height, wall_thickness):
    """One segment for every closed edge, horizontal edges first"""
    _check_positive(unit_width=unit_width, unit_height=unit_height, wall_thickness=wall_thickness)
    walls = []

    for row_index, row in enumerate(maze.horizontals):
        for column_index, is_open in enumerate(row):
            if is_open:
                continue
            walls.append(WallSegment(
                x=column_index * unit_width + unit_width / 2,
                y=row_index * unit_height + unit_height,
                width=unit_width,
                height=wall_thickness,
                orientation=HORIZONTAL,
            ))

    for row_index, row in enumerate(maze.verticals):
        for column_index, is_open in enumerate(row):
            if is_open:
                continue
            walls.append(WallSegment(
                x=column_index * unit_width + unit_width,
                y=row_index * unit_height + unit_height / 2,
                width=wall_thickness,
                height=unit_height,
                orientation=VERTICAL,
            ))

    return walls


def border_walls(width, height, wall_thickness):
    """Top, bottom, left and right edges of the playfield"""
    _check_positive(width=width, height=height, wall_thickness=wall_thickness)
    return [
        WallSegment(width / 2, 0, width, wall_thickness * 2, HORIZONTAL),
        WallSegment(width / 2, height, width, wall_thickness * 2, HORIZONTAL),
        WallSegment(0, height / 2, wall_thickness * 2, height, VERTICAL),
        WallSegment(width, height / 2, wall_thickness * 2, height, VERTICAL),
    ]


def goal_marker(rows, columns, unit_width, unit_height):
    """Goal square centred in the bottom-right cell"""
    return GoalMarker(
        x=columns * unit_width - unit_width / 2,
        y=rows * unit_height - unit_height / 2,
        width=unit_width * GOAL_SCALE,
        height=unit_height * GOAL_SCALE,
    )


def ball_marker(unit_width, unit_height):
    """Ball centred in the top-left cell"""
    return BallMarker(
        x=unit_width / 2,
        y=unit_height / 2,
        radius=min(unit_width, unit_height) * BALL_SCALE,
    )


def build_layout(maze, width, height, wall_thickness):
    """Full playfield description for a maze drawn over width x height"""
    _check_positive(width=width, height=height, wall_thickness=wall_thickness)
    unit_width = width / maze.columns
    unit_height = height / maze.rows

    walls = derive_walls(maze, unit_width, unit_height, wall_thickness)
    layout = MazeLayout(
        width=width,
        height=height,
        unit_width=unit_width,
        unit_height=unit_height,
        borders=border_walls(width, height, wall_thickness),
        walls=walls,
        goal=goal_marker(maze.rows, maze.columns, unit_width, unit_height),
        ball=ball_marker(unit_width, unit_height),
    )
    logger.debug("Derived %d inner walls for %r", len(walls), maze)
    return layout
