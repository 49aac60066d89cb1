"""Default maze and playfield settings."""

from dataclasses import dataclass
from typing import Optional

from maze_generator import InvalidGeometry, check_dimension

CELLS = 3               # rows and columns of the default maze
WIDTH = 600             # playfield width in pixels
HEIGHT = 600            # playfield height in pixels
WALL_THICKNESS = 2


@dataclass
class MazeConfig:
    rows: int = CELLS
    columns: int = CELLS
    width: float = WIDTH
    height: float = HEIGHT
    wall_thickness: float = WALL_THICKNESS
    seed: Optional[int] = None

    @property
    def unit_width(self):
        return self.width / self.columns

    @property
    def unit_height(self):
        return self.height / self.rows

    def validate(self):
        """Raise InvalidDimension or InvalidGeometry on bad settings"""
        check_dimension("rows", self.rows)
        check_dimension("columns", self.columns)
        for name in ("width", "height", "wall_thickness"):
            value = getattr(self, name)
            if not value > 0:
                raise InvalidGeometry(f"{name} must be positive, got {value!r}")
        return self

    @classmethod
    def from_args(cls, args):
        """Build a config from an argparse namespace"""
        return cls(
            rows=args.rows,
            columns=args.columns,
            width=args.width,
            height=args.height,
            wall_thickness=args.wall_thickness,
            seed=args.seed,
        ).validate()
