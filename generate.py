import argparse
import logging
from config import CELLS, HEIGHT, WALL_THICKNESS, WIDTH, MazeConfig
from environment import MazeEnv
from layout import build_layout
from maze_generator import MazeError, MazeGenerator
from vis import save_layout, save_walk_gif


def build_parser():
    parser = argparse.ArgumentParser(description="Generate a perfect maze and its wall layout")
    parser.add_argument("--rows", type=int, default=CELLS, help="Number of cell rows")
    parser.add_argument("--columns", type=int, default=CELLS, help="Number of cell columns")
    parser.add_argument("--width", type=float, default=WIDTH, help="Playfield width")
    parser.add_argument("--height", type=float, default=HEIGHT, help="Playfield height")
    parser.add_argument("--wall_thickness", type=float, default=WALL_THICKNESS, help="Wall thickness")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--output", type=str, default="maze.png", help="Where to save the layout image")
    parser.add_argument("--gif", type=str, default=None, help="Save an animated GIF of the shortest walk")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        config = MazeConfig.from_args(args)
        maze = MazeGenerator(config.rows, config.columns, seed=config.seed).generate_maze()
        layout = build_layout(maze, config.width, config.height, config.wall_thickness)
    except MazeError as e:
        parser.error(str(e))

    env = MazeEnv(maze)
    path = env.solve_with_bfs()

    print(f"Generated {maze.rows}x{maze.columns} maze starting at {maze.start}")
    print(f"Open edges: {maze.open_edge_count()}")
    print(f"Inner walls: {len(layout.walls)}")
    print(f"Shortest walk: {len(path) - 1} moves")

    save_layout(layout, args.output, path=path)
    print(f"Saved layout to {args.output}")

    if args.gif:
        save_walk_gif(layout, path, args.gif)
        print(f"Created animated walk GIF: {args.gif}")

    return maze, layout


if __name__ == "__main__":
    main()
