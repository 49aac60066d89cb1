import io
import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.patches as patches
import imageio.v2 as imageio


def _rectangle(x, y, width, height, **kwargs):
    """Rectangle patch from centre coordinates"""
    return patches.Rectangle((x - width / 2, y - height / 2), width, height, **kwargs)


def draw_layout(layout, ax=None, path=None, ball_cell=None, title=None):
    """Draw walls, goal and ball of a layout; optionally a walk through cell centres"""
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 8))
    else:
        fig = ax.figure

    for wall in layout.borders + layout.walls:
        ax.add_patch(_rectangle(wall.x, wall.y, wall.width, wall.height, color="black"))

    goal = layout.goal
    ax.add_patch(_rectangle(goal.x, goal.y, goal.width, goal.height, color="green", alpha=0.6))

    ball = layout.ball
    x, y = (ball.x, ball.y) if ball_cell is None else layout.cell_center(*ball_cell)
    ax.add_patch(patches.Circle((x, y), ball.radius, color="red"))

    if path:
        centers = np.array([layout.cell_center(row, col) for row, col in path])
        ax.plot(centers[:, 0], centers[:, 1], "b-", linewidth=2)

    ax.set_xlim(0, layout.width)
    # Playfield y grows downwards
    ax.set_ylim(layout.height, 0)
    ax.set_aspect("equal")
    ax.axis("off")
    if title:
        ax.set_title(title)
    return fig


def save_layout(layout, filename="maze.png", path=None):
    fig = draw_layout(layout, path=path)
    plt.tight_layout()
    fig.savefig(filename)
    plt.close(fig)


def save_walk_gif(layout, path, filename="maze_walk.gif", duration=0.2):
    """Animate the ball walking along a path of cells"""
    frames = []
    for i in range(1, len(path) + 1):
        title = "Goal Reached!" if i == len(path) else f"Step {i}/{len(path)}"
        fig = draw_layout(layout, path=path[:i], ball_cell=path[i - 1], title=title)
        buf = io.BytesIO()
        fig.savefig(buf, format="png")
        buf.seek(0)
        frames.append(imageio.imread(buf))
        plt.close(fig)

    imageio.mimsave(filename, frames, duration=duration)
    return len(frames)
