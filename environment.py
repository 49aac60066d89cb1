import numpy as np
import gymnasium as gym
from gymnasium import spaces
from collections import deque
from config import HEIGHT, WALL_THICKNESS, WIDTH
from layout import build_layout
from maze_generator import MazeGenerator

# 0: Up, 1: Right, 2: Down, 3: Left
MOVES = [(-1, 0), (0, 1), (1, 0), (0, -1)]


class MazeEnv(gym.Env):
    """Ball rolling cell to cell through a generated maze.

    The ball starts in the top-left cell and wins on reaching the
    bottom-right cell. Moves only pass through open edges.
    """

    def __init__(self, maze, reward_type="sparse"):
        super(MazeEnv, self).__init__()
        if reward_type not in ("sparse", "dense"):
            raise ValueError(f"Unknown reward type: {reward_type}")
        self.maze = maze
        self.grid = maze.to_cell_grid()
        self.start = (0, 0)
        self.goal = (maze.rows - 1, maze.columns - 1)
        self.state = self.start
        self.previous_state = self.start
        self.reward_type = reward_type
        self.max_steps = 4 * maze.rows * maze.columns
        self.steps_taken = 0
        self.visited_positions = set()
        self.won = False

        # Observation: cell grid image with the ball marked as 2
        self.observation_space = spaces.Box(low=0, high=2, shape=self.grid.shape, dtype=np.uint8)
        self.action_space = spaces.Discrete(4)

    def _manhattan_distance(self, pos1, pos2):
        return abs(pos1[0] - pos2[0]) + abs(pos1[1] - pos2[1])

    def _get_obs(self):
        """Return a copy of the cell grid with the ball's position marked."""
        obs = self.grid.copy().astype(np.uint8)
        row, col = self.state
        obs[2 * row + 1, 2 * col + 1] = 2
        return obs

    def _get_info(self):
        return {
            "distance": self._manhattan_distance(self.state, self.goal),
            "steps": self.steps_taken,
            "visited_before": self.state in self.visited_positions,
            "won": self.won,
        }

    def _calculate_reward(self):
        if self.state == self.goal:
            return 1.0

        if self.reward_type == "dense":
            current_distance = self._manhattan_distance(self.state, self.goal)
            previous_distance = self._manhattan_distance(self.previous_state, self.goal)
            distance_reward = previous_distance - current_distance
            revisit_penalty = -0.2 if self.state in self.visited_positions else 0.0
            step_penalty = -0.01
            return distance_reward + revisit_penalty + step_penalty
        return -0.1

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        self.state = self.start
        self.previous_state = self.start
        self.steps_taken = 0
        self.won = self.start == self.goal
        self.visited_positions = {self.start}
        return self._get_obs(), self._get_info()

    def can_move(self, action):
        """True when the edge in the given direction is open"""
        row, col = self.state
        dr, dc = MOVES[int(action)]
        return self.maze.is_open((row, col), (row + dr, col + dc))

    def step(self, action):
        if not self.action_space.contains(int(action)):
            raise ValueError(f"Invalid action: {action}")

        # The episode is over once the goal is reached; the ball stays put
        if self.won:
            return self._get_obs(), 0.0, True, False, self._get_info()

        self.previous_state = self.state
        if self.can_move(action):
            dr, dc = MOVES[int(action)]
            self.state = (self.state[0] + dr, self.state[1] + dc)

        self.steps_taken += 1
        self.won = self.state == self.goal
        truncated = not self.won and self.steps_taken >= self.max_steps

        # Reward is scored before the new cell counts as visited
        reward = self._calculate_reward()
        self.visited_positions.add(self.state)
        info = self._get_info()

        return self._get_obs(), reward, self.won, truncated, info

    def render(self):
        print(self._get_obs())

    def solve_with_bfs(self):
        """
        Shortest cell path from start to goal through open edges.
        Returns a list of (row, col) cells, or None if the goal is unreachable.
        """
        start = self.start
        goal = self.goal
        queue = deque([start])
        came_from = {start: None}

        while queue:
            current = queue.popleft()
            if current == goal:
                break
            for neighbor in self.maze.neighbors(*current):
                if neighbor not in came_from:
                    queue.append(neighbor)
                    came_from[neighbor] = current

        if goal not in came_from:
            return None

        path = []
        current = goal
        while current is not None:
            path.append(current)
            current = came_from[current]
        path.reverse()

        return path


def new_game(rows, columns, seed=None, width=WIDTH, height=HEIGHT, wall_thickness=WALL_THICKNESS):
    """Fresh maze, layout and reset env. seed=None draws a new random maze."""
    maze = MazeGenerator(rows, columns, seed=seed).generate_maze()
    layout = build_layout(maze, width, height, wall_thickness)
    env = MazeEnv(maze)
    env.reset()
    return maze, layout, env


def next_seed(seed):
    """Seed for the following game: random stays random, fixed seeds advance"""
    return None if seed is None else seed + 1
