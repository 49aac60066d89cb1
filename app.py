import streamlit as st
import matplotlib.pyplot as plt

from environment import new_game, next_seed
from maze_generator import MazeError
from vis import draw_layout

# Set page configuration
st.set_page_config(
    page_title="Maze Ball",
    page_icon="🟢",
    layout="centered",
    initial_sidebar_state="expanded"
)

st.title("Maze Ball")
st.markdown("""
Roll the ball from the top-left cell to the green goal in the bottom-right cell.
Every maze is perfect: there is exactly one route between any two cells.
""")

with st.sidebar:
    st.header("Configuration")
    rows = st.slider("Rows", 1, 30, 3, step=1)
    columns = st.slider("Columns", 1, 30, 3, step=1)
    random_maze = st.checkbox("Random maze", value=True,
                              help="Draw a fresh maze on every game, like a page reload")
    seed = st.number_input("Random Seed", min_value=0, max_value=9999, value=42,
                           disabled=random_maze,
                           help="Seed for reproducible maze generation")
    show_solution = st.checkbox("Show shortest walk", value=False)


def start_game(game_seed):
    try:
        maze, layout, env = new_game(rows, columns, seed=game_seed)
    except MazeError as e:
        st.error(f"Could not generate maze: {e}")
        return
    st.session_state.game_seed = game_seed
    st.session_state.maze = maze
    st.session_state.layout = layout
    st.session_state.env = env


if "env" not in st.session_state:
    st.session_state.env = None
    st.session_state.maze = None
    st.session_state.layout = None
    st.session_state.game_seed = None

if st.button("Generate New Maze", key="generate_maze"):
    start_game(None if random_maze else int(seed))

if st.session_state.env is None:
    st.info("Generate a maze to start playing.")
else:
    env = st.session_state.env

    # Direction pad: W / D / S / A in the browser game
    _, up_col, _ = st.columns(3)
    left_col, down_col, right_col = st.columns(3)
    pressed = None
    if up_col.button("Up", disabled=env.won):
        pressed = 0
    if right_col.button("Right", disabled=env.won):
        pressed = 1
    if down_col.button("Down", disabled=env.won):
        pressed = 2
    if left_col.button("Left", disabled=env.won):
        pressed = 3
    if pressed is not None:
        env.step(pressed)

    path = env.solve_with_bfs() if show_solution else None
    fig, ax = plt.subplots(figsize=(6, 6))
    draw_layout(st.session_state.layout, ax=ax, path=path, ball_cell=env.state,
                title=f"{st.session_state.maze.rows}x{st.session_state.maze.columns} maze, "
                      f"{env.steps_taken} moves")
    st.pyplot(fig)
    plt.close(fig)

    if env.won:
        st.success("You won!")
        st.balloons()
        if st.button("Play again"):
            start_game(next_seed(st.session_state.game_seed))
            st.rerun()
