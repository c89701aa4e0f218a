"""
Gymnasium environment wrapper for Minesweeper.

Drives a GameSession through the standard RL interface. Every episode
gets a brand new session.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig
from .engine import StepResult
from .render import render_text
from .session import GameSession, GameState


# ============================================================================
# Constants
# ============================================================================

STEP, FLAG, RESOLVE = 0, 1, 2
NUM_COMMANDS = 3


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array (height, width) where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = exploded mine

    Actions:
        Discrete action space of size 3 * width * height.
        Action a is command a // (width * height) (0 step, 1 flag,
        2 resolve) on cell i = a % (width * height), at (i % width, i // width).

    Rewards:
        - +1 for a command that reveals at least one cell
        - +10 for winning the game
        - -10 for hitting a mine
        - 0 for toggling a flag
        - -0.1 for a command that changes nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 10x10 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.render_mode = render_mode
        self.session = GameSession(self.config)
        self._num_cells = self.config.width * self.config.height

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(NUM_COMMANDS * self._num_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new episode on a freshly built board.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.session.close()
        rng = random.Random(int(self.np_random.integers(2**32)))
        self.session = GameSession(self.config, rng=rng)
        self._steps = 0

        return self.session.engine.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Encoded (command, cell) index.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        command, x, y = self.decode_action(action)
        self._steps += 1

        reward = self._apply(command, x, y)
        self.session.update()

        observation = self.session.engine.get_observation()
        terminated = self.session.is_stopped
        return observation, reward, terminated, False, self._get_info()

    def decode_action(self, action: int) -> Tuple[int, int, int]:
        """
        Convert action index to (command, x, y).

        Raises:
            ValueError: If the action is outside the action space.
        """
        if not self.action_space.contains(int(action)):
            raise ValueError(f"Invalid action {action}")
        command, index = divmod(int(action), self._num_cells)
        return command, index % self.config.width, index // self.config.width

    def encode_action(self, command: int, x: int, y: int) -> int:
        """Convert (command, x, y) to action index."""
        return command * self._num_cells + y * self.config.width + x

    def _apply(self, command: int, x: int, y: int) -> float:
        """
        Run one command against the session and score it.

        Returns:
            Reward value.
        """
        if self.session.is_stopped:
            return -0.1

        if command == FLAG:
            delta = self.session.toggle_flag(x, y)
            return 0.0 if delta else -0.1

        revealed_before = self.session.engine.revealed_count()
        if command == STEP:
            result = self.session.step(x, y)
        else:
            result = self.session.try_resolve_step(x, y)

        if result == StepResult.BOOM:
            return -10.0
        if self.session.game_state == GameState.WON:
            return 10.0
        if self.session.engine.revealed_count() > revealed_before:
            return 1.0
        return -0.1

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.session.engine.revealed_count(),
            "total_safe": self._num_cells - self.config.num_mines,
            "placed_flags": self.session.placed_flags,
            "game_state": self.session.game_state.name,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_text(self.session)
        if self.render_mode == "human":
            print(render_text(self.session))
        return None

    def close(self) -> None:
        self.session.close()

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that can change the board.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.session.is_stopped:
            return mask
        for (x, y), cell in self.session.engine.board.cells():
            if cell.is_hidden:
                mask[self.encode_action(STEP, x, y)] = True
            if cell.is_hidden or cell.is_flagged:
                mask[self.encode_action(FLAG, x, y)] = True
            if cell.is_revealed and cell.adjacent_mines > 0:
                mask[self.encode_action(RESOLVE, x, y)] = True
        return mask
