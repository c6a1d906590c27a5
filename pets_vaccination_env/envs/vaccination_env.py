import gymnasium as gym
from gymnasium import spaces
import numpy as np

from pets_vaccination_env.errors import InvalidAnimalCountError, InvalidMoveError
from pets_vaccination_env.planning.state import VaccinationState, apply_move, move_table, next_states
from pets_vaccination_env.utils.config_utils import PuzzleConfig, config_section, deep_merge, load_config
from pets_vaccination_env.utils.logging_utils import *

DEFAULT_INIT_LOG_LEVEL = logging.WARNING
logger = setup_logger(__name__, level=DEFAULT_INIT_LOG_LEVEL)


class PetsVaccinationEnv(gym.Env):
    """
    Gymnasium environment for the pets vaccination puzzle.

    Each action is one entry of the move table for the configured batch size: how many
    chihuahuas and cats go into surgery and which of them is sent back to the waiting room.
    The observation is the six room counts in state key order.
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(self, render_mode=None, scenario_file="classic.yaml",
                 base_config_file="base_config.yaml", config=None):
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode '{render_mode}'")
        self.render_mode = render_mode

        # --- Load configuration files, explicit overrides win ---
        self.config = load_config(scenario_file, base_config_file)
        if config:
            self.config = deep_merge(self.config, config)
        self._configure_logging()

        self._load_puzzle()
        self._load_task_settings()

        # --- Setup Gym RL interface ---
        self._setup_action_space()
        self._setup_observation_space()

        # --- Internal runtime state ---
        self.current_steps = 0
        self.state = None

        logger.info("Environment initialized.")

    # region CONFIGURATION LOADING + LOGGING

    def _configure_logging(self):
        """Applies the logging level from the config."""
        level_str = config_section(self.config, "logging").get("level", "WARNING")
        apply_log_level(logger, level_str)
        logger.info(f"Log level set to {str(level_str).upper()}")

    def _load_puzzle(self):
        self.puzzle = PuzzleConfig.from_dict(self.config.get("puzzle"))
        self.moves = move_table(self.puzzle.batch_size)
        logger.info(f"Puzzle loaded: {self.puzzle}")

    def _load_task_settings(self):
        """Loads episode limits and reward parameters."""
        sim_cfg = config_section(self.config, "simulation")
        reward_cfg = config_section(self.config, "reward")

        self.max_steps = sim_cfg.get("max_episode_steps", 4 * max(self.puzzle.total_population, 1))

        self.goal_reward = reward_cfg.get("goal_reward", 1.0)
        self.step_penalty = reward_cfg.get("step_penalty", -0.01)
        self.move_fail_penalty = reward_cfg.get("move_fail_penalty", -0.1)

    # endregion

    # region RL INTERFACE SETUP

    def _setup_action_space(self):
        self.action_space = spaces.Discrete(len(self.moves))
        logger.info(f"Action space = Discrete({len(self.moves)})")

    def _setup_observation_space(self):
        """Six counts; vaccinated tallies can exceed the population, so the bound is the largest tally."""
        high = max(self.puzzle.max_vaccinated, self.puzzle.total_population)
        self.observation_space = spaces.Box(low=0, high=high, shape=(6,), dtype=np.int64)
        logger.info(f"Observation space = Box(0, {high}, (6,))")

    # endregion

    # region RESET / STEP

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        self.current_steps = 0

        start = (options or {}).get("state")
        if start is None:
            self.state = VaccinationState.initial(self.puzzle)
        else:
            self.state = self._state_from_option(start)

        if self.render_mode == "human":
            self.render()
        return self._get_obs(), self._get_info()

    def step(self, action):
        """Applies one move from the move table."""
        if self.state is None:
            raise RuntimeError("Call reset() before step().")

        self.current_steps += 1
        truncated = self.current_steps >= self.max_steps
        fail_reward = self.step_penalty + self.move_fail_penalty

        if not self.action_space.contains(action):
            logger.warning(f"Invalid action {action!r}")
            return self._get_obs(), fail_reward, False, truncated, self._get_info(error="invalid_action")

        move = self.moves[int(action)]
        try:
            self.state = apply_move(self.state, move)
        except InvalidMoveError as e:
            logger.warning(f"Move failed: {e}")
            return self._get_obs(), fail_reward, False, truncated, self._get_info(error="invalid_move")

        # === Success & termination ===
        dead_end = not self.state.is_goal and not next_states(self.state)
        terminated = self.state.is_goal or dead_end
        reward = self.goal_reward if self.state.is_goal else self.step_penalty

        if dead_end:
            logger.debug(f"Dead end reached: {self.state}")
        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated and not terminated, self._get_info(dead_end=dead_end)

    def render(self):
        if self.render_mode is None or self.state is None:
            return None
        text = str(self.state)
        if self.render_mode == "ansi":
            return text
        print(text)
        return None

    # endregion

    # region RL HELPER

    def action_mask(self):
        """1 for every action that is currently legal and safe, 0 otherwise."""
        mask = np.zeros(len(self.moves), dtype=np.int8)
        for idx, move in enumerate(self.moves):
            try:
                apply_move(self.state, move)
            except InvalidMoveError:
                continue
            mask[idx] = 1
        return mask

    def action_for_move(self, move) -> int:
        """Index of a move in the action space."""
        return self.moves.index(tuple(move))

    def plan_actions(self, solution, start=None) -> list:
        """
        Translates a solver plan into action indices.

        Args:
            solution (list[SolutionStep]): Steps returned by VaccinationSolver.solve().
            start (VaccinationState, optional): State the plan starts from. Defaults to the initial state.

        Returns:
            list[int]: One action per step.
        """
        state = start or VaccinationState.initial(self.puzzle)
        actions = []
        for step in solution:
            for idx, move in enumerate(self.moves):
                try:
                    candidate = apply_move(state, move)
                except InvalidMoveError:
                    continue
                if candidate == step.state:
                    actions.append(idx)
                    state = candidate
                    break
            else:
                raise InvalidMoveError(f"No move leads from {state} to {step.state}")
        return actions

    def _state_from_option(self, start) -> VaccinationState:
        """Builds a start state from a VaccinationState or six counts, e.g. a returned observation."""
        counts = start.key if isinstance(start, VaccinationState) else np.asarray(start).reshape(-1).tolist()
        state = VaccinationState(*counts, config=self.puzzle)
        if not self.observation_space.contains(self._get_obs(state)):
            raise InvalidAnimalCountError(
                f"Start state {state.key} is outside the observation space (0..{self.observation_space.high[0]})"
            )
        return state

    def _get_obs(self, state=None):
        if state is None:
            state = self.state
        return np.array(state.key, dtype=np.int64)

    def _get_info(self, **extra):
        info = {
            "state": str(self.state),
            "is_goal": self.state.is_goal,
            "steps": self.current_steps,
            "action_mask": self.action_mask(),
        }
        info.update(extra)
        return info

    # endregion
