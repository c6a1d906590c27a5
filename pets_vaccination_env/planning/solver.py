# pets_vaccination_env/planning/solver.py

import logging
from collections import namedtuple

from pets_vaccination_env.planning.state import VaccinationState, next_states
from pets_vaccination_env.utils.config_utils import DEFAULT_PUZZLE
from pets_vaccination_env.utils.logging_utils import setup_logger

logger = setup_logger(__name__, level=logging.WARNING)

SolutionStep = namedtuple("SolutionStep", ["state", "action"])


class VaccinationSolver:
    """
    Depth-first planner for the pets vaccination puzzle.

    States are expanded in move table order and every state key is explored at most once,
    so the search always terminates and always returns the same plan. The plan is the first
    one found, not necessarily the shortest.

    One solver holds the visited set of its current run; do not call solve() on the same
    instance from several threads at once.
    """

    def __init__(self, config=None):
        self.config = config or DEFAULT_PUZZLE
        self._visited = set()

    @property
    def search_stats(self) -> dict:
        return {"visited_states": len(self._visited)}

    def solve(self):
        """
        Runs the search from the all-waiting state.

        Returns:
            list[SolutionStep] or None: Steps after the initial state up to and including the goal,
            or None if no safe sequence exists.
        """
        self._visited.clear()
        initial_state = VaccinationState.initial(self.config)
        logger.debug(f"Solving from {initial_state}")

        solution = self._depth_first_search(initial_state, [])

        if solution is None:
            logger.info(f"No solution after visiting {len(self._visited)} states.")
        else:
            logger.info(f"Solution with {len(solution)} steps after visiting {len(self._visited)} states.")
        return solution

    def _depth_first_search(self, state, path):
        if state.is_goal:
            return path

        # Checked before marking, so the root is always expanded once
        if state.key in self._visited:
            return None
        self._visited.add(state.key)

        for next_state, action in next_states(state):
            solution = self._depth_first_search(next_state, path + [SolutionStep(next_state, action)])
            if solution is not None:
                return solution

        return None  # Dead end, backtrack
