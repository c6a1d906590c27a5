from .state import (
    AnimalCount, VaccinationMove, VaccinationState,
    move_table, possible_moves, next_states, apply_move, describe_move,
)
from .solver import SolutionStep, VaccinationSolver
