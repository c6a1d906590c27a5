import pytest

from pets_vaccination_env.planning.solver import SolutionStep, VaccinationSolver
from pets_vaccination_env.planning.state import VaccinationState, next_states
from pets_vaccination_env.utils.config_utils import PuzzleConfig

ONE_AND_ONE = ("Vaccinate 1 chihuahua(s) and 1 cat(s). "
               "Return 0 chihuahua(s) and 1 cat(s) to waiting room.")


def test_classic_puzzle_solution():
    solver = VaccinationSolver()
    solution = solver.solve()

    assert [step.state.key for step in solution] == [
        (2, 3, 1, 0, 1, 1),
        (1, 3, 2, 0, 2, 2),
        (0, 3, 3, 0, 3, 3),
    ]
    assert all(step.action == ONE_AND_ONE for step in solution)
    assert isinstance(solution[0], SolutionStep)
    assert solver.search_stats == {"visited_states": 4}


def test_solve_is_repeatable():
    solver = VaccinationSolver(PuzzleConfig())
    first = solver.solve()
    first_stats = solver.search_stats
    second = solver.solve()

    assert first == second
    assert solver.search_stats == first_stats
    assert VaccinationSolver().solve() == first


def test_no_solution_is_a_value():
    solver = VaccinationSolver(PuzzleConfig(initial_chihuahuas=5, initial_cats=1, batch_size=2))
    assert solver.solve() is None
    assert solver.search_stats["visited_states"] == 3


def test_stats_reset_between_runs():
    solver = VaccinationSolver(PuzzleConfig(initial_chihuahuas=5, initial_cats=1))
    solver.solve()
    solver.config = PuzzleConfig(initial_chihuahuas=0, initial_cats=4)
    solution = solver.solve()
    assert len(solution) == 2
    assert solver.search_stats["visited_states"] == 2


def test_stats_before_solve():
    assert VaccinationSolver().search_stats == {"visited_states": 0}


def test_empty_population_is_solved_without_moves():
    solver = VaccinationSolver(PuzzleConfig(initial_chihuahuas=0, initial_cats=0))
    assert solver.solve() == []
    assert solver.search_stats["visited_states"] == 0


@pytest.mark.parametrize("config", [
    PuzzleConfig(),
    PuzzleConfig(initial_chihuahuas=0, initial_cats=4),
    PuzzleConfig(initial_chihuahuas=2, initial_cats=4),
    PuzzleConfig(initial_chihuahuas=1, initial_cats=5, batch_size=3),
])
def test_solution_path_replays(config):
    solution = VaccinationSolver(config).solve()
    assert solution

    state = VaccinationState.initial(config)
    for i, step in enumerate(solution):
        assert (step.state, step.action) in next_states(state)
        assert step.state.is_goal == (i == len(solution) - 1)
        state = step.state


def test_planning_package_exports():
    import pets_vaccination_env.planning as planning

    assert planning.VaccinationSolver is VaccinationSolver
    assert planning.next_states is next_states
    assert not hasattr(planning, "InvalidMoveError")
