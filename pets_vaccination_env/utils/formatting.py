# pets_vaccination_env/utils/formatting.py
"""Report lines for the console driver. Every function returns a list of strings; printing is up to the caller."""

from pets_vaccination_env.planning.state import VaccinationState

TITLE = "Pets Vaccination Problem Solver"
SEPARATOR = "=" * 60
SUCCESS_PREFIX = "[SUCCESS]"
ERROR_PREFIX = "[ERROR]"
STEP_PREFIX = "Step"


def format_header(config) -> list:
    return [
        TITLE,
        SEPARATOR,
        f"Initial state: {config.initial_chihuahuas} Chihuahuas and {config.initial_cats} cats in waiting room",
        "Goal: Vaccinate all animals safely without attacks",
        "",
    ]


def format_rules(config) -> list:
    return [
        "Game Rules:",
        f"• Only {config.batch_size} animals can go to surgery at the same time",
        f"• After vaccination: 1 returns to waiting room, {config.batch_size - 1} go(es) to recovery room",
        "• Chihuahuas attack cats if they outnumber cats in any room",
        "• All animals must be vaccinated before going home",
        "",
    ]


def format_solution(solution, config) -> list:
    """Step 0 is the initial state, then one action line and one indented state line per step."""
    if solution is None:
        return [f"{ERROR_PREFIX} No solution found!"]

    lines = [f"{SUCCESS_PREFIX} Solution found!", ""]
    lines.append(f"{STEP_PREFIX} 0: {VaccinationState.initial(config)}")
    for i, step in enumerate(solution, start=1):
        lines.append(f"{STEP_PREFIX} {i}: {step.action}")
        lines.append(f"        {step.state}")
    lines.append("")
    lines.append(f"{SUCCESS_PREFIX} All animals have been safely vaccinated!")
    return lines


def format_stats(stats: dict, solution_length: int) -> list:
    return [
        "",
        "Search Statistics:",
        f"• States explored: {stats['visited_states']}",
        f"• Solution steps: {solution_length}",
        "",
        SEPARATOR,
    ]
