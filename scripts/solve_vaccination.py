# scripts/solve_vaccination.py

import sys
import traceback

from pets_vaccination_env.errors import VaccinationError
from pets_vaccination_env.planning import solver as solver_module
from pets_vaccination_env.planning.solver import VaccinationSolver
from pets_vaccination_env.utils.config_utils import config_section, load_config, PuzzleConfig
from pets_vaccination_env.utils.formatting import (
    ERROR_PREFIX, SUCCESS_PREFIX, format_header, format_rules, format_solution, format_stats,
)
from pets_vaccination_env.utils.logging_utils import PLAIN_FORMAT, apply_log_level, setup_logger

# --- Run Configuration ---
# Scenario name from configs/scenarios/ or a path to a YAML file; override with the first CLI argument
SCENARIO_FILE = "classic.yaml"
LOG_FILE = None  # e.g. "solve_vaccination.log"

report = setup_logger("solve_vaccination", log_file=LOG_FILE, log_format=PLAIN_FORMAT)


def main(scenario_file) -> int:
    config = load_config(scenario_file)
    # The configured level applies to the planner logs; report lines are always shown
    apply_log_level(solver_module.logger, config_section(config, "logging").get("level", "WARNING"))

    puzzle = PuzzleConfig.from_dict(config.get("puzzle"))
    for line in format_header(puzzle) + format_rules(puzzle):
        report.info(line)

    solver = VaccinationSolver(puzzle)
    solution = solver.solve()

    for line in format_solution(solution, puzzle):
        report.info(line)

    if solution is not None:
        for line in format_stats(solver.search_stats, len(solution)):
            report.info(line)
        report.info(f"{SUCCESS_PREFIX} Application completed successfully!")
    return 0


if __name__ == "__main__":
    scenario = sys.argv[1] if len(sys.argv) > 1 else SCENARIO_FILE
    try:
        sys.exit(main(scenario))
    except VaccinationError as e:
        report.error(f"{ERROR_PREFIX} [{e.code}] {e.message}")
        sys.exit(1)
    except Exception:
        report.error(f"{ERROR_PREFIX} Unexpected error during execution:\n{traceback.format_exc()}")
        sys.exit(1)
