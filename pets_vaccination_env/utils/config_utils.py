# pets_vaccination_env/utils/config_utils.py

from dataclasses import dataclass
from numbers import Integral
from pathlib import Path

import yaml

from pets_vaccination_env.errors import InvalidConfigurationError

CONFIG_DIR = Path(__file__).resolve().parent.parent / "configs"
DEFAULT_BASE_CONFIG = "base_config.yaml"
DEFAULT_SCENARIO = "classic.yaml"

# After each vaccination exactly one animal of the batch goes back to the waiting room
RETURNS_TO_WAITING = 1


def _is_count(value) -> bool:
    # bool is an int subclass, but True chihuahuas is not a population
    return isinstance(value, Integral) and not isinstance(value, bool)


@dataclass(frozen=True)
class PuzzleConfig:
    """
    Fixed parameters of one vaccination puzzle.

    Attributes:
        initial_chihuahuas (int): Chihuahuas waiting at the start, all of which must be vaccinated.
        initial_cats (int): Cats waiting at the start, all of which must be vaccinated.
        batch_size (int): Animals vaccinated together in one move. One of them always returns
            to the waiting room, so a batch must hold at least two for the waiting room to drain.
    """

    initial_chihuahuas: int = 3
    initial_cats: int = 3
    batch_size: int = 2

    def __post_init__(self):
        for name in ("initial_chihuahuas", "initial_cats"):
            value = getattr(self, name)
            if not _is_count(value) or value < 0:
                raise InvalidConfigurationError(f"{name} must be a non-negative integer, got {value!r}")
        if not _is_count(self.batch_size) or self.batch_size <= RETURNS_TO_WAITING:
            raise InvalidConfigurationError(
                f"batch_size must be an integer greater than {RETURNS_TO_WAITING}, got {self.batch_size!r}"
            )

    @property
    def total_population(self) -> int:
        return self.initial_chihuahuas + self.initial_cats

    @property
    def max_vaccinated(self) -> int:
        """Upper bound of a vaccinated counter: every move drains at least one animal from waiting."""
        return self.batch_size * self.total_population

    @classmethod
    def from_dict(cls, puzzle_cfg: dict) -> "PuzzleConfig":
        """Builds a config from the `puzzle` section of a YAML config, using defaults for missing keys."""
        if puzzle_cfg is None:
            puzzle_cfg = {}
        if not isinstance(puzzle_cfg, dict):
            raise InvalidConfigurationError(f"'puzzle' section must be a mapping, got {type(puzzle_cfg).__name__}")

        unknown = set(puzzle_cfg) - {"initial_chihuahuas", "initial_cats", "batch_size"}
        if unknown:
            raise InvalidConfigurationError(f"Unknown puzzle keys: {sorted(unknown)}")
        return cls(**puzzle_cfg)

    def to_dict(self) -> dict:
        return {
            "initial_chihuahuas": self.initial_chihuahuas,
            "initial_cats": self.initial_cats,
            "batch_size": self.batch_size,
        }


DEFAULT_PUZZLE = PuzzleConfig()


def deep_merge(a: dict, b: dict) -> dict:
    """Recursive dict merge: values in b overwrite those in a. Mutates and returns a."""
    for k, v in b.items():
        if isinstance(v, dict):
            a[k] = deep_merge(dict(a.get(k) or {}), v)
        else:
            a[k] = v
    return a


def config_section(config: dict, name: str) -> dict:
    """Returns one top-level section of a merged config. A missing or empty (null) section is an empty dict."""
    section = config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise InvalidConfigurationError(f"'{name}' section must be a mapping, got {type(section).__name__}")
    return section


def _read_yaml(path: Path) -> dict:
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidConfigurationError(f"Could not parse {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfigurationError(f"{path} must contain a mapping at the top level")
    return data


def _resolve_scenario(scenario_file, config_dir: Path) -> Path:
    # Lookup order: configs/scenarios/, configs/, then the path as given
    candidates = [config_dir / "scenarios" / scenario_file, config_dir / scenario_file, Path(scenario_file)]
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    raise InvalidConfigurationError(f"Scenario config '{scenario_file}' not found")


def load_config(scenario_file=DEFAULT_SCENARIO, base_config_file=DEFAULT_BASE_CONFIG, config_dir=None) -> dict:
    """
    Loads and merges two YAML config files: base + scenario.

    Args:
        scenario_file (str or Path): Scenario file name (looked up in configs/scenarios/) or a path.
            None loads the base config alone.
        base_config_file (str): Base config file name inside config_dir. A missing base file is an empty config.
        config_dir (Path, optional): Directory holding the config files. Defaults to the packaged configs.

    Returns:
        dict: The merged configuration.
    """
    config_dir = Path(config_dir) if config_dir is not None else CONFIG_DIR

    base_path = config_dir / base_config_file
    base_config = _read_yaml(base_path) if base_path.is_file() else {}

    scenario_config = {}
    if scenario_file is not None:
        scenario_config = _read_yaml(_resolve_scenario(scenario_file, config_dir))

    return deep_merge(base_config, scenario_config)


def load_puzzle_config(scenario_file=DEFAULT_SCENARIO, base_config_file=DEFAULT_BASE_CONFIG,
                       config_dir=None) -> PuzzleConfig:
    """Loads the merged config and returns its validated `puzzle` section."""
    config = load_config(scenario_file, base_config_file, config_dir)
    return PuzzleConfig.from_dict(config.get("puzzle"))
