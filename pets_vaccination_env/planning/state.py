# pets_vaccination_env/planning/state.py

from collections import namedtuple
from dataclasses import dataclass, field
from numbers import Integral

from pets_vaccination_env.errors import InvalidAnimalCountError, InvalidMoveError
from pets_vaccination_env.utils.config_utils import DEFAULT_PUZZLE, RETURNS_TO_WAITING, PuzzleConfig

CHIHUAHUA_LABEL = "Chihuahua"
CAT_LABEL = "Cat"
ROOM_SEPARATOR = " | "

AnimalCount = namedtuple("AnimalCount", ["chihuahuas", "cats"])

VaccinationMove = namedtuple(
    "VaccinationMove",
    ["chihuahuas_to_vaccinate", "cats_to_vaccinate", "chihuahuas_to_waiting", "cats_to_waiting"],
)


def room_is_safe(chihuahuas: int, cats: int) -> bool:
    """Chihuahuas attack cats when they outnumber them. A room without cats is always safe."""
    return cats == 0 or chihuahuas <= cats


@dataclass(frozen=True)
class VaccinationState:
    """
    Distribution of chihuahuas and cats over the three rooms of the clinic.

    - waiting: animals queued for surgery (and the one of each batch sent back)
    - recovery: vaccinated animals resting after surgery
    - vaccinated: running tally of animals that went through surgery

    Two states are the same search node iff all six counts match; the puzzle config
    only decides what the goal is.
    """

    waiting_chihuahuas: int
    waiting_cats: int
    recovery_chihuahuas: int
    recovery_cats: int
    vaccinated_chihuahuas: int
    vaccinated_cats: int
    config: PuzzleConfig = field(default=DEFAULT_PUZZLE, compare=False, repr=False)

    def __post_init__(self):
        for name, value in zip(_COUNT_FIELDS, self.key):
            if not isinstance(value, Integral) or isinstance(value, bool) or value < 0:
                raise InvalidAnimalCountError(f"{name} must be a non-negative integer, got {value!r}")

    @classmethod
    def initial(cls, config: PuzzleConfig = DEFAULT_PUZZLE) -> "VaccinationState":
        """All animals in the waiting room, nobody vaccinated yet."""
        return cls(config.initial_chihuahuas, config.initial_cats, 0, 0, 0, 0, config=config)

    @property
    def key(self) -> tuple:
        return (
            self.waiting_chihuahuas, self.waiting_cats,
            self.recovery_chihuahuas, self.recovery_cats,
            self.vaccinated_chihuahuas, self.vaccinated_cats,
        )

    @property
    def waiting(self) -> AnimalCount:
        return AnimalCount(self.waiting_chihuahuas, self.waiting_cats)

    @property
    def recovery(self) -> AnimalCount:
        return AnimalCount(self.recovery_chihuahuas, self.recovery_cats)

    @property
    def vaccinated(self) -> AnimalCount:
        return AnimalCount(self.vaccinated_chihuahuas, self.vaccinated_cats)

    @property
    def is_valid(self) -> bool:
        return (room_is_safe(self.waiting_chihuahuas, self.waiting_cats)
                and room_is_safe(self.recovery_chihuahuas, self.recovery_cats))

    @property
    def is_goal(self) -> bool:
        return (self.vaccinated_chihuahuas == self.config.initial_chihuahuas
                and self.vaccinated_cats == self.config.initial_cats)

    def next_states(self) -> list:
        return next_states(self)

    def __str__(self):
        rooms = [("Waiting", self.waiting), ("Recovery", self.recovery), ("Vaccinated", self.vaccinated)]
        return ROOM_SEPARATOR.join(
            f"{name}: {count.chihuahuas} {CHIHUAHUA_LABEL} {count.cats} {CAT_LABEL}" for name, count in rooms
        )


_COUNT_FIELDS = (
    "waiting_chihuahuas", "waiting_cats",
    "recovery_chihuahuas", "recovery_cats",
    "vaccinated_chihuahuas", "vaccinated_cats",
)


def move_table(batch_size: int) -> list:
    """
    Every move shape for a batch size, independent of any state.

    Order is ascending chihuahuas in the batch, then chihuahuas sent back, then cats sent back.
    The solver returns the first solution it meets, so this order fixes which solution that is.
    """
    moves = []
    for chihuahuas in range(batch_size + 1):
        cats = batch_size - chihuahuas
        for chihuahuas_back in range(chihuahuas + 1):
            for cats_back in range(cats + 1):
                if chihuahuas_back + cats_back == RETURNS_TO_WAITING:
                    moves.append(VaccinationMove(chihuahuas, cats, chihuahuas_back, cats_back))
    return moves


def possible_moves(state: VaccinationState) -> list:
    """Moves whose batch can be taken from the waiting room, whether or not the result is safe."""
    return [
        move for move in move_table(state.config.batch_size)
        if move.chihuahuas_to_vaccinate <= state.waiting_chihuahuas
        and move.cats_to_vaccinate <= state.waiting_cats
    ]


def _successor(state: VaccinationState, move: VaccinationMove) -> VaccinationState:
    chihuahuas_to_recovery = move.chihuahuas_to_vaccinate - move.chihuahuas_to_waiting
    cats_to_recovery = move.cats_to_vaccinate - move.cats_to_waiting

    return VaccinationState(
        state.waiting_chihuahuas - move.chihuahuas_to_vaccinate + move.chihuahuas_to_waiting,
        state.waiting_cats - move.cats_to_vaccinate + move.cats_to_waiting,
        state.recovery_chihuahuas + chihuahuas_to_recovery,
        state.recovery_cats + cats_to_recovery,
        # The whole batch counts as vaccinated, including the animal sent back
        state.vaccinated_chihuahuas + move.chihuahuas_to_vaccinate,
        state.vaccinated_cats + move.cats_to_vaccinate,
        config=state.config,
    )


def describe_move(move: VaccinationMove) -> str:
    return (f"Vaccinate {move.chihuahuas_to_vaccinate} chihuahua(s) and {move.cats_to_vaccinate} cat(s). "
            f"Return {move.chihuahuas_to_waiting} chihuahua(s) and {move.cats_to_waiting} cat(s) to waiting room.")


def next_states(state: VaccinationState) -> list:
    """
    Generates all safe states reachable with one vaccination move.

    Args:
        state (VaccinationState): State to expand.

    Returns:
        list[tuple[VaccinationState, str]]: (successor, action description) pairs in move table order.
    """
    result = []
    for move in possible_moves(state):
        new_state = _successor(state, move)
        if new_state.is_valid:
            result.append((new_state, describe_move(move)))
    return result


def apply_move(state: VaccinationState, move) -> VaccinationState:
    """
    Applies one move and returns the resulting state.

    Raises:
        InvalidMoveError: If the move is not a legal batch for this state or leaves a room unsafe.
    """
    move = VaccinationMove(*move)
    if move not in move_table(state.config.batch_size):
        raise InvalidMoveError(f"{move} is not a valid move for batch size {state.config.batch_size}")
    if move not in possible_moves(state):
        raise InvalidMoveError(f"Not enough animals waiting for {move}: {state}")

    new_state = _successor(state, move)
    if not new_state.is_valid:
        raise InvalidMoveError(f"{describe_move(move)} leaves a room unsafe: {new_state}")
    return new_state
