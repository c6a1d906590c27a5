# pets_vaccination_env/errors.py


class VaccinationError(Exception):
    """Base class for all errors raised by the vaccination planner."""

    code = "VACCINATION_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidConfigurationError(VaccinationError, ValueError):
    """Raised when the puzzle configuration cannot describe a finite search (bad counts, bad batch size, bad file)."""

    code = "INVALID_CONFIGURATION"


class InvalidAnimalCountError(InvalidConfigurationError):
    """Raised when a state is built with a negative or non-integer animal count."""

    code = "INVALID_ANIMAL_COUNT"


class InvalidMoveError(VaccinationError):
    """Raised when a move cannot be applied to a state."""

    code = "INVALID_MOVE"
