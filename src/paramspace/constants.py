"""Global constants for paramspace.

This module centralizes markers and defaults shared by the parameter,
sampling and CLI layers.
"""


class _NotSampled:
    """Marker for a parameter that is absent from a raw design row."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_SAMPLED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_NotSampled, ())


# Raw design cell for a parameter whose dependency was unmet in that row
NOT_SAMPLED = _NotSampled()

# Prefix of the tag shared by parameters produced by repeat()
REPEAT_TAG_PREFIX: str = "repeat:"

# Separator between base id and 1-based index of a repeated parameter
REPEAT_ID_SEPARATOR: str = "_"

# Number of grid points per numeric parameter when none is given
DEFAULT_RESOLUTION: int = 10

# Methods understood by generate_design()
DESIGN_METHODS = ("random", "lhs", "sobol")
