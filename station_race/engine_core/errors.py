"""
Engine errors.

Rejected transitions are NOT errors: the reducer reports them through
ActionResult and leaves the state untouched. Exceptions are reserved for
programmer mistakes (bad configuration, inputs outside the closed set).
"""


class StationRaceError(Exception):
    """Base class for all Station Race errors."""


class ConfigurationError(StationRaceError, ValueError):
    """Raised when a Configuration violates its invariants."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Invalid configuration: {'; '.join(errors)}")


class UnknownInputError(StationRaceError, TypeError):
    """Raised when something other than a known Action reaches the reducer."""

    def __init__(self, action: object):
        self.action = action
        super().__init__(f"Unexpected input: {action!r}")
