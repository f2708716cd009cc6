"""
Exceptions raised by the impact simulator core.

Every failure in the core is a precondition violation signalled to the caller
synchronously. Nothing here is retried.
"""


class ImpactSimulatorError(Exception):
    """
    Base exception for simulator failures.

    Attributes:
        message: Human-readable error description
        details: Additional context about the failure
    """

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class InvalidInput(ImpactSimulatorError, ValueError):
    """
    A physical parameter, coordinate or warning time is out of range.

    Attributes:
        field: Name of the offending parameter
        value: The rejected value
    """

    def __init__(self, field: str, value, reason: str):
        super().__init__(f"Invalid {field}: {reason}", {"field": field, "value": value})
        self.field = field
        self.value = value


class InvalidStrategy(ImpactSimulatorError, KeyError):
    """Strategy key is not in the deflection strategy catalog."""

    def __init__(self, key, known_keys=None):
        super().__init__(
            f"Unknown deflection strategy '{key}'",
            {"known": ", ".join(known_keys or [])},
        )
        self.key = key
        self.known_keys = list(known_keys or [])


class MissingStrategy(ImpactSimulatorError):
    """A deflection calculation was requested before a strategy was selected."""

    def __init__(self):
        super().__init__("Select a deflection strategy first")


class MissingImpactData(ImpactSimulatorError):
    """A deflection calculation was requested before any impact was calculated."""

    def __init__(self):
        super().__init__("Calculate impact effects first")


class NeoFeedError(Exception):
    """Fetching or parsing the near-earth-object feed failed."""
