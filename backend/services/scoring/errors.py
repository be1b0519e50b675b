"""Scoring engine exceptions."""


class ScoringError(Exception):
    """Raised when a pipeline stage fails unexpectedly.

    Gate blocks are modeled outcomes, not errors; this covers programmer and
    integration failures only. The original exception is kept as __cause__.
    """

    def __init__(self, message: str = "Failed to calculate job fit score") -> None:
        super().__init__(message)
        self.message = message
