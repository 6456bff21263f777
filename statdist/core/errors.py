"""Exceptions raised by statdist."""

from .models.validation import ValidationResult


class StatdistError(Exception):
    """Base class for statdist errors."""


class UnsupportedProgressionError(StatdistError):
    """The progression can't be solved in closed form.

    Attributes:
        result: The feasibility gate's findings, one error per rejected step
    """

    def __init__(self, result: ValidationResult):
        self.result = result
        details = "; ".join(str(issue) for issue in result.errors)
        super().__init__(f"Progression is not supported by the closed-form analysis: {details}")


class PromotionContractError(StatdistError, ValueError):
    """A promotion transform broke its contract.

    Raised when a transform maps different values of one stat to different
    growths or caps, or produces a value outside [0, cap].
    """


class DistributionInvariantError(StatdistError, AssertionError):
    """A distribution failed its mass conservation check.

    This indicates a defect in the engine, not bad input.
    """
