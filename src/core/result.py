"""Result types for railway-oriented programming.

Operations that can fail in an expected way (bad webhook signature, rate limit
store outage, unknown invoice) return a Result instead of raising. Callers
pattern-match on the variant, which keeps the failure path explicit and easy
to test.

Usage:
    def parse_plan(raw: str) -> Result[PlanTier, str]:
        try:
            return Success(value=PlanTier(raw))
        except ValueError:
            return Failure(error=f"Unknown plan: {raw}")

    match parse_plan("PRO"):
        case Success(value=tier):
            print(tier)
        case Failure(error=error):
            print(error)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


# Type alias for Result union
type Result[T, E] = Success[T] | Failure[E]
