"""Project error types.

Usage:
    from src.domain.errors import ProjectError
    from src.core.enums import ErrorCode

    return Failure(error=ProjectError(
        code=ErrorCode.PROJECT_LIMIT_REACHED,
        message="Project limit reached (3 for plan FREE)",
    ))
"""

from dataclasses import dataclass

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ProjectError(DomainError):
    """Project failure.

    Attributes:
        code: PROJECT_NOT_FOUND or PROJECT_LIMIT_REACHED.
        message: Human-readable message.
        details: Additional context (project_id, plan_tier, limit).
    """

    pass
