"""Plan catalog: storage quota and project cap per subscription tier.

Usage:
    from src.domain.value_objects.plan import project_limit_for, storage_limit_for

    limit = storage_limit_for(PlanTier.PRO)  # 2 TiB in bytes
    cap = project_limit_for(PlanTier.FREE)  # 3 projects
"""

from src.domain.enums.plan_tier import PlanTier

GIB = 1024**3
TIB = 1024**4

PLAN_STORAGE_LIMITS: dict[PlanTier, int] = {
    PlanTier.FREE: 5 * GIB,
    PlanTier.STANDARD: 500 * GIB,
    PlanTier.PRO: 2 * TIB,
}
"""Storage quota in bytes for each plan tier."""


def storage_limit_for(tier: PlanTier) -> int:
    """Return the storage quota in bytes for a plan tier.

    Args:
        tier: Plan tier.

    Returns:
        int: Quota in bytes.
    """
    return PLAN_STORAGE_LIMITS[tier]


PLAN_PROJECT_LIMITS: dict[PlanTier, int] = {
    PlanTier.FREE: 3,
    PlanTier.STANDARD: 20,
    PlanTier.PRO: 100,
}
"""Maximum number of live (not deleted) projects for each plan tier."""


def project_limit_for(tier: PlanTier) -> int:
    """Return how many live projects a plan tier allows.

    Args:
        tier: Plan tier.

    Returns:
        int: Project cap.
    """
    return PLAN_PROJECT_LIMITS[tier]
