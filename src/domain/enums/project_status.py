"""Project status enumeration."""

from enum import Enum


class ProjectStatus(str, Enum):
    """Project lifecycle state.

    DELETED is a soft delete: the row stays, but every owner-facing read
    treats it as missing and it no longer counts towards the plan cap.
    """

    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"
    DELETED = "DELETED"
