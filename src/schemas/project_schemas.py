"""Project request and response schemas.

RESTful Endpoints:
    GET    /api/v1/projects               - List projects
    POST   /api/v1/projects               - Create project
    GET    /api/v1/projects/{project_id}  - Get project
    PATCH  /api/v1/projects/{project_id}  - Update project
    DELETE /api/v1/projects/{project_id}  - Delete project (soft)
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.application.dtos.project_dtos import ProjectListResult, ProjectResult
from src.domain.entities.project import MAX_DESCRIPTION_LENGTH, MAX_NAME_LENGTH


def _strip_name(v: str | None) -> str | None:
    if v is None:
        return v
    if not v.strip():
        raise ValueError("Name cannot be empty or just whitespace")
    return v.strip()


class ProjectCreateRequest(BaseModel):
    """Request schema for project creation.

    POST /api/v1/projects
    Returns: 201 Created
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=MAX_NAME_LENGTH,
        description="Project name",
        examples=["Photos"],
    )
    description: str | None = Field(
        None, max_length=MAX_DESCRIPTION_LENGTH, description="Project description"
    )

    @field_validator("name")
    @classmethod
    def validate_name_not_empty(cls, v: str) -> str:
        """Ensure name is not just whitespace."""
        if not v.strip():
            raise ValueError("Name cannot be empty or just whitespace")
        return v.strip()


class ProjectUpdateRequest(BaseModel):
    """Request schema for a partial project update.

    PATCH /api/v1/projects/{project_id}

    Only provided fields are applied. An explicit `"description": null`
    clears the description. Status can move between ACTIVE and ARCHIVED;
    deletion goes through DELETE.
    """

    name: str | None = Field(
        None, min_length=1, max_length=MAX_NAME_LENGTH, description="New name"
    )
    description: str | None = Field(
        None, max_length=MAX_DESCRIPTION_LENGTH, description="New description"
    )
    status: Literal["ACTIVE", "ARCHIVED"] | None = Field(
        None, description="ACTIVE or ARCHIVED"
    )

    @field_validator("name")
    @classmethod
    def validate_name_not_empty(cls, v: str | None) -> str | None:
        return _strip_name(v)

    @property
    def description_provided(self) -> bool:
        return "description" in self.model_fields_set


class ProjectResponse(BaseModel):
    """Single project response."""

    id: UUID = Field(..., description="Project unique identifier")
    name: str = Field(..., description="Project name")
    description: str | None = Field(None, description="Project description")
    status: str = Field(..., description="ACTIVE or ARCHIVED", examples=["ACTIVE"])
    storage_used: int = Field(..., description="Bytes stored")
    files_count: int = Field(..., description="Number of files")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    @classmethod
    def from_dto(cls, dto: ProjectResult) -> "ProjectResponse":
        return cls(
            id=dto.id,
            name=dto.name,
            description=dto.description,
            status=dto.status,
            storage_used=dto.storage_used,
            files_count=dto.files_count,
            created_at=dto.created_at,
            updated_at=dto.updated_at,
        )


class ProjectListResponse(BaseModel):
    """One page of projects."""

    projects: list[ProjectResponse] = Field(..., description="Projects on this page")
    total: int = Field(..., description="Total matching projects")
    limit: int = Field(..., description="Effective page size")
    offset: int = Field(..., description="Effective offset")

    @classmethod
    def from_dto(cls, dto: ProjectListResult) -> "ProjectListResponse":
        return cls(
            projects=[ProjectResponse.from_dto(project) for project in dto.projects],
            total=dto.total,
            limit=dto.limit,
            offset=dto.offset,
        )
