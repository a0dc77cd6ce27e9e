"""Pydantic models for the Task List API.

Field order on ``Task`` is the order used both on the wire and in the data file.
"""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class TaskCreate(BaseModel):
    """Request body for creating a new task."""

    text: str = Field(..., description="The task text (required, non-empty after trimming)")

    @field_validator("text")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Task text is required")
        return value


class Task(BaseModel):
    """A task item in the task list."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., description="Unique identifier for the task")
    text: str = Field(..., description="The task text")
    completed: bool = Field(default=False, description="Whether the task has been completed")
    created_at: str = Field(
        ...,
        alias="createdAt",
        description="ISO-8601 UTC creation timestamp",
    )


class ClearCompletedResponse(BaseModel):
    """Response from clearing completed tasks."""

    deleted: int


class ErrorResponse(BaseModel):
    """Body returned for every error status."""

    error: str


class HealthResponse(BaseModel):
    """Response from the health check endpoint."""

    status: str = "healthy"
    version: str = "1.0.0"


TaskList = TypeAdapter(list[Task])
