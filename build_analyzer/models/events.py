"""Build event log schema: one JSON object per line, discriminated by ``type``."""

from __future__ import annotations

import uuid
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter


class ItemEntry(BaseModel):
    """A single item as it appears in a ``project_started`` event."""

    item_spec: str
    metadata: dict[str, str] = Field(default_factory=dict)


class ProjectStarted(BaseModel):
    type: Literal["project_started"] = "project_started"
    context_id: int = 0
    project_file: str
    properties: dict[str, str] = Field(default_factory=dict)
    items: dict[str, list[ItemEntry]] = Field(default_factory=dict)
    # Identifier resolved from an enclosing solution, if any
    project_guid: uuid.UUID | None = None


class TargetStarted(BaseModel):
    type: Literal["target_started"] = "target_started"
    context_id: int = 0
    target_name: str


class TargetFinished(BaseModel):
    type: Literal["target_finished"] = "target_finished"
    context_id: int = 0
    target_name: str


class TaskCommandLine(BaseModel):
    type: Literal["task_command_line"] = "task_command_line"
    context_id: int = 0
    task_name: str
    command_line: str


class ProjectFinished(BaseModel):
    type: Literal["project_finished"] = "project_finished"
    context_id: int = 0
    succeeded: bool


BuildEvent = Annotated[
    Union[ProjectStarted, TargetStarted, TargetFinished, TaskCommandLine, ProjectFinished],
    Field(discriminator="type"),
]

BUILD_EVENT_ADAPTER: TypeAdapter[BuildEvent] = TypeAdapter(BuildEvent)
