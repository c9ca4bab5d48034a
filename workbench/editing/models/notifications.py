"""Notifications raised towards the user."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from workbench.editing.models.enums import Severity


class NotificationAction(BaseModel):
    """A button on a notification that runs a command when picked."""

    label: str
    command: str
    args: list[Any] = Field(default_factory=list)


class Notification(BaseModel):
    severity: Severity
    message: str
    actions: list[NotificationAction] = Field(default_factory=list)
