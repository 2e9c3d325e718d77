from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class TicketType(BaseModel):
    name: str
    icon: str = Field(default="", description="URL of the issue type icon")


class TicketProject(BaseModel):
    key: str
    name: str = ""
    url: str = ""


class TicketDetails(BaseModel):
    key: str = Field(..., description="Jira issue key, e.g. PROJ-123")
    summary: str = ""
    url: str = Field(..., description="Browse URL of the issue")
    type: TicketType
    project: Optional[TicketProject] = None
