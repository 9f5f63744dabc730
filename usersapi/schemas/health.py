"""Pydantic schemas for the ping endpoint."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class PingResponse(BaseModel):
    """Response body for GET /ping."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    time: datetime = Field(description="Current time reported by the database")
