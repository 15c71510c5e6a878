#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class AvailabilitySlotModel(BaseModel):
    """Weekly time window, accepted as {dayOfWeek, from, to}."""
    model_config = ConfigDict(populate_by_name=True)

    day_of_week: int = Field(alias="dayOfWeek", ge=0, le=6, description="0 = Sunday ... 6 = Saturday")
    start: str = Field(alias="from", pattern=r"^\d{1,2}:\d{2}$", description="Start time, HH:MM")
    end: str = Field(alias="to", pattern=r"^\d{1,2}:\d{2}$", description="End time, HH:MM")


class MentorMatchRequest(BaseModel):
    """Request to rank mentors for a skill."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "requester_id": "8d1c6a52-6f1e-4b7a-9a51-0f1b2c3d4e5f",
                "skill": "React",
                "level": "Beginner",
                "availability_slots": [{"dayOfWeek": 1, "from": "18:00", "to": "20:00"}],
                "mode": "hybrid"
            }
        }
    )

    requester_id: str = Field(..., description="Requesting user's id (excluded from results)")
    # Validated by the route so missing values map to 400, not 422
    skill: Optional[str] = Field(None, description="Skill to learn")
    level: Optional[str] = Field(None, description="Desired level: Beginner, Intermediate, Advanced")
    availability_slots: List[AvailabilitySlotModel] = Field(default_factory=list)
    mode: Optional[str] = Field(None, description="local, openai or hybrid; defaults to the server setting")
