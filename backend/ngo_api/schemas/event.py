"""
NGO Site Backend - Event Schemas
================================

What:  Request and response models for /api/events (JSON bodies).
How:   Whitespace is stripped from strings; blank or missing title/date/time
       fail validation and are answered with 400 by the handler in main.py.
"""

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field

from ngo_api.schemas.common import CamelModel


class EventCreate(CamelModel):
    """Body of POST /api/events."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1)
    date: str = Field(min_length=1, description="Event date as displayed, e.g. 2024-06-01")
    time: str = Field(min_length=1, description="Start time as displayed, e.g. 10:00")
    description: Optional[str] = None
    location: Optional[str] = None
    volunteers_needed: Optional[int] = Field(default=None, ge=0)
    category: Optional[str] = None


class EventUpdate(CamelModel):
    """Body of PUT /api/events/{id}; only fields present in the body change."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    volunteers_needed: Optional[int] = Field(default=None, ge=0)
    category: Optional[str] = None


class EventResponse(CamelModel):
    id: str
    title: str
    description: str = ""
    date: str
    time: str
    location: str = ""
    volunteers_needed: Optional[int] = None
    category: str = ""
    created_at: datetime
    updated_at: datetime
