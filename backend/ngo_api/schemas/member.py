"""
NGO Site Backend - Member Schemas
=================================

What:  API representation of a member record.
Note:  Member input arrives as form data (see services/upload_intake.py), so
       only the response model lives here.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from ngo_api.schemas.common import CamelModel


class MemberResponse(CamelModel):
    """
    A member as returned by /api/members.

    Example:
        {
            "id": "9f1c2e...",
            "name": "Asha",
            "position": "Coordinator",
            "description": "",
            "achievements": "",
            "imageRef": "http://localhost:8000/uploads/image-1718000000000-482913377.png",
            "createdAt": "2024-06-10T08:00:00Z",
            "updatedAt": "2024-06-10T08:00:00Z"
        }
    """
    id: str = Field(description="Unique member identifier")
    name: str
    position: str
    description: str = ""
    achievements: str = ""
    image_ref: Optional[str] = Field(
        default=None,
        description="Public URL of the member's image, null when none is attached",
    )
    created_at: datetime
    updated_at: datetime
