"""
User-side inputs to cluster matching: profile and request context.

Both come from external collaborators (user service, request layer) and are
read-only for the duration of one call.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserProfile(BaseModel):
    """
    Coarse user attributes used when no user embedding is available.

    interests: declared topics; matched case-insensitively against cluster topics.
    """

    model_config = ConfigDict(extra="allow")

    user_id: str = ""
    interests: List[str] = []


class RecommendationContext(BaseModel):
    """Request-time signals. Only ever used to boost scores, never to filter."""

    model_config = ConfigDict(extra="allow")

    time_of_day: Optional[int] = Field(default=None, ge=0, le=23)
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)  # 0 = Sunday
