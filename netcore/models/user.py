"""
Domain models for user profiles returned by the API.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import uuid4

from pydantic import Field

from netcore.models.base import WireModel


class Activity(WireModel):
    """A single entry in a user's recent activity feed."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    description: str
    time_ago: str = Field(..., description="Relative-time label such as '2h ago'.")


class User(WireModel):
    """User profile along with the activity records it owns."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    username: str
    bio: str = ""
    profile_image_name: str = "person.circle.fill"
    post_count: int = 0
    follower_count: int = 0
    following_count: int = 0
    activities: List[Activity] = Field(default_factory=list)
    updated_at: Optional[datetime] = None

    def to_profile_wire(self) -> bytes:
        """Encode the editable profile fields for ``PUT /users/{id}``.

        Activities and ``updated_at`` are server-owned and are not sent back.
        """
        return self.model_dump_json(
            exclude={"activities", "updated_at"}, exclude_none=True
        ).encode("utf-8")

    @classmethod
    def sample(cls) -> "User":
        """Build the demo profile used by previews and fixtures."""
        return cls(
            name="John Doe",
            username="@johndoe",
            bio="Mobile Developer | Coffee Lover",
            post_count=42,
            follower_count=589,
            following_count=217,
            activities=[
                Activity(description="Posted a new photo", time_ago="2h ago"),
                Activity(description="Liked a post", time_ago="4h ago"),
                Activity(description="Commented on a thread", time_ago="1d ago"),
                Activity(
                    description="Started following @design_tips", time_ago="2d ago"
                ),
            ],
        )


__all__ = ["Activity", "User"]
