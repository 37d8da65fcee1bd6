"""
Entity model: typed representation of an item (content or user) being clustered.

Used by the embedding generator and the clustering stage instead of raw dicts.
Built from store/API dicts via Entity.model_validate(d) or ensure_entities().
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict


class EngagementMetrics(BaseModel):
    """Aggregate engagement counters for a piece of content."""

    model_config = ConfigDict(extra="allow")

    views: int = 0
    likes: int = 0
    comments: int = 0
    shares: int = 0
    saves: int = 0
    avg_watch_time: float = 0.0

    def as_list(self) -> List[float]:
        """Counters in the fixed order used for the engagement sub-vector."""
        return [
            float(self.views),
            float(self.likes),
            float(self.comments),
            float(self.shares),
            float(self.saves),
            float(self.avg_watch_time),
        ]


class Entity(BaseModel):
    """
    Item payload used across the pipeline stages.

    All fields except id are optional; metadata is opaque to this package.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    type: str = "content"
    text_content: str = ""
    tags: List[str] = []
    engagement: Optional[EngagementMetrics] = None
    metadata: Dict[str, Any] = {}


def ensure_entities(
    items: Sequence[Union[str, Dict[str, Any], "Entity"]],
) -> List["Entity"]:
    """Convert ids, dicts or Entities to a list of Entity models for the pipeline."""
    entities = []
    for item in items:
        if isinstance(item, Entity):
            entities.append(item)
        elif isinstance(item, dict):
            entities.append(Entity.model_validate(item))
        else:
            entities.append(Entity(id=str(item)))
    return entities
