"""Developer portal content data models."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

# Index of the content type segment in a content item id:
# /contentTypes/<type>/contentItems/<name>
CONTENT_TYPE_SEGMENT = 2


@dataclass
class ContentType:
    """A named category of content items (page, layout, url, ...).

    Attributes:
        name: Content type identifier used in URLs and folder names
        id: Full content type id as returned by the service
    """
    name: str
    id: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContentType":
        return cls(name=data["name"], id=data.get("id", ""))


@dataclass
class ContentItem:
    """A developer portal content item.

    Content items are opaque JSON documents; only ``name``, ``id`` and the
    ``permalink`` property of URL items are interpreted by this tool.

    Attributes:
        name: Item identifier, also used as the local file name
        id: Path-like id embedding the content type
        type: Resource type string reported by the service
        properties: Free-form item payload
    """
    name: str
    id: str = ""
    type: str = ""
    properties: Dict[str, Any] = field(default_factory=dict)

    @property
    def content_type_name(self) -> Optional[str]:
        """Content type segment of ``id``, or None when ``id`` is too short."""
        segments = self.id.split("/")
        if len(segments) <= CONTENT_TYPE_SEGMENT:
            return None
        return segments[CONTENT_TYPE_SEGMENT]

    @property
    def permalink(self) -> Optional[str]:
        return self.properties.get("permalink")

    @permalink.setter
    def permalink(self, value: str) -> None:
        self.properties["permalink"] = value

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContentItem":
        """Build an item from its JSON form.

        Raises:
            ValueError: If ``data`` is not a JSON object
        """
        if not isinstance(data, dict):
            raise ValueError(f"Content item must be a JSON object, got {type(data).__name__}")
        return cls(
            name=data.get("name") or "",
            id=data.get("id") or "",
            type=data.get("type") or "",
            properties=dict(data.get("properties") or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON form written to disk."""
        return {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "properties": self.properties,
        }


@dataclass
class BlobEntry:
    """A media blob listed from the portal storage container."""
    name: str
    content_type: Optional[str] = None


@dataclass
class PortalRevision:
    """A publish marker for the developer portal.

    Attributes:
        name: Revision identifier (``yyyyMMddHHmmss`` when generated)
        description: Free-text description shown in the portal
        is_current: Whether the revision becomes the published one
    """
    name: str
    description: str
    is_current: bool = True
