"""Drive item models for SharePoint Uploader (spupload)."""

from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass
class DriveItem:
    """Represents a file or folder in a SharePoint document library."""

    id: str
    name: str
    size: int = 0
    is_folder: bool = False
    parent_id: Optional[str] = None
    web_url: Optional[str] = None

    @classmethod
    def from_api_response(cls, item: Dict[str, Any]) -> "DriveItem":
        """Create a DriveItem from a Graph driveItem resource."""
        return cls(
            id=item.get("id", ""),
            name=item.get("name", ""),
            size=item.get("size", 0),
            is_folder="folder" in item,
            parent_id=item.get("parentReference", {}).get("id"),
            web_url=item.get("webUrl"),
        )


@dataclass
class UploadResult:
    """Outcome of one upload run."""

    file_name: str
    byte_size: int
    succeeded: bool
    item: Optional[DriveItem] = None
    error: Optional[Exception] = None
