"""Site and drive models for SharePoint Uploader (spupload)."""

from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass(frozen=True)
class SiteReference:
    """Host name and site collection path parsed from a site URL."""

    host_name: str
    site_collection_path: str = ""


@dataclass
class Site:
    """A SharePoint site as returned by the Graph sites endpoint."""

    id: str
    name: Optional[str] = None
    web_url: Optional[str] = None

    @classmethod
    def from_api_response(cls, item: Dict[str, Any]) -> "Site":
        return cls(id=item["id"], name=item.get("name"), web_url=item.get("webUrl"))


@dataclass
class Drive:
    """A document library (drive) of a site."""

    id: str
    name: str
    web_url: Optional[str] = None

    @classmethod
    def from_api_response(cls, item: Dict[str, Any]) -> "Drive":
        return cls(
            id=item["id"],
            name=item.get("name", ""),
            web_url=item.get("webUrl"),
        )
