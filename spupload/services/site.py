"""Site and document library resolution for SharePoint Uploader (spupload)."""

import logging
from urllib.parse import urlparse

from spupload.core.config import DEFAULT_LIBRARY_NAME
from spupload.core.exceptions import (
    ConfigurationError,
    LibraryNotFoundError,
    SiteNotFoundError,
)
from spupload.models.site import SiteReference

logger = logging.getLogger(__name__)


def parse_site_url(site_url) -> SiteReference:
    """Split a site URL into its host name and site collection path.

    "https://contoso.sharepoint.com/sites/Team/" gives host
    "contoso.sharepoint.com" and path "/sites/Team"; a bare host gives an
    empty path.

    Raises:
        ConfigurationError: If the URL is not an absolute http(s) URL.
    """
    try:
        parsed = urlparse(site_url)
        host_name = parsed.hostname
    except (ValueError, AttributeError) as e:
        raise ConfigurationError(f"Malformed site URL: {site_url} ({e})") from e

    if parsed.scheme not in ("http", "https") or not host_name:
        raise ConfigurationError(f"Malformed site URL: {site_url}")

    path = parsed.path.strip("/")
    return SiteReference(
        host_name=host_name,
        site_collection_path=f"/{path}" if path else "",
    )


class SiteResolver:
    """Resolves a SiteReference to a Graph site."""

    def __init__(self, client):
        self.client = client

    def resolve(self, site_ref, site_url):
        """Look the site up by host, then by host and path.

        The host-only form addresses the root site; sub-sites only answer to
        the path-qualified form, which is tried when the first lookup comes
        back empty and the URL has a path.
        """
        site = self.client.lookup_site(site_ref.host_name)
        if site is None and site_ref.site_collection_path:
            logger.debug(
                "host lookup returned no site; trying path; host:%s;path:%s",
                site_ref.host_name,
                site_ref.site_collection_path,
            )
            site = self.client.lookup_site_by_path(
                site_ref.host_name, site_ref.site_collection_path
            )

        if site is None:
            raise SiteNotFoundError(site_url)
        return site


class DriveResolver:
    """Resolves a document library name to a drive of the site."""

    def __init__(self, client):
        self.client = client

    def resolve(self, site_id, library_name):
        target = library_name.lower()
        for drive in self.client.list_drives(site_id):
            if drive.name.lower() == target:
                return drive

        if target == DEFAULT_LIBRARY_NAME.lower():
            logger.debug("no drive named %s; using the site default drive", library_name)
            return self.client.get_default_drive(site_id)

        raise LibraryNotFoundError(library_name)
