"""Core Microsoft Graph client for SharePoint Uploader (spupload)."""

import logging
from urllib.parse import quote

import requests

from spupload.core.config import GRAPH_API_ENDPOINT, REQUEST_TIMEOUT
from spupload.core.auth import SharePointAuth
from spupload.core.exceptions import GraphApiError
from spupload.models.file import DriveItem
from spupload.models.site import Drive, Site

logger = logging.getLogger(__name__)

CONFLICT_BEHAVIOR_KEY = "@microsoft.graph.conflictBehavior"


def _quote_segment(name):
    return quote(name, safe="")


def _error_from_response(response):
    """Build a GraphApiError from a Graph error body, falling back to the HTTP reason."""
    code = "unknown"
    message = response.reason or f"HTTP {response.status_code}"
    try:
        error = response.json().get("error", {})
    except ValueError:
        error = {}
    if isinstance(error, dict):
        code = error.get("code") or code
        message = error.get("message") or message
    return GraphApiError(response.status_code, code, message)


def _decode_json(response):
    """Decode a 2xx body, raising GraphApiError when it is not JSON."""
    try:
        return response.json()
    except ValueError as e:
        raise GraphApiError(
            response.status_code, "invalidResponse", f"Response body is not JSON: {e}"
        ) from e


class GraphClient:
    """Thin Microsoft Graph transport covering the calls the uploader needs."""

    def __init__(self, client_id, client_secret, tenant_id, timeout=REQUEST_TIMEOUT):
        """Initialize the Graph client."""
        self.auth = SharePointAuth(client_id, client_secret, tenant_id)
        self.timeout = timeout

    @classmethod
    def from_config(cls, config):
        return cls(
            client_id=config.client_id,
            client_secret=config.client_secret,
            tenant_id=config.tenant_id,
        )

    def _request(self, method, path_or_url, authenticated=True, **kwargs):
        """Send a request and return the response, raising GraphApiError on non-2xx."""
        if path_or_url.startswith("http"):
            url = path_or_url
        else:
            url = f"{GRAPH_API_ENDPOINT}{path_or_url}"

        headers = kwargs.pop("headers", {})
        if authenticated:
            headers = {**self.auth.get_headers(), **headers}

        try:
            response = requests.request(
                method, url, headers=headers, timeout=self.timeout, **kwargs
            )
        except requests.exceptions.RequestException as e:
            logger.debug("%s %s failed; error:%s", method, url, e)
            raise GraphApiError(None, "connectionError", str(e)) from e

        logger.debug("%s %s -> %s", method, url, response.status_code)
        if not response.ok:
            raise _error_from_response(response)
        return response

    def _get_json_or_none(self, path):
        """GET a resource, returning None when it does not exist."""
        try:
            return _decode_json(self._request("GET", path))
        except GraphApiError as e:
            if e.is_not_found:
                return None
            raise

    # Sites and drives

    def lookup_site(self, host_name):
        """Look up a site by host name alone (the root site of the host)."""
        data = self._get_json_or_none(
            f"/sites/{host_name}?$select=id,name,webUrl"
        )
        if not data or not data.get("id"):
            return None
        return Site.from_api_response(data)

    def lookup_site_by_path(self, host_name, site_path):
        """Look up a site by host name and server-relative path such as /sites/team."""
        data = self._get_json_or_none(f"/sites/{host_name}:{site_path}")
        if not data or not data.get("id"):
            return None
        return Site.from_api_response(data)

    def list_drives(self, site_id) -> list[Drive]:
        """List the document libraries of a site, following pagination."""
        drives: list[Drive] = []
        next_url = f"/sites/{site_id}/drives"
        while next_url:
            data = _decode_json(self._request("GET", next_url))
            drives.extend(Drive.from_api_response(d) for d in data.get("value", []))
            next_url = data.get("@odata.nextLink")
        return drives

    def get_default_drive(self, site_id) -> Drive:
        data = _decode_json(self._request("GET", f"/sites/{site_id}/drive"))
        return Drive.from_api_response(data)

    # Items

    def get_child_by_name(self, drive_id, parent_id, name):
        """Return the child of parent_id called name, or None if there is none."""
        data = self._get_json_or_none(
            f"/drives/{drive_id}/items/{parent_id}:/{_quote_segment(name)}"
        )
        if not data:
            return None
        return DriveItem.from_api_response(data)

    def create_child_folder(self, drive_id, parent_id, name, conflict_behavior="fail"):
        """Create a folder called name under parent_id."""
        body = {
            "name": name,
            "folder": {},
            CONFLICT_BEHAVIOR_KEY: conflict_behavior,
        }
        response = self._request(
            "POST", f"/drives/{drive_id}/items/{parent_id}/children", json=body
        )
        return DriveItem.from_api_response(_decode_json(response))

    def put_content(self, drive_id, folder_id, file_name, data, conflict_behavior="replace"):
        """Upload content in a single request. Graph accepts up to 4 MiB this way."""
        path = (
            f"/drives/{drive_id}/items/{folder_id}:/{_quote_segment(file_name)}:/content"
            f"?{CONFLICT_BEHAVIOR_KEY}={conflict_behavior}"
        )
        response = self._request(
            "PUT",
            path,
            headers={"Content-Type": "application/octet-stream"},
            data=data,
        )
        return DriveItem.from_api_response(_decode_json(response))

    def create_upload_session(self, drive_id, folder_id, file_name, conflict_behavior="replace"):
        """Create a resumable upload session and return its upload URL (None if absent)."""
        path = (
            f"/drives/{drive_id}/items/{folder_id}:/{_quote_segment(file_name)}"
            ":/createUploadSession"
        )
        body = {"item": {CONFLICT_BEHAVIOR_KEY: conflict_behavior}}
        response = self._request("POST", path, json=body)
        return _decode_json(response).get("uploadUrl")

    def upload_chunk(self, upload_url, range_start, range_end, total_size, data):
        """Send one byte range to an upload session.

        The upload URL is pre-authenticated, so no bearer token is sent.

        Returns:
            The finalized DriveItem when the server completes the file
            (200/201), otherwise None (202 Accepted, more ranges expected).
        """
        headers = {
            "Content-Length": str(len(data)),
            "Content-Range": f"bytes {range_start}-{range_end}/{total_size}",
        }
        response = self._request(
            "PUT", upload_url, authenticated=False, headers=headers, data=data
        )
        if response.status_code in (200, 201):
            return DriveItem.from_api_response(_decode_json(response))
        return None

    def cancel_upload_session(self, upload_url):
        self._request("DELETE", upload_url, authenticated=False)
