"""Shared fixtures for services tests: an in-memory stand-in for GraphClient."""

import pytest

from spupload.core.exceptions import GraphApiError
from spupload.models.file import DriveItem
from spupload.models.site import Drive, Site


class FakeGraphClient:
    """In-memory drive implementing the GraphClient methods the services call."""

    def __init__(self):
        self.sites_by_host = {}
        self.sites_by_path = {}
        self.drives = {}
        self.default_drives = {}
        self.folders = {}
        self.calls = []
        self.lookups = 0
        self.creates = 0
        # names another process creates just before our create call lands
        self.race_names = set()
        # names whose creation fails with this error
        self.create_errors = {}
        self.session_url = "https://upload.example/session-1"
        self.chunks = []
        self.fail_chunk_at = None
        self.final_item = DriveItem(id="file-1", name="uploaded.bin")
        self._next_id = 0

    # helpers for tests

    def add_folder(self, drive_id, parent_id, name):
        self._next_id += 1
        folder = DriveItem(id=f"folder-{self._next_id}", name=name, is_folder=True, parent_id=parent_id)
        self.folders[(drive_id, parent_id, name)] = folder
        return folder

    # sites and drives

    def lookup_site(self, host_name):
        self.calls.append(("lookup_site", host_name))
        return self.sites_by_host.get(host_name)

    def lookup_site_by_path(self, host_name, site_path):
        self.calls.append(("lookup_site_by_path", host_name, site_path))
        return self.sites_by_path.get((host_name, site_path))

    def list_drives(self, site_id):
        self.calls.append(("list_drives", site_id))
        return list(self.drives.get(site_id, []))

    def get_default_drive(self, site_id):
        self.calls.append(("get_default_drive", site_id))
        return self.default_drives[site_id]

    # folders

    def get_child_by_name(self, drive_id, parent_id, name):
        self.lookups += 1
        self.calls.append(("get_child_by_name", parent_id, name))
        return self.folders.get((drive_id, parent_id, name))

    def create_child_folder(self, drive_id, parent_id, name, conflict_behavior="fail"):
        self.creates += 1
        self.calls.append(("create_child_folder", parent_id, name, conflict_behavior))
        if name in self.create_errors:
            raise self.create_errors[name]
        if name in self.race_names:
            self.add_folder(drive_id, parent_id, name)
        if (drive_id, parent_id, name) in self.folders:
            raise GraphApiError(409, "nameAlreadyExists", f"The name {name} already exists")
        return self.add_folder(drive_id, parent_id, name)

    # uploads

    def put_content(self, drive_id, folder_id, file_name, data, conflict_behavior="replace"):
        self.calls.append(("put_content", folder_id, file_name, len(data), conflict_behavior))
        return DriveItem(id="file-1", name=file_name, size=len(data))

    def create_upload_session(self, drive_id, folder_id, file_name, conflict_behavior="replace"):
        self.calls.append(("create_upload_session", folder_id, file_name, conflict_behavior))
        return self.session_url

    def upload_chunk(self, upload_url, range_start, range_end, total_size, data):
        index = len(self.chunks)
        if self.fail_chunk_at == index:
            raise GraphApiError(500, "generalException", "chunk rejected")
        self.chunks.append((range_start, range_end, total_size, len(data)))
        if range_end == total_size - 1:
            return self.final_item
        return None

    def cancel_upload_session(self, upload_url):
        self.calls.append(("cancel_upload_session", upload_url))


@pytest.fixture
def fake_client():
    return FakeGraphClient()


@pytest.fixture
def team_site(fake_client):
    """A sub-site only reachable through the path-qualified lookup, with two libraries."""
    site = Site(id="site-team", name="Team")
    fake_client.sites_by_path[("contoso.sharepoint.com", "/sites/Team")] = site
    fake_client.drives["site-team"] = [
        Drive(id="drive-docs", name="Documents"),
        Drive(id="drive-archive", name="Archive"),
    ]
    return site
