"""Unit tests for models/: Graph resources mapped to dataclasses."""

from spupload.models.file import DriveItem, UploadResult
from spupload.models.site import Drive, Site, SiteReference


class TestDriveItem:
    def test_from_api_response_file(self) -> None:
        item = DriveItem.from_api_response(
            {
                "id": "file-1",
                "name": "report.pdf",
                "size": 2048,
                "file": {"mimeType": "application/pdf"},
                "parentReference": {"id": "folder-1"},
                "webUrl": "https://contoso.sharepoint.com/report.pdf",
                "lastModifiedDateTime": "2024-03-01T10:00:00Z",
            }
        )
        assert item.id == "file-1"
        assert item.size == 2048
        assert item.is_folder is False
        assert item.parent_id == "folder-1"
        assert item.web_url.endswith("report.pdf")

    def test_from_api_response_folder(self) -> None:
        item = DriveItem.from_api_response({"id": "f", "name": "Reports", "folder": {"childCount": 0}})
        assert item.is_folder is True
        assert item.size == 0
        assert item.parent_id is None

    def test_missing_id_is_empty(self) -> None:
        assert DriveItem.from_api_response({"name": "x"}).id == ""


class TestSiteModels:
    def test_site_from_api_response(self) -> None:
        site = Site.from_api_response({"id": "s", "name": "Team", "webUrl": "https://x/sites/Team"})
        assert site == Site(id="s", name="Team", web_url="https://x/sites/Team")

    def test_drive_from_api_response(self) -> None:
        drive = Drive.from_api_response({"id": "d", "name": "Documents", "driveType": "documentLibrary"})
        assert drive.name == "Documents"
        assert drive.web_url is None

    def test_site_reference_defaults_to_empty_path(self) -> None:
        assert SiteReference("contoso.sharepoint.com").site_collection_path == ""


class TestUploadResult:
    def test_defaults(self) -> None:
        result = UploadResult("a.txt", 10, succeeded=True)
        assert result.item is None
        assert result.error is None
