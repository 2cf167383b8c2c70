"""Unit tests for services/site.py: URL parsing, site and drive resolution."""

import pytest

from spupload.core.exceptions import ConfigurationError, LibraryNotFoundError, SiteNotFoundError
from spupload.models.site import Drive, Site, SiteReference
from spupload.services.site import DriveResolver, SiteResolver, parse_site_url

# ---------------------------------------------------------------------------
# parse_site_url
# ---------------------------------------------------------------------------


class TestParseSiteUrl:
    def test_sub_site(self) -> None:
        assert parse_site_url("https://contoso.sharepoint.com/sites/Team") == SiteReference(
            "contoso.sharepoint.com", "/sites/Team"
        )

    def test_trailing_slash_is_trimmed(self) -> None:
        ref = parse_site_url("https://contoso.sharepoint.com/sites/Team/")
        assert ref.site_collection_path == "/sites/Team"

    @pytest.mark.parametrize("url", ["https://contoso.sharepoint.com", "https://contoso.sharepoint.com/"])
    def test_root_site_has_empty_path(self, url) -> None:
        assert parse_site_url(url) == SiteReference("contoso.sharepoint.com", "")

    def test_host_is_lowercased(self) -> None:
        assert parse_site_url("https://Contoso.SharePoint.com/sites/x").host_name == "contoso.sharepoint.com"

    @pytest.mark.parametrize(
        "url",
        ["contoso.sharepoint.com/sites/Team", "ftp://contoso.sharepoint.com", "https://", "not a url", "https://[::1"],
    )
    def test_malformed_urls(self, url) -> None:
        with pytest.raises(ConfigurationError):
            parse_site_url(url)


# ---------------------------------------------------------------------------
# SiteResolver
# ---------------------------------------------------------------------------


class TestSiteResolver:
    def test_host_lookup_is_used_when_it_finds_a_site(self, fake_client) -> None:
        root = Site(id="site-root")
        fake_client.sites_by_host["contoso.sharepoint.com"] = root
        ref = SiteReference("contoso.sharepoint.com", "/sites/Team")

        assert SiteResolver(fake_client).resolve(ref, "https://contoso.sharepoint.com/sites/Team") is root
        assert [c[0] for c in fake_client.calls] == ["lookup_site"]

    def test_falls_back_to_path_lookup(self, fake_client, team_site) -> None:
        ref = SiteReference("contoso.sharepoint.com", "/sites/Team")

        site = SiteResolver(fake_client).resolve(ref, "https://contoso.sharepoint.com/sites/Team")

        assert site is team_site
        assert fake_client.calls == [
            ("lookup_site", "contoso.sharepoint.com"),
            ("lookup_site_by_path", "contoso.sharepoint.com", "/sites/Team"),
        ]

    def test_no_path_lookup_without_path(self, fake_client) -> None:
        ref = SiteReference("contoso.sharepoint.com", "")
        with pytest.raises(SiteNotFoundError, match="https://contoso.sharepoint.com"):
            SiteResolver(fake_client).resolve(ref, "https://contoso.sharepoint.com")
        assert [c[0] for c in fake_client.calls] == ["lookup_site"]

    def test_both_lookups_fail(self, fake_client) -> None:
        ref = SiteReference("contoso.sharepoint.com", "/sites/Missing")
        with pytest.raises(SiteNotFoundError) as exc_info:
            SiteResolver(fake_client).resolve(ref, "https://contoso.sharepoint.com/sites/Missing")
        assert exc_info.value.site_url == "https://contoso.sharepoint.com/sites/Missing"


# ---------------------------------------------------------------------------
# DriveResolver
# ---------------------------------------------------------------------------


class TestDriveResolver:
    def test_matches_name_ignoring_case(self, fake_client, team_site) -> None:
        drive = DriveResolver(fake_client).resolve("site-team", "archive")
        assert drive.id == "drive-archive"

    def test_first_match_wins(self, fake_client) -> None:
        fake_client.drives["s"] = [Drive(id="d1", name="Reports"), Drive(id="d2", name="REPORTS")]
        assert DriveResolver(fake_client).resolve("s", "reports").id == "d1"

    def test_documents_falls_back_to_default_drive(self, fake_client) -> None:
        fake_client.drives["s"] = [Drive(id="d1", name="Shared Documents")]
        fake_client.default_drives["s"] = Drive(id="default", name="Shared Documents")

        drive = DriveResolver(fake_client).resolve("s", "DOCUMENTS")

        assert drive.id == "default"
        assert ("get_default_drive", "s") in fake_client.calls

    def test_exact_documents_match_skips_default(self, fake_client, team_site) -> None:
        drive = DriveResolver(fake_client).resolve("site-team", "Documents")
        assert drive.id == "drive-docs"
        assert ("get_default_drive", "site-team") not in fake_client.calls

    def test_unknown_library(self, fake_client, team_site) -> None:
        with pytest.raises(LibraryNotFoundError, match="Invoices"):
            DriveResolver(fake_client).resolve("site-team", "Invoices")
