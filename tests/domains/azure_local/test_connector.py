# tests/domains/azure_local/test_connector.py

"""Tests for the Azure Local connector: HTML release rows, Markdown bundles, link normalization."""

from datetime import date

import pytest

from release_spine.domains.azure_local.connector import (
    RawRelease,
    RawSolutionUpdate,
    normalize_url,
    parse_release_info,
    parse_solution_updates,
)

SINGLE_ROW_HTML = """
<table>
  <tr>
    <td>11.2505.1001.22 <br><br> Availability date: <br><br> 2025-05-28</td>
    <td>25398.1611</td>
    <td><a href="https://learn.microsoft.com/security-update">Security</a></td>
    <td><a href="/en-us/azure/azure-local/whats-new">What's new</a></td>
    <td><a href="known-issues">Known issues</a></td>
  </tr>
</table>
"""

SINGLE_ROW_MARKDOWN = """
| OS Build | Download URI | SHA256 |
|---|---|---|
| 25398.1611 | [11.2505.1001.22](https://example.com/download) <br><br> Availability date: <br><br> 2025-05-28 | ABC123 |
"""


class TestNormalizeUrl:
    """Relative advisory links become absolute."""

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://support.microsoft.com/help/1", "https://support.microsoft.com/help/1"),
            ("http://example.com/a", "http://example.com/a"),
            ("//support.microsoft.com/help/1", "https://support.microsoft.com/help/1"),
            ("/en-us/azure/azure-local/whats-new", "https://learn.microsoft.com/en-us/azure/azure-local/whats-new"),
            ("known-issues", "https://learn.microsoft.com/en-us/azure/azure-local/known-issues"),
            ("", ""),
            ("   ", ""),
        ],
    )
    def test_default_origin(self, url, expected):
        assert normalize_url(url) == expected

    def test_custom_origin_and_base_path(self):
        assert normalize_url("/a", origin="https://docs.example.com/") == "https://docs.example.com/a"
        assert normalize_url("b", base_path="https://docs.example.com/local") == "https://docs.example.com/local/b"


class TestParseReleaseInfo:
    """HTML release table extraction."""

    def test_single_row(self):
        releases = parse_release_info(SINGLE_ROW_HTML)

        assert releases == [
            RawRelease(
                version="11.2505.1001.22",
                os_build="25398.1611",
                availability_date=date(2025, 5, 28),
                security_update_url="https://learn.microsoft.com/security-update",
                whats_new_url="https://learn.microsoft.com/en-us/azure/azure-local/whats-new",
                known_issues_url="https://learn.microsoft.com/en-us/azure/azure-local/known-issues",
                new_deployments=False,
            )
        ]

    def test_fixture_document_sections(self, release_info_html):
        """Existing, new and older-version tables are read in page order."""
        releases = parse_release_info(release_info_html)

        assert [(r.version, r.new_deployments) for r in releases] == [
            ("11.2505.1001.22", False),
            ("11.2504.1001.19", False),
            ("11.2503.1002.4", False),
            ("11.2505.1001.22", True),
            ("10.2411.3.2", False),
            ("10.2411.0.24", False),
        ]

    def test_fixture_document_links(self, release_info_html):
        by_build = {r.os_build: r for r in parse_release_info(release_info_html)}

        march = by_build["25398.1486"]
        assert march.security_update_url == "https://support.microsoft.com/help/5053599"
        assert march.whats_new_url == "https://learn.microsoft.com/en-us/azure/azure-local/whats-new?view=azloc-2503"
        assert march.known_issues_url == "https://learn.microsoft.com/en-us/azure/azure-local/known-issues?view=azloc-2503"

    def test_row_without_date_is_discarded(self, release_info_html):
        """The "Coming soon" placeholder row never surfaces."""
        releases = parse_release_info(release_info_html)
        assert all(r.os_build != "TBD" for r in releases)

    def test_impossible_calendar_date_is_discarded(self):
        html = SINGLE_ROW_HTML.replace("2025-05-28", "2025-02-30")
        assert parse_release_info(html) == []

    def test_rows_with_too_few_cells_are_ignored(self):
        html = """
        <table>
          <tr><th>Version</th><th>OS build</th><th>Security</th><th>News</th></tr>
          <tr><td>11.2505.1001.22 Availability date: 2025-05-28</td><td>25398.1611</td><td></td></tr>
        </table>
        """
        assert parse_release_info(html) == []

    def test_four_cells_leave_known_issues_empty(self):
        html = """
        <table><tr>
          <td>11.2505.1001.22 Availability date: 2025-05-28</td>
          <td> 25398.1611 </td>
          <td><a href="https://learn.microsoft.com/security-update">Security</a></td>
          <td>No link</td>
        </tr></table>
        """
        [release] = parse_release_info(html)
        assert release.os_build == "25398.1611"
        assert release.whats_new_url == ""
        assert release.known_issues_url == ""

    def test_nested_table_rows_are_read_once(self):
        html = f"""
        <table>
          <tr><td>{SINGLE_ROW_HTML}</td></tr>
        </table>
        """
        releases = parse_release_info(html)
        assert [r.os_build for r in releases] == ["25398.1611"]

    def test_new_deployments_section_only(self):
        html = f'<div data-tab="new-deployments">{SINGLE_ROW_HTML}</div>'
        [release] = parse_release_info(html)
        assert release.new_deployments is True

    def test_document_without_tables(self):
        assert parse_release_info("<html><body><p>Nothing here</p></body></html>") == []
        assert parse_release_info("") == []

    def test_none_raises_type_error(self):
        with pytest.raises(TypeError):
            parse_release_info(None)


class TestParseSolutionUpdates:
    """Markdown offline bundle table extraction."""

    def test_single_row(self):
        assert parse_solution_updates(SINGLE_ROW_MARKDOWN) == [
            RawSolutionUpdate(
                os_build="25398.1611",
                download_uri="https://example.com/download",
                sha256="ABC123",
                availability_date=date(2025, 5, 28),
            )
        ]

    def test_date_marker_without_breaks(self):
        markdown = SINGLE_ROW_MARKDOWN.replace(" <br><br> ", " ")
        [update] = parse_solution_updates(markdown)
        assert update.availability_date == date(2025, 5, 28)

    def test_fixture_document(self, solution_updates_markdown):
        """Rows without a download link are discarded; the table ends at the note."""
        updates = parse_solution_updates(solution_updates_markdown)

        assert [u.os_build for u in updates] == ["25398.1611", "25398.1551"]
        assert updates[0].download_uri.endswith("CombinedSolutionBundle.11.2505.1001.22.zip")
        assert updates[0].sha256 == "6F1B0C85D6E4D9A2B3C4D5E6F7A8B9C0D1E2F3A4B5C6D7E8F9A0B1C2D3E4F5A6"

    def test_missing_table_yields_empty(self):
        assert parse_solution_updates("# Nothing\n\nNo table here.\n") == []
        assert parse_solution_updates("") == []

    def test_only_first_table_is_read(self):
        markdown = SINGLE_ROW_MARKDOWN + "\nSome prose.\n" + SINGLE_ROW_MARKDOWN.replace("25398.1611", "25398.9999")
        assert [u.os_build for u in parse_solution_updates(markdown)] == ["25398.1611"]

    def test_row_with_empty_hash_is_discarded(self):
        markdown = SINGLE_ROW_MARKDOWN.replace("| ABC123 |", "|  |")
        assert parse_solution_updates(markdown) == []

    def test_none_raises_type_error(self):
        with pytest.raises(TypeError):
            parse_solution_updates(None)
