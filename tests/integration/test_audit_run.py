"""End-to-end audit runs against scripted OCI Resource Search responses."""

import csv
import logging
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import oci
import pytest

import oci_tag_audit.config as config_module
from oci_tag_audit.main import main, run_audit
from oci_tag_audit.models.enums import RegionTaskState, SinkKind
from oci_tag_audit.models.report import REPORT_HEADERS, ReportOptions


def _summary(name, defined_tags, freeform_tags=None, time_created=None):
    return SimpleNamespace(
        display_name=name,
        resource_type="Instance",
        identifier=f"ocid1.instance.oc1..{name}",
        compartment_id="ocid1.compartment.oc1..cccc",
        lifecycle_state="RUNNING",
        availability_domain="AD-1",
        time_created=time_created or datetime(2024, 1, 15, 8, 30, tzinfo=timezone.utc),
        defined_tags=defined_tags,
        freeform_tags=freeform_tags or {},
    )


def _response(items, next_page=None):
    return SimpleNamespace(data=SimpleNamespace(items=items), next_page=next_page)


OWNED = {"Operations": {"CreatedBy": "alice@example.com"}}
NO_OWNER = {"Finance": {"CostCenter": "42"}}


def _scripted_sdk_client(pages):
    """SDK client whose search_resources() answers by page token."""
    client = MagicMock()

    def search_resources(details, limit, page=None):
        entry = pages[page]
        if isinstance(entry, Exception):
            raise entry
        return entry

    client.search_resources.side_effect = search_resources
    return client


@pytest.fixture
def sdk_clients():
    """Scripted SDK clients: fra succeeds over two pages, ams fails on page 2."""
    return {
        "eu-frankfurt-1": _scripted_sdk_client({
            None: _response([_summary("web-01", OWNED, {"env": "prod"})], next_page="fra-2"),
            "fra-2": _response([_summary("orphan", {}), _summary("batch", NO_OWNER)]),
        }),
        "eu-amsterdam-1": _scripted_sdk_client({
            None: _response([_summary("db-01", OWNED), _summary("db-02", {})], next_page="ams-2"),
            "ams-2": oci.exceptions.ServiceError(500, "InternalServerError", {}, "boom"),
        }),
    }


@pytest.fixture
def patched_sdk(sdk_clients):
    """Route ResourceSearchClient construction to the scripted clients by region."""
    def build_client(config, **kwargs):
        region = config.get("region")
        if region not in sdk_clients:
            raise ValueError(f"Unknown region {region!r}")
        return sdk_clients[region]

    with patch("oci.config.validate_config"), \
            patch("oci.resource_search.ResourceSearchClient", side_effect=build_client):
        yield


@pytest.fixture
def audit_env(test_env, oci_config_file, tmp_path, monkeypatch):
    """Point the audit at the temporary OCI config through the pointer file."""
    (tmp_path / "config_path.txt").write_text(f"{oci_config_file}\n", encoding="utf-8")
    monkeypatch.setattr(config_module, "_settings", None)
    return tmp_path


def _read_rows(path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


def _files_by_name(directory):
    return {path.name: path for path in directory.iterdir()}


@pytest.mark.asyncio
async def test_full_audit_with_exception_reports(audit_env, patched_sdk):
    """
    Test a two-region audit where one region fails mid-scan.

    fra completes with three resources; ams keeps its first page and fails.
    """
    config = config_module.settings()
    options = ReportOptions(include_missing_tags=True, include_no_owner=True)

    summary = await run_audit(config, options)

    results = {r.region: r for r in summary.results}
    assert [r.region for r in summary.results] == ["fra", "ams"]
    assert results["fra"].state == RegionTaskState.COMPLETED
    assert results["ams"].state == RegionTaskState.FAILED
    assert "page 2" in results["ams"].error_message
    assert "500 InternalServerError" in results["ams"].error_message

    assert results["fra"].total_resources == 3
    assert results["fra"].missing_tags_count == 1
    assert results["fra"].no_owner_count == 2
    assert results["ams"].total_resources == 2
    assert summary.total_resources == 5

    fra_main = _read_rows(results["fra"].report_paths[SinkKind.RESOURCES])
    assert fra_main[0] == list(REPORT_HEADERS)
    assert [row[1] for row in fra_main[1:]] == ["web-01", "orphan", "batch"]
    assert fra_main[1][10] == "env=prod"
    assert fra_main[1][9] == '{"Operations":{"CreatedBy":"alice@example.com"}}'
    assert all(len(row) == 11 for row in fra_main)

    fra_missing = _read_rows(results["fra"].report_paths[SinkKind.MISSING_TAGS])
    assert fra_missing[1:] == [fra_main[2]]

    fra_no_owner = _read_rows(results["fra"].report_paths[SinkKind.NO_OWNER])
    assert [row[1] for row in fra_no_owner[1:]] == ["orphan", "batch"]

    ams_main = _read_rows(results["ams"].report_paths[SinkKind.RESOURCES])
    assert [row[1] for row in ams_main[1:]] == ["db-01", "db-02"]


@pytest.mark.asyncio
async def test_all_files_share_run_timestamp(audit_env, patched_sdk):
    config = config_module.settings()
    options = ReportOptions(include_missing_tags=True, include_no_owner=True)

    summary = await run_audit(config, options)

    names = _files_by_name(audit_env / "data")
    assert len(names) == 6
    assert {name.rsplit("_", 2)[-2] + "_" + name.rsplit("_", 2)[-1] for name in names} == {
        f"{summary.run_timestamp}.csv"
    }
    assert f"fra_resources_{summary.run_timestamp}.csv" in names
    assert f"ams_no_owner_{summary.run_timestamp}.csv" in names


@pytest.mark.asyncio
async def test_main_report_only_by_default(audit_env, patched_sdk):
    summary = await run_audit(config_module.settings(), ReportOptions())

    names = sorted(_files_by_name(audit_env / "data"))
    assert names == sorted(
        [
            f"ams_resources_{summary.run_timestamp}.csv",
            f"fra_resources_{summary.run_timestamp}.csv",
        ]
    )


@pytest.mark.asyncio
async def test_bad_profile_fails_only_that_region(audit_env, patched_sdk, oci_config_file):
    """Test a profile without a region fails client construction and writes nothing."""
    with open(oci_config_file, "a", encoding="utf-8") as f:
        f.write("\n[broken]\nregion=\n")

    summary = await run_audit(config_module.settings(), ReportOptions())

    results = {r.region: r for r in summary.results}
    assert results["broken"].state == RegionTaskState.FAILED
    assert "Error creating client for broken" in results["broken"].error_message
    assert results["broken"].report_paths == {}
    assert results["fra"].state == RegionTaskState.COMPLETED
    assert not any(name.startswith("broken_") for name in _files_by_name(audit_env / "data"))


def test_main_exit_status(audit_env, patched_sdk, caplog):
    """Test main() exits 0 even with a failed region and logs the failure."""
    with patch("oci_tag_audit.main.configure_logging"), caplog.at_level(logging.INFO):
        assert main(["--missing-tags"]) == 0

    assert "Regions that failed: ['ams']" in caplog.text
    assert "All regions processed" in caplog.text
    names = _files_by_name(audit_env / "data")
    assert any(name.startswith("fra_missing_tags_") for name in names)
    assert not any("no_owner" in name for name in names)


def test_main_without_config_pointer(test_env, monkeypatch):
    """Test main() exits 1 when the config location cannot be read."""
    monkeypatch.setattr(config_module, "_settings", None)

    with patch("oci_tag_audit.main.configure_logging"):
        assert main([]) == 1
