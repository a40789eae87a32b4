"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone

import pytest

from oci_tag_audit.clients.search_client import SearchAPIError
from oci_tag_audit.models.resource import ResourceRecord
from oci_tag_audit.models.search import SearchPage, SearchRequest


# =============================================================================
# Environment and Configuration Fixtures
# =============================================================================

@pytest.fixture
def test_env(monkeypatch, tmp_path):
    """Set up test environment variables."""
    test_vars = {
        "OCI_CONFIG_PATH_FILE": str(tmp_path / "config_path.txt"),
        "REPORT_OUTPUT_DIR": str(tmp_path / "data"),
        "SEARCH_PAGE_DELAY_SECONDS": "0",
        "RESOLVE_HOME_REGION": "false",
        "LOG_LEVEL": "DEBUG",
    }
    for key, value in test_vars.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("OCI_CONFIG_FILE", raising=False)
    monkeypatch.delenv("OCI_CLI_CONFIG_FILE", raising=False)
    return test_vars


@pytest.fixture
def oci_config_file(tmp_path):
    """Write an OCI config file with a DEFAULT section and two region profiles."""
    key_file = tmp_path / "key.pem"
    key_file.write_text("", encoding="utf-8")
    path = tmp_path / "oci_config"
    path.write_text(
        "[DEFAULT]\n"
        "user=ocid1.user.oc1..aaaa\n"
        "fingerprint=aa:bb:cc\n"
        "tenancy=ocid1.tenancy.oc1..tttt\n"
        "region=eu-frankfurt-1\n"
        f"key_file={key_file}\n"
        "\n"
        "[fra]\n"
        "region=eu-frankfurt-1\n"
        "\n"
        "[ams]\n"
        "region=eu-amsterdam-1\n",
        encoding="utf-8",
    )
    return path


# =============================================================================
# Search Client Fakes
# =============================================================================

class FakeSearchClient:
    """In-memory search client returning scripted pages.

    Each scripted entry is either a SearchPage or an exception to raise
    for that request. Every request received is recorded.
    """

    def __init__(self, region: str, pages: list):
        self.region = region
        self._pages = list(pages)
        self.requests: list[SearchRequest] = []

    async def search(self, request: SearchRequest) -> SearchPage:
        self.requests.append(request)
        entry = self._pages[len(self.requests) - 1]
        if isinstance(entry, BaseException):
            raise entry
        return entry


class FakeClientFactory:
    """Client factory handing out prepared fake clients per region.

    Regions mapped to an exception raise it from get_client().
    """

    def __init__(self, clients: dict):
        self.clients = clients
        self.requested: list[str] = []
        self.executors: list = []

    def get_client(self, region: str, executor=None):
        self.requested.append(region)
        self.executors.append(executor)
        client = self.clients[region]
        if isinstance(client, BaseException):
            raise client
        return client


def make_record(region: str = "fra", **overrides) -> ResourceRecord:
    """Build a ResourceRecord with realistic defaults."""
    values = {
        "region": region,
        "display_name": "web-01",
        "resource_type": "Instance",
        "identifier": "ocid1.instance.oc1.eu-frankfurt-1.aaaa",
        "compartment_id": "ocid1.compartment.oc1..cccc",
        "lifecycle_state": "RUNNING",
        "availability_domain": "Uocm:EU-FRANKFURT-1-AD-1",
        "time_created": datetime(2024, 1, 15, 8, 30, 0, tzinfo=timezone.utc),
        "defined_tags": {"Operations": {"CreatedBy": "alice@example.com"}},
        "freeform_tags": {"env": "prod"},
    }
    values.update(overrides)
    return ResourceRecord(**values)


def make_page(records: list[ResourceRecord], next_cursor: str | None = None) -> SearchPage:
    """Build a SearchPage."""
    return SearchPage(items=records, next_cursor=next_cursor)


@pytest.fixture
def record_factory():
    """Provide the ResourceRecord builder."""
    return make_record


@pytest.fixture
def page_factory():
    """Provide the SearchPage builder."""
    return make_page


@pytest.fixture
def search_client_factory():
    """Provide a builder for scripted fake search clients."""
    return FakeSearchClient


@pytest.fixture
def client_factory_factory():
    """Provide a builder for fake regional client factories."""
    return FakeClientFactory


@pytest.fixture
def sample_record():
    """Provide a fully tagged resource record."""
    return make_record()


@pytest.fixture
def untagged_record():
    """Provide a resource record without any tags."""
    return make_record(
        display_name="orphan-bucket",
        resource_type="Bucket",
        identifier="ocid1.bucket.oc1..bbbb",
        availability_domain=None,
        defined_tags={},
        freeform_tags={},
    )


@pytest.fixture
def api_error():
    """Provide a search API error as raised by the OCI client wrapper."""
    return SearchAPIError("OCI API error: 500 InternalServerError - boom")


# =============================================================================
# Pytest Hooks for Test Reporting
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "property: marks tests as property-based tests"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark tests by directory
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "property" in str(item.fspath):
            item.add_marker(pytest.mark.property)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
