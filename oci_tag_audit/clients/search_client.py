"""OCI Resource Search client wrapper."""

import asyncio
import logging
from concurrent.futures import Executor
from typing import Any, Protocol

import oci

from ..errors import TagAuditError
from ..models.resource import ResourceRecord
from ..models.search import SearchPage, SearchRequest

logger = logging.getLogger(__name__)


class SearchAPIError(TagAuditError):
    """Raised when a Resource Search call fails."""

    pass


class SearchClient(Protocol):
    """Capability the region scanner needs: fetch one page of results."""

    region: str

    async def search(self, request: SearchRequest) -> SearchPage:
        ...


class OCIResourceSearchClient:
    """
    Wrapper around the OCI ResourceSearchClient for a single profile.

    The SDK is synchronous, so each call runs in a thread pool executor to
    keep the event loop free for other regions. Without an explicit
    executor the loop's default pool is used, which caps how many calls
    can be in flight at once.
    """

    def __init__(self, region: str, sdk_client: Any, executor: Executor | None = None):
        """
        Initialize the wrapper.

        Args:
            region: Profile/region name; stamped on every returned record
            sdk_client: An oci.resource_search.ResourceSearchClient
            executor: Thread pool running the blocking SDK calls
                (default: the event loop's default executor)
        """
        self.region = region
        self._sdk_client = sdk_client
        self._executor = executor

    async def search(self, request: SearchRequest) -> SearchPage:
        """
        Fetch one page of structured search results.

        Args:
            request: Query, page cursor and page limit

        Returns:
            SearchPage with the page's records and the next cursor, if any

        Raises:
            SearchAPIError: If the API call fails
        """
        details = oci.resource_search.models.StructuredSearchDetails(
            type="Structured",
            query=request.query,
        )
        kwargs: dict[str, Any] = {"limit": request.page_limit}
        if request.cursor is not None:
            kwargs["page"] = request.cursor

        loop = asyncio.get_running_loop()
        try:
            response = await loop.run_in_executor(
                self._executor,
                lambda: self._sdk_client.search_resources(details, **kwargs)
            )
        except oci.exceptions.ServiceError as e:
            raise SearchAPIError(
                f"OCI API error: {e.status} {e.code} - {e.message}"
            ) from e
        except Exception as e:
            raise SearchAPIError(f"Failed to search resources: {str(e)}") from e

        items = getattr(response.data, "items", None) or []
        records = [self._to_record(summary) for summary in items]
        logger.debug(
            f"Search page returned {len(records)} items "
            f"(next page: {'yes' if response.next_page else 'no'})"
        )
        return SearchPage(items=records, next_cursor=response.next_page or None)

    def _to_record(self, summary: Any) -> ResourceRecord:
        """
        Convert an SDK ResourceSummary into a ResourceRecord.

        Args:
            summary: oci.resource_search.models.ResourceSummary

        Returns:
            ResourceRecord stamped with this client's region
        """
        return ResourceRecord(
            region=self.region,
            display_name=summary.display_name,
            resource_type=summary.resource_type,
            identifier=summary.identifier,
            compartment_id=summary.compartment_id,
            lifecycle_state=summary.lifecycle_state,
            availability_domain=summary.availability_domain,
            time_created=summary.time_created,
            defined_tags=summary.defined_tags,
            freeform_tags=summary.freeform_tags,
        )
