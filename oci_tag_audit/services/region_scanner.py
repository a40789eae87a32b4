# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Paginated resource scanner for a single region.

This module provides the RegionScanner class that drains the Resource
Search API for one region, following the page cursor until the result set
is exhausted, and exposes the records as a lazy async sequence.
"""

import asyncio
import logging
from typing import AsyncIterator

from ..clients.search_client import SearchClient
from ..errors import TagAuditError
from ..models.resource import ResourceRecord
from ..models.search import DEFAULT_PAGE_LIMIT, DEFAULT_SEARCH_QUERY, SearchRequest

logger = logging.getLogger(__name__)

# Pause between consecutive page requests
DEFAULT_PAGE_DELAY_SECONDS = 0.2


class RegionScanError(TagAuditError):
    """Error that ended a region scan mid-stream.

    Records yielded before the failure stay yielded; the scan is not
    retried.
    """

    def __init__(self, region: str, page_number: int, message: str):
        """
        Initialize region scan error.

        Args:
            region: Region whose scan failed
            page_number: 1-based number of the page request that failed
            message: Error description
        """
        super().__init__(f"Error searching resources in {region} (page {page_number}): {message}")
        self.region = region
        self.page_number = page_number


class RegionScanner:
    """
    Scans every resource of one region through a search client.

    Iterating the scanner issues the first request without a cursor,
    yields each page's items in the order received, and requests the next
    page after a fixed delay for as long as the response carries a cursor.
    A scanner can only be iterated once; build a new one to scan again.
    """

    def __init__(
        self,
        client: SearchClient,
        query: str = DEFAULT_SEARCH_QUERY,
        page_limit: int = DEFAULT_PAGE_LIMIT,
        page_delay_seconds: float = DEFAULT_PAGE_DELAY_SECONDS,
    ):
        """
        Initialize with a search client and a fixed query.

        Args:
            client: Search client bound to the region to scan
            query: Structured search query (default: "query all resources")
            page_limit: Items per page requested (default: 1000)
            page_delay_seconds: Delay before each follow-up page request (default: 0.2)
        """
        self.client = client
        self.query = query
        self.page_limit = page_limit
        self.page_delay_seconds = page_delay_seconds
        self.pages_fetched = 0
        self._started = False

    @property
    def region(self) -> str:
        return self.client.region

    def __aiter__(self) -> AsyncIterator[ResourceRecord]:
        return self.scan()

    async def scan(self) -> AsyncIterator[ResourceRecord]:
        """
        Yield every resource record of the region.

        Yields:
            ResourceRecord for each item, page by page

        Raises:
            RegionScanError: If a page request fails
            RuntimeError: If the scanner was already iterated
        """
        if self._started:
            raise RuntimeError(f"Scanner for {self.region} has already been used")
        self._started = True

        cursor: str | None = None
        while True:
            request = SearchRequest(query=self.query, cursor=cursor, page_limit=self.page_limit)
            page_number = self.pages_fetched + 1
            try:
                page = await self.client.search(request)
            except Exception as e:
                raise RegionScanError(self.region, page_number, str(e)) from e
            self.pages_fetched = page_number

            logger.debug(f"{self.region}: page {page_number} returned {len(page.items)} items")
            for record in page.items:
                yield record

            if page.next_cursor is None:
                break
            cursor = page.next_cursor
            await asyncio.sleep(self.page_delay_seconds)
