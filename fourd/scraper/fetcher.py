import asyncio
import json
from typing import Any, List, Optional

import aiohttp

from fourd.config.settings import Config
from fourd.errors import FetchError
from fourd.scraper.models import DrawRecord
from fourd.utils.logger import get_logger


logger = get_logger(__name__)


def parse_rows(payload: Any) -> List[DrawRecord]:
    """Validate the sheet payload shape and convert each row to a DrawRecord."""
    if not isinstance(payload, list):
        raise FetchError(f"Expected a JSON array of rows, got {type(payload).__name__}")

    records = []
    for index, row in enumerate(payload):
        if not isinstance(row, dict):
            raise FetchError(f"Row {index} is not an object: {row!r}")
        if 'Company' not in row:
            logger.debug(f"Row {index} has no Company field")
        records.append(DrawRecord.from_row(row))
    return records


class SheetFetcher:
    """Fetches draw results from the published results sheet."""

    def __init__(self, config: Config, url: Optional[str] = None, timeout: Optional[float] = None):
        self.config = config
        self.url = url or config.source_url
        self.timeout = config.source_timeout if timeout is None else timeout

    def _client_timeout(self) -> aiohttp.ClientTimeout:
        # total=None disables the timeout
        return aiohttp.ClientTimeout(total=self.timeout or None)

    async def fetch(self) -> List[DrawRecord]:
        """Issue one GET request and parse the response body."""
        logger.info(f"Fetching 4D results from {self.url}")
        start_time = asyncio.get_event_loop().time()

        try:
            async with aiohttp.ClientSession(timeout=self._client_timeout()) as session:
                headers = {
                    "User-Agent": self.config.user_agent,
                    "Accept": "application/json",
                }
                async with session.get(self.url, headers=headers) as response:
                    response.raise_for_status()
                    body = await response.read()
        except aiohttp.ClientResponseError as e:
            raise FetchError(f"Results source answered HTTP {e.status}", self.url) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FetchError(f"Request to results source failed: {e}", self.url) from e

        try:
            payload = json.loads(body.decode(response.charset or "utf-8"))
        except (ValueError, LookupError) as e:
            raise FetchError(f"Response is not valid JSON: {e}", self.url) from e

        records = parse_rows(payload)
        duration = asyncio.get_event_loop().time() - start_time
        logger.info(f"Fetched {len(records)} rows in {duration:.2f}s")
        return records
