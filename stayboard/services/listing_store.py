"""In-memory listing store seeded from a JSON file."""

import asyncio
import json
import re
from pathlib import Path

from pydantic import ValidationError

from stayboard.exceptions import ConfigurationException, ErrorCode
from stayboard.logging_config import get_logger, log_with_context
from stayboard.models.listing import Listing

logger = get_logger(__name__)

# Longer search queries are treated as plain text rather than regular expressions
MAX_PATTERN_LENGTH = 64


class InMemoryListingStore:
    """Read-only listing store.

    Thread-safe for async operations using asyncio.Lock.
    """

    def __init__(self, listings: list[Listing] | None = None):
        self._listings: dict[str, Listing] = {listing.id: listing for listing in listings or []}
        self._lock = asyncio.Lock()

    @classmethod
    def from_file(cls, path: Path) -> "InMemoryListingStore":
        """Load listings from a JSON array file.

        A missing file yields an empty store.

        Raises:
            ConfigurationException: If the file is not a valid array of listings
        """
        if not path.exists():
            log_with_context(
                logger,
                "warning",
                "Listings file not found, starting with an empty store",
                file_path=str(path),
                event_type="listings_file_missing",
            )
            return cls()

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, list):
                raise ValueError("listings file must contain a JSON array")
            listings = [Listing.model_validate(item) for item in data]
        except (ValidationError, ValueError) as e:
            log_with_context(
                logger,
                "error",
                "Invalid listings file",
                file_path=str(path),
                error=str(e),
                event_type="listings_file_invalid",
            )
            raise ConfigurationException(
                f"Listings file is invalid: {e}",
                code=ErrorCode.CONFIG_INVALID,
                details={"file_path": str(path)},
            ) from e

        log_with_context(
            logger,
            "info",
            "Listings loaded",
            count=len(listings),
            event_type="listings_loaded",
        )
        return cls(listings)

    async def list_all(self) -> list[Listing]:
        async with self._lock:
            return list(self._listings.values())

    async def get(self, listing_id: str) -> Listing | None:
        async with self._lock:
            return self._listings.get(listing_id)

    async def search(self, query: str) -> list[Listing]:
        """Case-insensitive regular expression match on titles.

        A query that is not a valid pattern, or is longer than
        ``MAX_PATTERN_LENGTH``, is matched literally. Short patterns can still
        backtrack badly (e.g. ``(a+)+$``); titles are short, which bounds the cost.
        """
        pattern: re.Pattern[str] | None = None
        if len(query) <= MAX_PATTERN_LENGTH:
            try:
                pattern = re.compile(query, re.IGNORECASE)
            except re.error:
                pattern = None
        if pattern is None:
            pattern = re.compile(re.escape(query), re.IGNORECASE)

        async with self._lock:
            return [listing for listing in self._listings.values() if pattern.search(listing.title)]
