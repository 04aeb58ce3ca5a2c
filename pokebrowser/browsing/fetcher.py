"""
Paginated Resource Fetcher — Infinite Lists with Lazy Detail Enrichment.

One fetcher backs one list view for its whole lifetime:

1. It is seeded with the first page rendered by the page loader.
2. It resolves the detail record of every item in the background.
3. It appends further pages when the consumer asks for more.
4. It narrows the accumulated list with client-side filters.

INVARIANTS:
- A detail is requested at most once while it is cached or in flight
- Detail merges are order-independent (each completion writes its own key)
- At most one page request is in flight; re-entrant calls are no-ops
- Once exhausted, no further page is requested
- After close(), pending detail fetches are cancelled and late results
  are dropped instead of merged

CONCURRENCY:
Everything runs on one event loop. "Concurrency" is only interleaving of
awaited network calls, so no locks are needed.
"""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol

from pydantic import BaseModel

from pokebrowser.browsing.kinds import ResourceKind
from pokebrowser.config import settings
from pokebrowser.filtering.predicates import FilterSet, filter_visible
from pokebrowser.models.resource import NamedResource, ResourcePage

logger = logging.getLogger(__name__)


class ResourceSource(Protocol):
    """The two upstream calls a fetcher needs (PokeAPIClient satisfies this)."""

    async def list_resource(self, path: str, limit: int = ..., offset: int = ...) -> ResourcePage:
        ...

    async def get_resource(self, path: str, name_or_id: str | int) -> dict[str, Any]: ...


@dataclass
class Cursor:
    """How far the collection has been paged, and whether it has run out."""

    offset: int = 0
    exhausted: bool = False


class DetailCache:
    """
    Identity -> resolved detail record.

    Append-only for the lifetime of one list: entries are added as fetches
    complete and are never evicted. `version` increases on every merge so
    derived views can tell when to recompute.
    """

    def __init__(self) -> None:
        self._records: dict[str, BaseModel] = {}
        self.version = 0

    def __contains__(self, identity: object) -> bool:
        return identity in self._records

    def __len__(self) -> int:
        return len(self._records)

    def get(self, identity: str) -> BaseModel | None:
        return self._records.get(identity)

    def merge(self, updates: dict[str, BaseModel]) -> None:
        """Apply a delta on top of the current contents."""
        if not updates:
            return
        self._records.update(updates)
        self.version += 1

    def snapshot(self) -> dict[str, BaseModel]:
        return dict(self._records)


@dataclass
class FetcherSnapshot:
    """Read-only state handed to the presentation layer."""

    visible_items: list[NamedResource]
    details: dict[str, BaseModel]
    is_loading_next_page: bool
    has_more_pages: bool
    total_loaded: int
    active_filters: dict[str, str] = field(default_factory=dict)


class PaginatedResourceFetcher:
    """
    Growing, detail-enriched, optionally filtered view over a paginated
    collection.

    Must be used from a running event loop: detail resolution is scheduled
    as background tasks.
    """

    def __init__(
        self,
        source: ResourceSource,
        kind: ResourceKind,
        page_size: int | None = None,
    ) -> None:
        self.source = source
        self.kind = kind
        self.page_size = page_size or settings.page_size

        self.items: list[NamedResource] = []
        self.cache = DetailCache()
        self.cursor = Cursor()
        self.filters: FilterSet = kind.filter_set()
        self.search_term = ""

        self._items_version = 0
        self._loading = False
        self._closed = False
        self._in_flight: set[str] = set()
        self._tasks: set[asyncio.Task[None]] = set()
        self._visible_memo: tuple[tuple[Any, ...], list[NamedResource]] | None = None

    # --- Reactive state ---

    @property
    def is_loading_next_page(self) -> bool:
        return self._loading

    @property
    def has_more_pages(self) -> bool:
        return not self.cursor.exhausted

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def has_active_query(self) -> bool:
        """A search term or filter narrows the list; paging is suspended."""
        return bool(self.search_term) or self.filters.is_active

    # --- Operations ---

    def initialize(
        self,
        seed_items: Iterable[NamedResource],
        seed_offset: int,
        search_term: str = "",
        seeded_from_query: bool = False,
    ) -> None:
        """
        Seed the list with a server-rendered first page.

        Detail resolution for every seed item starts immediately in the
        background. A seed shorter than a page means nothing more exists.
        A seed produced by a search or type query is the whole result, not
        a page of the collection, so it is never paged past.
        """
        self.items = list(seed_items)
        self._items_version += 1
        exhausted = seeded_from_query or len(self.items) < self.page_size
        self.cursor = Cursor(offset=seed_offset, exhausted=exhausted)
        self.search_term = search_term

        logger.debug(
            "Seeded %s list with %d items at offset %d",
            self.kind.name,
            len(self.items),
            seed_offset,
        )
        self.schedule_details(self.items)

    def set_filters(self, filters: FilterSet) -> None:
        """Replace the active filters. Never triggers a fetch."""
        self.filters = filters

    def schedule_details(self, items: Iterable[NamedResource]) -> asyncio.Task[None]:
        """Start resolve_details() in the background and track the task."""
        task = asyncio.create_task(self.resolve_details(list(items)))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait_for_details(self) -> None:
        """Wait until every scheduled detail resolution has settled."""
        while self._tasks:
            # Cancelled tasks settle as results, not errors
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def resolve_details(self, items: Iterable[NamedResource]) -> None:
        """
        Fetch details for items not cached and not already in flight.

        Fetches run in parallel; each one merges its own key as soon as it
        settles. A failed fetch leaves its key absent and does not affect
        the others.
        """
        pending: dict[str, NamedResource] = {}
        for item in items:
            identity = item.identity
            if identity in self.cache or identity in self._in_flight or identity in pending:
                continue
            pending[identity] = item

        if not pending:
            return

        self._in_flight.update(pending)
        await asyncio.gather(*(self._resolve_one(item) for item in pending.values()))

    async def _resolve_one(self, item: NamedResource) -> None:
        identity = item.identity
        try:
            raw = await self.source.get_resource(self.kind.detail_path, identity)
            record = self.kind.project(raw)
        except Exception as e:
            # Per-item failures stay isolated; the item renders unenriched
            logger.debug("Detail fetch failed for %s/%s: %s", self.kind.name, identity, e)
            return
        finally:
            self._in_flight.discard(identity)

        if self._closed:
            logger.debug("Dropping detail for %s/%s: list closed", self.kind.name, identity)
            return

        self.cache.merge({identity: record})

    async def request_next_page(self) -> bool:
        """
        Append the next page of the collection.

        Returns:
            True if items were appended, False if the call was a no-op or
            reached the end of the collection.
        """
        if self._closed or self._loading or self.cursor.exhausted or self.has_active_query:
            return False

        self._loading = True
        try:
            page = await self.source.list_resource(
                self.kind.list_path, limit=self.page_size, offset=self.cursor.offset
            )
        except Exception as e:
            # Treated as end of list; no retry
            logger.warning(
                "Page fetch failed for %s at offset %d: %s", self.kind.name, self.cursor.offset, e
            )
            page = None
        finally:
            self._loading = False

        if self._closed:
            return False

        if page is None or not page.results:
            self.cursor.exhausted = True
            return False

        new_items = list(page.results)
        self.items.extend(new_items)
        self._items_version += 1
        self.cursor.offset += self.page_size
        if len(new_items) < self.page_size:
            self.cursor.exhausted = True

        logger.debug(
            "Appended %d %s items (offset now %d, exhausted=%s)",
            len(new_items),
            self.kind.name,
            self.cursor.offset,
            self.cursor.exhausted,
        )
        self.schedule_details(new_items)
        return True

    def visible_items(self, filter_set: FilterSet | None = None) -> list[NamedResource]:
        """
        Items in load order, narrowed by the given (or current) filters.

        Memoized on (items version, cache version, active filter values).
        """
        filters = filter_set if filter_set is not None else self.filters
        key = (self._items_version, self.cache.version, filters.key())

        if self._visible_memo is not None and self._visible_memo[0] == key:
            return list(self._visible_memo[1])

        visible = filter_visible(self.items, self.cache, filters)
        self._visible_memo = (key, visible)
        return list(visible)

    def snapshot(self, filter_set: FilterSet | None = None) -> FetcherSnapshot:
        filters = filter_set if filter_set is not None else self.filters
        visible = self.visible_items(filters)
        details: dict[str, BaseModel] = {}
        for item in visible:
            record = self.cache.get(item.identity)
            if record is not None:
                details[item.identity] = record

        return FetcherSnapshot(
            visible_items=visible,
            details=details,
            is_loading_next_page=self.is_loading_next_page,
            has_more_pages=self.has_more_pages,
            total_loaded=len(self.items),
            active_filters=filters.active,
        )

    def close(self) -> None:
        """Mark the list as unmounted. Pending detail fetches are cancelled."""
        self._closed = True
        for task in list(self._tasks):
            if not task.done() and not task.get_loop().is_closed():
                task.cancel()
