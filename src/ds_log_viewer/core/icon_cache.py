"""Pull-driven cache of workshop icon URLs.

This module implements the IconResolutionCache class. Each workshop id moves
through UNTRIED -> PENDING -> RESOLVED | FAILED, and is ABANDONED for the
rest of the session once its failure count exceeds the ceiling.

Resolution is pull-driven: ``resolve`` never blocks, starts at most one
fetch per id, and a failed id is only retried when a caller asks for it
again. Fetches run as asyncio tasks and complete on the event loop thread,
which is the single place cache entries are mutated.
"""

from __future__ import annotations

import asyncio
import re
from collections.abc import Callable, Iterable
from dataclasses import replace

import structlog

from ds_log_viewer.interfaces.resolver import IconResolver
from ds_log_viewer.models.icon import IconEntry, IconLookup, IconState, IconStatus
from ds_log_viewer.utils.async_helpers import with_timeout
from ds_log_viewer.utils.logging import LogEventNames

log = structlog.get_logger()

IconListener = Callable[[str, str], None]

DEFAULT_FAILURE_CEILING = 5


class IconResolutionCache:
    """Bounded-retry cache mapping workshop ids to icon URLs.

    Example:
        cache = IconResolutionCache(resolver)
        unsubscribe = cache.subscribe(lambda ref_id, url: view.refresh_hover())
        lookup = cache.resolve("727774324")
        if lookup.is_ready:
            show(lookup.url)
    """

    REFERENCE_ID_PATTERN = re.compile(r"\d{5,15}")

    def __init__(
        self,
        resolver: IconResolver,
        failure_ceiling: int = DEFAULT_FAILURE_CEILING,
        fetch_timeout: float | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            resolver: External resolver performing the actual fetch
            failure_ceiling: An id is abandoned once failures exceed this
            fetch_timeout: Seconds before a fetch counts as failed, None to wait
            loop: Event loop for fetch tasks (defaults to the running loop)
        """
        self._resolver = resolver
        self._failure_ceiling = failure_ceiling
        self._fetch_timeout = fetch_timeout
        self._loop = loop
        self._entries: dict[str, IconEntry] = {}
        self._tasks: dict[str, asyncio.Task[None]] = {}
        self._discarded: set[asyncio.Task[None]] = set()
        self._listeners: list[IconListener] = []
        # Bumped by clear(); completions from an older generation are dropped
        self._generation = 0

    @classmethod
    def is_resolvable(cls, reference_id: str) -> bool:
        """Check whether an id has the 5-15 digit workshop shape."""
        return cls.REFERENCE_ID_PATTERN.fullmatch(reference_id) is not None

    @property
    def failure_ceiling(self) -> int:
        return self._failure_ceiling

    @property
    def pending_count(self) -> int:
        return len(self._tasks)

    def resolve(self, reference_id: str) -> IconLookup:
        """Return the cached icon, starting a fetch if needed.

        Args:
            reference_id: Workshop id to resolve

        Returns:
            IconLookup: READY with a URL, PENDING while a fetch may still
            produce one, DEFERRED when no event loop could start a fetch
            (nothing is recorded, ask again later), UNAVAILABLE once
            abandoned, INVALID for ids that are not workshop ids (no entry
            is created for those)
        """
        if not self.is_resolvable(reference_id):
            return IconLookup(IconStatus.INVALID)

        entry = self._entries.get(reference_id)
        if entry is not None:
            if entry.state is IconState.RESOLVED:
                return IconLookup(IconStatus.READY, entry.url)
            if entry.state is IconState.ABANDONED:
                return IconLookup(IconStatus.UNAVAILABLE)
            if entry.state is IconState.PENDING:
                return IconLookup(IconStatus.PENDING)

        if not self._start_fetch(reference_id, entry or IconEntry(reference_id)):
            return IconLookup(IconStatus.DEFERRED)
        return IconLookup(IconStatus.PENDING)

    def prefetch(self, reference_ids: Iterable[str]) -> int:
        """Resolve a batch of ids so their icons are warm before hover.

        Returns:
            Number of ids that now have a fetch in flight
        """
        started = 0
        for reference_id in dict.fromkeys(reference_ids):
            if self.resolve(reference_id).status is IconStatus.PENDING:
                started += 1
        return started

    def state_of(self, reference_id: str) -> IconState:
        entry = self._entries.get(reference_id)
        return entry.state if entry else IconState.UNTRIED

    def failures(self, reference_id: str) -> int:
        entry = self._entries.get(reference_id)
        return entry.failures if entry else 0

    def snapshot(self) -> dict[str, IconEntry]:
        """Return a copy of every known entry."""
        return dict(self._entries)

    def subscribe(self, listener: IconListener) -> Callable[[], None]:
        """Register a callback fired once per id when its icon resolves.

        Args:
            listener: Called with (reference_id, url)

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def clear(self) -> None:
        """Forget every entry; in-flight fetches complete into nothing."""
        self._generation += 1
        self._entries.clear()
        # The event loop only holds weak references to tasks
        self._discarded.update(self._tasks.values())
        self._tasks.clear()

    async def wait_idle(self) -> None:
        """Wait until no fetch is in flight, including ones dropped by clear()."""
        while self._tasks or self._discarded:
            tasks = [*self._tasks.values(), *self._discarded]
            await asyncio.gather(*tasks, return_exceptions=True)
            self._discarded = {task for task in self._discarded if not task.done()}

    # -- internals ------------------------------------------------------------

    def _start_fetch(self, reference_id: str, entry: IconEntry) -> bool:
        """Start one fetch task; return False if no event loop could run it."""
        try:
            loop = self._loop or asyncio.get_running_loop()
        except RuntimeError:
            # Without a loop the id stays retry-eligible for the next call
            log.warning("icon_fetch_without_event_loop", reference_id=reference_id)
            return False

        self._entries[reference_id] = replace(entry, state=IconState.PENDING)
        task = loop.create_task(self._fetch(reference_id, self._generation))
        self._tasks[reference_id] = task
        log.debug(
            LogEventNames.ICON_FETCH_STARTED,
            reference_id=reference_id,
            attempt=entry.failures + 1,
        )
        return True

    async def _fetch(self, reference_id: str, generation: int) -> None:
        try:
            if self._fetch_timeout is not None:
                url = await with_timeout(
                    self._resolver.fetch_icon_url(reference_id),
                    self._fetch_timeout,
                    f"Icon fetch for {reference_id} timed out after {self._fetch_timeout}s",
                )
            else:
                url = await self._resolver.fetch_icon_url(reference_id)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self._complete(reference_id, generation, None, e)
        else:
            self._complete(reference_id, generation, url, None)
        finally:
            if generation == self._generation:
                self._tasks.pop(reference_id, None)
            else:
                current = asyncio.current_task()
                if current is not None:
                    self._discarded.discard(current)

    def _complete(
        self,
        reference_id: str,
        generation: int,
        url: str | None,
        error: Exception | None,
    ) -> None:
        entry = self._entries.get(reference_id)
        if generation != self._generation or entry is None or entry.state is not IconState.PENDING:
            log.debug(LogEventNames.ICON_COMPLETION_DISCARDED, reference_id=reference_id)
            return

        if error is not None:
            failures = entry.failures + 1
            abandoned = failures > self._failure_ceiling
            state = IconState.ABANDONED if abandoned else IconState.FAILED
            self._entries[reference_id] = replace(entry, state=state, failures=failures)
            log.warning(
                LogEventNames.ICON_ABANDONED if abandoned else LogEventNames.ICON_FETCH_FAILED,
                reference_id=reference_id,
                failures=failures,
                error_type=type(error).__name__,
                error=str(error),
            )
            return

        if not url:
            # Upstream does not know the icon yet; not a failure
            self._entries[reference_id] = replace(entry, state=IconState.UNTRIED)
            return

        self._entries[reference_id] = replace(entry, state=IconState.RESOLVED, url=url)
        log.info(LogEventNames.ICON_RESOLVED, reference_id=reference_id, url=url)
        self._notify(reference_id, url)

    def _notify(self, reference_id: str, url: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(reference_id, url)
            except Exception as e:
                log.warning(
                    LogEventNames.ICON_SUBSCRIBER_FAILED,
                    reference_id=reference_id,
                    error=str(e),
                )
