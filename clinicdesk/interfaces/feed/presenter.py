"""Presenter keeping the unread badge and the dropdown feed in sync with the store.

Two independent triggers refresh the display: a fixed-interval poll and a
subscription to the ``notifications`` change feed. Both go through
:meth:`NotificationFeedPresenter.request_refresh`, which re-fetches the
authoritative state and replaces the snapshot wholesale, so refreshes can be
applied in any order and converge on the same result.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable, Optional, Protocol

from anyio import to_thread

from clinicdesk.application.auth import AuthEvent, AuthProvider
from clinicdesk.application.use_cases.notifications import NotificationService
from clinicdesk.config import get_settings
from clinicdesk.domain.entities import ChangeEvent, User
from clinicdesk.domain.results import OperationResult
from clinicdesk.infrastructure.realtime import ChangeFeed, change_feed as default_feed
from clinicdesk.infrastructure.repositories.notification_repository import COLLECTION

from .state import FeedEntryView, FeedState, FeedStatus, format_badge

logger = logging.getLogger(__name__)

StateListener = Callable[[FeedState], None]


@dataclass(frozen=True)
class FeedHandlers:
    """Event handlers the rendering layer wires to its controls."""

    toggle: Callable[[], Awaitable[FeedState]]
    pointer: Callable[[bool], None]
    notification_click: Callable[[int], Awaitable[FeedState]]
    mark_all_read: Callable[[], Awaitable[FeedState]]


class FeedRenderer(Protocol):
    """Display surface driven by the presenter."""

    def render_badge(self, text: str, count: int) -> None: ...

    def render_feed(self, entries: Sequence[FeedEntryView], handlers: FeedHandlers) -> None: ...

    def show_feed(self, visible: bool) -> None: ...


class NotificationFeedPresenter:
    """State container for the badge and feed of one signed-in session."""

    def __init__(
        self,
        service: NotificationService,
        *,
        renderer: Optional[FeedRenderer] = None,
        feed: Optional[ChangeFeed] = None,
        auth: Optional[AuthProvider] = None,
        poll_interval: Optional[float] = None,
        badge_limit: Optional[int] = None,
    ) -> None:
        settings = get_settings()
        self._service = service
        self._renderer = renderer
        self._feed = feed if feed is not None else default_feed
        self._auth = auth
        self._poll_interval = (
            poll_interval
            if poll_interval is not None
            else settings.notification_poll_interval_seconds
        )
        self._badge_limit = (
            badge_limit if badge_limit is not None else settings.notification_badge_limit
        )

        self._state = FeedState()
        self._listeners: list[StateListener] = []
        self._inflight: Optional[asyncio.Task[FeedState]] = None
        self._background: set[asyncio.Task[Any]] = set()
        self._poll_task: Optional[asyncio.Task[None]] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._unsubscribers: list[Callable[[], None]] = []
        self._generation = 0

        self.handlers = FeedHandlers(
            toggle=self.toggle,
            pointer=self.handle_pointer_event,
            notification_click=self.mark_read,
            mark_all_read=self.mark_all_read,
        )

    # -- state container -------------------------------------------------

    def get_state(self) -> FeedState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` with every new snapshot. Returns an unsubscribe hook."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _set_state(self, state: FeedState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:  # pragma: no cover - logged and skipped
                logger.exception("Feed state listener failed")

    # -- lifecycle -------------------------------------------------------

    async def start(self) -> FeedState:
        """Subscribe to both refresh triggers and load the initial badge."""

        if self._loop is not None:
            return self._state
        self._loop = asyncio.get_running_loop()
        self._unsubscribers.append(self._feed.subscribe(COLLECTION, self._on_change))
        if self._auth is not None:
            self._unsubscribers.append(self._auth.on_auth_state_change(self._on_auth_change))
        self._poll_task = asyncio.create_task(self._poll())
        return await self.request_refresh(force=True)

    async def stop(self) -> None:
        self._generation += 1
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

        pending = [
            task
            for task in (self._poll_task, self._inflight, *self._background)
            if task is not None
        ]
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        self._poll_task = None
        self._inflight = None
        self._background.clear()
        self._loop = None

    async def _poll(self) -> None:
        while True:
            await asyncio.sleep(self._poll_interval)
            await self.request_refresh()

    # -- panel transitions -----------------------------------------------

    async def toggle(self) -> FeedState:
        if self._state.is_open:
            self.close()
            return self._state
        return await self.open()

    async def open(self) -> FeedState:
        """Open the feed; entering ``OPEN`` always fetches a fresh list."""

        if not self._state.is_open:
            self._set_state(replace(self._state, status=FeedStatus.OPEN))
            if self._renderer is not None:
                self._renderer.show_feed(True)
        return await self.request_refresh(force=True)

    def close(self) -> None:
        if not self._state.is_open:
            return
        self._set_state(replace(self._state, status=FeedStatus.CLOSED))
        if self._renderer is not None:
            self._renderer.show_feed(False)

    def handle_pointer_event(self, inside_feed: bool) -> None:
        """Close the feed when a pointer event lands outside of it."""

        if self._state.is_open and not inside_feed:
            self.close()

    # -- actions ---------------------------------------------------------

    async def mark_read(self, notification_id: int) -> FeedState:
        result = await self._call(self._service.mark_notification_as_read, notification_id)
        if not result.success:
            logger.warning("Could not mark notification %s as read: %s", notification_id, result.error)
        return await self.request_refresh(force=True)

    async def mark_all_read(self) -> FeedState:
        result = await self._call(self._service.mark_all_notifications_as_read)
        if not result.success:
            logger.warning("Could not mark all notifications as read: %s", result.error)
        return await self.request_refresh(force=True)

    # -- refresh ---------------------------------------------------------

    async def request_refresh(self, *, force: bool = False) -> FeedState:
        """Re-fetch badge and feed, sharing any refresh already in flight.

        Non-forced callers await the pending refresh instead of starting a
        second one. Forced callers wait for it to settle and then fetch again,
        so they observe changes made after the pending refresh began.
        """

        while self._inflight is not None and not self._inflight.done():
            pending = self._inflight
            if not force:
                return await asyncio.shield(pending)
            await asyncio.wait({pending})

        task = asyncio.create_task(self._refresh())
        self._inflight = task
        return await asyncio.shield(task)

    async def _refresh(self) -> FeedState:
        fetch_feed = self._state.is_open
        generation = self._generation

        count_result = await self._call(self._service.get_unread_notification_count)
        # results fetched for a signed-out session are discarded
        if generation != self._generation:
            return self._state
        if count_result.success:
            count = int(count_result.data or 0)
            self._set_state(
                replace(
                    self._state,
                    unread_count=count,
                    badge_text=format_badge(count, self._badge_limit),
                )
            )
            if self._renderer is not None:
                self._renderer.render_badge(self._state.badge_text, count)
        else:
            logger.warning("Badge refresh failed: %s", count_result.error)

        if not fetch_feed:
            return self._state

        list_result = await self._call(self._service.get_user_notifications, True)
        if generation != self._generation:
            return self._state
        if not list_result.success:
            logger.warning("Feed refresh failed: %s", list_result.error)
            return self._state

        self._set_state(replace(self._state, entries=tuple(list_result.data or ())))
        # the panel may have been closed while the fetch was pending
        if self._state.is_open and self._renderer is not None:
            views = [FeedEntryView.from_notification(entry) for entry in self._state.entries]
            self._renderer.render_feed(views, self.handlers)
        return self._state

    async def _call(self, function: Callable[..., OperationResult], *args: Any) -> OperationResult:
        return await to_thread.run_sync(functools.partial(function, *args))

    # -- trigger callbacks (may run on worker threads) -------------------

    def _on_change(self, event: ChangeEvent) -> None:
        logger.debug("Notification change detected: %s", event.kind.value)
        self._schedule(functools.partial(self.request_refresh))

    def _on_auth_change(self, event: AuthEvent, user: Optional[User]) -> None:
        if event is AuthEvent.SIGNED_OUT:
            self._call_in_loop(self._reset)
        else:
            self._schedule(functools.partial(self.request_refresh, force=True))

    def _reset(self) -> None:
        self._generation += 1
        self._set_state(FeedState())
        if self._renderer is not None:
            self._renderer.show_feed(False)
            self._renderer.render_badge("", 0)

    def _schedule(self, factory: Callable[[], Awaitable[Any]]) -> None:
        def _spawn() -> None:
            task = asyncio.ensure_future(factory())
            self._background.add(task)
            task.add_done_callback(self._background.discard)

        self._call_in_loop(_spawn)

    def _call_in_loop(self, callback: Callable[[], None]) -> None:
        loop = self._loop
        if loop is None or loop.is_closed():
            return
        try:
            loop.call_soon_threadsafe(callback)
        except RuntimeError:  # pragma: no cover - loop shutting down
            logger.debug("Dropped feed trigger, event loop is closing")


__all__ = [
    "FeedHandlers",
    "FeedRenderer",
    "NotificationFeedPresenter",
]
