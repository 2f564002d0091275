"""Domain service: Change Notifier.

In-process publish/subscribe keyed by resource identifier.  Writers
call ``notify()`` after a write commits; list-bound consumers subscribe
to the identifiers they display.

Dispatch is synchronous, on the notifying thread, in registration
order.  A handler exception propagates to the writer.  Work that a
handler wants to start (typically another write) is queued with
``defer()`` and runs once the outermost dispatch on that thread has
finished, so handlers never re-enter the store mid-dispatch.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable

from inventory.domain.model.resource import ResourceUri

logger = logging.getLogger(__name__)

ChangeHandler = Callable[[ResourceUri], None]


class ChangeNotifier:

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscriptions: list[tuple[ResourceUri, ChangeHandler]] = []
        self._local = threading.local()

    # --- Registry -------------------------------------------------------------

    def subscribe(self, uri: ResourceUri, handler: ChangeHandler) -> None:
        """Register *handler* for changes overlapping *uri*.

        Registering the same pair twice is a no-op.
        """
        with self._lock:
            if (uri, handler) in self._subscriptions:
                return
            self._subscriptions.append((uri, handler))
        logger.debug("Subscribed %r to %s", handler, uri)

    def unsubscribe(self, uri: ResourceUri, handler: ChangeHandler) -> None:
        with self._lock:
            try:
                self._subscriptions.remove((uri, handler))
            except ValueError:
                return
        logger.debug("Unsubscribed %r from %s", handler, uri)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    # --- Dispatch -------------------------------------------------------------

    @property
    def dispatching(self) -> bool:
        """True while the current thread is inside a ``notify()`` call."""
        return self._depth > 0

    def notify(self, uri: ResourceUri) -> None:
        """Call every handler whose identifier overlaps *uri*, once each."""
        with self._lock:
            targets = [h for sub, h in self._subscriptions if sub.overlaps(uri)]
        logger.debug("Change on %s -> %d handler(s)", uri, len(targets))

        self._depth += 1
        try:
            for handler in targets:
                handler(uri)
        except Exception:
            if self._depth == 1:
                dropped = len(self._pending)
                self._pending.clear()
                if dropped:
                    logger.warning(
                        "Handler failed on %s; dropped %d deferred call(s)",
                        uri, dropped,
                    )
            raise
        finally:
            self._depth -= 1

        if self._depth == 0:
            self._run_pending()

    def defer(self, callback: Callable[[], object]) -> None:
        """Queue *callback* to run after the current dispatch completes."""
        self._pending.append(callback)

    # --- Internal helpers -----------------------------------------------------

    @property
    def _depth(self) -> int:
        return getattr(self._local, "depth", 0)

    @_depth.setter
    def _depth(self, value: int) -> None:
        self._local.depth = value

    @property
    def _pending(self) -> deque[Callable[[], object]]:
        pending = getattr(self._local, "pending", None)
        if pending is None:
            pending = self._local.pending = deque()
        return pending

    def _run_pending(self) -> None:
        pending = self._pending
        while pending:
            callback = pending.popleft()
            try:
                callback()
            except Exception:
                pending.clear()
                raise
