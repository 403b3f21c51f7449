"""Quiet-period debouncing on top of the running asyncio loop."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNSET = object()


class Debouncer(Generic[T]):
    """Deliver only the latest submitted value once it has been stable for ``delay``.

    A single pending slot holds the most recent value. Each :meth:`submit`
    replaces the slot and restarts the timer; superseded values are dropped,
    never queued. A settled value equal to the last delivered one is skipped.
    ``submit`` must be called from inside a running event loop.
    """

    def __init__(self, callback: Callable[[T], None], *, delay: float) -> None:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        self._callback = callback
        self._delay = delay
        self._pending: object = _UNSET
        self._last_delivered: object = _UNSET
        self._handle: asyncio.TimerHandle | None = None

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def has_pending(self) -> bool:
        return self._pending is not _UNSET

    @property
    def pending(self) -> T | None:
        """The value waiting for the timer, or ``None`` when the slot is empty."""

        if self._pending is _UNSET:
            return None
        return self._pending  # type: ignore[return-value]

    def submit(self, value: T) -> None:
        loop = asyncio.get_running_loop()
        self._cancel_timer()
        self._pending = value
        self._handle = loop.call_later(self._delay, self._fire)

    def flush(self) -> None:
        """Fire immediately when a value is pending."""

        self._cancel_timer()
        self._fire()

    def cancel(self) -> None:
        """Drop the pending value without invoking the callback."""

        self._cancel_timer()
        self._pending = _UNSET

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        if self._pending is _UNSET:
            return
        value = self._pending
        self._pending = _UNSET
        if value == self._last_delivered:
            logger.debug("Debounced value %r unchanged; skipping delivery", value)
            return
        self._last_delivered = value
        logger.debug("Debounce quiet period elapsed; delivering %r", value)
        self._callback(value)  # type: ignore[arg-type]


__all__ = ["Debouncer"]
