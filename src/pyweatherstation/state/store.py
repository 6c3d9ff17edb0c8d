"""Observable in-memory state container.

Every mutation replaces the whole :class:`SessionState` in one
synchronous step, so a reader never sees a half-applied update.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from pyweatherstation.state.models import SessionState

_logger = logging.getLogger(__name__)

StateListener = Callable[[SessionState], None]


class StateStore:
    """Holds the current :class:`SessionState` and notifies listeners."""

    def __init__(self, initial: SessionState | None = None) -> None:
        self._state = initial if initial is not None else SessionState()
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def update(self, **changes: Any) -> SessionState:
        """Replace the state with a copy carrying *changes* and notify."""
        new_state = self._state.model_copy(update=changes)
        if new_state == self._state:
            return self._state
        self._state = new_state
        self._notify(new_state)
        return new_state

    def _notify(self, state: SessionState) -> None:
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                _logger.debug("State listener failed", exc_info=True)
