"""State layer.

The single observable snapshot of a station session and the container
that owns it. Only the session manager writes; everyone else reads or
subscribes.
"""

from pyweatherstation.state.models import SessionState
from pyweatherstation.state.store import StateListener, StateStore

__all__ = ["SessionState", "StateListener", "StateStore"]
