"""Session state."""

from libman.session.models import SessionState

__all__ = ["SessionState"]
