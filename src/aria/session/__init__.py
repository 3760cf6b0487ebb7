"""Conversation session management."""

from aria.session.controller import SessionController

__all__ = ["SessionController"]
