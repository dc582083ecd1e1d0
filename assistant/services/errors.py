"""Exceptions raised while assembling assistant context."""


class AssistantError(Exception):
    """Base class for assistant errors."""


class InvalidOwnership(AssistantError):
    """Context input contains a session or trade not owned by the requesting user."""


class SessionNotFound(AssistantError):
    """The requested session does not exist for this user."""
