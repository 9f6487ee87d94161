"""
Errors raised by the layers around the rules engine.

The reducer never raises for rule violations (those are soft, reported
through GameState.message). These exceptions belong to the session and
API layers, where a missing session or an unknown archetype is a caller
mistake rather than a game event.
"""


class CurveError(Exception):
    """Base class for all Curve errors."""

    error_code = "INTERNAL_ERROR"


class SessionNotFoundError(CurveError):
    error_code = "SESSION_NOT_FOUND"

    def __init__(self, session_id: str):
        super().__init__(f"Session {session_id} not found")
        self.session_id = session_id


class UnknownArchetypeError(CurveError):
    error_code = "UNKNOWN_ARCHETYPE"

    def __init__(self, archetype: str):
        super().__init__(f"Unknown archetype: {archetype}")
        self.archetype = archetype


class InvalidActionError(CurveError):
    """An action that the host refuses to forward to the engine."""

    error_code = "INVALID_ACTION"
