"""
Engine Errors - Exceptions raised by the rules engine.

Every rejected operation raises one of these before touching state.
The reducer turns them into failed ActionResults using error_code.
"""


class EngineError(Exception):
    """Base class for rule violations."""
    error_code = "ENGINE_ERROR"


class InvalidArgument(EngineError, ValueError):
    """Malformed input the caller controls (e.g. empty nickname)."""
    error_code = "INVALID_ARGUMENT"


class IllegalState(EngineError, RuntimeError):
    """Operation invoked while its game/board/cloud preconditions are unmet."""
    error_code = "ILLEGAL_STATE"


class IndexOutOfRange(EngineError, IndexError):
    """Addressing a cloud or island slot that does not exist."""
    error_code = "INDEX_OUT_OF_RANGE"
