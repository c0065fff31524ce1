class HistoryError(Exception):
    """Base class for errors raised by the history model."""


class ValidationError(HistoryError):
    """Raised when a caller-supplied name or value breaks the naming rules."""


class NotFoundError(HistoryError):
    """Raised when a ref or id does not resolve to any commit."""

    def __init__(self, ref: str, message: str | None = None):
        super().__init__(message or f"Cannot find commit: {ref}")
        self.ref = ref


class InvalidStateError(HistoryError):
    """Raised when an operation needs an attached branch but HEAD is detached."""


class LayoutError(HistoryError):
    """Raised when the layout pass cannot produce distinct commit positions."""
