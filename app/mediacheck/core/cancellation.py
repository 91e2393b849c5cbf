"""Cooperative cancellation checkpoints.

A caller that wants to stop an audit sets the ``threading.Event`` on
the audit context. Long loops call :func:`check_cancelled` at safe
points (between catalog pages, between record evaluations) and unwind
with AuditCancelledError.
"""

import threading


class AuditCancelledError(Exception):
    """Raised at a checkpoint once cancellation was requested."""


def is_cancelled(cancel: threading.Event | None) -> bool:
    """Check if cancellation was requested."""
    return cancel is not None and cancel.is_set()


def check_cancelled(cancel: threading.Event | None, where: str) -> None:
    """Raise AuditCancelledError if cancellation was requested.

    Args:
        cancel: Cancellation event, or None when cancellation is unsupported.
        where: Short description of the checkpoint for the error message.

    Raises:
        AuditCancelledError: If the event is set.
    """
    if is_cancelled(cancel):
        msg = f"Audit cancelled {where}"
        raise AuditCancelledError(msg)
