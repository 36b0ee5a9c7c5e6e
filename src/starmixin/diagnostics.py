"""
Diagnostics

Reporting channels for non-fatal failures. Nothing here raises: failures are
logged, and user-facing ones are also forwarded to handlers the host installs
(an in-game message log, a toast, a status bar).
"""

import logging
from typing import Callable, List, Optional

from .errors import ExtenderError

logger = logging.getLogger(__name__)

UserErrorHandler = Callable[[str], None]

_user_error_handlers: List[UserErrorHandler] = []


def add_user_error_handler(handler: UserErrorHandler) -> None:
    if handler not in _user_error_handlers:
        _user_error_handlers.append(handler)


def remove_user_error_handler(handler: UserErrorHandler) -> None:
    if handler in _user_error_handlers:
        _user_error_handlers.remove(handler)


def fail(message: str, error: Optional[ExtenderError] = None) -> None:
    """Report a developer-facing failure."""
    if error is not None:
        logger.error(f"{message} ({error.__class__.__name__})")
    else:
        logger.error(message)


def display_user_error(message: str, error: Optional[ExtenderError] = None) -> None:
    """Report a failure the user should see."""
    fail(message, error)
    for handler in list(_user_error_handlers):
        try:
            handler(message)
        except Exception:
            logger.exception("User error handler failed")
