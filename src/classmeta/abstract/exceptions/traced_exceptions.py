"""
MIT License

Copyright (c) 2025 Sébastien Gachoud

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.

-------------------------------------------------------------------------------

Author: Sébastien Gachoud
Created: 2025-07-11
Updated: 2026-10-19
Description: Base class and functions to ease exception tracing in a string, and the
            process-wide error handler every classmeta error is routed through.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"


import logging
import traceback
from typing import Any, Callable, NoReturn

logger = logging.getLogger(__name__)

type ErrorHandler = Callable[[Exception], Any]


def format_exception(e: Exception) -> str:
    """Format the provided exception to a string with its traceback.

    Args:
        e (Exception): The exception to format.

    Returns:
        str: The string representation of the exception with its traceback.
    """
    return "".join(traceback.format_exception(type(e), e, e.__traceback__))


class TracedException(Exception):
    """Base traceable exception class."""

    def traceback_format(self) -> str:
        """Format the exception to a string with its traceback.

        Returns:
            str: The string representation of the exception with its traceback.
        """
        return format_exception(self)


def raise_error(error: Exception) -> NoReturn:
    """Default error handler. Simply raises the error."""
    raise error


_default_handler: ErrorHandler = raise_error


def default_error_handler(handler: ErrorHandler | None = None) -> ErrorHandler:
    """Get, or replace, the process-wide error handler.

    Args:
        handler (ErrorHandler | None): The new handler. When None, the current one is
            only returned.

    Raises:
        TypeError: Raised through the current handler if the new handler is not callable.

    Returns:
        ErrorHandler: The handler in use after the call.
    """
    global _default_handler  # pylint: disable=global-statement
    if handler is None:
        return _default_handler
    if not callable(handler):
        handle_error(TypeError(f"Error handler must be callable, got {handler!r}."))
    _default_handler = handler
    return _default_handler


def handle_error(error: Exception, handler: ErrorHandler | None = None) -> NoReturn:
    """Route an error through a handler. If the handler returns instead of raising, the
    error is raised anyway: no error is ever swallowed.

    Args:
        error (Exception): The error to signal.
        handler (ErrorHandler | None): The handler to use. Defaults to the process-wide one.

    Raises:
        Exception: The error, or whatever the handler raises in its place.
    """
    logger.debug("Signaling %s: %s", type(error).__name__, error)
    (handler or _default_handler)(error)
    raise error
