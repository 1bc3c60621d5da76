"""
Browser Layer
=============
The collaborator contract (``PageDriver`` and friends) lives in
``base``; the Playwright implementation in ``playwright_driver`` is
imported lazily by callers so the login core stays importable without a
browser installed.
"""

from .base import (
    BrowserError,
    ClickableHandle,
    ElementNotFoundError,
    InputHandle,
    PageDriver,
    PageUnavailableError,
)

__all__ = [
    'BrowserError',
    'ClickableHandle',
    'ElementNotFoundError',
    'InputHandle',
    'PageDriver',
    'PageUnavailableError',
]
