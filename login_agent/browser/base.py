"""
Browser Collaborator Contract
=============================
The minimal set of page operations the login flow needs from a
browser-control layer.

The login core never talks to Playwright (or any other driver) directly.
It issues commands through a ``PageDriver`` and observes the session only
through ``current_location()``.  Anything else (process launch, profile
persistence, launch flags) belongs to the concrete driver.

Failure contract:
    - ``current_location()`` raises ``PageUnavailableError`` when the page
      or browser is gone.
    - ``find_input()`` / ``find_clickable()`` raise ``ElementNotFoundError``
      when the selector does not resolve within the lookup timeout.
    - Every driver-level failure is a ``BrowserError`` so callers can catch
      one type.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class BrowserError(RuntimeError):
    """Base error for the browser-control layer."""


class PageUnavailableError(BrowserError):
    """The page was closed or the browser is unreachable."""


class ElementNotFoundError(BrowserError):
    """A required element did not appear within the lookup timeout."""

    def __init__(self, selector: str, timeout_ms: Optional[int] = None):
        self.selector = selector
        self.timeout_ms = timeout_ms
        detail = f" within {timeout_ms} ms" if timeout_ms else ""
        super().__init__(f"Element not found{detail}: {selector}")


# ---------------------------------------------------------------------------
# Handles
# ---------------------------------------------------------------------------

class InputHandle(ABC):
    """A located text input."""

    @abstractmethod
    def focus(self) -> None:
        ...

    @abstractmethod
    def set_text(self, text: str) -> None:
        ...


class ClickableHandle(ABC):
    """A located control that can be activated."""

    @abstractmethod
    def click(self) -> None:
        ...


# ---------------------------------------------------------------------------
# Page driver
# ---------------------------------------------------------------------------

class PageDriver(ABC):
    """Interface for one remotely-controlled browser page.

    A driver is not safe for concurrent use: one caller issues commands
    at a time.
    """

    @abstractmethod
    def current_location(self) -> str:
        """Return the page's current URL.

        Raises:
            PageUnavailableError: the page or browser is gone.
        """

    @abstractmethod
    def navigate(self, url: str) -> None:
        """Best-effort navigation; blocks until the initial load signal."""

    @abstractmethod
    def wait_load(self) -> None:
        """Block until the page reports load completion."""

    @abstractmethod
    def find_input(self, selector: str, timeout_ms: Optional[int] = None) -> InputHandle:
        """Locate a text input.

        Raises:
            ElementNotFoundError: not present within *timeout_ms*.
        """

    @abstractmethod
    def find_clickable(
        self, selector: str, timeout_ms: Optional[int] = None
    ) -> ClickableHandle:
        """Locate a clickable control.

        Raises:
            ElementNotFoundError: not present within *timeout_ms*.
        """
