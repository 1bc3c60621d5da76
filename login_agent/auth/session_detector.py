"""
Session Detector
================
Decides whether the browser already holds an authenticated session, by
looking at the page location only.

``matches()`` is the one success rule of the package: the login flow
uses it both for the pre-login fast path and inside its polling loop.
"""

from __future__ import annotations

import logging

from ..browser.base import BrowserError, PageDriver

logger = logging.getLogger(__name__)

DEFAULT_SUCCESS_MARKER = "/feed"


def location_matches(location: str, marker: str) -> bool:
    """Substring match of *marker* in *location* (case-sensitive)."""
    return bool(location) and bool(marker) and marker in location


class SessionDetector:
    """Location-based session check.

    Args:
        driver:         Page to observe (borrowed, never closed).
        success_marker: Substring only present in post-login locations.
    """

    def __init__(self, driver: PageDriver, success_marker: str = DEFAULT_SUCCESS_MARKER):
        if not success_marker:
            raise ValueError("success_marker must be a non-empty string")
        self.driver = driver
        self.success_marker = success_marker

    def matches(self, location: str) -> bool:
        """True if *location* is inside the authenticated area."""
        return location_matches(location, self.success_marker)

    def is_authenticated(self) -> bool:
        """Fetch the current location and apply ``matches()``.

        Never raises: an unreachable page counts as not authenticated.
        """
        try:
            location = self.driver.current_location()
        except BrowserError as exc:
            logger.debug(f"[AUTH] Session check skipped — page unavailable: {exc}")
            return False
        return self.matches(location)
