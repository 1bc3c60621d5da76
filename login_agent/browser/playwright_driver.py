"""
Playwright Page Driver
======================
Concrete browser collaborator built on Playwright's sync API.

Two pieces:
    - ``BrowserSession``       — launches a persistent Chromium profile so
      cookies survive between runs (a later run usually hits the
      already-logged-in fast path).
    - ``PlaywrightPageDriver`` — adapts a Playwright ``Page`` to the
      ``PageDriver`` contract and translates Playwright errors into
      ``BrowserError`` subclasses.

Usage::

    from login_agent.browser.playwright_driver import BrowserSession

    with BrowserSession(profile_dir="chrome-profile") as session:
        manager = LoginManager(session.driver, policy)
        outcome = manager.authenticate(creds)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, sync_playwright
from playwright.sync_api import TimeoutError as PlaywrightTimeout

from .base import (
    ClickableHandle,
    ElementNotFoundError,
    InputHandle,
    PageDriver,
    PageUnavailableError,
)

logger = logging.getLogger(__name__)


# Chromium flags applied to every launch
_LAUNCH_ARGS: List[str] = [
    "--disable-blink-features=AutomationControlled",
    "--disable-gpu",
    "--no-sandbox",
    "--disable-dev-shm-usage",
]


# ---------------------------------------------------------------------------
# Element handles
# ---------------------------------------------------------------------------

class PlaywrightInput(InputHandle):
    """Text input backed by a Playwright ``ElementHandle``."""

    def __init__(self, handle, selector: str, action_timeout_ms: int):
        self._handle = handle
        self._selector = selector
        self._timeout = action_timeout_ms

    def focus(self) -> None:
        # A real click fires the page's own focus handlers
        try:
            self._handle.click(timeout=self._timeout)
        except PlaywrightError as exc:
            raise ElementNotFoundError(self._selector, self._timeout) from exc

    def set_text(self, text: str) -> None:
        try:
            self._handle.fill(text, timeout=self._timeout)
        except PlaywrightError as exc:
            raise ElementNotFoundError(self._selector, self._timeout) from exc


class PlaywrightClickable(ClickableHandle):
    """Clickable control backed by a Playwright ``ElementHandle``."""

    def __init__(self, handle, selector: str, action_timeout_ms: int):
        self._handle = handle
        self._selector = selector
        self._timeout = action_timeout_ms

    def click(self) -> None:
        # no_wait_after=True: the submit triggers navigation, which the
        # login flow observes itself by polling the location
        try:
            self._handle.click(timeout=self._timeout, no_wait_after=True)
        except PlaywrightError as exc:
            raise ElementNotFoundError(self._selector, self._timeout) from exc


# ---------------------------------------------------------------------------
# Page driver
# ---------------------------------------------------------------------------

class PlaywrightPageDriver(PageDriver):
    """``PageDriver`` over a Playwright sync ``Page``.

    The page is borrowed: the driver never closes it.
    """

    def __init__(
        self,
        page: Page,
        element_timeout_ms: int = 15_000,
        navigation_timeout_ms: int = 60_000,
        action_timeout_ms: int = 5_000,
    ):
        self.page = page
        self.element_timeout_ms = element_timeout_ms
        self.navigation_timeout_ms = navigation_timeout_ms
        self.action_timeout_ms = action_timeout_ms

    def current_location(self) -> str:
        if self.page.is_closed():
            raise PageUnavailableError("Page is closed")
        try:
            return self.page.url
        except PlaywrightError as exc:
            raise PageUnavailableError(str(exc)) from exc

    def navigate(self, url: str) -> None:
        logger.info(f"[BROWSER] Navigating to {url[:80]}")
        try:
            self.page.goto(
                url,
                wait_until="domcontentloaded",
                timeout=self.navigation_timeout_ms,
            )
        except PlaywrightTimeout:
            logger.warning(f"[BROWSER] Navigation timeout for {url[:80]} — continuing")
        except PlaywrightError as exc:
            raise PageUnavailableError(str(exc)) from exc

    def wait_load(self) -> None:
        try:
            self.page.wait_for_load_state("load", timeout=self.navigation_timeout_ms)
        except PlaywrightTimeout:
            logger.warning("[BROWSER] Load state not reached — continuing")
        except PlaywrightError as exc:
            raise PageUnavailableError(str(exc)) from exc

    def _wait_visible(self, selector: str, timeout_ms: Optional[int]):
        timeout = timeout_ms or self.element_timeout_ms
        try:
            handle = self.page.wait_for_selector(
                selector, state="visible", timeout=timeout
            )
        except PlaywrightError as exc:
            raise ElementNotFoundError(selector, timeout) from exc
        if handle is None:
            raise ElementNotFoundError(selector, timeout)
        logger.debug(f"[BROWSER] Located {selector}")
        return handle

    def find_input(self, selector: str, timeout_ms: Optional[int] = None) -> InputHandle:
        handle = self._wait_visible(selector, timeout_ms)
        return PlaywrightInput(handle, selector, self.action_timeout_ms)

    def find_clickable(
        self, selector: str, timeout_ms: Optional[int] = None
    ) -> ClickableHandle:
        handle = self._wait_visible(selector, timeout_ms)
        return PlaywrightClickable(handle, selector, self.action_timeout_ms)


# ---------------------------------------------------------------------------
# Browser session (persistent profile)
# ---------------------------------------------------------------------------

class BrowserSession:
    """Persistent-profile Chromium session.

    Launches ``launch_persistent_context`` on *profile_dir*, so cookies and
    local storage persist between runs. Use as a context manager; on exit
    the context and the Playwright driver process are shut down.
    """

    def __init__(
        self,
        profile_dir: str = "chrome-profile",
        headless: bool = False,
        viewport_width: int = 1280,
        viewport_height: int = 900,
        user_agent: Optional[str] = None,
        element_timeout_ms: int = 15_000,
        navigation_timeout_ms: int = 60_000,
    ):
        self.profile_dir = profile_dir
        self.headless = headless
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        self.user_agent = user_agent
        self.element_timeout_ms = element_timeout_ms
        self.navigation_timeout_ms = navigation_timeout_ms

        self._pw = None
        self._context = None
        self.page: Optional[Page] = None
        self.driver: Optional[PlaywrightPageDriver] = None

    def start(self) -> "BrowserSession":
        profile = Path(self.profile_dir)
        profile.mkdir(parents=True, exist_ok=True)
        logger.info(f"[BROWSER] Using persistent profile: {profile}")

        self._pw = sync_playwright().start()
        launch_kwargs = dict(
            user_data_dir=str(profile),
            headless=self.headless,
            args=list(_LAUNCH_ARGS),
            viewport={"width": self.viewport_width, "height": self.viewport_height},
        )
        if self.user_agent:
            launch_kwargs["user_agent"] = self.user_agent

        # __exit__ never runs when __enter__ raises, so tear down here
        try:
            self._context = self._pw.chromium.launch_persistent_context(**launch_kwargs)
            self.page = self._context.pages[0] if self._context.pages else self._context.new_page()
            self.driver = PlaywrightPageDriver(
                self.page,
                element_timeout_ms=self.element_timeout_ms,
                navigation_timeout_ms=self.navigation_timeout_ms,
            )
        except Exception:
            self.close()
            raise
        logger.info(
            f"[BROWSER] Chromium launched (headless={self.headless})"
        )
        return self

    def close(self) -> None:
        if self._context:
            try:
                self._context.close()
            except PlaywrightError as exc:
                logger.debug(f"[BROWSER] Context close: {exc}")
            self._context = None
        if self._pw:
            self._pw.stop()
            self._pw = None
        self.page = None
        self.driver = None

    def __enter__(self) -> "BrowserSession":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
