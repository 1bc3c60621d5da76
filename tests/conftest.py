"""
Shared fixtures: a scripted in-memory page driver.

``ScriptedDriver`` replays a list of locations. The first entry answers
the pre-login session check; each following entry answers one post-submit
check. ``None`` in the script simulates a closed page. Every command is
recorded in ``calls`` so tests can assert what was (not) sent.
"""

import pytest

from login_agent.auth.base_auth import Credentials
from login_agent.auth.policy import LoginPolicy
from login_agent.browser.base import (
    ClickableHandle,
    ElementNotFoundError,
    InputHandle,
    PageDriver,
    PageUnavailableError,
)

LOGIN = "https://www.linkedin.com/login"
CHECKPOINT = "https://www.linkedin.com/checkpoint/challenge/abc"
FEED = "https://www.linkedin.com/feed/"
OTHER = "https://www.linkedin.com/uas/redirect?session=1"


class _Input(InputHandle):
    def __init__(self, driver, selector):
        self.driver = driver
        self.selector = selector

    def focus(self):
        self.driver.calls.append(("focus", self.selector))

    def set_text(self, text):
        self.driver.calls.append(("set_text", self.selector))
        self.driver.typed[self.selector] = text


class _Clickable(ClickableHandle):
    def __init__(self, driver, selector):
        self.driver = driver
        self.selector = selector

    def click(self):
        self.driver.calls.append(("click", self.selector))


class ScriptedDriver(PageDriver):
    def __init__(self, locations, missing=()):
        self.locations = list(locations)
        self.missing = set(missing)
        self.calls = []
        self.typed = {}
        self.location_reads = 0

    def current_location(self):
        self.location_reads += 1
        self.calls.append(("current_location",))
        if not self.locations:
            # script exhausted: keep returning an unmatched location
            return OTHER
        location = self.locations.pop(0)
        if location is None:
            raise PageUnavailableError("page closed")
        return location

    def navigate(self, url):
        self.calls.append(("navigate", url))

    def wait_load(self):
        self.calls.append(("wait_load",))

    def find_input(self, selector, timeout_ms=None):
        self.calls.append(("find_input", selector))
        if selector in self.missing:
            raise ElementNotFoundError(selector, timeout_ms)
        return _Input(self, selector)

    def find_clickable(self, selector, timeout_ms=None):
        self.calls.append(("find_clickable", selector))
        if selector in self.missing:
            raise ElementNotFoundError(selector, timeout_ms)
        return _Clickable(self, selector)

    @property
    def commands(self):
        """Every call except location reads."""
        return [c for c in self.calls if c[0] != "current_location"]


class SleepRecorder:
    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def policy():
    return LoginPolicy(max_checks=10, grace_checks=3, poll_interval_s=3.0, settle_delay_s=0.4)


@pytest.fixture
def creds():
    return Credentials(identifier="jane.doe@example.com", secret="hunter2")


@pytest.fixture
def sleeper():
    return SleepRecorder()
