"""
Shared fakes for the chat service tests: a scripted page fetcher, a
settable clock and a completion provider that records what it was sent.
"""

import pytest

from errors import FetchError
from site_cache import SiteCache, topic_url

BASE_URL = "https://shop.test"


class FakeFetcher:
    """Returns canned text per URL; URLs listed in ``failing`` raise FetchError."""

    def __init__(self, pages=None, failing=()):
        self.pages = dict(pages or {})
        self.failing = set(failing)
        self.calls = []

    def __call__(self, url):
        self.calls.append(url)
        if url in self.failing:
            raise FetchError("Page fetch failed", details="boom", url=url)
        return self.pages.get(url, f"text of {url}")


class FakeClock:
    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeCompletions:
    """Records submitted conversations and answers with a canned response."""

    def __init__(self, response=None, error=None):
        self.response = response if response is not None else {
            "choices": [{"message": {"role": "assistant", "content": "Hello from the model."}}]
        }
        self.error = error
        self.calls = []

    def complete(self, messages, temperature):
        self.calls.append({"messages": messages, "temperature": temperature})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def site_cache(fetcher, clock):
    return SiteCache(fetch=fetcher, clock=clock, base_url=BASE_URL)


@pytest.fixture
def url_of():
    """Topic -> URL under the test site."""
    return lambda topic: topic_url(topic, BASE_URL)
