# site_cache.py — in-memory copy of the store's policy pages
import os
import time
from typing import Callable, Dict, List, Literal, NamedTuple, Optional

from crawl_light import fetch_page_text
from errors import FetchError
from log_helper import log

SITE_URL = os.getenv("SITE_URL", "https://www.example-shop.ro").rstrip("/")
MAX_AGE_SEC = float(os.getenv("SITE_CACHE_MAX_AGE_SEC", "3600"))

Topic = Literal["shipping", "refund", "privacy", "terms", "faqs"]

TOPICS: Dict[str, Dict[str, str]] = {
    "shipping": {"label": "Shipping policy", "path": "/policies/shipping-policy"},
    "refund":   {"label": "Returns & refund policy", "path": "/policies/refund-policy"},
    "privacy":  {"label": "Privacy policy", "path": "/policies/privacy-policy"},
    "terms":    {"label": "Terms and conditions", "path": "/policies/terms-of-service"},
    "faqs":     {"label": "Frequently asked questions", "path": "/pages/faqs"},
}

# Fetched in this order; any failure here aborts the cycle.
MANDATORY_TOPICS: List[str] = ["shipping", "refund", "privacy", "terms"]
OPTIONAL_TOPICS: List[str] = ["faqs"]
TOPIC_ORDER: List[str] = MANDATORY_TOPICS + OPTIONAL_TOPICS


def topic_label(topic: str) -> str:
    return TOPICS[topic]["label"]


def topic_url(topic: str, base: str = SITE_URL) -> str:
    return base.rstrip("/") + TOPICS[topic]["path"]


class Selection(NamedTuple):
    topic: str
    text: str
    url: str


class SiteCache:
    """Topic -> flattened page text, with one shared freshness timestamp.

    ``updated_at`` is the start time of the last refresh cycle whose four
    mandatory pages all came back. The text mapping is only ever swapped
    whole, at the end of such a cycle.
    """

    def __init__(self,
                 fetch: Callable[[str], str] = fetch_page_text,
                 clock: Callable[[], float] = time.time,
                 max_age_sec: float = MAX_AGE_SEC,
                 base_url: str = SITE_URL):
        self._fetch = fetch
        self._clock = clock
        self.max_age_sec = max_age_sec
        self.urls: Dict[str, str] = {t: topic_url(t, base_url) for t in TOPIC_ORDER}
        self.texts: Dict[str, str] = {t: "" for t in TOPIC_ORDER}
        self.updated_at: float = 0.0
        self.last_error: Optional[str] = None

    def is_stale(self, now: Optional[float] = None) -> bool:
        if not self.updated_at:
            return True
        if now is None:
            now = self._clock()
        return now - self.updated_at > self.max_age_sec

    def refresh(self) -> bool:
        started = self._clock()
        log("info", "site_cache_refresh_start", topics=TOPIC_ORDER)
        fresh = dict(self.texts)

        for topic in MANDATORY_TOPICS:
            url = self.urls[topic]
            try:
                fresh[topic] = self._fetch(url)
            except FetchError as e:
                self.last_error = f"{topic}: {e}"
                log("error", "site_cache_refresh_failed", topic=topic, url=url, error=str(e)[:300])
                return False

        for topic in OPTIONAL_TOPICS:
            url = self.urls[topic]
            try:
                fresh[topic] = self._fetch(url)
            except FetchError as e:
                fresh[topic] = ""
                log("warn", "site_cache_faq_failed", topic=topic, url=url, error=str(e)[:300])

        self.texts = fresh
        self.updated_at = started
        self.last_error = None
        log("info", "site_cache_refresh_done",
            chars={t: len(v) for t, v in fresh.items()}, updated_at=started)
        return True

    def ensure_fresh(self) -> None:
        if self.is_stale():
            self.refresh()

    def text_for(self, topic: Topic) -> str:
        return self.texts.get(topic) or ""

    def select(self, topic: Optional[Topic]) -> Optional[Selection]:
        if not topic:
            return None
        return Selection(topic=topic, text=self.text_for(topic), url=self.urls[topic])

    def snapshot(self) -> Dict[str, str]:
        return dict(self.texts)

    def status(self) -> Dict[str, object]:
        return {
            "updated_at": self.updated_at or None,
            "stale": self.is_stale(),
            "last_error": self.last_error,
            "topics": {
                t: {"label": topic_label(t), "url": self.urls[t], "chars": len(self.texts.get(t) or "")}
                for t in TOPIC_ORDER
            },
        }
