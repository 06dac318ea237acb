# crawl_light.py — fetch a single page and flatten it to plain text
# Public API: fetch_page_text(url) -> str, scrape_root(url) -> dict

import os
import re
from typing import Any, Dict, Optional

import requests
from bs4 import BeautifulSoup

from errors import FetchError

DEFAULT_TIMEOUT = float(os.getenv("SITE_FETCH_TIMEOUT_SEC", "15"))
MAX_HTML_BYTES = int(os.getenv("SITE_MAX_HTML_BYTES", "1500000"))
SAMPLE_CHARS = 400

DEFAULT_UA = os.getenv(
    "SITE_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36",
)

_DROP_TAGS = ["script", "style", "noscript", "template", "svg", "iframe"]


def _clean(s: str) -> str:
    s = re.sub(r"\s+", " ", (s or "")).strip()
    return s


def fetch_html(url: str, ua: Optional[str] = None, timeout: float = DEFAULT_TIMEOUT) -> str:
    headers = {
        "User-Agent": ua or DEFAULT_UA,
        "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8",
    }
    try:
        resp = requests.get(url, headers=headers, timeout=timeout, allow_redirects=True)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise FetchError("Page fetch failed", details=str(e)[:300], url=url) from e
    html = resp.text if isinstance(resp.text, str) else ""
    if len(html.encode("utf-8", "ignore")) > MAX_HTML_BYTES:
        html = html[:MAX_HTML_BYTES]
    return html


def html_to_text(html: str) -> str:
    """Best-effort visible text: drop non-content tags, collapse whitespace."""
    soup = BeautifulSoup(html or "", "html.parser")
    for bad in soup.find_all(_DROP_TAGS):
        bad.decompose()
    root = soup.body or soup
    return _clean(root.get_text(separator=" "))


def fetch_page_text(url: str, ua: Optional[str] = None, timeout: float = DEFAULT_TIMEOUT) -> str:
    return html_to_text(fetch_html(url, ua=ua, timeout=timeout))


def scrape_root(url: str) -> Dict[str, Any]:
    try:
        text = fetch_page_text(url)
    except FetchError as e:
        return {"error": e.details or e.message}
    return {"success": True, "length": len(text), "sample": text[:SAMPLE_CHARS]}
