from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

import requests
from lxml import etree
from lxml import html as lxml_html
from readability import Document

from .exceptions import ExtractionError

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (compatible; NewsTeasersBot/1.0; RSS reader)"

_IMAGE_XPATHS = (
    '//meta[@property="og:image"]/@content',
    '//meta[@name="twitter:image"]/@content',
)


@dataclass(frozen=True)
class Extraction:
    text: str
    image: Optional[str] = None


def fetch_html(url: str, timeout: float = 10) -> str:
    response = requests.get(url, timeout=timeout, headers={"User-Agent": USER_AGENT})
    response.raise_for_status()
    return response.text


def lead_image(page_html: str) -> Optional[str]:
    """Return the og:image (falling back to twitter:image) URL, if any."""
    try:
        tree = lxml_html.fromstring(page_html)
    except (etree.ParserError, ValueError):
        return None
    for xpath in _IMAGE_XPATHS:
        for value in tree.xpath(xpath):
            value = str(value).strip()
            if value:
                return value
    return None


def main_text(page_html: str) -> str:
    """Readability main-content text with whitespace collapsed."""
    summary_html = Document(page_html).summary()
    tree = lxml_html.fromstring(summary_html)
    return re.sub(r"\s+", " ", tree.text_content()).strip()


def extract_article(url: str, *, timeout: float = 10) -> Extraction:
    """
    Fetch one article page and pull out its body text and lead image.

    Raises ExtractionError when the page cannot be fetched. A page that fetches
    but defeats readability yields empty text and whatever image was found.
    """
    try:
        page_html = fetch_html(url, timeout=timeout)
    except requests.RequestException as e:
        raise ExtractionError(f"Failed to fetch article: {url} ({e})") from e

    image = lead_image(page_html)
    try:
        text = main_text(page_html)
    except Exception as e:
        logger.warning("readability failed for %s: %s", url, e)
        text = ""
    return Extraction(text=text, image=image)
