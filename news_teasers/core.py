from __future__ import annotations

import logging
import random
import time
from typing import Callable, Iterable, List, Optional

from . import composer, hooks
from .classifier import classify
from .dedup import deduplicate
from .exceptions import ExtractionError, GenerationError
from .extractor import Extraction, extract_article
from .fetcher import fetch_feed_entries
from .guard import DEFAULT_FIRST_WORD_CAP, RepetitionGuard
from .history import HistoryState
from .models import Article, Domain, FeedItem, HookSet, Result, Teaser
from .normalizer import to_feed_item
from .parser import parse_entry
from .summarizers import BulletGenerator, NullBulletGenerator, clean_bullet, pad_bullets

logger = logging.getLogger(__name__)


def load_feed_items(url: str, limit: Optional[int] = None) -> List[FeedItem]:
    """
    Feed retrieval: fetch → parse → normalize → deduplicate → limit.

    Raises RSSFetchError when the feed cannot be loaded at all.
    """
    items: List[FeedItem] = []
    for entry in fetch_feed_entries(url):
        try:
            items.append(to_feed_item(parse_entry(entry)))
        except ValueError as e:
            # Skip malformed rows
            logger.warning("Skipping feed entry: %s", e)
    items = deduplicate(items)
    if limit and limit > 0:
        items = items[:limit]
    return items


class TeaserPipeline:
    """
    High-level API: turn feed items into three-bullet Results.

    Per article, strictly in order: extract → hooks → classify → factual bullets
    → compose → guard → assemble. The HistoryState is shared across the batch,
    so earlier articles get first claim on openers.
    """

    def __init__(
        self,
        *,
        history: Optional[HistoryState] = None,
        generator: Optional[BulletGenerator] = None,
        first_word_cap: int = DEFAULT_FIRST_WORD_CAP,
        pacing_sec: float = 0.3,
        fetch_timeout: float = 10.0,
        rng: Optional[random.Random] = None,
        extract: Callable[..., Extraction] = extract_article,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.history = history if history is not None else HistoryState()
        self.generator = generator or NullBulletGenerator()
        self.guard = RepetitionGuard(self.history, first_word_cap=first_word_cap, rng=rng)
        self.pacing_sec = pacing_sec
        self.fetch_timeout = fetch_timeout
        self._extract = extract
        self._sleep = sleep

    def build_article(self, item: FeedItem) -> Article:
        try:
            extraction = self._extract(item.link, timeout=self.fetch_timeout)
        except ExtractionError as e:
            logger.warning("Extraction failed for %s: %s", item.link, e)
            extraction = Extraction(text="", image=None)
        return Article(
            title=item.title,
            link=item.link,
            text=extraction.text,
            section=item.section,
            published=item.published,
            image=extraction.image,
            author=item.author,
            excerpt=item.excerpt,
        )

    def factual_bullets(self, article: Article) -> List[str]:
        try:
            bullets = self.generator.generate(article)
        except GenerationError as e:
            logger.warning("Generation failed for %s: %s", article.link, e)
            bullets = []
        return pad_bullets([clean_bullet(b) for b in bullets], article.article_text)

    def compose_teaser(self, article: Article, hook_set: HookSet, domain: Domain) -> Teaser:
        return self.guard.finalize(composer.drafts(hook_set, domain, article.title), domain)

    def process(self, item: FeedItem) -> Result:
        article = self.build_article(item)
        text = article.article_text
        hook_set = hooks.extract(text, article.title)
        domain = classify(f"{article.title}\n{text}", article.section)
        factual = self.factual_bullets(article)
        teaser = self.compose_teaser(article, hook_set, domain)
        logger.debug("Teaser for %s: domain=%s move=%s", article.link, teaser.domain.value, teaser.move)
        return Result(
            title=article.title,
            url=article.link,
            author=article.author,
            section=article.section,
            published=article.published,
            image=article.image,
            bullets=[*factual, teaser.text],
        )

    def run_batch(self, items: Iterable[FeedItem]) -> List[Result]:
        """
        Process items sequentially with a pacing delay between them.

        A failing article is logged and skipped; the rest of the batch continues.
        """
        results: List[Result] = []
        for i, item in enumerate(items):
            if i and self.pacing_sec > 0:
                self._sleep(self.pacing_sec)
            try:
                results.append(self.process(item))
            except Exception as e:
                logger.warning("Skipping %s: %s", item.link, e)
        return results
