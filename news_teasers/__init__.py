"""
news_teasers

Turns a news feed into fixed-shape three-bullet summaries: two factual bullets
from a text-generation service and one curiosity teaser composed locally from
hooks mined out of the article, kept varied across the run and recent history.

Core ideas:
- Input: one RSS/Atom feed URL
- Process: fetch → extract → hooks → classify → factual bullets → compose → guard
- Output: List[Result], written as a JSON array that seeds the next run's history

Example
-------
import random

from news_teasers import HistoryState, TeaserPipeline, load_feed_items

history = HistoryState.from_artifact("data/summaries.json", limit=200)
pipeline = TeaserPipeline(history=history, first_word_cap=2, rng=random.Random(7))

items = load_feed_items("https://www.boston.com/feed/bdc-msn-rss", limit=16)
for result in pipeline.run_batch(items):
    print(result.title)
    for bullet in result.bullets:
        print("  -", bullet)
"""
from .models import Article, Domain, FeedItem, HookSet, Result, Teaser
from .core import TeaserPipeline, load_feed_items
from .history import HistoryState
from .summarizers import GenerateOptions

__all__ = [
    "Article",
    "Domain",
    "FeedItem",
    "HookSet",
    "Result",
    "Teaser",
    "TeaserPipeline",
    "load_feed_items",
    "HistoryState",
    "GenerateOptions",
]
