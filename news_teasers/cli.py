"""Process entry point: one run over the configured feed."""

from __future__ import annotations

import logging
import random

from dotenv import load_dotenv

from .config import Settings
from .core import TeaserPipeline, load_feed_items
from .exceptions import PreconditionError
from .history import HistoryState
from .storage import write_artifact
from .summarizers import build_generator

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def run(settings: Settings) -> int:
    """Execute one run. Returns the number of stories written."""
    settings.validate()
    generator = build_generator(settings.generate_options())
    items = load_feed_items(settings.rss_url, limit=settings.max_articles)
    logger.info("Loaded %d feed items from %s", len(items), settings.rss_url)

    history = HistoryState.from_artifact(settings.output_path, limit=settings.history_limit)
    logger.info("Seeded %d openers from %s", len(history.recent_openers), settings.output_path)

    pipeline = TeaserPipeline(
        history=history,
        generator=generator,
        first_word_cap=settings.first_word_cap,
        pacing_sec=settings.pacing_sec,
        fetch_timeout=settings.fetch_timeout,
        rng=random.Random(settings.seed),
    )
    results = pipeline.run_batch(items)
    path = write_artifact(settings.output_path, results)
    logger.info("Wrote %s (%d stories)", path, len(results))
    return len(results)


def main() -> int:
    load_dotenv()
    setup_logging()
    try:
        run(Settings.from_env())
    except PreconditionError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
