class NewsTeasersError(Exception):
    """Base class for news_teasers errors."""


class ExtractionError(NewsTeasersError):
    """Raised when one article's HTML cannot be fetched or parsed."""


class GenerationError(NewsTeasersError):
    """Raised when the factual-bullet service fails or returns unusable output."""


class PreconditionError(NewsTeasersError):
    """Raised for run-level failures that abort the run before any article is processed."""


class ConfigError(PreconditionError):
    """Raised when a required setting or credential is missing or malformed."""


class RSSFetchError(PreconditionError):
    """Raised when an RSS/Atom feed cannot be fetched or parsed."""
