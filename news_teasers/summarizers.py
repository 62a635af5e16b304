from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Protocol

from .exceptions import ConfigError, GenerationError
from .models import Article

FACTUAL_BULLETS = 2

FILLER_BULLETS = (
    "Further context in the full story.",
    "Details are still developing in the full report.",
)

SYSTEM_PROMPT = (
    "You are a Boston-area news copy editor. Write EXACTLY two factual bullets "
    "(<= 22 words each) summarizing the article.\n"
    "- Bullet 1: what happened, plain and neutral.\n"
    "- Bullet 2: one key detail (a number, name, or decision).\n"
    "- Concise, specific, clear journalistic style. No hype, no ellipses, no questions.\n"
    "- Do not repeat the same opening word in both bullets.\n"
    'Output strict JSON with key "bullets" (array of 2 strings).'
)


class BulletGenerator(Protocol):
    def generate(self, article: Article) -> List[str]:  # pragma: no cover - interface
        ...


@dataclass
class GenerateOptions:
    provider: str = "openai"  # "openai" | "gemini" | "none"
    model: Optional[str] = None
    api_key: Optional[str] = None
    max_input_chars: int = 7000
    timeout_sec: float = 30.0


def clip(s: str, limit: int) -> str:
    s = re.sub(r"\s+", " ", s or "").strip()
    if limit <= 0:
        return s
    return s[:limit]


def clean_bullet(s: str) -> str:
    s = re.sub(r"\s+", " ", s or "").strip()
    s = re.sub(r"(?:\.\.\.|…)$", "", s).strip()
    return s.lstrip("•-* ").strip()


def build_user_prompt(article: Article, max_input_chars: int) -> str:
    return (
        f"TITLE: {article.title}\n"
        f"URL: {article.link}\n"
        f"PUBLISHED: {article.published}\n"
        f"SECTION: {article.section}\n\n"
        f"ARTICLE (truncated):\n{clip(article.article_text, max_input_chars)}"
    )


def parse_bullets(raw: Any) -> List[str]:
    """
    Parse a service response of the form {"bullets": [...]}.

    Returns the cleaned, non-empty bullets (at most FACTUAL_BULLETS).
    Raises GenerationError on anything else.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise GenerationError("Empty response from generation service")
    try:
        obj = json.loads(raw)
    except ValueError as e:
        raise GenerationError(f"Response is not valid JSON: {e}") from e
    bullets = obj.get("bullets") if isinstance(obj, dict) else None
    if not isinstance(bullets, list):
        raise GenerationError("Response lacks a 'bullets' array")
    cleaned = [clean_bullet(b) for b in bullets if isinstance(b, str)]
    cleaned = [b for b in cleaned if b]
    if not cleaned:
        raise GenerationError("Response has no usable bullets")
    return cleaned[:FACTUAL_BULLETS]


_SENTENCE_END = re.compile(r"(?<=[.!?])\s+")


def naive_bullets(text: str, count: int = FACTUAL_BULLETS, max_chars: int = 220) -> List[str]:
    """First `count` sentences of the text, used when the service is unavailable."""
    out: List[str] = []
    for sentence in _SENTENCE_END.split(re.sub(r"\s+", " ", text or "").strip()):
        sentence = clean_bullet(sentence)
        if len(sentence.split()) < 3:
            continue
        if len(sentence) > max_chars:
            sentence = sentence[:max_chars].rsplit(" ", 1)[0].rstrip(",;:") + "."
        if sentence not in out:
            out.append(sentence)
        if len(out) >= count:
            break
    return out


def pad_bullets(bullets: List[str], text: str, count: int = FACTUAL_BULLETS) -> List[str]:
    """Top up to `count` bullets from the text, then from filler sentences."""
    out = [b for b in bullets if b][:count]
    if len(out) < count:
        for b in naive_bullets(text, count=count):
            if len(out) >= count:
                break
            if b not in out:
                out.append(b)
    for filler in FILLER_BULLETS:
        if len(out) >= count:
            break
        if filler not in out:
            out.append(filler)
    return out


class NullBulletGenerator:
    """Offline generator: extractive bullets only."""

    def generate(self, article: Article) -> List[str]:
        return naive_bullets(article.article_text)


class OpenAIBulletGenerator:
    def __init__(self, *, api_key: Optional[str], model: Optional[str], timeout_sec: float,
                 max_input_chars: int = 7000) -> None:
        try:
            from openai import OpenAI  # type: ignore
        except ImportError as e:  # pragma: no cover - optional dep
            raise ConfigError("openai package is required for OpenAI generation. Install with `pip install openai`.") from e
        key = api_key or os.getenv("OPENAI_API_KEY")
        if not key:
            raise ConfigError("OPENAI_API_KEY not set.")
        self._client = OpenAI(api_key=key)
        self._model = model or os.getenv("OPENAI_MODEL", "gpt-4o")
        self._timeout = timeout_sec
        self._max_input_chars = max_input_chars

    def generate(self, article: Article) -> List[str]:
        try:
            resp = self._client.chat.completions.create(
                model=self._model,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_user_prompt(article, self._max_input_chars)},
                ],
                timeout=self._timeout,
            )
            content = resp.choices[0].message.content if resp and resp.choices else None
        except Exception as e:
            raise GenerationError(f"OpenAI request failed: {e}") from e
        return parse_bullets(content)


class GeminiBulletGenerator:
    def __init__(self, *, api_key: Optional[str], model: Optional[str], timeout_sec: float,
                 max_input_chars: int = 7000) -> None:
        try:
            import google.generativeai as genai  # type: ignore
        except ImportError as e:  # pragma: no cover - optional dep
            raise ConfigError("google-generativeai package is required for Gemini generation. Install with `pip install google-generativeai`.") from e
        key = api_key or os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY")
        if not key:
            raise ConfigError("GOOGLE_API_KEY (or GEMINI_API_KEY) not set.")
        genai.configure(api_key=key)
        self._model_name = model or os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
        self._timeout = timeout_sec
        self._max_input_chars = max_input_chars
        self._genai = genai

    def generate(self, article: Article) -> List[str]:
        prompt = f"{SYSTEM_PROMPT}\n\n{build_user_prompt(article, self._max_input_chars)}"
        try:
            model = self._genai.GenerativeModel(
                self._model_name,
                generation_config={"response_mime_type": "application/json"},
            )
            resp = model.generate_content(prompt, request_options={"timeout": self._timeout})
            text = getattr(resp, "text", None)
        except Exception as e:
            raise GenerationError(f"Gemini request failed: {e}") from e
        return parse_bullets(text)


def build_generator(options: Optional[GenerateOptions]) -> BulletGenerator:
    if not options:
        return NullBulletGenerator()
    provider = (options.provider or "").lower()
    if provider == "openai":
        return OpenAIBulletGenerator(api_key=options.api_key, model=options.model,
                                     timeout_sec=options.timeout_sec, max_input_chars=options.max_input_chars)
    if provider in {"gemini", "google", "googleai"}:
        return GeminiBulletGenerator(api_key=options.api_key, model=options.model,
                                     timeout_sec=options.timeout_sec, max_input_chars=options.max_input_chars)
    if provider in {"none", "null", "offline"}:
        return NullBulletGenerator()
    raise ConfigError(f"Unknown generation provider: {options.provider}")
