from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Set

from .storage import PathLike, read_artifact

DEFAULT_HISTORY_LIMIT = 200

_EDGE = ".,;:!\"'“”‘’()"


def opener(text: str) -> str:
    """Lowercased first two words; the repetition key for teasers."""
    return " ".join((text or "").strip().split()[:2]).lower()


def first_word(text: str) -> str:
    words = (text or "").strip().split()
    return words[0].lower().strip(_EDGE) if words else ""


def seed_openers(records: Iterable[Any], limit: int = DEFAULT_HISTORY_LIMIT) -> List[str]:
    """Openers of bullet #3 from the first `limit` records of a prior artifact."""
    out: List[str] = []
    for i, rec in enumerate(records):
        if i >= limit:
            break
        if not isinstance(rec, dict):
            continue
        bullets = rec.get("bullets")
        if not isinstance(bullets, list) or len(bullets) < 3 or not isinstance(bullets[2], str):
            continue
        op = opener(bullets[2])
        if op:
            out.append(op)
    return out


@dataclass
class HistoryState:
    """
    Run-scoped repetition state, built once per run and passed by reference.

    recent_openers starts with the seed from the previous artifact and grows
    as teasers are accepted; nothing is removed during a run.
    """
    recent_openers: List[str] = field(default_factory=list)
    first_word_counts: Counter = field(default_factory=Counter)
    used_openers: Set[str] = field(default_factory=set)

    @classmethod
    def from_artifact(cls, path: PathLike, limit: int = DEFAULT_HISTORY_LIMIT) -> "HistoryState":
        return cls(recent_openers=seed_openers(read_artifact(path), limit))

    def has_opener(self, op: str) -> bool:
        return op in self.used_openers or op in self.recent_openers

    def first_word_count(self, word: str) -> int:
        return self.first_word_counts[word]

    def record(self, text: str) -> str:
        """Register an accepted teaser and return its opener."""
        op = opener(text)
        if op:
            self.recent_openers.append(op)
            self.used_openers.add(op)
        word = first_word(text)
        if word:
            self.first_word_counts[word] += 1
        return op
