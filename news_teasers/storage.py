from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Iterable, List, Union

from .models import Result

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_artifact(path: PathLike) -> List[Any]:
    """
    Load a previous run's artifact.

    A missing, unreadable or non-list file yields an empty list; the first run
    of a deployment has no artifact yet.
    """
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return []
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable artifact %s: %s", p, e)
        return []
    if not isinstance(data, list):
        logger.warning("Ignoring artifact %s: expected a JSON array", p)
        return []
    return data


def write_artifact(path: PathLike, results: Iterable[Result]) -> Path:
    """Overwrite the artifact with this run's results (atomic replace)."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_name(p.name + ".tmp")
    records = [r.to_dict() for r in results]
    with tmp.open("w", encoding="utf-8") as f:
        json.dump(records, f, ensure_ascii=False, indent=2)
    os.replace(tmp, p)
    return p
