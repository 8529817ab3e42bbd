from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from threading import RLock

logger = logging.getLogger(__name__)


DEFAULT_CATEGORIES = [
    "Fruit",
    "Objet très utile sur une île déserte",
    "Hobby",
    "Sport un peu niche",
    "Arme",
    "Site internet",
]


def clean_categories(raw: object) -> list[str]:
    """Trimmed, non-empty, de-duplicated category names in input order."""
    if not isinstance(raw, (list, tuple)):
        return []
    out: list[str] = []
    for item in raw:
        if not isinstance(item, str):
            continue
        name = item.strip()
        if name and name not in out:
            out.append(name)
    return out


def pick_random(items: list[str], count: int, rng: random.Random | None = None) -> list[str]:
    count = max(0, min(count, len(items)))
    return (rng or random).sample(list(items), count)


class CategorySource:
    """Default categories plus an optional pool read from a JSON file.

    The pool file may hold a bare array or an object with a ``categories``
    array. Reading it never raises: a missing or broken file falls back to
    the defaults, and the result is cached after the first load.
    """

    def __init__(self, pool_file: str | Path | None = None, defaults: list[str] | None = None):
        self.pool_file = Path(pool_file) if pool_file else None
        self.defaults = list(defaults or DEFAULT_CATEGORIES)
        self._pool: list[str] | None = None
        self._lock = RLock()

    def default_list(self) -> list[str]:
        return list(self.defaults)

    def pool(self) -> list[str]:
        with self._lock:
            if self._pool is None:
                self._pool = self._load_pool() or self.default_list()
            return list(self._pool)

    def sample(self, count: int, rng: random.Random | None = None) -> list[str]:
        return pick_random(self.pool(), count, rng=rng)

    def _load_pool(self) -> list[str]:
        if self.pool_file is None:
            return []
        try:
            data = json.loads(self.pool_file.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Could not read categories file %s: %s", self.pool_file, exc)
            return []

        if isinstance(data, dict):
            data = data.get("categories")
        pool = clean_categories(data)
        if not pool:
            logger.warning("Categories file %s has no usable entries", self.pool_file)
        else:
            logger.info("Loaded %d categories from %s", len(pool), self.pool_file)
        return pool
