from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from auto_nbsp.formatting.catalog import RuleCatalog
from auto_nbsp.formatting.config import NbspConfig
from auto_nbsp.formatting.rules import Pass, apply_rules, build_passes

logger = logging.getLogger(__name__)


@dataclass
class NbspResult:
    text: str
    stats: dict[str, int]


class NbspEngine:
    """Rewrites eligible spaces into the configured marker.

    All patterns are compiled in ``__init__``; afterwards the engine holds
    read-only data only, so one instance can serve concurrent callers.
    """

    def __init__(self, config: NbspConfig | None = None) -> None:
        self.config = config or NbspConfig()
        self.catalog = RuleCatalog(self.config.custom_replacements, language=self.config.language)
        self._passes: tuple[Pass, ...] = build_passes(self.config, self.catalog)
        logger.debug(
            "nbsp engine ready: language=%s passes=%s",
            self.config.language,
            ",".join(p.name for p in self._passes) or "-",
        )

    @property
    def passes(self) -> tuple[str, ...]:
        return tuple(p.name for p in self._passes)

    def replace_with_stats(self, text: str) -> NbspResult:
        if not text or not self._passes:
            return NbspResult(text=text, stats={})
        out, stats = apply_rules(text, self._passes)
        return NbspResult(text=out, stats=stats)

    def replace(self, text: str) -> str:
        return self.replace_with_stats(text).text


@lru_cache(maxsize=32)
def engine_for(config: NbspConfig) -> NbspEngine:
    """Shared engine per distinct configuration."""

    return NbspEngine(config)


def nbsp(text: str, config: NbspConfig | None = None) -> str:
    return engine_for(config or NbspConfig()).replace(text)
