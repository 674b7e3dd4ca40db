"""Default engine options taken from the environment.

The hosting application normally passes options per call; these are used
when it does not (HTTP requests without ``options``, the CLI defaults).
Logging for the HTTP service is configured here as well.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from auto_nbsp.env import env_bool, env_json_object, env_str, env_truthy
from auto_nbsp.models import NbspOptions, RuleOptions

ENV_PREFIX = "AUTO_NBSP_"
DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent / "output" / "logs"


def _rule_env_name(field_name: str) -> str:
    return f"{ENV_PREFIX}RULE_{field_name.upper()}"


def default_options() -> NbspOptions:
    base = NbspOptions()
    rules = {
        name: env_bool(_rule_env_name(name), bool(getattr(base.rules, name)))
        for name in RuleOptions.model_fields
    }
    return NbspOptions(
        language=env_str(f"{ENV_PREFIX}LANGUAGE", base.language),
        custom_replacements=env_json_object(f"{ENV_PREFIX}CUSTOM_REPLACEMENTS") or {},
        rules=RuleOptions(**rules),
        debug=env_truthy(f"{ENV_PREFIX}DEBUG"),
        marker=env_str(f"{ENV_PREFIX}MARKER", base.marker),
    )


@dataclass(frozen=True)
class LogSettings:
    log_dir: Path
    level: str | None = None
    file_enabled: bool = True
    max_bytes: int = 5 * 1024 * 1024
    backups: int = 3

    @property
    def log_file(self) -> Path:
        return self.log_dir / "auto-nbsp.log"


def log_settings() -> LogSettings:
    """Log file location and root level for the HTTP service.

    An unknown ``AUTO_NBSP_LOG_LEVEL`` raises ``ValueError`` at startup.
    """

    level = env_str(f"{ENV_PREFIX}LOG_LEVEL").upper() or None
    if level is not None and level not in logging.getLevelNamesMapping():
        raise ValueError(f"{ENV_PREFIX}LOG_LEVEL: unknown level {level!r}")
    return LogSettings(
        log_dir=Path(env_str(f"{ENV_PREFIX}LOG_DIR", str(DEFAULT_LOG_DIR))),
        level=level,
        file_enabled=not env_truthy(f"{ENV_PREFIX}DISABLE_FILE_LOG"),
    )
