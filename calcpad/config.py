"""Runtime settings for calcpad.

Read from CALCPAD_* environment variables; CLI options override them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_ERROR_TEXT = "Error"
DEFAULT_PLACEHOLDER = "0"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    """Display and logging settings for one calculator session."""

    error_text: str = DEFAULT_ERROR_TEXT
    placeholder: str = DEFAULT_PLACEHOLDER
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Settings:
        """Build settings from the environment.

        Empty values fall back to the defaults so the display text can never
        end up empty.
        """
        env = os.environ if environ is None else environ
        return cls(
            error_text=env.get("CALCPAD_ERROR_TEXT") or DEFAULT_ERROR_TEXT,
            placeholder=env.get("CALCPAD_PLACEHOLDER") or DEFAULT_PLACEHOLDER,
            log_level=(env.get("CALCPAD_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        )
