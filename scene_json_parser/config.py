"""
Runtime settings for the Scene JSON Parser.

Sources, highest priority first:
1) real environment variables
2) a `.env` file in the project root (loaded without overriding 1)
3) the defaults below

The API key is read here and nowhere else; keep `.env` out of version control.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

DEFAULT_FAST_MODEL = "gemini-2.5-flash"
DEFAULT_THINKING_MODEL = "gemini-3-pro-preview"
DEFAULT_THINKING_BUDGET = 32768
DEFAULT_ARCHIVE_NAME = "scene_assets.zip"


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str] = None
    fast_model: str = DEFAULT_FAST_MODEL
    thinking_model: str = DEFAULT_THINKING_MODEL
    thinking_budget: int = DEFAULT_THINKING_BUDGET
    archive_name: str = DEFAULT_ARCHIVE_NAME
    export_dir: Optional[str] = None
    log_level: str = "INFO"


def _env(name: str, default: str = "") -> str:
    return (os.environ.get(name, "") or "").strip() or default


def _load_dotenv_if_present(project_root: Path) -> None:
    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=str(env_path), override=False)


def load_settings(project_root: Optional[str] = None) -> Settings:
    root = Path(project_root or os.getcwd()).resolve()
    _load_dotenv_if_present(root)

    raw_budget = _env("SCENE_PARSER_THINKING_BUDGET", str(DEFAULT_THINKING_BUDGET))
    try:
        budget = int(raw_budget)
    except ValueError:
        raise ConfigurationError(f"SCENE_PARSER_THINKING_BUDGET must be an integer, got {raw_budget!r}")

    return Settings(
        api_key=_env("GEMINI_API_KEY") or _env("API_KEY") or None,
        fast_model=_env("SCENE_PARSER_FAST_MODEL", DEFAULT_FAST_MODEL),
        thinking_model=_env("SCENE_PARSER_THINKING_MODEL", DEFAULT_THINKING_MODEL),
        thinking_budget=budget,
        archive_name=_env("SCENE_PARSER_ARCHIVE_NAME", DEFAULT_ARCHIVE_NAME),
        export_dir=_env("SCENE_PARSER_EXPORT_DIR") or None,
        log_level=_env("SCENE_PARSER_LOG_LEVEL", "INFO").upper(),
    )


def require_api_key(settings: Settings) -> str:
    if not settings.api_key:
        raise ConfigurationError("Missing GEMINI_API_KEY (from .env or env)")
    return settings.api_key
