from __future__ import annotations

import logging
import os
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

_ENV_PREFIX = "STANDINGS_"


class Settings(BaseModel):
    podium_places: int = Field(default=3, ge=0)
    unranked_label: str = "-"
    unavailable_label: str = "N/A"
    time_format: str = "%H:%M"
    # 提出時刻の表示タイムゾーン（IANA名）。入力の時刻は UTC として保持する。
    display_timezone: str = "UTC"
    max_workers: int = Field(default=4, ge=1)
    log_level: str = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, v: object) -> str:
        if not isinstance(v, str):
            raise ValueError("log_level must be a string")
        s = v.strip().upper()
        if not isinstance(logging.getLevelName(s), int):
            raise ValueError(f"unknown log level: {v}")
        return s

    @field_validator("display_timezone", mode="before")
    @classmethod
    def _known_timezone(cls, v: object) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("display_timezone must be a non-empty string")
        s = v.strip()
        try:
            ZoneInfo(s)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone: {v}") from exc
        return s

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.display_timezone)

    @classmethod
    def from_env(cls, repo_root: Path | None = None) -> "Settings":
        if repo_root is not None:
            _load_dotenv(repo_root)
        values: dict[str, str] = {}
        for name in cls.model_fields:
            raw = os.environ.get(_ENV_PREFIX + name.upper())
            if raw is not None and raw.strip():
                values[name] = raw.strip()
        return cls.model_validate(values)


def _load_dotenv(repo_root: Path) -> None:
    env_path = repo_root / "config" / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path, override=False)


def configure_logging(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger("contest_standings")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    return logger
