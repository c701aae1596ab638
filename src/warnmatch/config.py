"""Environment-based configuration."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

from warnmatch.rewriter import (
    ClassNameRewriter,
    MappingRewriter,
    identity_rewriter,
)

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Reads from .env file and WARNMATCH_* environment variables."""

    # Matching
    exact_pattern_match: bool = True
    compare_priorities: bool = False

    # Class renames: "old.Name=new.Name,other.Old=other.New"
    class_renames: Annotated[dict[str, str], NoDecode] = {}
    renames_file: Path | None = None

    # Logging
    log_level: str = "INFO"

    @field_validator("class_renames", mode="before")
    @classmethod
    def _parse_renames(cls, v: Any) -> Any:
        """Accept comma-separated ``old=new`` pairs or a mapping."""
        if not isinstance(v, str):
            return v
        renames: dict[str, str] = {}
        dupes: list[str] = []
        for pair in v.split(","):
            if not pair.strip():
                continue
            old, sep, new = pair.partition("=")
            old, new = old.strip(), new.strip()
            if not sep or not old or not new:
                raise ValueError(
                    f"Malformed class rename {pair.strip()!r}, "
                    "expected old=new"
                )
            if old in renames:
                dupes.append(old)
            renames[old] = new
        if dupes:
            logger.warning(
                "Duplicate class renames in WARNMATCH_CLASS_RENAMES "
                "(last one wins): %s",
                ", ".join(dupes),
            )
        return renames

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}"
            )
        return level

    def load_renames(self) -> dict[str, str]:
        """Renames from ``renames_file`` overlaid with ``class_renames``."""
        renames: dict[str, str] = {}
        if self.renames_file is not None:
            renames.update(read_renames_file(self.renames_file))
        renames.update(self.class_renames)
        return renames

    def rewriter(self) -> ClassNameRewriter:
        renames = self.load_renames()
        if not renames:
            return identity_rewriter
        logger.debug("Loaded %d class renames", len(renames))
        return MappingRewriter(renames)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "WARNMATCH_",
        "extra": "ignore",
    }


def read_renames_file(path: Path) -> dict[str, str]:
    """Read a JSON ``{"old.Name": "new.Name"}`` rename map."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str)
        for k, v in data.items()
    ):
        raise ValueError(
            f"{path}: rename map must be a JSON object of strings"
        )
    return data
