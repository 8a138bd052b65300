"""Client settings, read from the environment (and a repo-root .env file).

  FRONTS_API_BASE          Base URL of the fronts store (default http://localhost:3000)
  FRONTS_TIMEOUT           HTTP timeout in seconds (default 30)
  FRONTS_CONFIRM_DELETIONS Comma-separated entity kinds whose deletion asks
                           for confirmation first (default "danger").
                           Kinds: front-item, danger, portent, secret, location
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

ROOT = Path(__file__).parent.parent

DEFAULT_API_BASE = "http://localhost:3000"


class Settings(BaseModel):
    api_base: str = DEFAULT_API_BASE
    timeout: float = 30.0
    confirm_deletions: frozenset[str] = Field(default_factory=lambda: frozenset({"danger"}))


def _parse_kinds(raw: str) -> frozenset[str]:
    return frozenset(k.strip() for k in raw.split(",") if k.strip())


def load_settings(env_file: Path | None = None) -> Settings:
    """Build Settings from environment variables after loading .env."""
    load_dotenv(env_file or ROOT / ".env")
    return Settings(
        api_base=os.getenv("FRONTS_API_BASE", DEFAULT_API_BASE),
        timeout=float(os.getenv("FRONTS_TIMEOUT", "30")),
        confirm_deletions=_parse_kinds(os.getenv("FRONTS_CONFIRM_DELETIONS", "danger")),
    )
