"""Reference fronts store: the REST endpoints a FrontManager talks to.

Fronts live in `<data dir>/fronts.json`. The data dir comes from the caller,
then `DATA_DIR` (read from `.env` when present), then `./data`.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

from backend import storage
from backend.routes import router

PROJECT_ROOT = Path(__file__).parent.parent

load_dotenv(PROJECT_ROOT / ".env")


def _store_dir(data_dir: Path | None) -> Path:
    if data_dir is not None:
        return data_dir
    return Path(os.getenv("DATA_DIR") or PROJECT_ROOT / "data")


def create_app(data_dir: Path | None = None) -> FastAPI:
    storage.init_storage(_store_dir(data_dir))
    store = FastAPI(title="Fronts Store", description="Fronts, dangers, portents and secrets")
    store.include_router(router, prefix="/api")
    return store


app = create_app()
