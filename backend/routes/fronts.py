"""Fronts document endpoints: fetch, wholesale save, and server-side toggles."""

import logging

from fastapi import APIRouter, HTTPException

from backend import storage

from .models import SaveFronts, TogglePortent, ToggleSecret

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/fronts")
async def get_fronts():
    """Get the whole fronts document."""
    return {"fronts": storage.get_fronts()}


@router.post("/fronts/save")
async def save_fronts(body: SaveFronts):
    """Replace every front with the posted list."""
    storage.save_fronts(body.fronts)
    logger.info("Saved %d fronts", len(body.fronts))
    return {"ok": True}


@router.post("/fronts/secret/toggle")
async def toggle_secret(body: ToggleSecret):
    """Flip a secret between revealed and hidden."""
    try:
        secret = storage.toggle_secret(body.danger_id, body.secret_id)
    except KeyError as e:
        raise HTTPException(404, str(e.args[0]))
    return {"secret": secret}


@router.post("/fronts/portent/toggle")
async def toggle_portent(body: TogglePortent):
    """Flip a grim portent between completed and pending."""
    try:
        portent = storage.toggle_portent(body.danger_id, body.portent_id)
    except KeyError as e:
        raise HTTPException(404, str(e.args[0]))
    return {"portent": portent}
