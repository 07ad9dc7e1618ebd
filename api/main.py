"""flashdeck data API.

This FastAPI service serves the generated flash card dataset so the slideshow
can fetch a fresher copy than the one bundled at load time. Responses are
never cached.

Environment variables:
    FLASHDECK_BUILD_DIR: Directory holding the generated artifacts.
        Default: 'static/web/build'.
    FLASHDECK_CORS_ORIGINS: Optional CSV of allowed origins for CORS.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware

from flashdeck import __version__
from flashdeck.config import BUILD_DIR, CORS_ORIGINS, DATA_JSON_NAME, DATA_SCRIPT_NAME

# --------------------------------------------------------------------------- #
# Configuration & app setup
# --------------------------------------------------------------------------- #

logger = logging.getLogger("uvicorn.error")

NO_STORE = {"Cache-Control": "no-store"}

app = FastAPI(title="flashdeck API", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS or ["*"],  # for LAN/dev; tighten for production
    allow_credentials=False,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)

# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #


def _artifact(name: str) -> Path:
    """Return the path of a generated artifact.

    Raises:
        HTTPException: 404 if the dataset has not been built yet.
    """
    path = Path(BUILD_DIR) / name
    if not path.exists():
        raise HTTPException(status_code=404, detail="Dataset not built; run flashdeck-build")
    return path


def _load_cards() -> List[Dict[str, Any]]:
    """Read the JSON dataset.

    Raises:
        HTTPException: 404 when missing, 500 when unreadable or corrupt.
    """
    path = _artifact(DATA_JSON_NAME)
    try:
        cards = json.loads(path.read_text(encoding="utf-8"))
    except Exception as exc:
        logger.exception("Corrupt dataset file %s", path)
        raise HTTPException(status_code=500, detail="Corrupt dataset file") from exc
    if not isinstance(cards, list):
        logger.error("Dataset file %s does not hold a list", path)
        raise HTTPException(status_code=500, detail="Corrupt dataset file")
    return cards


# --------------------------------------------------------------------------- #
# Routes
# --------------------------------------------------------------------------- #


@app.get(f"/{DATA_JSON_NAME}")
def get_dataset_json() -> Response:
    """Serve the dataset as a JSON array (any `refresh` query is ignored)."""
    path = _artifact(DATA_JSON_NAME)
    return Response(
        content=path.read_bytes(),
        media_type="application/json",
        headers=NO_STORE,
    )


@app.get(f"/{DATA_SCRIPT_NAME}")
def get_dataset_script() -> Response:
    """Serve the bundled dataset script for pages that load it directly."""
    path = _artifact(DATA_SCRIPT_NAME)
    return Response(
        content=path.read_bytes(),
        media_type="application/javascript",
        headers=NO_STORE,
    )


@app.get("/api/cards/{card_id}", response_model=Dict[str, Any])
def get_card(card_id: str) -> Dict[str, Any]:
    """Look up a single card by id.

    Errors:
        404: Unknown id or dataset not built.
        500: Corrupt dataset file.
    """
    for card in _load_cards():
        if card.get("id") == card_id:
            return card
    raise HTTPException(status_code=404, detail="Card not found")


@app.get("/health")
def health() -> Dict[str, Any]:
    path = Path(BUILD_DIR) / DATA_JSON_NAME
    if not path.exists():
        return {"ok": True, "built": False, "cards": 0}
    return {"ok": True, "built": True, "cards": len(_load_cards())}
