"""Loading the card dataset for the slideshow.

A fresh copy is fetched from the data API first; if that fails for any
reason the copy bundled with the build is used instead. Neither source is
ever executed: both are parsed as JSON.
"""

import json
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

import requests

from .config import BUILD_DIR, DATA_SCRIPT_NAME, DATA_URL, DATA_VARIABLE, FETCH_TIMEOUT
from .models import Card

logger = logging.getLogger(__name__)


class DatasetUnavailableError(RuntimeError):
    """Neither the fetched nor the bundled dataset holds any cards."""


@dataclass(frozen=True)
class CardStore:
    cards: Tuple[Card, ...]
    origin: str

    def __len__(self) -> int:
        return len(self.cards)


def _non_empty_list(data) -> Optional[List[Card]]:
    if isinstance(data, list) and data and all(isinstance(card, dict) for card in data):
        return data
    return None


def fetch_latest_cards(url: str = DATA_URL, timeout: Optional[float] = FETCH_TIMEOUT) -> Optional[List[Card]]:
    """Fetch the current dataset from the data API.

    The request carries a ``refresh`` query parameter and a no-store cache
    directive so no intermediate cache answers it.

    Args:
        url: Location of the JSON dataset.
        timeout: Seconds to wait for the server; None waits indefinitely.

    Returns:
        list[dict] | None: The cards, or None on any failure or empty result.
    """
    try:
        resp = requests.get(
            url,
            params={"refresh": int(time.time() * 1000)},
            headers={"Cache-Control": "no-store"},
            timeout=timeout,
        )
        resp.raise_for_status()
        cards = _non_empty_list(resp.json())
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Falling back to bundled flash card dataset: %s", exc)
        return None

    if cards is None:
        logger.warning("Fetched flash card dataset is empty or malformed; using bundled copy.")
    return cards


def parse_dataset_script(script_text: str) -> Optional[List[Card]]:
    """Recover the card array from the text of a generated dataset script.

    The value assigned to ``window.FLASH_CARD_DATA`` is decoded as JSON.

    Returns:
        list[dict] | None: The cards, or None if the text holds no usable array.
    """
    _, sep, value = script_text.partition(f"{DATA_VARIABLE} =")
    if not sep:
        logger.warning("Dataset script does not assign %s.", DATA_VARIABLE)
        return None
    value = value.strip()
    if value.endswith(";"):
        value = value[:-1]
    try:
        data = json.loads(value)
    except ValueError as exc:
        logger.warning("Unable to parse flash card dataset script: %s", exc)
        return None
    return _non_empty_list(data)


def load_bundled_cards(path: Union[str, Path] = BUILD_DIR / DATA_SCRIPT_NAME) -> Optional[List[Card]]:
    path = Path(path)
    if not path.exists():
        return None
    try:
        script_text = path.read_text(encoding="utf-8")
    except (OSError, ValueError) as exc:
        logger.warning("Unable to read bundled flash card dataset %s: %s", path, exc)
        return None
    return parse_dataset_script(script_text)


def load_dataset(url: str = DATA_URL,
                 bundled_path: Union[str, Path] = BUILD_DIR / DATA_SCRIPT_NAME,
                 timeout: Optional[float] = FETCH_TIMEOUT) -> CardStore:
    """Return the freshest available dataset.

    The bundled copy is read before the fetch starts, mirroring a page that
    ships with the dataset script already loaded.

    Raises:
        DatasetUnavailableError: If both sources are missing or empty.
    """
    bundled = load_bundled_cards(bundled_path)
    latest = fetch_latest_cards(url, timeout)
    if latest:
        return CardStore(cards=tuple(latest), origin="fetched")
    if bundled:
        return CardStore(cards=tuple(bundled), origin="bundled")
    raise DatasetUnavailableError("The flash card dataset is unavailable.")
