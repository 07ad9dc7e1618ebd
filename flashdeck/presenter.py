"""Slideshow state machine.

The slideshow shows one card at a time: a card is visible for
`display_duration` seconds, then fades out for `transition_duration`
seconds before the next one appears. The deck is shuffled when it is loaded
and again every time the cycle wraps back to the first card.

Timing is driven from outside: `start` and `advance` return how long to wait
before the next call, and `run` is the plain blocking loop used by the
Streamlit app.
"""

import enum
import logging
import random
import time
from typing import Callable, List, MutableSequence, Optional, TypeVar

from .config import DISPLAY_DURATION, TRANSITION_DURATION
from .dataset import CardStore, DatasetUnavailableError
from .models import Card

logger = logging.getLogger(__name__)

T = TypeVar("T")


def shuffle(items: MutableSequence[T], rng: Optional[random.Random] = None) -> MutableSequence[T]:
    """Fisher-Yates shuffle in place; returns `items` for chaining."""
    rand = rng or random
    for i in range(len(items) - 1, 0, -1):
        j = rand.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


class SlideState(str, enum.Enum):
    LOADING = "loading"
    DISPLAYING = "displaying"
    FADING_OUT = "fading_out"
    ERROR = "error"


class Slideshow:
    def __init__(self,
                 display_duration: float = DISPLAY_DURATION,
                 transition_duration: float = TRANSITION_DURATION,
                 rng: Optional[random.Random] = None):
        self.display_duration = display_duration
        self.transition_duration = transition_duration
        self.rng = rng
        self.state = SlideState.LOADING
        self.cards: List[Card] = []
        self.index = 0
        self.origin: Optional[str] = None
        self.error: Optional[str] = None

    @property
    def current(self) -> Optional[Card]:
        if not self.cards or self.state in (SlideState.LOADING, SlideState.ERROR):
            return None
        return self.cards[self.index]

    @property
    def visible(self) -> bool:
        return self.state == SlideState.DISPLAYING

    def start(self, loader: Callable[[], CardStore]) -> Optional[float]:
        """Load the dataset and show the first card.

        Returns:
            float | None: Seconds until `advance` should be called, or None
            when loading failed and the slideshow is in the error state.
        """
        if self.state != SlideState.LOADING:
            raise RuntimeError(f"Slideshow already started (state: {self.state.value})")
        try:
            store = loader()
            if not len(store):
                raise DatasetUnavailableError("The flash card collection is empty.")
        except DatasetUnavailableError as exc:
            logger.error("Flash cards could not be loaded: %s", exc)
            self.state = SlideState.ERROR
            self.error = str(exc)
            return None

        self.cards = list(shuffle(list(store.cards), self.rng))
        self.origin = store.origin
        self.index = 0
        self.state = SlideState.DISPLAYING
        logger.info("Loaded %d flash cards (%s)", len(self.cards), store.origin)
        return self.display_duration

    def advance(self) -> Optional[float]:
        """Move to the next phase of the display/fade cycle.

        Returns:
            float | None: Seconds until the next call, or None once the
            slideshow is in the error state.
        """
        if self.state == SlideState.DISPLAYING:
            self.state = SlideState.FADING_OUT
            return self.transition_duration

        if self.state == SlideState.FADING_OUT:
            self.index = (self.index + 1) % len(self.cards)
            if self.index == 0:
                self.cards = list(shuffle(self.cards[:], self.rng))
            self.state = SlideState.DISPLAYING
            return self.display_duration

        if self.state == SlideState.ERROR:
            return None

        raise RuntimeError("Slideshow has not been started")

    def run(self,
            loader: Callable[[], CardStore],
            render: Callable[["Slideshow"], None],
            sleep: Callable[[float], None] = time.sleep,
            max_steps: Optional[int] = None) -> None:
        """Blocking display loop.

        `render` is called after every state change; each phase is scheduled
        only after the previous one has elapsed. `max_steps` bounds the
        number of `advance` calls (None loops forever).
        """
        delay = self.start(loader)
        render(self)
        steps = 0
        while delay is not None and (max_steps is None or steps < max_steps):
            sleep(delay)
            delay = self.advance()
            render(self)
            steps += 1
