"""
Slide deck and the consumer that turns gesture events into presentation actions.
"""
import logging
import time
from typing import Callable, List, Optional, Sequence, Tuple

from .ai_service import AIDispatcher
from .types import AIResponse, FrameResult, GestureTriggered, SwipeDetected, command_for

logger = logging.getLogger(__name__)


class SlideDeck:
    """Ordered slides with a clamped current position."""

    def __init__(self, slides: Sequence[str]):
        if not slides:
            raise ValueError("A slide deck needs at least one slide")
        self.slides: List[str] = list(slides)
        self.current_index = 0

    def __len__(self) -> int:
        return len(self.slides)

    @property
    def current_text(self) -> str:
        return self.slides[self.current_index]

    def go_to(self, index: int) -> bool:
        """Jump to a slide; out-of-range indexes are ignored."""
        if not 0 <= index < len(self.slides) or index == self.current_index:
            return False
        self.current_index = index
        return True

    def navigate(self, step: int) -> bool:
        """Move by step slides, clamped to the deck. Returns True if the slide changed."""
        target = max(0, min(len(self.slides) - 1, self.current_index + step))
        return self.go_to(target)

    def set_current_text(self, text: str) -> None:
        self.slides[self.current_index] = text


class PresentationController:
    """
    Consumes gesture events for a slide deck.

    Swipes move the current slide; held poses ask the text-generation service
    about the current slide. on_request_finished runs after every request,
    including cancelled ones, so the caller can require a fresh hold.

    Swipe notices and responses are shown for a limited time, measured with
    clock (time.monotonic by default).
    """

    def __init__(self, deck: SlideDeck, dispatcher: AIDispatcher,
                 on_request_finished: Optional[Callable[[], None]] = None,
                 swipe_notice_ms: int = 2000,
                 response_timeout_ms: int = 10000,
                 clock: Callable[[], float] = time.monotonic):
        self.deck = deck
        self.dispatcher = dispatcher
        self.dispatcher.on_response = self._on_response
        self.dispatcher.on_finished = self._on_finished
        self.on_request_finished = on_request_finished
        self.swipe_notice_s = swipe_notice_ms / 1000.0
        self.response_timeout_s = response_timeout_ms / 1000.0
        self.clock = clock
        self.last_response: Optional[AIResponse] = None
        self._response_until = 0.0
        self._notice: Optional[Tuple[str, float]] = None

    @property
    def is_processing(self) -> bool:
        return self.dispatcher.busy

    def handle_frame(self, result: FrameResult) -> None:
        for swipe in result.swipes:
            self.handle_swipe(swipe)
        for trigger in result.triggers:
            self.handle_trigger(trigger)

    def handle_swipe(self, event: SwipeDetected) -> bool:
        step = 1 if event.direction == "right" else -1
        changed = self.deck.navigate(step)
        if changed:
            self.last_response = None
            text = "Swipe Right - Next Slide" if step > 0 else "Swipe Left - Previous Slide"
            self._notice = (text, self.clock() + self.swipe_notice_s)
            logger.info(f"Slide {self.deck.current_index + 1}/{len(self.deck)} ({event.direction} swipe)")
        return changed

    def handle_trigger(self, event: GestureTriggered) -> bool:
        command = command_for(event.kind)
        if command is None:
            return False
        slide_text = self.deck.current_text
        if not slide_text.strip():
            logger.info(f"Current slide is empty, ignoring {command}")
            return False
        return self.dispatcher.dispatch(command, slide_text)

    def swipe_notice(self, now: Optional[float] = None) -> Optional[str]:
        """Notice for the last slide change, until it expires."""
        if self._notice is None:
            return None
        text, until = self._notice
        if (self.clock() if now is None else now) >= until:
            self._notice = None
            return None
        return text

    def visible_response(self, now: Optional[float] = None) -> Optional[AIResponse]:
        """Last response, until it times out or the slide changes."""
        if self.last_response is None:
            return None
        if (self.clock() if now is None else now) >= self._response_until:
            self.last_response = None
        return self.last_response

    def _on_response(self, response: AIResponse) -> None:
        self.last_response = response
        self._response_until = self.clock() + self.response_timeout_s

    def _on_finished(self) -> None:
        if self.on_request_finished is not None:
            self.on_request_finished()
