"""
Text-generation client and the single-flight dispatcher that calls it.
"""
import asyncio
import logging
from typing import Callable, Optional

import google.generativeai as genai

from .types import AIResponse, Command, TextGenerator

logger = logging.getLogger(__name__)


PROMPTS = {
    "summarize": (
        "You are helping a presenter. Summarize the key takeaway of this slide "
        "in one or two short sentences.\n\nSlide:\n{slide}"
    ),
    "ask-question": (
        "You are an attentive audience member. Based on this slide, write the single "
        "most likely question the audience would ask. Reply with the question only."
        "\n\nSlide:\n{slide}"
    ),
}


def build_prompt(command: str, slide_text: str) -> str:
    """Prompt for a slide command; ValueError for unknown commands."""
    try:
        template = PROMPTS[command]
    except KeyError:
        raise ValueError(f"Unknown command: {command}") from None
    return template.format(slide=slide_text.strip())


class GeminiTextGenerator:
    """Answers slide commands with Google Gemini."""

    def __init__(self, model_name: str, api_key: str):
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self.model = genai.GenerativeModel(model_name)

    async def generate(self, command: Command, slide_text: str) -> str:
        prompt = build_prompt(command, slide_text)
        logger.info(f"🔍 Asking {self.model_name}: {command}")
        response = await self.model.generate_content_async(prompt)
        text = (response.text or "").strip()
        if not text:
            raise RuntimeError(f"Empty response from {self.model_name}")
        return text


class AIDispatcher:
    """
    Runs at most one text-generation request at a time.

    Requests run as asyncio tasks so the frame loop never waits on them.
    Results, including failures, are delivered through on_response.
    on_finished runs after every request, cancelled ones included.
    """

    def __init__(self, generator: TextGenerator,
                 on_response: Optional[Callable[[AIResponse], None]] = None,
                 fallback_message: str = "Error processing request. Is the text-generation service reachable?",
                 on_finished: Optional[Callable[[], None]] = None):
        self.generator = generator
        self.on_response = on_response
        self.on_finished = on_finished
        self.fallback_message = fallback_message
        self._task: Optional[asyncio.Task] = None

    @property
    def busy(self) -> bool:
        return self._task is not None and not self._task.done()

    def dispatch(self, command: Command, slide_text: str) -> bool:
        """
        Start a request unless one is already outstanding.

        Must be called from within a running event loop.

        Returns:
            True if the request was started
        """
        if self.busy:
            logger.info(f"Request already in progress, ignoring {command}")
            return False

        logger.info(f"📨 Dispatching {command}")
        self._task = asyncio.get_running_loop().create_task(self._run(command, slide_text))
        return True

    async def wait(self) -> None:
        """Wait for the outstanding request, if any."""
        if self._task is not None:
            await asyncio.shield(self._task)

    def cancel(self) -> None:
        """Abandon the outstanding request, if any."""
        if self.busy:
            self._task.cancel()

    async def _run(self, command: Command, slide_text: str) -> None:
        response: Optional[AIResponse] = None
        try:
            text = await self.generator.generate(command, slide_text)
            response = AIResponse(command=command, text=text, ok=True)
            logger.info(f"✅ {command} complete")
        except asyncio.CancelledError:
            logger.info(f"{command} cancelled")
            raise
        except Exception as e:
            logger.error(f"❌ AI processing error: {e}")
            response = AIResponse(command="error", text=self.fallback_message, ok=False)
        finally:
            if response is not None and self.on_response is not None:
                self.on_response(response)
            if self.on_finished is not None:
                self.on_finished()
