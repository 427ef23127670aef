"""
Mock text generator for running without a text-generation API key.
"""
from .types import Command


class MockTextGenerator:
    """Mock generator that answers locally instead of calling a service."""

    def __init__(self):
        """Initialize the mock generator."""
        self.call_count = 0

    async def generate(self, command: Command, slide_text: str) -> str:
        """Return a canned answer built from the slide's first sentence."""
        self.call_count += 1
        first_sentence = slide_text.strip().split(". ")[0].rstrip(".")
        print(f"[MockTextGenerator] {command} (call #{self.call_count})")
        if command == "ask-question":
            return f"Could you say more about this: {first_sentence}?"
        return f"Key takeaway: {first_sentence}."

    def reset_counters(self) -> None:
        """Reset call counter for testing."""
        self.call_count = 0
