"""
Main application: webcam gestures driving a slide presentation.
"""
import asyncio
import logging
import os
import sys
import textwrap
import time
from typing import Optional

import cv2
import numpy as np
from dotenv import load_dotenv

from .ai_service import AIDispatcher, GeminiTextGenerator
from .config import load_config
from .gestures import GestureProcessor
from .generator_mock import MockTextGenerator
from .landmarks import HandsTracker
from .presentation import PresentationController, SlideDeck
from .types import FrameResult, SwipeDetected

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255)
GREEN = (0, 255, 0)
RED = (0, 0, 255)
YELLOW = (0, 255, 255)


class GestureConductorApp:
    """Main application class for gesture-controlled presentations."""

    def __init__(self, config_path: Optional[str] = None, use_mock: bool = False):
        """Initialize the application with configuration."""
        load_dotenv()
        self.config = load_config(config_path)
        self.tracker = HandsTracker(
            max_num_hands=self.config.mediapipe.max_num_hands,
            min_detection_conf=self.config.mediapipe.min_detection_confidence,
            min_tracking_conf=self.config.mediapipe.min_tracking_confidence,
            model_complexity=self.config.mediapipe.model_complexity
        )
        self.gesture_processor = GestureProcessor(self.config)

        # Choose text generator
        api_key = os.getenv(self.config.ai.api_key_env)
        if api_key and not use_mock:
            generator = GeminiTextGenerator(self.config.ai.model, api_key)
            print(f"🤖 Using {self.config.ai.model} for slide questions and summaries")
        else:
            generator = MockTextGenerator()
            if not use_mock:
                logger.warning(f"{self.config.ai.api_key_env} not found, using mock text generator")

        self.dispatcher = AIDispatcher(generator, fallback_message=self.config.ai.fallback_message)
        self.deck = SlideDeck(self.config.presentation.slides)
        self.controller = PresentationController(
            self.deck,
            self.dispatcher,
            on_request_finished=self.gesture_processor.reset_holds,
            swipe_notice_ms=self.config.display.swipe_notice_ms,
            response_timeout_ms=self.config.display.response_timeout_ms
        )

        # Initialize camera
        self.cap = cv2.VideoCapture(self.config.camera.index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.camera.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.camera.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.config.camera.fps)

        if not self.cap.isOpened():
            raise RuntimeError(f"Failed to open camera {self.config.camera.index}")

    async def run(self):
        """Run the main application loop."""
        print(f"Starting {self.config.display.window_name}")
        print("🎯 Gestures:")
        print("  - Raised hand (hold 1s) = Likely audience question")
        print("  - Fist (hold 1s) = Summarize slide")
        print("  - Swipe left/right = Previous/next slide")
        print("Press 'n'/'p' to change slides, 'q' to quit")

        try:
            while True:
                ret, frame = self.cap.read()
                if not ret:
                    print("Failed to read frame from camera")
                    break

                if self.config.display.mirror:
                    frame = cv2.flip(frame, 1)

                hands = self.tracker.process(frame)
                result = self.gesture_processor.process_frame(hands, time.monotonic())
                self.controller.handle_frame(result)

                if self.config.display.show_landmarks:
                    for landmarks in hands.values():
                        frame = self.tracker.draw_landmarks(frame, landmarks)
                self._draw_overlay(frame, result)

                cv2.imshow(self.config.display.window_name, frame)

                key = cv2.waitKey(1) & 0xFF
                if key == ord('q'):
                    break
                if key == ord('n'):
                    self.controller.handle_swipe(SwipeDetected(direction="right", hand="keyboard"))
                elif key == ord('p'):
                    self.controller.handle_swipe(SwipeDetected(direction="left", hand="keyboard"))

                # Let the text-generation task make progress
                await asyncio.sleep(0)
        finally:
            self.dispatcher.cancel()
            self.gesture_processor.reset()
            self.close()

    def _draw_overlay(self, frame: np.ndarray, result: FrameResult) -> None:
        height, width = frame.shape[:2]

        if result.poses:
            for row, (hand_id, pose) in enumerate(sorted(result.poses.items())):
                color = GREEN if pose.kind.value != "none" else WHITE
                text = f"{hand_id}: {pose.description} ({pose.confidence * 100:.0f}%)"
                cv2.putText(frame, text, (10, 30 + 30 * row), cv2.FONT_HERSHEY_SIMPLEX, 0.7, color, 2)
        else:
            cv2.putText(frame, "No hand detected", (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.7, WHITE, 2)

        notice = self.controller.swipe_notice()
        if notice is not None:
            notice += f" (Slide {self.deck.current_index + 1} of {len(self.deck)})"
            cv2.putText(frame, notice, (10, 100), cv2.FONT_HERSHEY_SIMPLEX, 0.8, YELLOW, 2)

        slide_label = f"Slide {self.deck.current_index + 1} of {len(self.deck)}"
        cv2.putText(frame, slide_label, (10, height - 150), cv2.FONT_HERSHEY_SIMPLEX, 0.6, WHITE, 2)
        for i, line in enumerate(textwrap.wrap(self.deck.current_text, 90)[:3]):
            cv2.putText(frame, line, (10, height - 125 + 20 * i), cv2.FONT_HERSHEY_SIMPLEX, 0.45, WHITE, 1)

        if self.controller.is_processing:
            cv2.putText(frame, "Processing...", (width - 180, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.7, YELLOW, 2)

        response = self.controller.visible_response()
        if response is not None:
            titles = {"ask-question": "Likely Audience Question", "summarize": "Key Takeaway"}
            title = titles.get(response.command, "Error")
            color = GREEN if response.ok else RED
            cv2.putText(frame, title, (10, height - 60), cv2.FONT_HERSHEY_SIMPLEX, 0.6, color, 2)
            for i, line in enumerate(textwrap.wrap(response.text, 90)[:2]):
                cv2.putText(frame, line, (10, height - 38 + 18 * i), cv2.FONT_HERSHEY_SIMPLEX, 0.45, color, 1)

    def close(self) -> None:
        """Release camera, windows and the landmark graph."""
        if self.cap.isOpened():
            self.cap.release()
        self.tracker.close()
        cv2.destroyAllWindows()


async def main():
    """Entry point for the application."""
    logging.basicConfig(level=logging.INFO)

    use_mock = "--mock" in sys.argv
    config_path = None
    if "--config" in sys.argv:
        idx = sys.argv.index("--config")
        if idx + 1 < len(sys.argv):
            config_path = sys.argv[idx + 1]

    try:
        app = GestureConductorApp(config_path=config_path, use_mock=use_mock)
        await app.run()
    except KeyboardInterrupt:
        print("\nApplication interrupted by user")
    except (FileNotFoundError, ValueError, RuntimeError) as e:
        print(f"Error: {e}")
        sys.exit(1)


def cli():
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    cli()
