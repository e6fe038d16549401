"""AI-powered product-idea generation using the Anthropic Messages API."""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, List, Optional, Sequence

import anthropic

from generation_engine.config import Settings
from generation_engine.errors import ExtractionFailure
from generation_engine.models import IdeaRecord, TopicRecord
from generation_engine.parser import parse_ideas
from generation_engine.prompt import build_prompt
from generation_engine.tiering import classify

logger = logging.getLogger(__name__)

# Linear backoff step: wait attempt * BACKOFF_SECONDS between attempts.
BACKOFF_SECONDS = 5.0


class AIIdeaGenerator:
    """Turns trending topics into scored product ideas.

    Each attempt sends one prompt, validates the response and parses it into
    idea records. Failed attempts are retried with linear backoff until
    ``max_retries`` attempts have been made.
    """

    def __init__(
        self,
        settings: Settings,
        client: Optional[Any] = None,
        sleep: Callable[[float], None] = time.sleep,
        backoff_seconds: float = BACKOFF_SECONDS,
    ):
        """Initialize the generator.

        Args:
            settings: Run settings (credential, base URL, model, limits).
            client: Object exposing ``messages.create``; defaults to an
                ``anthropic.Anthropic`` client pointed at ``settings.api_base_url``.
            sleep: Function used for backoff waits.
            backoff_seconds: Base step of the linear backoff.
        """
        self.settings = settings
        self.client = client if client is not None else anthropic.Anthropic(
            api_key=settings.api_key,
            base_url=settings.api_base_url,
        )
        self.sleep = sleep
        self.backoff_seconds = backoff_seconds

    def _request_text(self, prompt: str, attempt: int) -> str:
        """Make one API call and return the first content block's text."""
        response = self.client.messages.create(
            model=self.settings.model_id,
            max_tokens=self.settings.max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )

        content = getattr(response, "content", None) or []
        usage = getattr(response, "usage", None)
        logger.info(
            f"API response: stop_reason={getattr(response, 'stop_reason', None)}, "
            f"content blocks={len(content)}, usage={usage}"
        )

        if not content:
            raise ExtractionFailure(f"API returned empty content (attempt {attempt})")

        first = content[0]
        if getattr(first, "type", None) != "text":
            raise ExtractionFailure(f"Response block type is not text: {getattr(first, 'type', None)}")

        text = getattr(first, "text", None) or ""
        if not text:
            raise ExtractionFailure(f"API returned empty text (attempt {attempt})")

        logger.info(f"Received response, {len(text)} characters")
        return text

    def _attempt(self, prompt: str, attempt: int) -> List[IdeaRecord]:
        text = self._request_text(prompt, attempt)
        try:
            ideas = parse_ideas(text)
        except ExtractionFailure:
            logger.debug(f"Response head: {text[:1000]}")
            logger.debug(f"Response tail: {text[-500:]}")
            raise
        logger.info(f"Parsed {len(ideas)} product ideas")
        return ideas

    def generate_ideas(self, topics: Sequence[TopicRecord], max_retries: Optional[int] = None) -> List[IdeaRecord]:
        """Generate tiered ideas for *topics*.

        Args:
            topics: Topics to analyze, in ranking order.
            max_retries: Maximum number of attempts; defaults to
                ``settings.max_retries``.

        Returns:
            Idea records with ``tier`` attached, in response order.

        Raises:
            ExtractionFailure: once every attempt has failed.
        """
        attempts = self.settings.max_retries if max_retries is None else max_retries
        if attempts < 1:
            raise ValueError(f"max_retries must be at least 1, got {attempts}")

        logger.info(f"🤖 Generating ideas for {len(topics)} topics with {self.settings.model_id}")
        prompt = build_prompt(topics)
        last_error: Optional[Exception] = None

        for attempt in range(1, attempts + 1):
            logger.info(f"API call attempt {attempt}/{attempts}...")
            try:
                ideas = self._attempt(prompt, attempt)
            except (anthropic.AnthropicError, ExtractionFailure) as exc:
                last_error = exc
                logger.error(f"Attempt {attempt} failed: {exc}")
                if attempt < attempts:
                    wait_time = attempt * self.backoff_seconds
                    logger.info(f"Retrying in {wait_time:g} seconds...")
                    self.sleep(wait_time)
                continue
            return classify(ideas)

        raise ExtractionFailure(
            f"Idea generation failed after {attempts} attempts: {last_error}",
            attempts=attempts,
        ) from last_error
