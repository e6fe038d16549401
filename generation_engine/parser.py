"""Best-effort extraction of the idea list from free-form model output.

The model is asked for a bare JSON array but often wraps it in prose or a
fenced code block. Each strategy below locates a candidate substring; the
first candidate that decodes to a JSON array wins.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, List, Optional, Tuple

from pydantic import ValidationError

from .errors import ExtractionFailure
from .models import IdeaRecord

logger = logging.getLogger(__name__)

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
_BRACKET_SPAN = re.compile(r"\[[\s\S]*\]")


def _from_fenced_block(text: str) -> Optional[str]:
    match = _FENCED_BLOCK.search(text)
    return match.group(1).strip() if match else None


def _from_bracket_span(text: str) -> Optional[str]:
    match = _BRACKET_SPAN.search(text)
    return match.group(0) if match else None


def _from_whole_text(text: str) -> Optional[str]:
    return text.strip() or None


EXTRACTION_STRATEGIES: Tuple[Tuple[str, Callable[[str], Optional[str]]], ...] = (
    ("fenced code block", _from_fenced_block),
    ("bracket span", _from_bracket_span),
    ("whole response", _from_whole_text),
)


def extract_json_array(text: str) -> Tuple[List[Any], str]:
    """Return the first JSON array found in *text* and the strategy that found it.

    Raises:
        ExtractionFailure: if no strategy yields a decodable JSON array.
    """
    for name, locate in EXTRACTION_STRATEGIES:
        candidate = locate(text)
        if candidate is None:
            continue
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError as exc:
            logger.info(f"JSON decode via {name} failed ({exc}), trying next strategy")
            continue
        if isinstance(data, list):
            return data, name
        logger.info(f"{name} decoded to {type(data).__name__}, not an array; trying next strategy")

    raise ExtractionFailure("Invalid response format - could not extract JSON array")


def parse_ideas(text: str) -> List[IdeaRecord]:
    """Extract and validate idea records from a raw model response."""
    data, strategy = extract_json_array(text)
    logger.info(f"Extracted JSON array via {strategy}")

    ideas: List[IdeaRecord] = []
    for index, item in enumerate(data, 1):
        if not isinstance(item, dict):
            raise ExtractionFailure(f"Idea #{index} is a {type(item).__name__}, expected an object")
        try:
            ideas.append(IdeaRecord.model_validate(item))
        except ValidationError as exc:
            raise ExtractionFailure(f"Idea #{index} failed validation: {exc}") from exc
    return ideas
