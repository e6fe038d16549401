from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace
from typing import Any, List

import pytest

from generation_engine.config import Settings


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        api_key="test-api-key",
        tianapi_key="test-tianapi-key",
        reports_dir=tmp_path / "reports",
        report_timezone="UTC",
    )


def idea_dict(topic: str, total: Any, **overrides: Any) -> dict:
    """Model-shaped idea object; sub-scores sum to *total* when it is an int."""
    if isinstance(total, int):
        innovation = min(total, 30)
        topicality = min(total - innovation, 25)
        fun = min(total - innovation - topicality, 25)
        practicality = min(total - innovation - topicality - fun, 10)
        feasibility = total - innovation - topicality - fun - practicality
    else:
        innovation = topicality = fun = practicality = feasibility = 0
    data = {
        "hotTopic": topic,
        "productName": f"「{topic} App」",
        "coreFunction": f"A product built around {topic}.",
        "targetUsers": "Young urban professionals",
        "eventTimeline": ["It started", "It spread", "It trended"],
        "scores": {
            "innovation": innovation,
            "topicality": topicality,
            "fun": fun,
            "practicality": practicality,
            "feasibility": feasibility,
            "total": total,
        },
    }
    data.update(overrides)
    return data


def fenced(items: List[dict]) -> str:
    return "Here are the ideas:\n```json\n" + json.dumps(items, ensure_ascii=False) + "\n```\nEnjoy!"


def text_response(text: str) -> SimpleNamespace:
    return SimpleNamespace(
        stop_reason="end_turn",
        content=[SimpleNamespace(type="text", text=text)],
        usage=SimpleNamespace(input_tokens=100, output_tokens=200),
    )


class FakeMessagesClient:
    """Stands in for ``anthropic.Anthropic``; replays queued responses or errors."""

    def __init__(self, *responses: Any):
        self.responses = list(responses)
        self.calls: List[dict] = []
        self.messages = self

    def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result
