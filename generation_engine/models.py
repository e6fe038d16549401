"""Pydantic data models used across the generation engine."""
from __future__ import annotations

import math
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

EXCELLENT_THRESHOLD = 80
GOOD_THRESHOLD = 60

# Upper bound of every sub-score, used by the prompt and the score bars.
SCORE_MAXIMA = {
    "innovation": 30,
    "topicality": 25,
    "fun": 25,
    "practicality": 10,
    "feasibility": 10,
}


def _coerce_score(value: Any) -> Optional[int]:
    """Return *value* as an int, or ``None`` when it is not a usable number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return int(number)


class Tier(str, Enum):
    """Quality bucket derived from an idea's total score.

    Member order is the order sections appear in the report.
    """

    EXCELLENT = "excellent"
    GOOD = "good"
    NORMAL = "normal"


class TopicRecord(BaseModel):
    """One ranked entry from the trending-topic source."""

    name: str = Field(..., description="Topic title as shown on the hot list")
    popularity: str = Field("", description="Popularity metric, verbatim from the source")

    model_config = ConfigDict(frozen=True)


class ScoreBreakdown(BaseModel):
    """Five sub-scores plus the model-reported total."""

    innovation: int = 0
    topicality: int = 0
    fun: int = 0
    practicality: int = 0
    feasibility: int = 0
    total: Optional[int] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("innovation", "topicality", "fun", "practicality", "feasibility", mode="before")
    @classmethod
    def _lenient_sub_score(cls, value: Any) -> int:
        score = _coerce_score(value)
        return score if score is not None else 0

    @field_validator("total", mode="before")
    @classmethod
    def _lenient_total(cls, value: Any) -> Optional[int]:
        return _coerce_score(value)

    @property
    def component_sum(self) -> int:
        return self.innovation + self.topicality + self.fun + self.practicality + self.feasibility

    @property
    def is_consistent(self) -> bool:
        """True when ``total`` equals the sum of the five sub-scores."""
        return self.total is not None and self.total == self.component_sum


class IdeaRecord(BaseModel):
    """A generated product concept tied to one trending topic.

    Accepts both the camelCase keys the model is asked to emit and the
    Python field names. ``tier`` is unset until the classifier runs.
    """

    topic: str = Field("", alias="hotTopic")
    product_name: str = Field("", alias="productName")
    core_function: str = Field("", alias="coreFunction")
    target_users: str = Field("", alias="targetUsers")
    timeline: List[str] = Field(default_factory=list, alias="eventTimeline")
    scores: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    tier: Optional[Tier] = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("topic", "product_name", "core_function", "target_users", mode="before")
    @classmethod
    def _text_or_empty(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("timeline", mode="before")
    @classmethod
    def _timeline_list(cls, value: Any) -> List[str]:
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value]
        return [str(value)]

    @field_validator("scores", mode="before")
    @classmethod
    def _scores_or_empty(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, ScoreBreakdown)) else {}


class ReportMetadata(BaseModel):
    """Run facts embedded in the rendered report."""

    generated_at: str
    model_id: str
    topic_count: int = Field(..., ge=0)
    idea_count: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True, protected_namespaces=())
