"""Hot-topic Generation Engine.

Pure core of the pipeline: turns trending topics into a prompt, parses the
model's free-form answer into `IdeaRecord` objects, sorts them into tiers and
renders the HTML report.
"""

__all__ = [
    "IdeaRecord",
    "ReportMetadata",
    "ScoreBreakdown",
    "Tier",
    "TopicRecord",
]

__version__ = "0.1.0"

from .models import IdeaRecord, ReportMetadata, ScoreBreakdown, Tier, TopicRecord  # noqa: E402
