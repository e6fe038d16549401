"""Hot-topic product idea pipeline.

Runs the stages in order:
1. Fetch the Weibo hot-search list
2. Select the top-N topics
3. Generate scored product ideas with the LLM (bounded retry)
4. Classify ideas into tiers and render the HTML report
5. Write the report and publish its path for CI

Any unrecovered error aborts the run before a report is written.
"""
from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Sequence
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pandas as pd
from dotenv import load_dotenv

from fetchers.ai_ideator import AIIdeaGenerator
from fetchers.weibo_hot_seeder import fetch_hot_topics
from generation_engine.config import Settings, parse_top_n
from generation_engine.errors import IdeaEngineError, WriteError
from generation_engine.html_report import TIER_LABELS, render_report
from generation_engine.models import IdeaRecord, ReportMetadata, Tier, TopicRecord
from generation_engine.tiering import group_by_tier

LOGGER = logging.getLogger(__name__)

# Candidate pool size relative to N before the quality filter runs.
CANDIDATE_POOL_FACTOR = 2
REPORT_PREFIX = "weibo-hot-analysis"


@dataclass(frozen=True)
class PipelineResult:
    """What a successful run produced."""

    report_path: Path
    topics: List[TopicRecord]
    ideas: List[IdeaRecord]
    grouped: Dict[Tier, List[IdeaRecord]]


def filter_candidate_topics(topics: Sequence[TopicRecord]) -> List[TopicRecord]:
    """Quality filter for candidate topics (e.g. dropping pure celebrity gossip).

    Currently keeps every topic unchanged.
    """
    return list(topics)


def select_topics(topics: Sequence[TopicRecord], top_n: int) -> List[TopicRecord]:
    """Take the ``2 * top_n`` highest-ranked topics, filter them, keep the first ``top_n``."""
    candidates = filter_candidate_topics(topics[: top_n * CANDIDATE_POOL_FACTOR])
    return candidates[:top_n]


def report_filename(now: datetime) -> str:
    """File name for a report generated at *now* (UTC compact timestamp)."""
    stamp = now.astimezone(timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"{REPORT_PREFIX}-{stamp}.html"


def format_report_time(now: datetime, tz_name: str) -> str:
    try:
        tz = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        LOGGER.warning("Unknown REPORT_TIMEZONE %r, falling back to UTC", tz_name)
        tz = timezone.utc
    return now.astimezone(tz).strftime("%Y-%m-%d %H:%M %Z")


def write_report(html: str, path: Path) -> Path:
    """Write *html* to *path* in one call, creating the directory on demand."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
    except OSError as exc:
        raise WriteError(f"Could not write report to {path}: {exc}") from exc
    return path.resolve()


def publish_github_outputs(report_path: Path, environ: Optional[Mapping[str, str]] = None) -> bool:
    """Append ``report_path``/``report_name`` to ``$GITHUB_OUTPUT`` when it is set."""
    environ = os.environ if environ is None else environ
    output_file = environ.get("GITHUB_OUTPUT")
    if not output_file:
        return False
    with open(output_file, "a", encoding="utf-8") as fh:
        fh.write(f"report_path={report_path}\n")
        fh.write(f"report_name={report_path.name}\n")
    return True


def summarize_ideas(ideas: Sequence[IdeaRecord]) -> str:
    """Per-tier count and mean total as a plain-text table."""
    if not ideas:
        return "No ideas generated."

    df = pd.DataFrame(
        [
            {"tier": idea.tier.value if idea.tier else Tier.NORMAL.value, "total": idea.scores.total}
            for idea in ideas
        ]
    )
    df["total"] = pd.to_numeric(df["total"], errors="coerce")
    stats = (
        df.groupby("tier", sort=False)["total"]
        .agg(["size", "mean"])
        .reindex([tier.value for tier in Tier])
    )

    lines = []
    for tier in Tier:
        size = stats.loc[tier.value, "size"]
        size = 0 if pd.isna(size) else int(size)
        mean = stats.loc[tier.value, "mean"]
        mean_text = "-" if pd.isna(mean) else f"{mean:.1f}"
        lines.append(f"  • {TIER_LABELS[tier]}: {size} ideas (avg score {mean_text})")
    return "\n".join(lines)


def run(
    settings: Settings,
    top_n: int,
    *,
    fetch: Optional[Callable[[Settings], List[TopicRecord]]] = None,
    generator: Optional[AIIdeaGenerator] = None,
    now: Optional[datetime] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> PipelineResult:
    """Run the pipeline once and return what it produced.

    Raises:
        IdeaEngineError: on any unrecovered fetch, generation or write failure.
    """
    now = now or datetime.now(timezone.utc)
    report_path = settings.reports_dir / report_filename(now)

    LOGGER.info("=" * 60)
    LOGGER.info("🔥 Weibo hot-search product idea analysis")
    LOGGER.info("Analysis count: top%d", top_n)
    LOGGER.info("API base URL: %s", settings.api_base_url)
    LOGGER.info("Model: %s", settings.model_id)
    LOGGER.info("Report path: %s", report_path)
    LOGGER.info("=" * 60)

    fetch = fetch or fetch_hot_topics
    topics = fetch(settings)
    selected = select_topics(topics, top_n)
    LOGGER.info("Selected %d topics for analysis:", len(selected))
    for i, topic in enumerate(selected, 1):
        LOGGER.info("  %d. %s", i, topic.name)

    generator = generator or AIIdeaGenerator(settings)
    ideas = generator.generate_ideas(selected, settings.max_retries)
    grouped = group_by_tier(ideas)
    LOGGER.info("Analysis complete, %d product ideas:\n%s", len(ideas), summarize_ideas(ideas))

    metadata = ReportMetadata(
        generated_at=format_report_time(now, settings.report_timezone),
        model_id=settings.model_id,
        topic_count=len(selected),
        idea_count=len(ideas),
    )
    html = render_report(grouped, metadata)
    saved_path = write_report(html, report_path)
    LOGGER.info("✅ Report saved to %s", saved_path)

    try:
        publish_github_outputs(saved_path, environ)
    except OSError as exc:
        raise WriteError(f"Could not append to GITHUB_OUTPUT: {exc}") from exc

    excellent = grouped.get(Tier.EXCELLENT, [])
    if excellent:
        LOGGER.info("🌟 Excellent ideas worth a look:")
        for idea in excellent:
            LOGGER.info("  - %s (%s pts)", idea.product_name, idea.scores.total)
            LOGGER.info("    %s...", idea.core_function[:50])

    return PipelineResult(report_path=saved_path, topics=selected, ideas=ideas, grouped=grouped)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry-point: returns 0 on success, 1 on any configuration or run failure."""
    argv = list(sys.argv[1:] if argv is None else argv)
    load_dotenv()

    try:
        settings = Settings.from_env()
    except IdeaEngineError as exc:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")
        LOGGER.error("Error: %s", exc)
        return 1

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    try:
        run(settings, parse_top_n(argv))
    except IdeaEngineError as exc:
        LOGGER.error("❌ Run failed: %s", exc)
        return 1
    except Exception:
        LOGGER.exception("❌ Run failed with an unexpected error")
        return 1

    LOGGER.info("🎉 Pipeline finished successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
