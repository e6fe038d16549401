"""Static HTML report for tiered product ideas.

Rendering is a pure function of its inputs: the same grouped ideas and
metadata always produce byte-identical output.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Dict, List, Mapping

import jinja2

from .models import SCORE_MAXIMA, IdeaRecord, ReportMetadata, Tier

TIER_LABELS: Dict[Tier, str] = {
    Tier.EXCELLENT: "Excellent",
    Tier.GOOD: "Good",
    Tier.NORMAL: "Normal",
}

TIER_HEADINGS: Dict[Tier, str] = {
    Tier.EXCELLENT: "🌟 Excellent ideas (≥80)",
    Tier.GOOD: "👍 Good ideas (60-79)",
    Tier.NORMAL: "📝 Other ideas (<60)",
}

SCORE_LABELS = (
    ("innovation", "Innovation"),
    ("topicality", "Topicality"),
    ("fun", "Fun"),
    ("practicality", "Practicality"),
    ("feasibility", "Feasibility"),
)

_STYLE = """
        :root {
            --excellent-color: #10b981; --excellent-bg: #ecfdf5;
            --good-color: #3b82f6; --good-bg: #eff6ff;
            --normal-color: #6b7280; --normal-bg: #f9fafb;
            --text-primary: #1f2937; --text-secondary: #6b7280;
            --bg-main: #f3f4f6; --card-shadow: 0 4px 6px -1px rgba(0, 0, 0, 0.1);
        }
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body {
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
            background: var(--bg-main); color: var(--text-primary); line-height: 1.6;
        }
        header {
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            color: white; padding: 3rem 2rem; text-align: center;
        }
        header h1 { font-size: 2.5rem; margin-bottom: 1rem; }
        .report-date { font-size: 1rem; opacity: 0.9; }
        .summary {
            margin-top: 1rem; font-size: 1.1rem; background: rgba(255,255,255,0.2);
            display: inline-block; padding: 0.5rem 1.5rem; border-radius: 2rem;
        }
        .stats-bar { display: flex; justify-content: center; gap: 2rem; margin-top: 1.5rem; flex-wrap: wrap; }
        .stat-item { background: rgba(255,255,255,0.15); padding: 0.75rem 1.5rem; border-radius: 0.5rem; }
        .stat-value { font-size: 1.5rem; font-weight: bold; }
        .stat-label { font-size: 0.85rem; opacity: 0.9; }
        main { max-width: 1200px; margin: 0 auto; padding: 2rem; }
        section { margin-bottom: 3rem; }
        section h2 { font-size: 1.5rem; margin-bottom: 1.5rem; padding-bottom: 0.5rem; border-bottom: 3px solid; }
        .excellent-ideas h2 { border-color: var(--excellent-color); }
        .good-ideas h2 { border-color: var(--good-color); }
        .normal-ideas h2 { border-color: var(--normal-color); }
        .ideas-grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(350px, 1fr)); gap: 1.5rem; }
        .idea-card { background: white; border-radius: 1rem; overflow: hidden; box-shadow: var(--card-shadow); }
        .idea-card.excellent { border-top: 4px solid var(--excellent-color); }
        .idea-card.good { border-top: 4px solid var(--good-color); }
        .idea-card.normal { border-top: 4px solid var(--normal-color); }
        .card-header {
            padding: 1rem 1.5rem; display: flex; justify-content: space-between;
            align-items: center; border-bottom: 1px solid #e5e7eb;
        }
        .hot-topic { font-size: 0.85rem; color: #ef4444; font-weight: 500; }
        .score-badge { font-weight: bold; padding: 0.25rem 0.75rem; border-radius: 1rem; font-size: 0.9rem; }
        .card-body { padding: 1.5rem; }
        .idea-name { font-size: 1.25rem; margin-bottom: 1rem; }
        .event-timeline {
            background: #fef3c7; border-left: 4px solid #f59e0b; padding: 1rem;
            margin-bottom: 1rem; border-radius: 0 0.5rem 0.5rem 0;
        }
        .event-timeline h4 { font-size: 0.9rem; color: #92400e; margin-bottom: 0.5rem; }
        .event-timeline ul { margin-left: 1rem; font-size: 0.9rem; color: #78350f; }
        .idea-details h4 { font-size: 0.95rem; color: var(--text-secondary); margin: 1rem 0 0.5rem 0; }
        .idea-details p { font-size: 0.95rem; }
        .score-breakdown { margin-top: 1.5rem; padding-top: 1rem; border-top: 1px dashed #e5e7eb; }
        .score-breakdown h4 { font-size: 0.9rem; color: var(--text-secondary); margin-bottom: 0.75rem; }
        .score-bar { display: flex; align-items: center; margin-bottom: 0.5rem; font-size: 0.85rem; }
        .score-bar > span:first-child { width: 90px; color: var(--text-secondary); }
        .score-bar > span:last-child { width: 50px; text-align: right; font-weight: 500; }
        .bar { flex: 1; height: 8px; background: #e5e7eb; border-radius: 4px; margin: 0 0.5rem; overflow: hidden; }
        .bar .fill { height: 100%; border-radius: 4px; }
        .excellent .bar .fill { background: var(--excellent-color); }
        .good .bar .fill { background: var(--good-color); }
        .normal .bar .fill { background: var(--normal-color); }
        .excellent .score-badge, .excellent .grade-label { background: var(--excellent-bg); color: var(--excellent-color); }
        .good .score-badge, .good .grade-label { background: var(--good-bg); color: var(--good-color); }
        .normal .score-badge, .normal .grade-label { background: var(--normal-bg); color: var(--normal-color); }
        .total-score {
            margin-top: 0.75rem; padding-top: 0.75rem; border-top: 1px solid #e5e7eb;
            display: flex; justify-content: space-between; font-weight: bold;
        }
        .grade-label { display: inline-block; padding: 0.2rem 0.6rem; border-radius: 0.25rem; font-size: 0.8rem; margin-left: 0.5rem; }
        footer { text-align: center; padding: 2rem; color: var(--text-secondary); font-size: 0.9rem; }
        @media (max-width: 768px) {
            header h1 { font-size: 1.75rem; }
            .ideas-grid { grid-template-columns: 1fr; }
        }
"""

_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Weibo Hot-Search Product Idea Report</title>
    <style>{{ style | safe }}    </style>
</head>
<body>
    <header>
        <h1>🔥 Weibo Hot-Search Product Idea Report</h1>
        <p class="report-date">Generated: {{ meta.generated_at }}</p>
        <p class="summary">Analyzed {{ meta.topic_count }} trending topics, found {{ meta.idea_count }} product ideas</p>
        <div class="stats-bar">
{% for tier in tiers %}
            <div class="stat-item">
                <div class="stat-value">{{ counts[tier] }}</div>
                <div class="stat-label">{{ labels[tier] }} ideas</div>
            </div>
{% endfor %}
        </div>
    </header>

    <main>
{% for tier, ideas in sections %}
        <section class="{{ tier.value }}-ideas">
            <h2>{{ headings[tier] }}</h2>
            <div class="ideas-grid">
{% for idea in ideas %}
                <article class="idea-card {{ tier.value }}">
                    <div class="card-header">
                        <span class="hot-topic">🔥 {{ idea.topic }}</span>
                        <span class="score-badge">{{ display_total(idea) }} pts</span>
                    </div>
                    <div class="card-body">
                        <h3 class="idea-name">{{ idea.product_name }}</h3>
                        <div class="event-timeline">
                            <h4>📰 Event timeline</h4>
                            <ul>
{% for event in idea.timeline %}
                                <li>{{ event }}</li>
{% endfor %}
                            </ul>
                        </div>
                        <div class="idea-details">
                            <h4>💡 Core function</h4>
                            <p>{{ idea.core_function }}</p>
                            <h4>👥 Target users</h4>
                            <p>{{ idea.target_users }}</p>
                        </div>
                        <div class="score-breakdown">
                            <h4>📊 Score breakdown</h4>
{% for key, label in score_labels %}
                            <div class="score-bar">
                                <span>{{ label }}</span>
                                <div class="bar"><div class="fill" style="width: {{ bar_width(idea.scores[key], maxima[key]) }}%"></div></div>
                                <span>{{ idea.scores[key] }}/{{ maxima[key] }}</span>
                            </div>
{% endfor %}
                            <div class="total-score">
                                <span>Overall</span>
                                <span>{{ display_total(idea) }}/100 <span class="grade-label">{{ labels[tier] }}</span></span>
                            </div>
                        </div>
                    </div>
                </article>
{% endfor %}
            </div>
        </section>
{% endfor %}
    </main>

    <footer>
        <p>Generated automatically by {{ meta.model_id }} on a scheduled job</p>
        <p>Data source: Weibo hot-search list (TianAPI)</p>
    </footer>
</body>
</html>
"""


def bar_width(score: int, maximum: int) -> str:
    """Percentage of *maximum* reached by *score*, clamped to 0-100."""
    if maximum <= 0:
        return "0.0"
    return f"{min(100.0, max(0.0, score / maximum * 100)):.1f}"


def display_total(idea: IdeaRecord) -> str:
    return "n/a" if idea.scores.total is None else str(idea.scores.total)


@lru_cache(maxsize=1)
def _get_template() -> jinja2.Template:
    env = jinja2.Environment(
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.globals.update(bar_width=bar_width, display_total=display_total)
    return env.from_string(_TEMPLATE)


def render_report(grouped: Mapping[Tier, List[IdeaRecord]], metadata: ReportMetadata) -> str:
    """Render grouped ideas into a self-contained HTML document.

    Args:
        grouped: Ideas keyed by tier, as produced by ``group_by_tier``.
            Empty or missing tiers get no section.
        metadata: Timestamp, model identifier and totals for the header.

    Returns:
        The complete HTML document as a string.
    """
    sections = [(tier, list(grouped[tier])) for tier in Tier if grouped.get(tier)]
    counts = {tier: len(grouped.get(tier) or []) for tier in Tier}
    return _get_template().render(
        style=_STYLE,
        meta=metadata,
        tiers=list(Tier),
        counts=counts,
        labels=TIER_LABELS,
        headings=TIER_HEADINGS,
        sections=sections,
        score_labels=SCORE_LABELS,
        maxima=SCORE_MAXIMA,
    )
