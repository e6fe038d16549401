from datetime import datetime, timezone
from pathlib import Path

import pytest

import idea_engine.pipeline as pipeline
from conftest import FakeMessagesClient, fenced, idea_dict, text_response
from fetchers.ai_ideator import AIIdeaGenerator
from generation_engine.errors import ExtractionFailure, FetchError, WriteError
from generation_engine.models import IdeaRecord, Tier, TopicRecord
from generation_engine.tiering import classify

NOW = datetime(2026, 10, 18, 1, 2, 3, tzinfo=timezone.utc)


def _topics(count: int):
    return [TopicRecord(name=f"Topic {i}", popularity=str(1000 - i)) for i in range(1, count + 1)]


def test_select_topics_takes_first_n_in_source_order() -> None:
    topics = _topics(30)
    selected = pipeline.select_topics(topics, 10)
    assert selected == topics[:10]


def test_select_topics_with_short_list() -> None:
    topics = _topics(3)
    assert pipeline.select_topics(topics, 10) == topics


def test_candidate_filter_is_pass_through() -> None:
    topics = _topics(5)
    assert pipeline.filter_candidate_topics(topics) == topics


def test_report_filename_uses_utc_compact_timestamp() -> None:
    assert pipeline.report_filename(NOW) == "weibo-hot-analysis-20261018010203.html"


def test_end_to_end_one_section_per_tier(settings, tmp_path: Path) -> None:
    output_file = tmp_path / "github_output"
    client = FakeMessagesClient(
        text_response(fenced([idea_dict("Topic 1", 85), idea_dict("Topic 2", 65), idea_dict("Topic 3", 40)]))
    )
    waits = []
    generator = AIIdeaGenerator(settings, client=client, sleep=waits.append)

    result = pipeline.run(
        settings,
        10,
        fetch=lambda _settings: _topics(3),
        generator=generator,
        now=NOW,
        environ={"GITHUB_OUTPUT": str(output_file)},
    )

    assert len(client.calls) == 1
    assert waits == []
    assert [len(result.grouped[t]) for t in Tier] == [1, 1, 1]

    reports = [p.name for p in settings.reports_dir.iterdir()]
    assert reports == [result.report_path.name]
    html = result.report_path.read_text(encoding="utf-8")
    for section in ("excellent-ideas", "good-ideas", "normal-ideas"):
        assert html.count(f'class="{section}"') == 1

    assert output_file.read_text().splitlines() == [
        f"report_path={result.report_path}",
        "report_name=weibo-hot-analysis-20261018010203.html",
    ]


def test_github_output_skipped_when_unset(tmp_path: Path) -> None:
    assert pipeline.publish_github_outputs(tmp_path / "r.html", environ={}) is False


def test_extraction_failure_leaves_no_report(settings) -> None:
    client = FakeMessagesClient(text_response("?"), text_response("?"), text_response("?"))
    generator = AIIdeaGenerator(settings, client=client, sleep=lambda _s: None)

    with pytest.raises(ExtractionFailure):
        pipeline.run(settings, 3, fetch=lambda _settings: _topics(3), generator=generator, now=NOW, environ={})

    assert not settings.reports_dir.exists()


def test_write_failure_raises_write_error(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file in the way")

    with pytest.raises(WriteError):
        pipeline.write_report("<html></html>", blocker / "report.html")


def test_summary_lists_every_tier() -> None:
    ideas = classify([IdeaRecord(topic="a", scores={"total": 90}), IdeaRecord(topic="b", scores={"total": 70})])
    summary = pipeline.summarize_ideas(ideas)

    assert "Excellent: 1 ideas (avg score 90.0)" in summary
    assert "Good: 1 ideas (avg score 70.0)" in summary
    assert "Normal: 0 ideas (avg score -)" in summary
    assert pipeline.summarize_ideas([]) == "No ideas generated."


def _set_credentials(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(pipeline, "load_dotenv", lambda: None)
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)
    monkeypatch.setenv("YUNWU_API_KEY", "k")
    monkeypatch.setenv("TIANAPI_KEY", "t")
    monkeypatch.setenv("REPORTS_DIR", str(tmp_path / "reports"))


def test_main_returns_1_without_credentials(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(pipeline, "load_dotenv", lambda: None)
    for key in ("YUNWU_API_KEY", "ANTHROPIC_API_KEY", "TIANAPI_KEY"):
        monkeypatch.delenv(key, raising=False)

    assert pipeline.main([]) == 1


def test_main_returns_1_on_fetch_failure(monkeypatch, tmp_path: Path) -> None:
    _set_credentials(monkeypatch, tmp_path)

    def failing_fetch(_settings):
        raise FetchError("Topic API returned error code 250")

    monkeypatch.setattr(pipeline, "fetch_hot_topics", failing_fetch)

    assert pipeline.main(["top5"]) == 1
    assert not (tmp_path / "reports").exists()


def test_main_success_uses_top_n(monkeypatch, tmp_path: Path) -> None:
    _set_credentials(monkeypatch, tmp_path)
    client = FakeMessagesClient(text_response(fenced([idea_dict("Topic 1", 90), idea_dict("Topic 2", 50)])))
    monkeypatch.setattr(pipeline, "fetch_hot_topics", lambda _settings: _topics(30))
    monkeypatch.setattr(
        pipeline,
        "AIIdeaGenerator",
        lambda settings: AIIdeaGenerator(settings, client=client, sleep=lambda _s: None),
    )

    assert pipeline.main(["top2"]) == 0

    prompt = client.calls[0]["messages"][0]["content"]
    assert "2. Topic 2 (popularity: 998)" in prompt
    assert "3. Topic 3" not in prompt
    (report,) = (tmp_path / "reports").iterdir()
    assert report.name.startswith("weibo-hot-analysis-") and report.suffix == ".html"


def test_main_returns_1_on_unexpected_error(monkeypatch, tmp_path: Path) -> None:
    _set_credentials(monkeypatch, tmp_path)

    def broken_fetch(_settings):
        raise RuntimeError("unexpected bug")

    monkeypatch.setattr(pipeline, "fetch_hot_topics", broken_fetch)

    assert pipeline.main(["top3"]) == 1
    assert not (tmp_path / "reports").exists()
