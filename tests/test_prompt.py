from generation_engine.models import TopicRecord
from generation_engine.prompt import build_prompt, format_topic_list


def test_topic_list_is_numbered_with_popularity() -> None:
    topics = [TopicRecord(name="Rainstorm", popularity="5012345"), TopicRecord(name="New phone", popularity="")]
    assert format_topic_list(topics) == "1. Rainstorm (popularity: 5012345)\n2. New phone (popularity: )"


def test_prompt_states_maxima_and_output_contract() -> None:
    prompt = build_prompt([TopicRecord(name="Rainstorm", popularity="1")])

    for line in ("innovation (0-30)", "topicality (0-25)", "fun (0-25)", "practicality (0-10)", "feasibility (0-10)"):
        assert line in prompt
    assert "50-100 word" in prompt
    assert "3-4 bullet points" in prompt
    assert "JSON array only" in prompt
    assert '"total": 84' in prompt
