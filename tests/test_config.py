from pathlib import Path

import pytest

from generation_engine.config import DEFAULT_API_BASE_URL, DEFAULT_MODEL_ID, Settings, parse_top_n
from generation_engine.errors import ConfigurationError


def test_defaults_applied() -> None:
    settings = Settings.from_env({"ANTHROPIC_API_KEY": "a", "TIANAPI_KEY": "t"})

    assert settings.api_key == "a"
    assert settings.api_base_url == DEFAULT_API_BASE_URL
    assert settings.model_id == DEFAULT_MODEL_ID
    assert settings.reports_dir == Path("reports")
    assert settings.max_retries == 3
    assert settings.max_tokens == 8000


def test_first_non_empty_api_key_wins() -> None:
    env = {"YUNWU_API_KEY": "yunwu", "ANTHROPIC_API_KEY": "anthropic", "TIANAPI_KEY": "t"}
    assert Settings.from_env(env).api_key == "yunwu"

    env["YUNWU_API_KEY"] = "  "
    assert Settings.from_env(env).api_key == "anthropic"


def test_overrides_are_read() -> None:
    settings = Settings.from_env(
        {
            "YUNWU_API_KEY": "k",
            "TIANAPI_KEY": "t",
            "API_BASE_URL": "https://proxy.example",
            "MODEL_ID": "some-model",
            "MAX_RETRIES": "5",
            "REPORTS_DIR": "/tmp/out",
            "LOG_LEVEL": "debug",
        }
    )
    assert settings.api_base_url == "https://proxy.example"
    assert settings.model_id == "some-model"
    assert settings.max_retries == 5
    assert settings.reports_dir == Path("/tmp/out")
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "env",
    [
        {"TIANAPI_KEY": "t"},
        {"YUNWU_API_KEY": "", "ANTHROPIC_API_KEY": "", "TIANAPI_KEY": "t"},
        {"ANTHROPIC_API_KEY": "a"},
        {"ANTHROPIC_API_KEY": "a", "TIANAPI_KEY": "t", "MAX_RETRIES": "three"},
        {"ANTHROPIC_API_KEY": "a", "TIANAPI_KEY": "t", "MAX_TOKENS": "0"},
    ],
)
def test_invalid_environment_raises(env) -> None:
    with pytest.raises(ConfigurationError):
        Settings.from_env(env)


@pytest.mark.parametrize(
    ("argv", "expected"),
    [
        ([], 10),
        (["top5"], 5),
        (["TOP20"], 20),
        (["top"], 10),
        (["five"], 10),
        (["top0"], 10),
        (["--verbose", "top5"], 10),
    ],
)
def test_parse_top_n(argv, expected) -> None:
    assert parse_top_n(argv) == expected
