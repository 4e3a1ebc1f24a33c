import pytest

from content_wizard import llm_client
from content_wizard.config import Provider, RetryHistory, WizardConfig, load_config

ENV_NAMES = (
    "LLM_PROVIDER",
    "MODEL",
    "LLM_API_BASE",
    "CONTENT_MIN_WORDS",
    "CONTENT_MAX_ATTEMPTS",
    "RETRY_HISTORY",
    "LLM_TIMEOUT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = load_config()
    assert config.provider == Provider.ANTHROPIC
    assert config.min_content_words == 1200
    assert config.content_max_attempts == 2
    assert config.retry_history == RetryHistory.LATEST
    assert config.outline_max_tokens == 1000


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "openai")
    monkeypatch.setenv("CONTENT_MIN_WORDS", "900")
    monkeypatch.setenv("RETRY_HISTORY", "full")
    monkeypatch.setenv("MODEL", "  ")
    config = load_config()
    assert config.provider == Provider.OPENAI
    assert config.min_content_words == 900
    assert config.retry_history == RetryHistory.FULL
    assert config.model is None


def test_overrides_win(monkeypatch):
    monkeypatch.setenv("CONTENT_MAX_ATTEMPTS", "4")
    assert load_config({"content_max_attempts": 1}).content_max_attempts == 1


def test_unknown_override():
    with pytest.raises(ValueError, match="Unknown config option"):
        load_config({"retries": 3})


def test_at_least_one_attempt():
    with pytest.raises(ValueError):
        WizardConfig(content_max_attempts=0)


def test_build_model_call_selects_transport(monkeypatch):
    seen = {}

    def fake_openai(messages, **kwargs):
        seen["openai"] = kwargs
        return "from openai"

    def fake_anthropic(messages, **kwargs):
        seen["anthropic"] = kwargs
        return "from claude"

    monkeypatch.setattr(llm_client, "openai_compatible_chat", fake_openai)
    monkeypatch.setattr(llm_client, "anthropic_chat", fake_anthropic)

    config = WizardConfig(provider=Provider.OPENAI, model="deepseek-chat", api_base="https://llm.local")
    call = llm_client.build_model_call(config)
    assert call([], temperature=0.2, max_tokens=10) == "from openai"
    assert seen["openai"]["api_base"] == "https://llm.local"
    assert seen["openai"]["max_tokens"] == 10

    call = llm_client.build_model_call(WizardConfig(model="claude-test"))
    assert call([], temperature=0.2, max_tokens=10) == "from claude"
    assert seen["anthropic"]["model"] == "claude-test"


def test_split_system_messages():
    system, chat = llm_client._split_system([
        {"role": "system", "content": "Be brief."},
        {"role": "user", "content": "Hi"},
    ])
    assert system == "Be brief."
    assert chat == [{"role": "user", "content": "Hi"}]


def test_openai_transport_requires_key(monkeypatch):
    monkeypatch.delenv("LLM_API_KEY", raising=False)
    monkeypatch.delenv("DEEPSEEK_API_KEY", raising=False)
    with pytest.raises(ValueError):
        llm_client.openai_compatible_chat([{"role": "user", "content": "Hi"}])
