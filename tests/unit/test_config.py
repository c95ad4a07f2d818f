import json

import pytest

from config import LlmRoute, Settings, load_config, resolve_api_key, resolve_route


def test_default_route_is_gemini():
    route = resolve_route(Settings(_env_file=None))
    assert route.name == "gemini"
    assert route.provider == "gemini"
    assert route.api_key_env == "GEMINI_API_KEY"


def test_timeout_override_applies():
    route = resolve_route(Settings(_env_file=None, LLM_ROUTE="groq", LLM_TIMEOUT_S=5))
    assert route.name == "groq"
    assert route.timeout_s == 5


def test_unknown_route_raises():
    with pytest.raises(KeyError):
        resolve_route(Settings(_env_file=None, LLM_ROUTE="nope"))


def test_config_file_adds_routes(tmp_path):
    path = tmp_path / "app_config.json"
    path.write_text(
        json.dumps(
            {
                "llm_routes": {
                    "local": {
                        "name": "local",
                        "provider": "openai",
                        "base_url": "http://localhost:11434",
                        "endpoint": "/v1/chat/completions",
                        "model": "llama3",
                        "timeout_s": 10,
                    }
                },
                "interviewer_route": "local",
            }
        )
    )
    assert load_config(path).interviewer_route == "local"
    route = resolve_route(Settings(_env_file=None, LLM_CONFIG_PATH=str(path)))
    assert route.model == "llama3"
    assert resolve_api_key(route, Settings(_env_file=None)) is None


def test_api_key_prefers_settings_then_environment(monkeypatch):
    route = LlmRoute(name="r", base_url="http://x", endpoint="/", model="m", api_key_env="GEMINI_API_KEY")
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    assert resolve_api_key(route, Settings(_env_file=None, GEMINI_API_KEY="from-settings")) == "from-settings"
    other = route.model_copy(update={"api_key_env": "GROQ_API_KEY"})
    monkeypatch.setenv("GROQ_API_KEY", "from-env")
    assert resolve_api_key(other, Settings(_env_file=None)) == "from-env"


def test_settings_defaults():
    cfg = Settings(_env_file=None)
    assert cfg.DB_PATH.endswith(".db")
    assert cfg.ALLOW_REEVALUATION is True
    assert cfg.CORS_ORIGINS == ["*"]
