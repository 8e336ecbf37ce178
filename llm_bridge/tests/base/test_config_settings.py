"""Configuration merge order and settings providers."""
from __future__ import annotations

from llm_bridge.base.dto import VendorSettings
from llm_bridge.base.settings import ConfigSettingsProvider, StaticSettingsProvider
from llm_bridge.config import get_model, get_provider_config, reset_config_cache
from llm_bridge.config.env import (
    ENV_ALIASES,
    ENV_MAP,
    get_env_var_name,
    is_placeholder,
    resolve_provider_key,
)


def test_env_map_covers_supported_vendors():
    for vendor in ["openai", "anthropic", "gemini", "grok", "openrouter"]:
        assert vendor in ENV_MAP
    assert get_env_var_name("grok") == "GROK_API_KEY"
    assert ENV_ALIASES["gemini"][0] == "GEMINI_API_KEY"


def test_is_placeholder_heuristics():
    assert is_placeholder("placeholder-value")
    assert is_placeholder("ChangeMe123")
    assert is_placeholder("test_token")
    assert not is_placeholder("sk-real-value")


def test_resolve_provider_key_prefers_canonical(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "canon")
    monkeypatch.setenv("GOOGLE_API_KEY", "alias")
    assert resolve_provider_key("gemini") == ("canon", "GEMINI_API_KEY")


def test_resolve_provider_key_falls_back_to_alias(monkeypatch):
    monkeypatch.setenv("XAI_API_KEY", "xai-key")
    assert resolve_provider_key("grok") == ("xai-key", "XAI_API_KEY")
    assert get_provider_config("grok")["api_key"] == "xai-key"


def test_defaults_when_nothing_is_configured():
    cfg = get_provider_config("openrouter")
    assert cfg["base_url"] == "https://openrouter.ai/api/v1"
    assert "api_key" not in cfg
    assert get_model("anthropic")


def test_merge_order_file_then_env_then_overrides(monkeypatch, tmp_path):
    config_file = tmp_path / "providers.yaml"
    config_file.write_text(
        "openai:\n"
        "  model: file-model\n"
        "  organization: org-file\n"
        "  retry:\n"
        "    max_attempts: 5\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(config_file))
    monkeypatch.setenv("OPENAI_MODEL", "env-model")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    reset_config_cache()

    cfg = get_provider_config("openai", {"organization": "org-override", "base_url": None})
    assert cfg["model"] == "env-model"
    assert cfg["api_key"] == "sk-env"
    assert cfg["organization"] == "org-override"
    assert cfg["base_url"] == "https://api.openai.com/v1"
    assert cfg["retry"] == {"max_attempts": 5}


def test_json_config_file_is_accepted(monkeypatch, tmp_path):
    config_file = tmp_path / "providers.json"
    config_file.write_text('{"gemini": {"model": "gemini-json"}}', encoding="utf-8")
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(config_file))
    reset_config_cache()
    assert get_model("gemini") == "gemini-json"


def test_dotenv_file_replaces_placeholder_values(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("# local keys\nANTHROPIC_API_KEY='sk-dotenv'\n", encoding="utf-8")
    monkeypatch.setenv("DOTENV_FILE", str(env_file))
    monkeypatch.setenv("ANTHROPIC_API_KEY", "placeholder")
    reset_config_cache()
    assert get_provider_config("anthropic")["api_key"] == "sk-dotenv"


def test_config_settings_provider_splits_extra(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-or")
    provider = ConfigSettingsProvider({"openrouter": {"site_url": "https://app.example", "app_name": "Editor"}})
    settings = provider.get("OpenRouter")
    assert settings.api_key == "sk-or"
    assert settings.base_url == "https://openrouter.ai/api/v1"
    assert settings.extra["site_url"] == "https://app.example"
    assert settings.extra["model"] == "openrouter/auto"


def test_static_settings_provider():
    provider = StaticSettingsProvider(
        {"openai": VendorSettings(api_key="sk-1"), "gemini": {"api_key": "g-1", "retry": {"max_attempts": 1}}}
    )
    assert provider.get("openai").api_key == "sk-1"
    assert provider.get("gemini").extra == {"retry": {"max_attempts": 1}}
    assert provider.get("grok").api_key is None


def test_vendor_settings_base_url_strips_slash():
    assert VendorSettings(base_url="https://proxy.local/v1/").base_url_or("x") == "https://proxy.local/v1"
    assert VendorSettings().base_url_or("https://default") == "https://default"
