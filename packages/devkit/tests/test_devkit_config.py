from devkit.config import load_settings


def test_load_settings_reads_env(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql://example")
    monkeypatch.setenv("LLM_BASE_URL", "https://llm.example.com/v1")
    monkeypatch.setenv("PINCODE_SEARCH_LIMIT", "5")
    monkeypatch.setenv("FALLBACK_RANDOM_SEED", "7")
    settings = load_settings("route-api")

    assert settings.SERVICE_NAME == "route-api"
    assert settings.DATABASE_URL == "postgresql://example"
    assert settings.LLM_BASE_URL == "https://llm.example.com/v1"
    assert settings.PINCODE_SEARCH_LIMIT == 5
    assert settings.FALLBACK_RANDOM_SEED == 7


def test_load_settings_defaults(monkeypatch) -> None:
    for key in ("DATABASE_URL", "LLM_BASE_URL", "PINCODE_SEARCH_LIMIT", "PINCODE_PREFIX_LIMIT", "FALLBACK_RANDOM_SEED"):
        monkeypatch.delenv(key, raising=False)
    settings = load_settings("route-api")

    assert settings.DATABASE_URL is None
    assert settings.LLM_BASE_URL is None
    assert settings.PINCODE_SEARCH_LIMIT == 10
    assert settings.PINCODE_PREFIX_LIMIT == 100
    assert settings.FALLBACK_RANDOM_SEED is None
