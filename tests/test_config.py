from gateway.core.config import Settings


def test_nested_sections_read_from_environment(monkeypatch):
    monkeypatch.setenv("NAMESPACE__NAME", "production")
    monkeypatch.setenv("NAMESPACE__API_TOKEN", "token-123")
    monkeypatch.setenv("DATABASE__URL", "sqlite+aiosqlite:///./other.db")

    settings = Settings(_env_file=None)

    assert settings.namespace_name == "production"
    assert settings.namespace.api_token == "token-123"
    assert settings.database_url == "sqlite+aiosqlite:///./other.db"


def test_api_token_is_hidden_from_repr(monkeypatch):
    monkeypatch.setenv("NAMESPACE__API_TOKEN", "token-123")

    assert "token-123" not in repr(Settings(_env_file=None))
