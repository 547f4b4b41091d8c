"""Unit tests for application settings."""

from commentary.config import SearchSettings, Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.delenv("SEARCH__INDEX_NAME", raising=False)

        settings = Settings(_env_file=None)

        assert settings.rendering.url_display_limit == 60
        assert settings.rendering.title_length == 80
        assert settings.rendering.max_markdown_length == 25_000
        assert settings.threads.max_depth == 256

    def test_index_name_follows_environment(self, monkeypatch):
        monkeypatch.delenv("SEARCH__INDEX_NAME", raising=False)

        settings = Settings(_env_file=None, environment="production")

        assert settings.search.index_name == "Comment_production"

    def test_explicit_index_name_kept(self):
        settings = Settings(
            _env_file=None,
            environment="test",
            search=SearchSettings(index_name="comments_v2"),
        )

        assert settings.search.index_name == "comments_v2"

    def test_nested_env_overrides(self, monkeypatch):
        monkeypatch.setenv("RENDERING__APP_DOMAIN", "example.com")
        monkeypatch.setenv("THREADS__MAX_DEPTH", "10")

        settings = Settings(_env_file=None)

        assert settings.rendering.app_domain == "example.com"
        assert settings.threads.max_depth == 10
