from upload_ai.config import load_client_config, load_config


class TestLoadConfig:
    def test_defaults(self, monkeypatch):
        for name in ("DATABASE_URL", "UPLOAD_AI_PORT", "GEMINI_MODEL", "UPLOAD_AI_API_URL"):
            monkeypatch.delenv(name, raising=False)

        config = load_config()

        assert config.server.port == 3333
        assert config.server.max_upload_bytes == 25 * 1024 * 1024
        assert config.database.url.startswith("postgresql+psycopg://")
        assert config.minio.bucket_name == "videos"
        assert config.gemini.model_name == "gemini-2.5-flash-lite"
        assert load_client_config().api_base_url == "http://localhost:3333"
        assert load_client_config().reset_delay_seconds == 7.0
        assert load_client_config().timeout_seconds is None

    def test_database_url_override(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite:///upload_ai.db")

        assert load_config().database.url == "sqlite:///upload_ai.db"
