from threadkeeper.config.core import Core
from threadkeeper.config.loader import load_raw_config
from threadkeeper.config.rest import Rest
from threadkeeper.config.threads import Threads


def test_load_raw_config_missing_file_returns_empty(tmp_path):
    assert load_raw_config(tmp_path / "missing.toml") == {}


def test_sections_read_toml_before_environment(tmp_path, monkeypatch):
    cfg = tmp_path / "config.toml"
    cfg.write_text(
        """
[threadkeeper]
log_level = "debug"

[threadkeeper.discord]
token_env = "TK_TEST_TOKEN"

[threadkeeper.rest]
api_base = "https://example.test/api/v10/"
timeout_seconds = 5

[threadkeeper.threads]
default_archive_limit = 25
"""
    )
    monkeypatch.setenv("TK_TEST_TOKEN", "from-env")
    raw = load_raw_config(cfg)

    core = Core(raw)
    rest = Rest(raw)
    threads = Threads(raw)

    assert core.DISCORD_API_TOKEN == "from-env"
    assert core.LOG_LEVEL == "DEBUG"
    assert rest.API_BASE == "https://example.test/api/v10"
    assert rest.TIMEOUT_SECONDS == 5.0
    assert threads.DEFAULT_ARCHIVE_LIMIT == 25


def test_sections_fall_back_to_environment(monkeypatch):
    monkeypatch.setenv("DISCORD_API_BASE", "https://env.test/api")
    monkeypatch.setenv("DEFAULT_ARCHIVE_LIMIT", "7")

    assert Rest({}).API_BASE == "https://env.test/api"
    assert Threads(None).DEFAULT_ARCHIVE_LIMIT == 7
