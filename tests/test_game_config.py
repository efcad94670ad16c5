from __future__ import annotations

import json
import logging

import pytest

import game_config
import game_logging
import paths


_ENV_NAMES = [
    "GRID_RECALL_CONFIG_PATH",
    "GRID_RECALL_GRID_SIZE",
    "GRID_RECALL_MAX_LEVEL",
    "GRID_RECALL_SEED",
    "GRID_RECALL_FULLSCREEN",
    "GRID_RECALL_LOG_LEVEL",
    "GRID_RECALL_LOG_TO_FILE",
]


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    for env_name in _ENV_NAMES:
        monkeypatch.delenv(env_name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(paths, "user_config_directory", lambda: tmp_path / "user_config")
    return tmp_path


def _write_config(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_missing_file_gives_defaults():
    config, resolved_path = game_config.load_config()

    assert resolved_path is None
    assert config.board.grid_size == 5
    assert config.levels.max_level == 7
    assert config.session.seed is None
    assert config.logging.level == "INFO"


def test_defaults_convert_to_level_rules():
    config, _ = game_config.load_config()
    rules = config.levels.to_rules()

    assert rules.flash_duration_ms(1) == 3000
    assert rules.recall_budget_seconds(6) == 30
    assert rules.success_delay_ms == 200
    assert rules.failure_delay_ms == 100


def test_config_in_working_directory_is_found(isolated_environment):
    config_path = _write_config(
        isolated_environment / paths.CONFIG_FILE_NAME,
        {"levels": {"max_level": 5}, "session": {"seed": 11}},
    )

    config, resolved_path = game_config.load_config()
    assert resolved_path == config_path
    assert config.levels.max_level == 5
    assert config.session.seed == 11


def test_explicit_path_from_environment(monkeypatch, isolated_environment):
    config_path = _write_config(isolated_environment / "custom.json", {"board": {"grid_size": 4}})
    monkeypatch.setenv("GRID_RECALL_CONFIG_PATH", str(config_path))

    config, resolved_path = game_config.load_config()
    assert resolved_path == config_path
    assert config.board.grid_size == 4


def test_environment_overrides_file_values(monkeypatch, isolated_environment):
    config_path = _write_config(isolated_environment / "c.json", {"levels": {"max_level": 5}})
    monkeypatch.setenv("GRID_RECALL_MAX_LEVEL", "6")
    monkeypatch.setenv("GRID_RECALL_SEED", "99")
    monkeypatch.setenv("GRID_RECALL_FULLSCREEN", "yes")
    monkeypatch.setenv("GRID_RECALL_LOG_LEVEL", "debug")

    config, _ = game_config.load_config(config_path)
    assert config.levels.max_level == 6
    assert config.session.seed == 99
    assert config.window.fullscreen is True
    assert config.logging.level == "DEBUG"


def test_unparseable_integer_override_is_skipped(monkeypatch):
    monkeypatch.setenv("GRID_RECALL_GRID_SIZE", "five")
    config, _ = game_config.load_config()
    assert config.board.grid_size == 5


def test_invalid_json_raises_config_error(isolated_environment):
    config_path = isolated_environment / "broken.json"
    config_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(game_config.ConfigError, match="not valid JSON"):
        game_config.load_config(config_path)


def test_non_object_root_raises_config_error(isolated_environment):
    config_path = _write_config(isolated_environment / "list.json", [1, 2, 3])

    with pytest.raises(game_config.ConfigError, match="JSON object"):
        game_config.load_config(config_path)


def test_missing_explicit_file_raises_config_error(isolated_environment):
    with pytest.raises(game_config.ConfigError):
        game_config.load_config(isolated_environment / "absent.json")


def test_grid_too_small_for_max_level_is_rejected(isolated_environment):
    config_path = _write_config(
        isolated_environment / "small.json",
        {"board": {"grid_size": 2}, "levels": {"max_level": 7}},
    )

    with pytest.raises(game_config.ConfigError, match="fewer than max_level"):
        game_config.load_config(config_path)


def test_unknown_log_level_is_rejected(isolated_environment):
    config_path = _write_config(isolated_environment / "log.json", {"logging": {"level": "chatty"}})

    with pytest.raises(game_config.ConfigError):
        game_config.load_config(config_path)


def test_main_prints_resolved_config(capsys):
    assert game_config.main() == 0
    payload = json.loads(capsys.readouterr().out)

    assert payload["ok"] is True
    assert payload["config_path"] is None
    assert payload["config"]["board"]["grid_size"] == 5


def test_main_reports_errors(monkeypatch, capsys, isolated_environment):
    config_path = isolated_environment / "bad.json"
    config_path.write_text("[]", encoding="utf-8")
    monkeypatch.setenv("GRID_RECALL_CONFIG_PATH", str(config_path))

    assert game_config.main() == 2
    payload = json.loads(capsys.readouterr().out)
    assert payload["ok"] is False


def test_configure_logging_does_not_duplicate_handlers(tmp_path):
    root_logger = logging.getLogger()
    previous_level = root_logger.level
    try:
        game_logging.configure_logging("DEBUG")
        log_path = game_logging.configure_logging("INFO", log_dir=tmp_path / "logs", use_colors=False)

        ours = [handler for handler in root_logger.handlers if getattr(handler, "_grid_recall_handler", False)]
        assert len(ours) == 2
        assert root_logger.level == logging.INFO

        logging.getLogger("game_controller").info("hello from test")
        for handler in ours:
            handler.flush()
        assert log_path is not None
        assert "[INFO] [game_controller] hello from test" in log_path.read_text(encoding="utf-8")
    finally:
        for handler in list(root_logger.handlers):
            if getattr(handler, "_grid_recall_handler", False):
                root_logger.removeHandler(handler)
                handler.close()
        root_logger.setLevel(previous_level)


def test_colored_formatter_wraps_level_color():
    formatter = game_logging.ColoredFormatter(use_colors=True)
    record = logging.LogRecord("grid", logging.ERROR, __file__, 1, "boom", (), None)

    formatted = formatter.format(record)
    assert formatted.startswith("\033[91m")
    assert formatted.endswith("\033[0m")
    assert "[ERROR] [grid] boom" in formatted
