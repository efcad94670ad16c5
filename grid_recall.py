"""
grid_recall.py

Real entrypoint that launches the trainer.

Integration
- Parses command line options
- Loads config (file, environment, then command line overrides)
- Configures logging
- Creates QApplication, the Qt scheduler, the controller and the main window
- Starts the Qt event loop
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional

from PyQt6.QtWidgets import QApplication

import game_config
import game_logging
import paths
from game_controller import GamePhaseController
from main_window import MainWindow
from qt_scheduler import QtTaskScheduler


logger = logging.getLogger(__name__)


def _build_argument_parser() -> argparse.ArgumentParser:
    argument_parser = argparse.ArgumentParser(description="Grid Recall visuospatial memory trainer")
    argument_parser.add_argument("--config", type=Path, default=None, help="Path to a JSON config file.")
    argument_parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible session.")
    argument_parser.add_argument("--max-level", type=int, default=None, help="Override the last level.")
    argument_parser.add_argument("--fullscreen", action="store_true", help="Start in fullscreen.")
    argument_parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR or CRITICAL.")
    return argument_parser


def _apply_cli_overrides(config: game_config.AppConfig, parsed_args: argparse.Namespace) -> game_config.AppConfig:
    config_dict = config.model_dump()
    if parsed_args.seed is not None:
        config_dict["session"]["seed"] = int(parsed_args.seed)
    if parsed_args.max_level is not None:
        config_dict["levels"]["max_level"] = int(parsed_args.max_level)
    if parsed_args.fullscreen:
        config_dict["window"]["fullscreen"] = True
    if parsed_args.log_level:
        config_dict["logging"]["level"] = str(parsed_args.log_level)

    try:
        return game_config.AppConfig.model_validate(config_dict)
    except ValueError as exception:
        raise game_config.ConfigError(f"Invalid command line options:\n{exception}") from exception


def build_controller(config: game_config.AppConfig, scheduler) -> GamePhaseController:
    random_generator = random.Random(config.session.seed) if config.session.seed is not None else random.Random()
    return GamePhaseController(
        scheduler,
        rules=config.levels.to_rules(),
        grid_size=int(config.board.grid_size),
        random_generator=random_generator,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parsed_args = _build_argument_parser().parse_args(argv)

    try:
        app_config, config_path = game_config.load_config(parsed_args.config)
        app_config = _apply_cli_overrides(app_config, parsed_args)
    except game_config.ConfigError as exception:
        print(json.dumps({"ok": False, "error": str(exception)}, ensure_ascii=False, indent=2))
        return 2

    log_dir = paths.user_log_directory() if app_config.logging.log_to_file else None
    log_path = game_logging.configure_logging(app_config.logging.level, log_dir=log_dir)
    logger.info("Config: %s", str(config_path) if config_path is not None else "defaults")
    if log_path is not None:
        logger.info("Logging to %s", log_path)

    qt_application = QApplication(sys.argv if argv is None else ["grid_recall"] + list(argv))

    scheduler = QtTaskScheduler()
    controller = build_controller(app_config, scheduler)

    main_window = MainWindow(controller)
    main_window.resize(int(app_config.window.width), int(app_config.window.height))
    if app_config.window.fullscreen:
        main_window.showFullScreen()
    else:
        main_window.show()

    exit_code = int(qt_application.exec())
    controller.shutdown()
    logger.info("Exited with code %d", exit_code)
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
