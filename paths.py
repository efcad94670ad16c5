# -*- coding: utf-8 -*-
########################
# paths.py
########################
# Purpose:
# - Central filesystem path helpers for the app.
# - Defines where the config file and log files live.
#
# Design notes:
# - Keep path derivation consistent across modules.
# - No Qt usage. Return pathlib.Path only.
# - Nothing here creates directories. Callers that write files create them.
#
########################
# Interfaces:
# Public constants:
# - APP_NAME, APP_AUTHOR, CONFIG_FILE_NAME
#
# Public functions:
# - user_config_directory() -> pathlib.Path
# - user_log_directory() -> pathlib.Path
# - config_file_candidates() -> list[pathlib.Path]
#
########################

from __future__ import annotations

from pathlib import Path
from typing import List

from platformdirs import user_config_dir, user_log_dir


APP_NAME = "GridRecall"
APP_AUTHOR = "GridRecall"
CONFIG_FILE_NAME = "grid_recall_config.json"


def user_config_directory() -> Path:
    return Path(user_config_dir(APP_NAME, APP_AUTHOR))


def user_log_directory() -> Path:
    return Path(user_log_dir(APP_NAME, APP_AUTHOR))


def config_file_candidates() -> List[Path]:
    """Search order for the config file. The first existing path wins."""
    return [
        Path.cwd() / CONFIG_FILE_NAME,
        user_config_directory() / CONFIG_FILE_NAME,
    ]
