# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "daykeep"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

LOG_PATH = platformdirs.user_log_path(APP_NAME)
APP_LOG_PATH = LOG_PATH / "daykeep.log"

DATA_FILE_NAME = ".daykeep.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = Path.home()
DATA_FILE_PATH: Path = DATA_PATH / DATA_FILE_NAME


class Configuration(TypedDict):
    data_path: Optional[str]
    save_on_quit: bool
    show_header: bool
    allow_past_reschedule: bool
    log_level: str


def default_configuration() -> Configuration:
    return {
        "data_path": None,
        "save_on_quit": True,
        "show_header": True,
        "allow_past_reschedule": False,
        "log_level": "WARNING",
    }


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before the
    persistence gateway is created.
    """
    global DATA_PATH, DATA_FILE_PATH

    DATA_PATH = Path.home()
    DATA_FILE_PATH = DATA_PATH / DATA_FILE_NAME

    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    if data_path_setting is not None:
        DATA_PATH = Path(data_path_setting).expanduser()
        DATA_FILE_PATH = DATA_PATH / DATA_FILE_NAME
