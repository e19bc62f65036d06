# SPDX-License-Identifier: MIT

import logging

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from daykeep import configuration
from daykeep.logger import configure_logging
from daykeep.repository.configuration import CONFIGURATION_REPO
from daykeep.view import state as view_state

logger = logging.getLogger(__name__)


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_config_files()
    configuration.load_data_path_configuration()

    config = CONFIGURATION_REPO.get_config()
    configure_logging(configuration.APP_LOG_PATH, config["log_level"])
    view_state.set_show_header(config["show_header"])
    logger.debug("data file: %s", configuration.DATA_FILE_PATH)


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        config = configuration.default_configuration()
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))
