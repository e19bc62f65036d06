import pendulum
import pytest

from daykeep import configuration
from daykeep.repository.configuration import CONFIGURATION_REPO
from daykeep.repository.persistence import PersistenceGateway
from daykeep.repository.task import TaskStore


@pytest.fixture
def day():
    return pendulum.date(2024, 1, 10)


@pytest.fixture
def store():
    return TaskStore()


@pytest.fixture
def gateway(tmp_path):
    return PersistenceGateway(tmp_path / "daykeep.yaml")


@pytest.fixture
def make_clock():
    def _make_clock(year, month, day, hour=0, minute=0):
        moment = pendulum.datetime(year, month, day, hour, minute, tz="local")
        return lambda: moment

    return _make_clock


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point config and data files at tmp_path for the duration of a test."""
    config_path = tmp_path / "config" / "config.yaml"
    data_file_path = tmp_path / "data" / configuration.DATA_FILE_NAME
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_path)
    monkeypatch.setattr(configuration, "DATA_PATH", data_file_path.parent)
    monkeypatch.setattr(configuration, "DATA_FILE_PATH", data_file_path)
    CONFIGURATION_REPO.reset()
    yield data_file_path
    CONFIGURATION_REPO.reset()
