import pytest
import tempfile
from pathlib import Path

from api import create_app
from calculator import Calculator
from database import MemoryStorage
from history_manager import HistoryManager


@pytest.fixture
def temp_dir_fixture():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def calc(storage):
    return Calculator(HistoryManager(storage))


@pytest.fixture
def press(calc):
    """Press a sequence of keys, e.g. press("5", "+", "3", "=")"""
    def _press(*keys):
        for key in keys:
            calc.press(key)
        return calc
    return _press


@pytest.fixture
def client(calc):
    app = create_app(calc)
    app.config['TESTING'] = True
    return app.test_client()


class BrokenStorage:
    """Storage whose every call fails"""

    def get(self, key):
        raise OSError("storage unavailable")

    def set(self, key, value):
        raise OSError("storage unavailable")


@pytest.fixture
def broken_storage():
    return BrokenStorage()
