import pytest

from passgen.server import create_app
from passgen.storage import HistoryStore


class SequenceRng:
    """Deterministic stand-in for the secrets module: replays fixed indices."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []
        self._i = 0

    def randbelow(self, n):
        self.calls.append(n)
        value = self.values[self._i % len(self.values)]
        self._i += 1
        return value % n


@pytest.fixture
def events_log(tmp_path):
    return tmp_path / "events.log"


@pytest.fixture
def app(tmp_path, events_log):
    app = create_app(
        settings={"history_cap": 5},
        db_path=str(tmp_path / "passgen.db"),
        events_log=str(events_log),
    )
    app.config.update({"TESTING": True})
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(tmp_path):
    return HistoryStore(str(tmp_path / "history.db"), cap=3)
