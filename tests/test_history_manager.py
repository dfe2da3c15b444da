import json
import pytest
from database import MemoryStorage
from history_manager import HistoryItem, HistoryManager


def test_empty_storage_gives_empty_history(storage):
    assert HistoryManager(storage).get_calculation_history() == []


def test_add_calculation_saves_snapshot(storage):
    history = HistoryManager(storage)
    history.add_calculation("5+3", "8")
    history.add_calculation("8×2", "16")

    saved = json.loads(storage.get("equations"))
    assert saved == [
        {"expression": "5+3", "result": "8"},
        {"expression": "8×2", "result": "16"},
    ]


def test_history_is_reloaded_in_order(storage):
    history = HistoryManager(storage)
    for i in range(3):
        history.add_calculation(f"{i}+{i}", str(i * 2))

    reloaded = HistoryManager(storage)
    assert reloaded.get_calculation_history() == [
        HistoryItem("0+0", "0"),
        HistoryItem("1+1", "2"),
        HistoryItem("2+2", "4"),
    ]


def test_limit_returns_most_recent(storage):
    history = HistoryManager(storage)
    for i in range(5):
        history.add_calculation(str(i), str(i))
    assert [h.result for h in history.get_calculation_history(2)] == ["3", "4"]
    assert history.get_calculation_history(0) == []


def test_clear_calculation_history_persists(storage):
    history = HistoryManager(storage)
    history.add_calculation("1+1", "2")
    history.clear_calculation_history()

    assert storage.get("equations") == "[]"
    assert HistoryManager(storage).get_calculation_history() == []


def test_custom_key(storage):
    history = HistoryManager(storage, key="other")
    history.add_calculation("1+1", "2")
    assert storage.get("other") is not None
    assert storage.get("equations") is None


@pytest.mark.parametrize("raw", [
    "not json",
    "{\"expression\": \"1\"}",
    "42",
    "[{\"expression\": \"1+1\"}]",
    "[{\"expression\": 1, \"result\": \"1\"}]",
    "[\"1+1\"]",
])
def test_malformed_snapshot_gives_empty_history(raw):
    storage = MemoryStorage({"equations": raw})
    assert HistoryManager(storage).get_calculation_history() == []


def test_double_encoded_snapshot_is_read():
    entries = [{"expression": "5+3", "result": "8"}]
    storage = MemoryStorage({"equations": json.dumps(json.dumps(entries))})
    assert HistoryManager(storage).get_calculation_history() == [HistoryItem("5+3", "8")]


def test_broken_storage_is_tolerated(broken_storage):
    history = HistoryManager(broken_storage)
    assert history.get_calculation_history() == []

    history.add_calculation("1+1", "2")
    assert history.get_calculation_history() == [HistoryItem("1+1", "2")]

    history.clear_calculation_history()
    assert history.get_calculation_history() == []


def test_format_calculation_history(storage):
    history = HistoryManager(storage)
    history.add_calculation("5+3", "8")
    assert history.format_calculation_history() == ["5+3 = 8"]


def test_history_items_are_immutable():
    item = HistoryItem("1+1", "2")
    with pytest.raises(AttributeError):
        item.result = "3"
