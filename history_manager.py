"""
History Manager for TokenCalc
Manages calculation history persisted through a key-value store
"""
import json
from dataclasses import dataclass, asdict
import config


@dataclass(frozen=True)
class HistoryItem:
    expression: str
    result: str


class HistoryManager:
    def __init__(self, storage, key=config.HISTORY_KEY):
        self.storage = storage
        self.key = key
        self.items = []
        self.load()

    def load(self):
        """Load stored history, falling back to an empty one"""
        try:
            raw = self.storage.get(self.key)
        except Exception as e:
            print(f"Failed to load history: {e}")
            raw = None

        self.items = self._parse(raw) if raw else []
        return self.items

    def _parse(self, raw):
        try:
            data = json.loads(raw)
            # Snapshots written by the browser storage service are encoded twice
            if isinstance(data, str):
                data = json.loads(data)
        except (TypeError, ValueError) as e:
            print(f"Ignoring malformed history: {e}")
            return []

        if not isinstance(data, list):
            return []

        items = []
        for entry in data:
            if not (isinstance(entry, dict)
                    and isinstance(entry.get('expression'), str)
                    and isinstance(entry.get('result'), str)):
                print("Ignoring malformed history: unexpected entry")
                return []
            items.append(HistoryItem(entry['expression'], entry['result']))
        return items

    def save(self):
        """Write the whole history back to the store"""
        snapshot = json.dumps([asdict(item) for item in self.items], ensure_ascii=False)
        try:
            self.storage.set(self.key, snapshot)
        except Exception as e:
            print(f"Failed to save history: {e}")

    def add_calculation(self, expression, result):
        """Add a calculation to history"""
        self.items.append(HistoryItem(expression, result))
        self.save()

    def get_calculation_history(self, limit=None):
        """Get calculation history, oldest first"""
        if limit is None:
            return list(self.items)
        return self.items[-limit:] if limit > 0 else []

    def clear_calculation_history(self):
        """Clear all calculation history"""
        self.items = []
        self.save()

    def format_calculation_history(self):
        """Format calculation history for display"""
        return [f"{item.expression} = {item.result}" for item in self.items]
