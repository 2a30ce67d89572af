import json
import os
from typing import Dict, Optional


class LocalStorage:
    """Browser-style key/value storage kept in a single local JSON file"""

    def __init__(self, storage_file: str = 'habit_tracker_data.json'):
        self.storage_file = str(storage_file)
        self.values = self._load_values()

    def _load_values(self) -> Dict[str, str]:
        """Load stored values from the JSON file"""
        if os.path.exists(self.storage_file):
            try:
                with open(self.storage_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (json.JSONDecodeError, IOError) as e:
                print(f"[storage] error loading {self.storage_file}: {e}")
                return {}
            if isinstance(data, dict):
                return {str(k): v for k, v in data.items() if isinstance(v, str)}
            print(f"[storage] ignoring unexpected content in {self.storage_file}")
        return {}

    def _save_values(self):
        """Write every value back to the JSON file"""
        try:
            with open(self.storage_file, 'w', encoding='utf-8') as f:
                json.dump(self.values, f, indent=2)
        except IOError as e:
            print(f"[storage] error saving {self.storage_file}: {e}")

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value
        self._save_values()
