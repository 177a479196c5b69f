from collections import deque
from typing import List

from viz_core.settings import DEFAULT_SETTINGS


class CommandHistory:
    """Most-recent-first log of submitted queries; the oldest entry drops off past ``limit``."""

    def __init__(self, limit: int = DEFAULT_SETTINGS.history_limit):
        self._entries = deque(maxlen=limit)

    def add(self, query: str):
        self._entries.appendleft(query)

    def recent(self, count=None) -> List[str]:
        entries = list(self._entries)
        return entries if count is None else entries[:count]

    def clear(self):
        self._entries.clear()

    def __len__(self):
        return len(self._entries)

    def __getitem__(self, index):
        return self._entries[index]
