from __future__ import annotations

import sys
from typing import Callable, List

Diagnostics = Callable[[str], None]


def print_sink(message: str) -> None:
    print(message, file=sys.stderr)


class CollectingSink:
    """Keeps every reported message, in order."""

    def __init__(self):
        self.messages: List[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)

    def clear(self):
        self.messages.clear()
