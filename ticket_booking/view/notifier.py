"""
User-facing notifications for the booking widget.
"""

import sys
from abc import ABC, abstractmethod
from typing import List, Optional, TextIO, Tuple


class Notifier(ABC):
    """Receives the messages the widget shows to its user."""

    @abstractmethod
    def error(self, message: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def success(self, message: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def info(self, message: str) -> None:
        raise NotImplementedError


class ConsoleNotifier(Notifier):
    """Writes notifications to a terminal."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    def _write(self, prefix: str, message: str) -> None:
        self.stream.write(f"{prefix} {message}\n")
        self.stream.flush()

    def error(self, message: str) -> None:
        self._write("[!]", message)

    def success(self, message: str) -> None:
        self._write("[ok]", message)

    def info(self, message: str) -> None:
        self._write("[i]", message)


class RecordingNotifier(Notifier):
    """Keeps notifications in memory, e.g. for tests or a GUI poll loop."""

    def __init__(self):
        self.messages: List[Tuple[str, str]] = []

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def of_kind(self, kind: str) -> List[str]:
        return [message for message_kind, message in self.messages if message_kind == kind]

    @property
    def last(self) -> Optional[Tuple[str, str]]:
        return self.messages[-1] if self.messages else None
