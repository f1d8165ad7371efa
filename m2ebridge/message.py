"""Messages flowing through a pipeline and the wrapper that routes them."""

from __future__ import annotations

import copy
import enum
import json as _json
from typing import Any, Iterable

import cbor2


class MessageFormat(enum.Enum):
    """Encoding of a message payload."""

    UNKN = enum.auto()
    RAW = enum.auto()
    JSON = enum.auto()
    CBOR = enum.auto()


_NO_DATA = object()


class Message:
    """A payload with a topic, held either serialized or decoded.

    Without ``fmt`` the data is taken as already serialized; with ``fmt``
    it is a decoded value that is encoded on demand in that format.
    A message built with no data at all is invalid and false.
    """

    def __init__(self, data: Any = _NO_DATA, topic: str = "", fmt: MessageFormat | None = None):
        self.topic = topic
        self._levels: list[str] | None = None
        self._raw: str | bytes = ""
        self._decoded: Any = None
        self._format = MessageFormat.UNKN
        self._serialized = False
        self._valid = data is not _NO_DATA
        if not self._valid:
            return
        if fmt is None:
            self._raw = data
            self._serialized = True
        else:
            self._decoded = data
            self._format = fmt

    @property
    def format(self) -> MessageFormat:
        return self._format

    @property
    def raw(self) -> str | bytes:
        """The serialized payload, encoding the decoded value if needed."""
        if not self._serialized:
            if self._format is MessageFormat.JSON:
                self._raw = _json.dumps(
                    self._decoded, separators=(",", ":"), ensure_ascii=False
                )
            elif self._format is MessageFormat.CBOR:
                self._raw = cbor2.dumps(self._decoded)
            else:
                raise RuntimeError("Unknown encoder")
            self._serialized = True
        return self._raw

    @property
    def json(self) -> Any:
        """The decoded payload, parsing the serialized form as JSON if needed."""
        if self._serialized:
            self._decoded = _json.loads(self._raw)
            self._serialized = False
            self._format = MessageFormat.JSON
        return self._decoded

    @json.setter
    def json(self, value: Any) -> None:
        if self._serialized:
            self._serialized = False
            self._format = MessageFormat.JSON
        self._decoded = value

    def topic_level(self, level: int) -> str:
        """Return the topic segment at ``level``, or "" when there is none."""
        if self._levels is None:
            parts = self.topic.split("/")
            if parts and parts[-1] == "":
                parts.pop()
            self._levels = parts
        if 0 <= level < len(self._levels):
            return self._levels[level]
        return ""

    def __bool__(self) -> bool:
        return self._valid


def _merge_patch(target: Any, patch: Any) -> Any:
    if not isinstance(patch, dict):
        return copy.deepcopy(patch)
    result = dict(target) if isinstance(target, dict) else {}
    for key, value in patch.items():
        if value is None:
            result.pop(key, None)
        else:
            result[key] = _merge_patch(result.get(key), value)
    return result


class MessageWrapper:
    """Tracks an original message, its working copy, routing and metadata."""

    def __init__(self, msg: Message | None = None):
        self._initialized = msg is not None
        source = msg if msg is not None else Message()
        self.orig = copy.deepcopy(source)
        self.msg = copy.deepcopy(source)
        self.passed = self._initialized
        self.destinations: set[str] = set()
        self.metadata: Any = None

    def __bool__(self) -> bool:
        return self._initialized

    def mark_passed(self) -> None:
        self.passed = True

    def reject(self) -> None:
        self.passed = False

    def pass_if(self, cond: bool) -> None:
        self.passed = bool(cond)

    def add_destination(self, queue_id: str) -> None:
        self.destinations.add(queue_id)

    def add_destinations(self, queue_ids: Iterable[str]) -> None:
        self.destinations.update(queue_ids)

    def clear_destinations(self) -> None:
        self.destinations.clear()

    def add_metadata(self, metadata: Any) -> None:
        """Merge ``metadata`` into the current metadata as a JSON merge patch."""
        self.metadata = _merge_patch(self.metadata, metadata)