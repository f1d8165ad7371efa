"""Base class for pipeline filters and the interface they see of a pipeline."""

from __future__ import annotations

import abc
import copy
from typing import Any, Mapping

from m2ebridge.message import Message, MessageFormat, MessageWrapper

_FORMATS = {"json": MessageFormat.JSON, "raw": MessageFormat.RAW}


class PipelineIface(abc.ABC):
    """What a filter may ask of the pipeline that runs it."""

    @abc.abstractmethod
    def schedule_event(self, msec: int) -> None:
        """Ask the pipeline to trigger an event after ``msec`` milliseconds."""


class Filtra(abc.ABC):
    """A pipeline stage that inspects, changes or routes messages.

    ``hops`` holds the next stage for passed and for rejected messages;
    each falls back to ``goto`` when not given on its own.
    """

    def __init__(self, pipeline: PipelineIface, config: Mapping[str, Any]):
        self.pipeline = pipeline
        self.name: str = config.get("name", "")
        self.msg_format = _FORMATS.get(config.get("msg_format", "raw"), MessageFormat.UNKN)
        self.logical_negation = bool(config.get("logical_negation", False))
        self.destinations: list[str] = list(config.get("queues") or ())
        self.metadata: Any = copy.deepcopy(config.get("metadata"))
        goto = config.get("goto", "")
        self.hops: tuple[str, str] = (
            config.get("goto_passed", goto),
            config.get("goto_rejected", goto),
        )

    def process(self, msg_w: MessageWrapper) -> str:
        """Attach this filter's metadata to the message, then process it."""
        msg_w.add_metadata(self.metadata)
        return self.process_message(msg_w)

    def generate(self) -> Message:
        """Produce a message originating from this filter."""
        return self.generate_message()

    @abc.abstractmethod
    def process_message(self, msg_w: MessageWrapper) -> str:
        """Handle one message; return a hop override or ""."""

    def generate_message(self) -> Message:
        return Message()


def common_schema(type_name: str) -> dict[str, Any]:
    """Schema fields shared by every filter of the given type."""
    return {
        "type": {"type": "string", "enum": [type_name], "required": True},
        "name": {"type": "string", "default": "", "required": False},
        "msg_format": {
            "type": "string",
            "enum": ["json", "raw"],
            "default": "raw",
            "required": False,
        },
        "logical_negation": {"type": "boolean", "default": False, "required": False},
        "queues": {"type": "array", "items": {"type": "string"}, "required": False},
        "metadata": {"type": "object", "required": False},
        "goto": {"type": "string", "default": "", "required": False},
        "goto_passed": {"type": "string", "default": "", "required": False},
        "goto_rejected": {"type": "string", "default": "", "required": False},
    }