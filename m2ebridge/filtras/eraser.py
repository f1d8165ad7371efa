"""Filter that removes keys from a JSON payload."""

from __future__ import annotations

from typing import Any, Mapping

from m2ebridge.filtras.filtra import Filtra, PipelineIface, common_schema
from m2ebridge.message import MessageFormat, MessageWrapper


class EraserFT(Filtra):
    """Deletes the configured ``keys`` from JSON object payloads."""

    def __init__(self, pipeline: PipelineIface, config: Mapping[str, Any]):
        super().__init__(pipeline, config)
        self.keys: list[str] = list(config["keys"])

    def process_message(self, msg_w: MessageWrapper) -> str:
        if self.msg_format is MessageFormat.JSON:
            payload = msg_w.msg.json
            if isinstance(payload, dict):
                for key in self.keys:
                    payload.pop(key, None)
        return ""


SCHEMA = {
    **common_schema("eraser"),
    "keys": {"type": "array", "items": {"type": "string"}, "required": True},
}