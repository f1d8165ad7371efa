"""Filter that searches message text, payload values or payload keys."""

from __future__ import annotations

import enum
from typing import Any, Mapping

from m2ebridge.filtras.filtra import Filtra, PipelineIface, common_schema
from m2ebridge.message import MessageFormat, MessageWrapper


class SearchOperator(enum.Enum):
    UNKN = ""
    CONTAIN = "contain"
    CONTAINED = "contained"
    MATCH = "match"


class FinderFT(Filtra):
    """Passes messages whose text, value or keys match the configured search.

    With ``string`` set, the raw message (or the payload field named by
    ``value_key``) is searched with ``operator``; with ``keys`` set, every key
    must be present in the JSON payload. Both checks must hold.
    """

    def __init__(self, pipeline: PipelineIface, config: Mapping[str, Any]):
        super().__init__(pipeline, config)
        try:
            self.operator = SearchOperator(config.get("operator", "match"))
        except ValueError:
            self.operator = SearchOperator.UNKN
        self.string: str = config.get("string", "")
        self.keys: list[str] = list(config.get("keys") or ())
        self.value_key: str = config.get("value_key", "")

    def process_message(self, msg_w: MessageWrapper) -> str:
        result = True
        if self.string:
            if self.value_key:
                result = self.find_in_value(msg_w)
            else:
                result = self.find_in_string(msg_w.msg.raw)
        if result and self.keys:
            result = self.find_in_keys(msg_w)
        msg_w.pass_if(not result if self.logical_negation else result)
        return ""

    def find_in_string(self, text: str | bytes) -> bool:
        """Apply the search operator between ``text`` and the configured string."""
        if isinstance(text, bytes):
            text = text.decode("utf-8", errors="replace")
        if self.operator is SearchOperator.CONTAIN:
            return self.string in text
        if self.operator is SearchOperator.CONTAINED:
            return text in self.string
        if self.operator is SearchOperator.MATCH:
            return self.string == text
        return False

    def find_in_keys(self, msg_w: MessageWrapper) -> bool:
        """Return whether every configured key is present in the JSON payload."""
        if self.msg_format is not MessageFormat.JSON:
            return False
        payload = msg_w.msg.json
        if not isinstance(payload, dict):
            return False
        return all(key in payload for key in self.keys)

    def find_in_value(self, msg_w: MessageWrapper) -> bool:
        """Search the payload field named by ``value_key``."""
        if self.msg_format is not MessageFormat.JSON:
            return False
        payload = msg_w.msg.json
        if not isinstance(payload, dict) or self.value_key not in payload:
            return False
        value = payload[self.value_key]
        if not isinstance(value, str):
            raise TypeError(f"value of '{self.value_key}' is not a string")
        return self.find_in_string(value)


SCHEMA = {
    **common_schema("finder"),
    "operator": {
        "type": "string",
        "enum": ["contain", "contained", "match"],
        "default": "match",
        "required": True,
    },
    "string": {"type": "string", "required": False},
    "keys": {"type": "array", "items": {"type": "string"}, "required": False},
    "value_key": {"type": "string", "required": False},
}