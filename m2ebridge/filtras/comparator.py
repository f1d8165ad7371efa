"""Filter that compares a numeric payload field with a fixed value."""

from __future__ import annotations

import enum
import operator
from typing import Any, Mapping

from m2ebridge.filtras.filtra import Filtra, PipelineIface, common_schema
from m2ebridge.message import MessageWrapper


class ComparatorOperator(enum.Enum):
    UNKN = ""
    EQ = "eq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"


_COMPARE = {
    ComparatorOperator.EQ: operator.eq,
    ComparatorOperator.GT: operator.gt,
    ComparatorOperator.GTE: operator.ge,
    ComparatorOperator.LT: operator.lt,
    ComparatorOperator.LTE: operator.le,
}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ComparatorFT(Filtra):
    """Passes a message when ``payload[value_key] <operator> comparand`` holds."""

    def __init__(self, pipeline: PipelineIface, config: Mapping[str, Any]):
        super().__init__(pipeline, config)
        try:
            self.operator = ComparatorOperator(config["operator"])
        except ValueError:
            self.operator = ComparatorOperator.UNKN
        self.value_key: str = config["value_key"]
        comparand = config["comparand"]
        self.comparand: int | float = comparand if _is_number(comparand) else 0

    def _compare(self, value: int | float) -> bool:
        compare = _COMPARE.get(self.operator)
        return compare(value, self.comparand) if compare else False

    def process_message(self, msg_w: MessageWrapper) -> str:
        payload = msg_w.msg.json
        try:
            value = payload[self.value_key]
        except (KeyError, TypeError, IndexError) as exc:
            raise ValueError("json") from exc
        if not _is_number(value):
            raise ValueError("json")
        result = self._compare(value)
        msg_w.pass_if(not result if self.logical_negation else result)
        return ""


SCHEMA = {
    **common_schema("comparator"),
    "operator": {
        "type": "string",
        "enum": ["eq", "gt", "gte", "lt", "lte"],
        "required": True,
    },
    "value_key": {"type": "string", "required": True},
    "comparand": {"type": "integer", "required": True},
}