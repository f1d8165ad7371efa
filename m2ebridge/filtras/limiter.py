"""Filter that rejects messages larger than a size limit."""

from __future__ import annotations

from typing import Any, Mapping

from m2ebridge.filtras.filtra import Filtra, PipelineIface, common_schema
from m2ebridge.message import MessageWrapper


class LimiterFT(Filtra):
    """Passes messages whose serialized size is at most ``size`` bytes."""

    def __init__(self, pipeline: PipelineIface, config: Mapping[str, Any]):
        super().__init__(pipeline, config)
        self.size: int = config["size"]

    def process_message(self, msg_w: MessageWrapper) -> str:
        data = msg_w.msg.raw
        if isinstance(data, str):
            data = data.encode("utf-8")
        msg_w.pass_if(len(data) <= self.size)
        return ""


SCHEMA = {
    **common_schema("limiter"),
    "size": {"type": "integer", "required": True},
}