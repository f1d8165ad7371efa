"""Filter that replaces a message payload with a fixed one."""

from __future__ import annotations

import copy
from typing import Any, Mapping

from m2ebridge.filtras.filtra import Filtra, PipelineIface, common_schema
from m2ebridge.message import MessageFormat, MessageWrapper


class BuilderFT(Filtra):
    """Sets every JSON message's payload to the configured ``payload``."""

    def __init__(self, pipeline: PipelineIface, config: Mapping[str, Any]):
        super().__init__(pipeline, config)
        self.payload = copy.deepcopy(config["payload"])

    def process_message(self, msg_w: MessageWrapper) -> str:
        if self.msg_format is not MessageFormat.JSON:
            raise RuntimeError("Builder: Unknown encoder type")
        msg_w.msg.json = copy.deepcopy(self.payload)
        msg_w.mark_passed()
        return ""


SCHEMA = {
    **common_schema("builder"),
    "payload": {"type": "object", "required": True},
}