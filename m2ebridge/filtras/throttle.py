"""Filter that limits how many messages pass per second."""

from __future__ import annotations

import time
from typing import Any, Mapping

from m2ebridge.filtras.filtra import Filtra, PipelineIface, common_schema
from m2ebridge.message import MessageWrapper


class ThrottleFT(Filtra):
    """Passes at most ``rate`` messages per second, rejecting the rest."""

    def __init__(self, pipeline: PipelineIface, config: Mapping[str, Any]):
        super().__init__(pipeline, config)
        self.rate = config["rate"]
        self.delay_ms = 1000 / self.rate
        self._last_msg_ms: int | None = None

    def process_message(self, msg_w: MessageWrapper) -> str:
        now_ms = time.monotonic_ns() // 1_000_000
        if self._last_msg_ms is None or now_ms - self._last_msg_ms >= self.delay_ms:
            self._last_msg_ms = now_ms
            msg_w.mark_passed()
        else:
            msg_w.reject()
        return ""


SCHEMA = {
    **common_schema("throttle"),
    "rate": {"type": "integer", "required": True},
}