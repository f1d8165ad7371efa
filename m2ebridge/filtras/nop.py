"""Filter that passes every message unchanged."""

from __future__ import annotations

from m2ebridge.filtras.filtra import Filtra, common_schema
from m2ebridge.message import MessageWrapper


class NopFT(Filtra):
    """Passes every message."""

    def process_message(self, msg_w: MessageWrapper) -> str:
        msg_w.mark_passed()
        return ""


SCHEMA = common_schema("nop")