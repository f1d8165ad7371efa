"""Filter that splits large messages into CBOR-encoded chunks."""

from __future__ import annotations

import random
from typing import Any, Mapping

from m2ebridge.filtras.filtra import Filtra, PipelineIface, common_schema
from m2ebridge.message import Message, MessageFormat, MessageWrapper

CHUNK_MARKER = "____SPL"


class SplitterFT(Filtra):
    """Splits messages longer than ``chunk_size`` bytes.

    A long message makes :meth:`process_message` return ``"self"``; the
    pipeline then calls :meth:`generate_message` repeatedly, each call giving
    one chunk ``[marker, message_id, total_size, index, bytes]`` encoded as
    CBOR, until an invalid message signals the end.
    """

    def __init__(self, pipeline: PipelineIface, config: Mapping[str, Any]):
        super().__init__(pipeline, config)
        self.chunk_size: int = config["chunk_size"]
        self.message_id = random.randrange(65536)
        self._chunk_counter = -1
        self._msg_w: MessageWrapper | None = None

    def process_message(self, msg_w: MessageWrapper) -> str:
        if len(_as_bytes(msg_w.msg.raw)) > self.chunk_size:
            self._msg_w = msg_w
            self._chunk_counter = 0
            self.message_id += 1
            return "self"
        msg_w.mark_passed()
        return ""

    def generate_message(self) -> Message:
        if self._chunk_counter == -1 or self._msg_w is None:
            return Message()
        data = _as_bytes(self._msg_w.msg.raw)
        start = self.chunk_size * self._chunk_counter
        if len(data) - start <= 0:
            return Message()
        chunk = [
            CHUNK_MARKER,
            self.message_id,
            len(data),
            self._chunk_counter,
            data[start:start + self.chunk_size],
        ]
        self._chunk_counter += 1
        return Message(chunk, self._msg_w.msg.topic, MessageFormat.CBOR)


def _as_bytes(data: str | bytes) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


SCHEMA = {
    **common_schema("splitter"),
    "chunk_size": {"type": "integer", "required": True},
}