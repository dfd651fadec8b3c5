import codecs
import json
from typing import List

DATA_PREFIX = "data: "
DONE_MARKER = "[DONE]"


class StreamReassembler:
    """
    Incrementally rebuild assistant text from a text/event-stream body.

    Feed raw transport chunks in arrival order. Comment and blank lines
    are ignored and a `data: [DONE]` frame ends the stream. A frame whose
    JSON does not parse yet is put back in front of the buffer and
    retried once more bytes arrive, since a transport chunk can end in
    the middle of a frame.
    """

    def __init__(self):
        self._decoder = codecs.getincrementaldecoder('utf-8')(errors='replace')
        self._buffer = ""
        self._fragments: List[str] = []
        self.done = False

    @property
    def content(self) -> str:
        return "".join(self._fragments)

    def feed(self, chunk: bytes) -> List[str]:
        """
        Consume one transport chunk.

        Returns:
            The content fragments completed by this chunk, in order
        """
        if self.done:
            return []

        self._buffer += self._decoder.decode(chunk)
        added = []

        while "\n" in self._buffer:
            line, self._buffer = self._buffer.split("\n", 1)
            if line.endswith("\r"):
                line = line[:-1]

            if line.startswith(":") or not line.strip():
                continue
            if not line.startswith(DATA_PREFIX):
                continue

            payload = line[len(DATA_PREFIX):].strip()
            if payload == DONE_MARKER:
                self.done = True
                break

            try:
                parsed = json.loads(payload)
            except json.JSONDecodeError:
                # Incomplete frame; wait for the rest
                self._buffer = line + "\n" + self._buffer
                break

            fragment = _delta_content(parsed)
            if fragment:
                self._fragments.append(fragment)
                added.append(fragment)

        return added


def _delta_content(frame) -> str:
    try:
        return frame["choices"][0]["delta"].get("content") or ""
    except (KeyError, IndexError, TypeError, AttributeError):
        return ""
