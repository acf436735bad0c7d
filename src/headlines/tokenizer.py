from __future__ import annotations
import io
import logging
from typing import BinaryIO, Callable, List

from .config import DECODE_ERRORS, DELIM, ENCODING

log = logging.getLogger(__name__)


def split_tokens(text: str) -> List[str]:
    """Split on the single delimiter; repeated spaces yield empty tokens."""
    return text.split(DELIM)


def join_tokens(tokens: List[str]) -> str:
    return DELIM.join(tokens)


def process_stream(stream: BinaryIO, process_tokens: Callable[[List[str]], None]) -> int:
    """
    Read stream line by line, trim each line, split it into tokens and pass
    them to process_tokens. Returns the number of lines handed to the callback.

    The last line is delivered even without a trailing newline. A stream that
    ends on a newline (or is empty) delivers one final empty line, i.e. [""].
    End of stream is not an error; OSError from the stream propagates.
    """
    n = 0
    while True:
        line = stream.readline()
        at_eof = not line.endswith(b"\n")
        text = line.decode(ENCODING, errors=DECODE_ERRORS).strip()
        process_tokens(split_tokens(text))
        n += 1
        if at_eof:
            break
    log.debug("processed %d lines", n)
    return n


class TeeReader:
    """
    Line reader that copies every line it returns into each sink, so the
    bytes consumed from the source can be replayed later from the sinks.
    """
    def __init__(self, source: BinaryIO, *sinks: io.BytesIO) -> None:
        self._source = source
        self._sinks = sinks

    def readline(self) -> bytes:
        line = self._source.readline()
        for sink in self._sinks:
            sink.write(line)
        return line
