from __future__ import annotations
import io
import logging
import os
import sys
from typing import BinaryIO, Iterable

from . import config as CFG
from .config import EXCLUDE_DIRS, INCLUDE_EXTS

log = logging.getLogger(__name__)

PROGRESS_EVERY_FILES = 500

def iter_corpus_files(root: str) -> Iterable[str]:
    """Yield corpus files under root recursively, in sorted order."""
    root = os.path.abspath(root)
    exts = tuple(e.lower() for e in INCLUDE_EXTS)
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in EXCLUDE_DIRS)
        for fn in sorted(filenames):
            if fn.lower().endswith(exts):
                yield os.path.join(dirpath, fn)

def _read_tree(root: str) -> BinaryIO:
    buf = io.BytesIO()
    file_count = 0
    for path in iter_corpus_files(root):
        with open(path, "rb") as f:
            data = f.read()
        buf.write(data)
        # keep the last line of one file from fusing with the first of the next
        if data and not data.endswith(b"\n"):
            buf.write(b"\n")
        file_count += 1
        if CFG.VERBOSE and file_count % PROGRESS_EVERY_FILES == 0:
            print(f"[scanned] files={file_count:,}")
    log.info("Read %d corpus files (%d bytes) under %s", file_count, buf.tell(), root)
    buf.seek(0)
    return buf

def open_corpus(path: str) -> BinaryIO:
    """
    Return a binary stream over the corpus at path.
      "-"        -> stdin
      directory  -> every INCLUDE_EXTS file beneath it, concatenated
      file       -> the file itself (caller closes it)
    """
    if path == "-":
        return sys.stdin.buffer
    if os.path.isdir(path):
        return _read_tree(path)
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    log.info("Opening corpus file %s", path)
    return open(path, "rb")
