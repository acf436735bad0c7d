from __future__ import annotations
import logging
import os

log = logging.getLogger(__name__)

# chain shape
PREFIX_LENGTH: int = 2     # tokens per state
MAX_LENGTH: int = 20       # default upper bound on tokens per generated phrase
MAX_LENGTH_LIMIT: int = 1000  # largest max length a request may ask for

# phrases per request
COUNT: int = 1
MAX_COUNT: int = 50

# tokenization: a single space, not a whitespace class
DELIM: str = " "
ENCODING: str = "utf-8"
# bytes that are not valid ENCODING survive as lone surrogates
DECODE_ERRORS: str = "surrogateescape"

# corpus files picked up when a directory is given
INCLUDE_EXTS = [".txt", ".md", ".csv", ".log"]

# folders to skip
EXCLUDE_DIRS = {".git", ".hg", ".svn", ".idea", ".vscode", "node_modules", "__pycache__"}

# /* ~~~ set HEADLINES_SEED=<int> for reproducible output ~~~ */
def _env_seed(name: str) -> int | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        log.warning("Ignoring %s=%r: not an integer", name, raw)
        return None

SEED: int | None = _env_seed("HEADLINES_SEED")

# Progress logging (set HEADLINES_VERBOSE=1 to enable)
VERBOSE: bool = os.environ.get("HEADLINES_VERBOSE") == "1"
