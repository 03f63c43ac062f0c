import os
import sys

from tqdm import tqdm

from utils.timeutil import now_stamp


class RunLogger:
    """Timestamped free-text log lines.

    INFO goes to stdout, WARN/ERROR to stderr. Lines are written through
    tqdm.write so an active progress bar is not torn. When a path is given
    every line is also appended to that file.
    """

    def __init__(self, path: str | None = None):
        self.path = path
        if path and os.path.dirname(path):
            os.makedirs(os.path.dirname(path), exist_ok=True)

    def info(self, msg: str):
        self._emit("INFO", msg, sys.stdout)

    def warn(self, msg: str):
        self._emit("WARN", msg, sys.stderr)

    def error(self, msg: str):
        self._emit("ERROR", msg, sys.stderr)

    def _emit(self, level: str, msg: str, stream):
        line = f"[{now_stamp()}] {level} {msg}"
        tqdm.write(line, file=stream)
        if self.path:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
