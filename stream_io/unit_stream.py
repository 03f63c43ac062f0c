# Sequential one-unit-at-a-time readers and writers.
# Byte mode treats the file as opaque bytes; char mode decodes text with
# newline="" so no line-ending translation happens.

import codecs
from typing import Optional

from domain.constants import MODE_BYTE, MODE_CHAR


class ByteReader:
    def __init__(self, path: str):
        self.path = path
        self._f = open(path, "rb")

    def read_unit(self) -> Optional[int]:
        """Next byte value, or None at end of stream."""
        b = self._f.read(1)
        if not b:
            return None
        return b[0]

    def close(self):
        self._f.close()


class ByteWriter:
    def __init__(self, path: str):
        self.path = path
        self._f = open(path, "wb")

    def write_unit(self, unit: int) -> int:
        self._f.write(bytes((unit,)))
        return 1

    def close(self):
        self._f.close()


class CharReader:
    def __init__(self, path: str, encoding: str):
        self.path = path
        self._f = open(path, "r", encoding=encoding, newline="")

    def read_unit(self) -> Optional[str]:
        """Next character, or None at end of stream."""
        ch = self._f.read(1)
        if ch == "":
            return None
        return ch

    def close(self):
        self._f.close()


class CharWriter:
    def __init__(self, path: str, encoding: str):
        self.path = path
        self.encoding = encoding
        # mirrors the file encoder so a BOM is counted once, not per character
        self._encoder = codecs.getincrementalencoder(encoding)()
        self._f = open(path, "w", encoding=encoding, newline="")

    def write_unit(self, unit: str) -> int:
        self._f.write(unit)
        # bytes this character occupies on disk
        return len(self._encoder.encode(unit))

    def close(self):
        self._f.close()


def open_reader(path: str, mode: str, encoding: str):
    if mode == MODE_BYTE:
        return ByteReader(path)
    if mode == MODE_CHAR:
        return CharReader(path, encoding)
    raise ValueError(f"Unknown copy mode: {mode}")


def open_writer(path: str, mode: str, encoding: str):
    if mode == MODE_BYTE:
        return ByteWriter(path)
    if mode == MODE_CHAR:
        return CharWriter(path, encoding)
    raise ValueError(f"Unknown copy mode: {mode}")
