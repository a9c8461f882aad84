"""Binary save-file persistence for games in progress.

Layout (little-endian)::

    int32   magic 0x4753504D
    int32   format version
    int32   width
    int32   height
    string  image path (7-bit encoded byte length, UTF-8)
    int32   move count
    int64   elapsed time in 100 ns ticks
    bytes   rank, two's-complement, remainder of the stream

Boards above ``MAX_CELLS`` cells are refused on read.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import BinaryIO

from tilesolver.engine.codec import rank_count

MAGIC = 0x4753504D
VERSION = 1
TICKS_PER_SECOND = 10_000_000
# 64×64; larger boards are rejected before any rank arithmetic
MAX_CELLS = 4096

_HEADER = struct.Struct("<iiii")
_MOVES = struct.Struct("<i")
_TICKS = struct.Struct("<q")


class SaveFormatError(ValueError):
    """The stream is not a save file this version can read."""


@dataclass
class SaveData:
    width: int
    height: int
    image_path: str
    moves: int
    elapsed: float
    rank: int

    # -- persistence ----------------------------------------------------------

    def write(self, stream: BinaryIO) -> None:
        stream.write(_HEADER.pack(MAGIC, VERSION, self.width, self.height))
        stream.write(_encode_string(self.image_path))
        stream.write(_MOVES.pack(self.moves))
        stream.write(_TICKS.pack(round(self.elapsed * TICKS_PER_SECOND)))
        stream.write(_encode_rank(self.rank))

    @classmethod
    def read(cls, stream: BinaryIO) -> SaveData:
        magic, version, width, height = _HEADER.unpack(_read_exact(stream, _HEADER.size))
        if magic != MAGIC:
            raise SaveFormatError(f"Bad magic number 0x{magic & 0xFFFFFFFF:08X}.")
        if version != VERSION:
            raise SaveFormatError(f"Unsupported save version {version}.")
        if width <= 1 or height <= 1:
            raise SaveFormatError(f"Invalid board size {width}×{height}.")
        if width * height > MAX_CELLS:
            raise SaveFormatError(
                f"Board size {width}×{height} exceeds {MAX_CELLS} cells."
            )

        image_path = _decode_string(stream)
        (moves,) = _MOVES.unpack(_read_exact(stream, _MOVES.size))
        (ticks,) = _TICKS.unpack(_read_exact(stream, _TICKS.size))
        rank = int.from_bytes(stream.read(), "little", signed=True)
        if not 0 <= rank < rank_count(width * height):
            raise SaveFormatError(f"Rank {rank} out of range for {width}×{height}.")

        return cls(
            width=width,
            height=height,
            image_path=image_path,
            moves=moves,
            elapsed=ticks / TICKS_PER_SECOND,
            rank=rank,
        )

    def to_bytes(self) -> bytes:
        buffer = BytesIO()
        self.write(buffer)
        return buffer.getvalue()


def save_path(data: SaveData, filepath: Path) -> None:
    filepath.parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, "wb") as f:
        data.write(f)


def load_path(filepath: Path) -> SaveData:
    with open(filepath, "rb") as f:
        return SaveData.read(f)


# -- encoding helpers ---------------------------------------------------------


def _read_exact(stream: BinaryIO, n: int) -> bytes:
    data = stream.read(n)
    if len(data) != n:
        raise SaveFormatError(f"Unexpected end of data (wanted {n} bytes, got {len(data)}).")
    return data


def _encode_string(text: str) -> bytes:
    raw = text.encode("utf-8")
    length = len(raw)
    prefix = bytearray()
    while length >= 0x80:
        prefix.append((length & 0x7F) | 0x80)
        length >>= 7
    prefix.append(length)
    return bytes(prefix) + raw


def _decode_string(stream: BinaryIO) -> str:
    length = 0
    shift = 0
    while True:
        (byte,) = _read_exact(stream, 1)
        length |= (byte & 0x7F) << shift
        if not byte & 0x80:
            break
        shift += 7
        if shift > 28:
            raise SaveFormatError("String length prefix is too long.")
    try:
        return _read_exact(stream, length).decode("utf-8")
    except UnicodeDecodeError as e:
        raise SaveFormatError(f"Image path is not valid UTF-8: {e}") from e


def _encode_rank(rank: int) -> bytes:
    """Shortest two's-complement form; zero is a single byte."""
    return rank.to_bytes((rank.bit_length() + 8) // 8, "little", signed=True)
