"""Wire format shared by the audio client and server.

Every packet is a fixed header followed by ``num_frames`` mono float32
samples. The header fields travel in network byte order; the samples are
sent as raw float32 values in the host's byte order.
"""

from __future__ import annotations

import struct
from array import array
from collections.abc import Iterable
from dataclasses import dataclass

_HEADER = struct.Struct("!II")
_UINT32_MAX = 0xFFFFFFFF

HEADER_SIZE = _HEADER.size
SAMPLE_SIZE = array("f").itemsize
DEFAULT_SAMPLE_RATE = 44100

Buffer = list[float]
"""A batch of audio samples carried by one packet."""


@dataclass(frozen=True)
class PacketHeader:
    """Metadata that precedes each packet of audio sample data."""

    sample_rate: int
    num_frames: int

    def __post_init__(self) -> None:
        for name in ("sample_rate", "num_frames"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{name} must be an int, not {type(value).__name__}")
            if not 0 <= value <= _UINT32_MAX:
                raise ValueError(f"{name} must fit in an unsigned 32-bit integer: {value}")

    @property
    def payload_size(self) -> int:
        """Number of bytes of sample data that follow this header."""
        return self.num_frames * SAMPLE_SIZE

    def pack(self) -> bytes:
        """Serialise the header in network byte order."""
        return _HEADER.pack(self.sample_rate, self.num_frames)

    @classmethod
    def unpack(cls, data: bytes) -> PacketHeader:
        """Parse a header from exactly ``HEADER_SIZE`` bytes."""
        if len(data) != HEADER_SIZE:
            raise ValueError(f"packet header must be {HEADER_SIZE} bytes, got {len(data)}")
        sample_rate, num_frames = _HEADER.unpack(data)
        return cls(sample_rate, num_frames)


def encode_samples(samples: Iterable[float]) -> bytes:
    """Encode samples as raw float32 values."""
    return array("f", samples).tobytes()


def decode_samples(data: bytes) -> Buffer:
    """Decode raw float32 values into a list of samples."""
    if len(data) % SAMPLE_SIZE:
        raise ValueError(
            f"sample data length {len(data)} is not a multiple of {SAMPLE_SIZE}"
        )
    samples = array("f")
    samples.frombytes(data)
    return samples.tolist()