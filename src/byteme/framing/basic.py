"""Length-prefixed record framing.

Each frame is the struct's 2-byte delimiter followed by the encoded record:

    [SIZE (2 bytes, big-endian)] [Record (SIZE bytes)]

Because SIZE is fixed per struct, the prefix doubles as a cheap sanity check
that sender and receiver agree on the struct.
"""

from __future__ import annotations

import logging
import struct
from typing import Iterator, Type, TypeVar

from pydantic import BaseModel

from ..codec.compiler import codec_for
from ..exceptions import FramingError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

DELIMITER_SIZE = 2


def frame_record(record: BaseModel) -> bytes:
    """Encode a record and prepend its delimiter.

    Args:
        record: Model instance to frame

    Returns:
        Delimiter + encoded record (SIZE + 2 bytes)

    Example:
        >>> framed = frame_record(greeting)
        >>> framed[:2]
        b'\\x00@'
    """
    codec = codec_for(record)
    return codec.get_delimiter() + codec.encode(record)


def unframe_record(model_class: Type[T], framed: bytes | bytearray | memoryview) -> T:
    """Validate a frame's delimiter and decode its record.

    Args:
        model_class: Model class the frame carries
        framed: Exactly one frame

    Returns:
        Decoded record

    Raises:
        FramingError: If the frame is too short, the delimiter does not match
            the struct size, or the frame length is inconsistent
    """
    codec = codec_for(model_class)
    framed = bytes(framed)

    if len(framed) < DELIMITER_SIZE:
        raise FramingError(f"Frame too short for delimiter: {len(framed)} bytes")

    (declared,) = struct.unpack(">H", framed[:DELIMITER_SIZE])
    if declared != codec.size:
        raise FramingError(
            f"Delimiter mismatch: frame declares {declared} bytes, "
            f"{codec.name} is {codec.size} bytes"
        )

    payload = framed[DELIMITER_SIZE:]
    if len(payload) != declared:
        raise FramingError(
            f"Length mismatch: delimiter says {declared} bytes, but got {len(payload)} bytes"
        )

    return codec.decode(payload)  # type: ignore[no-any-return]


def iter_records(model_class: Type[T], stream: bytes | bytearray | memoryview) -> Iterator[T]:
    """Decode every frame in a buffer of back-to-back frames.

    Args:
        model_class: Model class every frame carries
        stream: Concatenated frames

    Yields:
        Decoded records, in stream order

    Raises:
        FramingError: If a delimiter does not match or the last frame is truncated
    """
    codec = codec_for(model_class)
    stream = bytes(stream)
    frame_size = DELIMITER_SIZE + codec.size

    position = 0
    while position < len(stream):
        frame = stream[position : position + frame_size]
        if len(frame) < frame_size:
            raise FramingError(
                f"Truncated frame at offset {position}: need {frame_size} bytes, "
                f"got {len(frame)} bytes"
            )
        yield unframe_record(model_class, frame)
        position += frame_size

    logger.debug("Read %d %s frames", position // frame_size, codec.name)
