#!/usr/bin/env python3
"""Server greeting frame example for byteme.

This example demonstrates:
1. Declaring a struct with byte arrays, an integer and a mapped enum
2. Encoding to a fixed 64-byte big-endian frame
3. Decoding it back
4. Inspecting the layout and delimiter

Run ``byteme --analyze examples/server_greeting.py`` to print the layout.
"""

from __future__ import annotations

import enum
from typing import Annotated

from byteme import U8, U32, Array, ByteMe, ByteMeModel, decode, encode, field_offsets


class ServerGreetingMode(enum.IntEnum):
    """Security mode offered by the server."""

    UNAVAILABLE = 0
    UNAUTHENTICATED = 1
    AUTHENTICATED = 2
    ENCRYPTED = 4


class ServerGreeting(ByteMeModel):
    """Fixed 64-byte greeting sent by a measurement server."""

    unused: Array[U8, 12]
    mode: Annotated[ServerGreetingMode, ByteMe(U32)]
    challenge: Array[U8, 16]
    salt: Array[U8, 16]
    count: U32
    mbz: Array[U8, 12]


def main() -> None:
    """Run the server greeting example."""
    print("=" * 60)
    print("byteme Server Greeting Example")
    print("=" * 60)
    print()

    greeting = ServerGreeting(
        unused=bytes(12),
        mode=ServerGreetingMode.UNAUTHENTICATED,
        challenge=bytes(range(16)),
        salt=bytes(16),
        count=1024,
        mbz=bytes(12),
    )

    print(f"1. Size: {ServerGreeting.SIZE} bytes, delimiter {ServerGreeting.get_delimiter().hex()}")
    for name, (start, end) in field_offsets(ServerGreeting).items():
        print(f"   {name:<10} [{start:>2}, {end:>2})")
    print()

    data = encode(greeting)
    print(f"2. Encoded: {data.hex()}")
    print()

    decoded = decode(ServerGreeting, data)
    print(f"3. Decoded mode={decoded.mode.name} count={decoded.count}")
    print(f"   Round-trip OK: {decoded == greeting}")


if __name__ == "__main__":
    main()
