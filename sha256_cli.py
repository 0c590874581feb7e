"""SHA-256 implementation using `compress_block` from `compress.py`.

This module provides:

- `sha256(data: bytes) -> bytes`: compute the SHA-256 digest of arbitrary data.
- CLI usage: `python sha256_cli.py path/to/file` prints the hex digest of the
  raw bytes of the file.
"""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, List

from compress import BLOCK_SIZE, State, compress_block
from constants import H0


# Sizes in bits, FIPS 180-4 section 5.1.1.
BLOCK_BITS = 512
LENGTH_FIELD_BITS = 64
# Bit offset of the 64-bit length field within the final block.
LENGTH_FIELD_OFFSET = BLOCK_BITS - LENGTH_FIELD_BITS  # 448


def zero_bits_for_length(length_in_bits: int) -> int:
    """Number of '0' padding bits for a message of `length_in_bits` bits.

    Full blocks are irrelevant; only the bits consumed in the last block,
    counting the mandatory '1' bit, decide the padding. Once the consumed bits
    reach bit 448, where the 64-bit length field starts, the padding spills
    into one more block and the zeros run up to bit 448 of that extra block
    (960 = 448 + 512). Byte-aligned messages always consume 1 mod 8 bits, so
    they never land exactly on 448.
    """
    consumed = (length_in_bits + 1) % BLOCK_BITS

    if consumed < LENGTH_FIELD_OFFSET:
        zeros = LENGTH_FIELD_OFFSET - consumed
    else:
        zeros = LENGTH_FIELD_OFFSET + BLOCK_BITS - consumed

    padded_length = length_in_bits + 1 + zeros + LENGTH_FIELD_BITS
    if padded_length % BLOCK_BITS != 0:
        raise ValueError(
            f"Padded message is {padded_length} bits long which is not a "
            f"multiple of {BLOCK_BITS}"
        )

    return zeros


def calculate_zero_bits(length_in_bytes: int) -> int:
    """Number of '0' padding bits for a message of `length_in_bytes` bytes."""
    return zero_bits_for_length(length_in_bytes * 8)


def pad_message(message: bytes) -> bytes:
    """Pad the input message as described in FIPS 180-4 section 5.1.1.

    The result is ``message || 0x80 || 0x00 * z || bit_length`` where the
    bit length is a 64-bit big-endian integer. Its length is a multiple of
    64 bytes (512 bits).
    """
    # The '1' bit is the top bit of 0x80, the remaining 7 bits of that byte
    # are zeros already counted by calculate_zero_bits.
    zero_bytes = (calculate_zero_bits(len(message)) - 7) // 8

    padded = bytearray(message)
    padded.append(0x80)
    padded.extend(bytes(zero_bytes))
    padded.extend((len(message) * 8).to_bytes(8, byteorder="big"))
    return bytes(padded)


def _chunks(data: bytes, size: int) -> Iterable[bytes]:
    """Yield successive `size`-byte chunks from `data`."""
    for i in range(0, len(data), size):
        yield data[i : i + size]


def split_into_blocks(padded: bytes) -> List[bytes]:
    """Split a padded message into 512-bit (64-byte) blocks.

    The input must already be padded so that its length is a multiple of 64.
    Blocks are returned in message order and cover the input exactly.
    """
    if len(padded) % BLOCK_SIZE != 0:
        raise ValueError(
            f"Padded message length must be a multiple of 64 bytes, got {len(padded)}"
        )
    return list(_chunks(bytes(padded), BLOCK_SIZE))


def finalize_digest(state: State) -> bytes:
    """Convert the final hash state into the 32-byte SHA-256 digest."""
    return b"".join(word.to_bytes(4, byteorder="big") for word in state)


def sha256_states(data: bytes) -> List[State]:
    """Return the chaining values H(0)..H(N) seen while hashing `data`.

    The first entry is the initial hash value, the last one is the state the
    digest is formed from; there is one entry per block in between.
    """
    state: State = H0
    states: List[State] = [state]
    for block in split_into_blocks(pad_message(data)):
        state = compress_block(state, block)
        states.append(state)
    return states


def sha256(data: bytes) -> bytes:
    """Compute the SHA-256 digest of `data`.

    1. Pad the message to a whole number of 512-bit blocks.
    2. Split it into blocks.
    3. Compress each block in order into the running hash state.
    4. Serialise the final state big-endian.
    """
    state: State = H0
    for block in split_into_blocks(pad_message(data)):
        state = compress_block(state, block)
    return finalize_digest(state)


def sha256_hex(data: bytes) -> str:
    """Return the SHA-256 digest of `data` as 64 lowercase hex characters."""
    return sha256(data).hex()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Usage:
        python sha256_cli.py path/to/file

    The raw bytes of the file are hashed and the hex digest is printed to
    stdout.
    """
    parser = argparse.ArgumentParser(
        description="Print the SHA-256 digest of a file"
    )
    parser.add_argument("path", help="File whose contents are hashed")
    args = parser.parse_args(argv)

    try:
        with open(args.path, "rb") as f:
            data = f.read()
    except OSError as e:
        sys.stderr.write(f"Error reading file '{args.path}': {e}\n")
        return 1

    print(sha256_hex(data))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
