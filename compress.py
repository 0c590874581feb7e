"""Forward SHA-256 compression.

This implements the per-block hash computation of FIPS 180-4 section 6.2.2.

For each 512-bit block the message schedule is expanded to 64 words:

    w[t] = block word t                                    0 <= t < 16
    w[t] = s1(w[t-2]) + w[t-7] + s0(w[t-15]) + w[t-16]     16 <= t < 64

    s0(x) = (x >>> 7) ^ (x >>> 18) ^ (x >> 3)
    s1(x) = (x >>> 17) ^ (x >>> 19) ^ (x >> 10)

Then, starting from the working state `(a, b, c, d, e, f, g, h)` (a copy of
the current hash value), each of the 64 rounds computes:

    S1   = (e >>> 6) ^ (e >>> 11) ^ (e >>> 25)
    ch   = (e & f) ^ (~e & g)
    temp1 = h + S1 + ch + k + w

    S0   = (a >>> 2) ^ (a >>> 13) ^ (a >>> 22)
    maj  = (a & b) ^ (a & c) ^ (b & c)
    temp2 = S0 + maj

    a' = temp1 + temp2
    e' = d + temp1

    b' = a
    c' = b
    d' = c
    f' = e
    g' = f
    h' = g

and finally the working state is added word-wise into the hash value.

All additions are performed modulo 2**32, as in SHA-256.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from constants import K_VALUES


MASK32 = 0xFFFFFFFF

BLOCK_SIZE = 64
SCHEDULE_LENGTH = 64

State = Tuple[int, int, int, int, int, int, int, int]


def _rotr(x: int, n: int) -> int:
    """Right-rotate a 32-bit word `x` by `n` bits."""
    x &= MASK32
    return ((x >> n) | (x << (32 - n))) & MASK32


def _shr(x: int, n: int) -> int:
    """Right-shift a 32-bit word `x` by `n` bits."""
    x &= MASK32
    return x >> n


def ch(x: int, y: int, z: int) -> int:
    """Choice: bits of `y` where `x` is set, bits of `z` elsewhere."""
    return ((x & y) ^ (~x & z)) & MASK32


def maj(x: int, y: int, z: int) -> int:
    """Majority vote of each bit position."""
    return ((x & y) ^ (x & z) ^ (y & z)) & MASK32


def big_sigma0(x: int) -> int:
    """SHA-256 function Σ0 applied to `a` in each round."""
    return _rotr(x, 2) ^ _rotr(x, 13) ^ _rotr(x, 22)


def big_sigma1(x: int) -> int:
    """SHA-256 function Σ1 applied to `e` in each round."""
    return _rotr(x, 6) ^ _rotr(x, 11) ^ _rotr(x, 25)


def small_sigma0(x: int) -> int:
    """SHA-256 function σ0 used in the message schedule."""
    return _rotr(x, 7) ^ _rotr(x, 18) ^ _shr(x, 3)


def small_sigma1(x: int) -> int:
    """SHA-256 function σ1 used in the message schedule."""
    return _rotr(x, 17) ^ _rotr(x, 19) ^ _shr(x, 10)


def word_from_block(block: bytes, t: int) -> int:
    """Read big-endian word `t` (0..15) out of a 64-byte block."""
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"Expected 64-byte block, got {len(block)}")
    if not 0 <= t < 16:
        raise ValueError(f"Block word index must be in 0..15, got {t}")
    return int.from_bytes(block[4 * t : 4 * (t + 1)], byteorder="big")


def build_message_schedule(block: bytes) -> List[int]:
    """Given a 512-bit block, build the 64-word message schedule w[0..63]."""
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"Expected 64-byte block, got {len(block)}")

    w: List[int] = [0] * SCHEDULE_LENGTH

    # First 16 words come directly from the block (big-endian).
    for t in range(16):
        w[t] = word_from_block(block, t)

    for t in range(16, SCHEDULE_LENGTH):
        w[t] = (
            small_sigma1(w[t - 2]) + w[t - 7] + small_sigma0(w[t - 15]) + w[t - 16]
        ) & MASK32

    return w


def compression(
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    f: int,
    g: int,
    h: int,
    w: int,
    k: int,
) -> State:
    """Perform one SHA-256 compression round.

    Parameters
    ----------
    a, b, c, d, e, f, g, h : int
        32-bit words representing the current working state.
    w : int
        Message schedule word `w[t]`.
    k : int
        Round constant `k[t]`.

    Returns
    -------
    (a, b, c, d, e, f, g, h) : tuple[int, ...]
        Working state after the round, all reduced modulo 2**32.
    """
    temp1 = (h + big_sigma1(e) + ch(e, f, g) + k + w) & MASK32
    temp2 = (big_sigma0(a) + maj(a, b, c)) & MASK32

    return (
        (temp1 + temp2) & MASK32,
        a,
        b,
        c,
        (d + temp1) & MASK32,
        e,
        f,
        g,
    )


def compress64(
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    f: int,
    g: int,
    h: int,
    ws: Sequence[int],
) -> State:
    """Run the full 64-round SHA-256 compression loop for one block.

    Parameters
    ----------
    a, b, c, d, e, f, g, h : int
        Initial working state words (typically the current hash value).
    ws : Sequence[int]
        The 64-word message schedule `w[0..63]` for this block.

    Returns
    -------
    (a, b, c, d, e, f, g, h) : tuple[int, ...]
        Final working state words after 64 rounds.
    """
    if len(ws) != SCHEDULE_LENGTH:
        raise ValueError(f"compress64 expects 64 message schedule words, got {len(ws)}")

    working = (a, b, c, d, e, f, g, h)
    for t in range(SCHEDULE_LENGTH):
        working = compression(*working, ws[t], K_VALUES[t])

    return working


def update_hash_state(
    H_i: State,
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    f: int,
    g: int,
    h: int,
) -> State:
    """Fold the working registers a..h into the chaining value H_i.

        H_{i+1}[j] = (H_i[j] + working[j]) mod 2^32
    """
    if len(H_i) != 8:
        raise ValueError(f"Hash state must hold 8 words, got {len(H_i)}")
    return tuple(
        (word + reg) & MASK32 for word, reg in zip(H_i, (a, b, c, d, e, f, g, h))
    )


def compress_block(state: State, block: bytes) -> State:
    """Process one 64-byte block and return the next chaining value."""
    ws = build_message_schedule(block)
    working = compress64(*state, ws)
    return update_hash_state(state, *working)
