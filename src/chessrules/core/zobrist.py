"""Zobrist hashing keys for incremental position hashing.

Keys are derived from a fixed seed, so a position hashes to the same value
in every process. That keeps hashes comparable across the two ends of a
network game.
"""

from __future__ import annotations

from typing import Final

from chessrules.core.enums import CastlingRights, Color
from chessrules.core.piece import Piece
from chessrules.core.types import Square

_SEED: Final = 0x3C6EF372FE94F82B
_MASK_64: Final = 0xFFFFFFFFFFFFFFFF

_PIECE_KEY_COUNT: Final = 2 * 6 * 64


def _splitmix64(state: int) -> int:
    z = (state + 0x9E3779B97F4A7C15) & _MASK_64
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK_64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK_64
    return z ^ (z >> 31)


def _nth_key(index: int) -> int:
    return _splitmix64((_SEED + index) & _MASK_64)


_PIECE_KEYS: Final = tuple(
    tuple(
        tuple(_nth_key((color * 384) + (ptype * 64) + sq) for sq in range(64))
        for ptype in range(6)
    )
    for color in range(2)
)
_SIDE_TO_MOVE_KEY: Final = _nth_key(_PIECE_KEY_COUNT)
# One key per individual right; a rights set hashes to the XOR of its members.
_CASTLING_RIGHT_KEYS: Final = {
    right: _nth_key(_PIECE_KEY_COUNT + 1 + idx)
    for idx, right in enumerate(
        (
            CastlingRights.WHITE_KINGSIDE,
            CastlingRights.WHITE_QUEENSIDE,
            CastlingRights.BLACK_KINGSIDE,
            CastlingRights.BLACK_QUEENSIDE,
        )
    )
}
_EN_PASSANT_KEYS: Final = tuple(
    _nth_key(_PIECE_KEY_COUNT + 1 + 4 + idx) for idx in range(64)
)


def piece_key(piece: Piece, sq: Square) -> int:
    """Hash key for a specific piece on a square."""
    return _PIECE_KEYS[int(piece.color)][int(piece.piece_type) - 1][sq]


def side_to_move_key() -> int:
    """Hash toggle key, present while Black is to move."""
    return _SIDE_TO_MOVE_KEY


def castling_key(castling: CastlingRights) -> int:
    key = 0
    for right, right_key in _CASTLING_RIGHT_KEYS.items():
        if castling & right:
            key ^= right_key
    return key


def en_passant_key(ep_square: Square) -> int:
    return _EN_PASSANT_KEYS[ep_square]


def full_hash(
    occupancy: list[tuple[Square, Piece]],
    side_to_move: Color,
    castling: CastlingRights,
    en_passant: Square | None,
) -> int:
    """Hash computed from scratch; incremental updates must agree with it."""
    key = castling_key(castling)
    if side_to_move == Color.BLACK:
        key ^= _SIDE_TO_MOVE_KEY
    if en_passant is not None:
        key ^= _EN_PASSANT_KEYS[en_passant]
    for sq, piece in occupancy:
        key ^= piece_key(piece, sq)
    return key
