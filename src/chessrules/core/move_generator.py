"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.board import Board
from chessrules.core.enums import (
    PROMOTION_TYPES,
    CastlingRights,
    Color,
    MoveFlag,
    PieceType,
)
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.types import Square, make_square

if TYPE_CHECKING:
    from chessrules.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx = sq % 8
        rank_idx = sq // 8
        moves: list[Square] = []
        for df, dr in offsets:
            af = file_idx + df
            ar = rank_idx + dr
            if 0 <= af < 8 and 0 <= ar < 8:
                moves.append(make_square(af, ar))
        targets.append(tuple(moves))
    return tuple(targets)


def _build_attack_masks(targets: tuple[tuple[Square, ...], ...]) -> tuple[int, ...]:
    masks: list[int] = []
    for sq in range(64):
        mask = 0
        for to_sq in targets[sq]:
            mask |= 1 << to_sq
        masks.append(mask)
    return tuple(masks)


def _build_pawn_attacker_masks() -> tuple[tuple[int, ...], tuple[int, ...]]:
    """[color][sq] -> squares from which a *color* pawn attacks *sq*."""
    white_masks: list[int] = [0] * 64
    black_masks: list[int] = [0] * 64

    for sq in range(64):
        file_idx = sq % 8
        rank_idx = sq // 8
        for df in (-1, 1):
            af = file_idx + df
            if not 0 <= af < 8:
                continue
            if rank_idx > 0:
                white_masks[sq] |= 1 << make_square(af, rank_idx - 1)
            if rank_idx < 7:
                black_masks[sq] |= 1 << make_square(af, rank_idx + 1)

    return (tuple(white_masks), tuple(black_masks))


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        file_idx = sq % 8
        rank_idx = sq // 8
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while 0 <= af < 8 and 0 <= ar < 8:
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_KNIGHT_ATTACK_MASKS = _build_attack_masks(_KNIGHT_TARGETS)
_KING_ATTACK_MASKS = _build_attack_masks(_KING_TARGETS)
_PAWN_ATTACKER_MASKS = _build_pawn_attacker_masks()

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_DIAGONAL_SLIDERS = (PieceType.BISHOP, PieceType.QUEEN)
_ORTHOGONAL_SLIDERS = (PieceType.ROOK, PieceType.QUEEN)


def _ray_hits(
    board: Board,
    rays: tuple[tuple[Square, ...], ...],
    by_color: Color,
    sliders: tuple[PieceType, ...],
    exclude: Square | None,
) -> bool:
    for ray in rays:
        for to_sq in ray:
            piece = board[to_sq]
            if piece is None or to_sq == exclude:
                continue
            if piece.color == by_color and piece.piece_type in sliders:
                return True
            break
    return False


def is_square_attacked(
    board: Board,
    sq: Square,
    by_color: Color,
    exclude: Square | None = None,
) -> bool:
    """Is *sq* attacked by any piece of *by_color*?

    *exclude* is treated as an empty square by sliding pieces.  King-step
    generation passes the king's own square here: a king that steps back
    along the ray of the piece checking it is still attacked, even though
    on the current board its own body blocks that ray.
    """
    if board.pieces_bitboard(by_color, PieceType.PAWN) & _PAWN_ATTACKER_MASKS[by_color][sq]:
        return True
    if board.pieces_bitboard(by_color, PieceType.KNIGHT) & _KNIGHT_ATTACK_MASKS[sq]:
        return True
    if board.pieces_bitboard(by_color, PieceType.KING) & _KING_ATTACK_MASKS[sq]:
        return True

    queens = board.has_piece(by_color, PieceType.QUEEN)
    if (queens or board.has_piece(by_color, PieceType.BISHOP)) and _ray_hits(
        board, _BISHOP_RAYS[sq], by_color, _DIAGONAL_SLIDERS, exclude
    ):
        return True
    if (queens or board.has_piece(by_color, PieceType.ROOK)) and _ray_hits(
        board, _ROOK_RAYS[sq], by_color, _ORTHOGONAL_SLIDERS, exclude
    ):
        return True
    return False


class MoveGenerator:
    """Generates pseudo-legal and legal moves for a given :class:`Position`.

    Legality filtering plays every candidate on a scratch copy of the
    position, so the position handed in is never modified.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        mover = self._pos.side_to_move
        opponent = mover.opposite
        scratch = self._pos.copy()
        legal: list[Move] = []

        for move in self.generate_pseudo_legal_moves():
            scratch.make_move(move)
            king_sq = scratch.board.king_square(mover)
            if not is_square_attacked(scratch.board, king_sq, opponent):
                legal.append(move)
            scratch.unmake_move(move)
        return legal

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        moves: list[Move] = []
        color = self._pos.side_to_move
        board = self._board

        for sq in board.pieces(color, PieceType.PAWN):
            self._gen_pawn(sq, color, moves)
        for sq in board.pieces(color, PieceType.KNIGHT):
            self._gen_knight(sq, color, moves)
        for sq in board.pieces(color, PieceType.BISHOP):
            self._gen_sliding(sq, color, PieceType.BISHOP, _BISHOP_RAYS[sq], moves)
        for sq in board.pieces(color, PieceType.ROOK):
            self._gen_sliding(sq, color, PieceType.ROOK, _ROOK_RAYS[sq], moves)
        for sq in board.pieces(color, PieceType.QUEEN):
            self._gen_sliding(sq, color, PieceType.QUEEN, _QUEEN_RAYS[sq], moves)
        for sq in board.pieces(color, PieceType.KING):
            self._gen_king(sq, color, moves)
        return moves

    def legal_destinations(self, from_sq: Square) -> set[Square]:
        """Target squares of the legal moves starting on *from_sq*."""
        return {m.to_sq for m in self.generate_legal_moves() if m.from_sq == from_sq}

    # -- Attack detection ---------------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_sq = self._board.king_square(color)
        return is_square_attacked(self._board, king_sq, color.opposite)

    def is_square_attacked(
        self, sq: Square, by_color: Color, exclude: Square | None = None
    ) -> bool:
        return is_square_attacked(self._board, sq, by_color, exclude)

    def attacked_squares(
        self, by_color: Color, exclude: Square | None = None
    ) -> set[Square]:
        """Every square *by_color* attacks, with *exclude* seen as empty."""
        return {
            sq
            for sq in range(64)
            if is_square_attacked(self._board, sq, by_color, exclude)
        }

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        pawn = Piece(color, PieceType.PAWN)
        file_idx = sq % 8
        rank_idx = sq // 8
        step = 8 if color == Color.WHITE else -8
        start_rank = 1 if color == Color.WHITE else 6
        promotes = rank_idx == (6 if color == Color.WHITE else 1)

        def add(to_sq: Square, captured: Piece | None) -> None:
            if promotes:
                for pt in PROMOTION_TYPES:
                    moves.append(Move(sq, to_sq, pawn, captured, pt))
            else:
                moves.append(Move(sq, to_sq, pawn, captured))

        one_step = sq + step
        if not 0 <= one_step < 64:
            return
        if board.is_empty(one_step):
            add(one_step, None)
            two_step = one_step + step
            if rank_idx == start_rank and board.is_empty(two_step):
                moves.append(
                    Move(sq, two_step, pawn, flags=MoveFlag.DOUBLE_PAWN_PUSH)
                )

        for df in (-1, 1):
            if not 0 <= file_idx + df < 8:
                continue
            cap_sq = one_step + df
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    add(cap_sq, target)
            elif cap_sq == self._pos.en_passant:
                victim = board[cap_sq - step]
                if victim == Piece(color.opposite, PieceType.PAWN):
                    moves.append(
                        Move(sq, cap_sq, pawn, victim, flags=MoveFlag.EN_PASSANT)
                    )

    def _gen_knight(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        knight = Piece(color, PieceType.KNIGHT)
        for to_sq in _KNIGHT_TARGETS[sq]:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(Move(sq, to_sq, knight, target))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        piece_type: PieceType,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        slider = Piece(color, piece_type)
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq, slider))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq, slider, target))
                break

    def _gen_king(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        king = Piece(color, PieceType.KING)
        opponent = color.opposite
        for to_sq in _KING_TARGETS[sq]:
            target = board[to_sq]
            if target is not None and target.color == color:
                continue
            if is_square_attacked(board, to_sq, opponent, exclude=sq):
                continue
            moves.append(Move(sq, to_sq, king, target))

        self._gen_castling(sq, color, moves)

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        offset = 0 if color == Color.WHITE else 56
        if king_sq != offset + 4:
            return

        board = self._board
        opponent = color.opposite
        king = Piece(color, PieceType.KING)
        rook = Piece(color, PieceType.ROOK)
        castling = self._pos.castling

        def can_castle(
            right: CastlingRights,
            rook_sq: Square,
            between: tuple[Square, ...],
            king_path: tuple[Square, ...],
        ) -> bool:
            return (
                bool(castling & right)
                and board[rook_sq] == rook
                and all(board.is_empty(s) for s in between)
                and not any(is_square_attacked(board, s, opponent) for s in king_path)
            )

        if can_castle(
            CastlingRights.kingside(color),
            offset + 7,
            (offset + 5, offset + 6),
            (king_sq, offset + 5, offset + 6),
        ):
            moves.append(
                Move(king_sq, offset + 6, king, flags=MoveFlag.CASTLE_KINGSIDE)
            )

        if can_castle(
            CastlingRights.queenside(color),
            offset,
            (offset + 1, offset + 2, offset + 3),
            (king_sq, offset + 3, offset + 2),
        ):
            moves.append(
                Move(king_sq, offset + 2, king, flags=MoveFlag.CASTLE_QUEENSIDE)
            )
