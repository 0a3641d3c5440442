"""Zobrist keys and the repetition tracker."""

from chessrules.core.enums import CastlingRights, Color
from chessrules.core.fen import position_from_fen
from chessrules.core.position import Position
from chessrules.core.repetition import RepetitionTracker
from chessrules.core.zobrist import castling_key, full_hash


class TestZobrist:
    def test_same_position_same_hash(self) -> None:
        assert Position.initial().zobrist_hash == Position.initial().zobrist_hash

    def test_transposition_hashes_equal(self, find_move) -> None:
        a = Position.initial()
        for uci in ("g1f3", "g8f6", "b1c3"):
            a = a.after(find_move(a, uci))
        b = Position.initial()
        for uci in ("b1c3", "g8f6", "g1f3"):
            b = b.after(find_move(b, uci))
        assert a.zobrist_hash == b.zobrist_hash

    def test_side_to_move_changes_hash(self) -> None:
        white = position_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
        black = position_from_fen("4k3/8/8/8/8/8/8/R3K3 b - - 0 1")
        assert white.zobrist_hash != black.zobrist_hash

    def test_castling_rights_change_hash(self) -> None:
        with_right = position_from_fen("4k3/8/8/8/8/8/8/R3K3 w Q - 0 1")
        without = position_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
        assert with_right.zobrist_hash != without.zobrist_hash

    def test_en_passant_target_changes_hash(self) -> None:
        with_ep = position_from_fen("4k3/8/8/8/4P3/8/8/4K3 b - e3 0 1")
        without = position_from_fen("4k3/8/8/8/4P3/8/8/4K3 b - - 0 1")
        assert with_ep.zobrist_hash != without.zobrist_hash

    def test_clocks_do_not_change_hash(self) -> None:
        a = position_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
        b = position_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 30 44")
        assert a.zobrist_hash == b.zobrist_hash

    def test_castling_key_is_xor_of_rights(self) -> None:
        assert castling_key(CastlingRights.NONE) == 0
        assert castling_key(CastlingRights.WHITE_BOTH) == castling_key(
            CastlingRights.WHITE_KINGSIDE
        ) ^ castling_key(CastlingRights.WHITE_QUEENSIDE)

    def test_full_hash_matches_position(self) -> None:
        pos = Position.initial()
        assert pos.zobrist_hash == full_hash(
            list(pos.board.occupied()), Color.WHITE, CastlingRights.ALL, None
        )


class TestRepetitionTracker:
    def test_seeded_with_initial_key(self) -> None:
        tracker = RepetitionTracker(42)
        assert tracker.count(42) == 1
        assert tracker.count(7) == 0
        assert len(tracker) == 1

    def test_record_returns_new_count(self) -> None:
        tracker = RepetitionTracker(42)
        assert tracker.record(7) == 1
        assert tracker.record(42) == 2
        assert tracker.record(42) == 3
        assert tracker.counts == {42: 3, 7: 1}

    def test_reset_forgets_history(self) -> None:
        tracker = RepetitionTracker(42)
        tracker.record(42)
        tracker.reset(7)
        assert tracker.count(42) == 0
        assert tracker.count(7) == 1

    def test_counts_is_a_copy(self) -> None:
        tracker = RepetitionTracker(1)
        snapshot = tracker.counts
        tracker.record(1)
        assert snapshot[1] == 1
