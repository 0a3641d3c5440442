"""chessrules — rules engine and game-state machine for two-player chess."""

__version__ = "0.1.0"
