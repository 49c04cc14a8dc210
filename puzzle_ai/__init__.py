"""Puzzle AI - analysis engine for swap-based tile and jigsaw puzzles."""

__version__ = "1.0.0"
