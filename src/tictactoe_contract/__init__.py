"""Validator for two-party tic-tac-toe game state transitions."""

__version__ = "0.1.0"
