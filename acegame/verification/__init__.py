"""
Statistical checks for the deck builder.
"""

from acegame.verification.shuffle import ShuffleReport, ShuffleValidator

__all__ = ["ShuffleReport", "ShuffleValidator"]
