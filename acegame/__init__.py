"""
acegame: state engine for the ACE trick-taking card game.
"""

__version__ = "0.1.0"
