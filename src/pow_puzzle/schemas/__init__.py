"""
Pydantic schemas for the wire representation of challenges and solutions.

These schemas reuse the canonical textual forms of the value types.
"""

from .pow import ChallengeOut, SolutionOut

__all__ = ["ChallengeOut", "SolutionOut"]
