"""Puzzle entities and their builders."""

from .challenge import Challenge, ChallengeHashData, SolveParams
from .challenge_builder import ChallengeBuilder
from .solution import Solution
from .solution_builder import SolutionBuilder

__all__ = [
    "Challenge",
    "ChallengeBuilder",
    "ChallengeHashData",
    "Solution",
    "SolutionBuilder",
    "SolveParams",
]
