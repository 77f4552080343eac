"""
Ranking Module
AHP priority calculation (principal eigenvector)
"""

from .ahp import AHPCalculator, EIGEN_METHODS

__all__ = [
    "AHPCalculator",
    "EIGEN_METHODS"
]
