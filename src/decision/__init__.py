"""
Decision Module
AHP decision engine: data model, structure completion, comparisons, validation, evaluation
"""

from .decision import Decision
from .errors import (
    AggregateValidationError,
    DecisionError,
    InsufficientAlternatives,
    InsufficientCriteria,
    MissingAlternativeComparison,
    MissingAlternativeComparisons,
    MissingAlternativeId,
    MissingAlternativeMeasurement,
    MissingAlternativeName,
    MissingCriterionComparisons,
    MissingCriterionId,
    MissingCriterionMeasurement,
    MissingCriterionName,
    MissingDecisionGoal,
    MissingDecisionId,
    ValidationError,
)
from .types import (
    Alternative,
    AlternativeComparison,
    Criterion,
    CriterionComparison,
    Measurement,
    Summary,
    ValidationResult,
    is_valid_weight,
)

__all__ = [
    "Decision",
    # Data model
    "Alternative",
    "AlternativeComparison",
    "Criterion",
    "CriterionComparison",
    "Measurement",
    "Summary",
    "ValidationResult",
    "is_valid_weight",
    # Errors
    "DecisionError",
    "ValidationError",
    "AggregateValidationError",
    "InsufficientAlternatives",
    "InsufficientCriteria",
    "MissingAlternativeComparison",
    "MissingAlternativeComparisons",
    "MissingAlternativeId",
    "MissingAlternativeMeasurement",
    "MissingAlternativeName",
    "MissingCriterionComparisons",
    "MissingCriterionId",
    "MissingCriterionMeasurement",
    "MissingCriterionName",
    "MissingDecisionGoal",
    "MissingDecisionId",
]
