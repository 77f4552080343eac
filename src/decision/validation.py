"""
Decision Validator
평가 전에 의사결정 구조의 완결성과 가중치 범위를 검사한다.
첫 결함에서 멈추지 않고 발견된 모든 결함을 모아서 돌려준다.
"""

from typing import Any, List, Optional

from config.ahp_config import MINIMUM_CHARS, MINIMUM_ITEMS, SAATY_SCALE
from .errors import (
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
from .types import Measurement, ValidationResult, is_valid_weight

SCALE_TEXT = "[" + ",".join(str(value) for value in SAATY_SCALE) + "]"


def _has_min_chars(value: Any) -> bool:
    return isinstance(value, str) and len(value) >= MINIMUM_CHARS


def _find_measurement(measurements: Any, pair_id: Optional[str]) -> Optional[Measurement]:
    for measurement in measurements or []:
        if measurement is not None and measurement.pair_id == pair_id:
            return measurement
    return None


def _weight_text(measurement: Optional[Measurement]) -> str:
    return str(measurement.weight) if measurement is not None else "None"


def validate_decision(decision) -> ValidationResult:
    """
    의사결정 검증 (예외를 던지지 않음)

    Args:
        decision: 검사할 Decision

    Returns:
        ValidationResult(valid, errors)
    """
    errors: List[ValidationError] = []

    if not decision.id:
        errors.append(MissingDecisionId("Missing id for this decision"))

    if not _has_min_chars(decision.goal):
        errors.append(MissingDecisionGoal("Missing goal for this decision"))

    criteria = decision.criteria if isinstance(decision.criteria, list) else None
    alternatives = decision.alternatives if isinstance(decision.alternatives, list) else None

    if criteria is None or len(criteria) < MINIMUM_ITEMS:
        errors.append(InsufficientCriteria(
            f"Found {len(criteria or [])} criteria, but a minimum of {MINIMUM_ITEMS} is required"
        ))

    if alternatives is None or len(alternatives) < MINIMUM_ITEMS:
        errors.append(InsufficientAlternatives(
            f"Found {len(alternatives or [])} alternatives, but a minimum of {MINIMUM_ITEMS} is required"
        ))

    for criterion in criteria or []:
        errors.extend(_validate_criterion(criterion, criteria))

    for alternative in alternatives or []:
        errors.extend(_validate_alternative(alternative, alternatives, criteria))

    return ValidationResult(valid=not errors, errors=errors)


def _validate_criterion(criterion, criteria) -> List[ValidationError]:
    errors: List[ValidationError] = []

    if not criterion.id:
        errors.append(MissingCriterionId(f'Missing id for criterion "{criterion.name}"'))

    if not _has_min_chars(criterion.name):
        errors.append(MissingCriterionName(
            f'Missing or insufficient name for criterion with id "{criterion.id}"'
        ))

    comparisons = criterion.comparisons
    if not isinstance(comparisons, list) or len(comparisons) != 1 or comparisons[0] is None:
        errors.append(MissingCriterionComparisons(
            f'Missing or invalid number of comparisons for criterion "{criterion.name}" (Expected 1)'
        ))
        return errors

    for pair in criteria:
        if pair is criterion:
            continue
        measurement = _find_measurement(comparisons[0].measurements, pair.id)
        if measurement is None or not is_valid_weight(measurement.weight):
            errors.append(MissingCriterionMeasurement(
                f'Missing or invalid measurement for criterion "{criterion.name}" '
                f'with respect to "{pair.name}" '
                f'(Weight "{_weight_text(measurement)}" not found in scale {SCALE_TEXT})'
            ))

    return errors


def _validate_alternative(alternative, alternatives, criteria) -> List[ValidationError]:
    errors: List[ValidationError] = []

    if not alternative.id:
        errors.append(MissingAlternativeId(f'Missing id for alternative "{alternative.name}"'))

    if not _has_min_chars(alternative.name):
        errors.append(MissingAlternativeName(
            f'Missing or insufficient name for alternative with id "{alternative.id}"'
        ))

    expected = len(criteria or [])
    comparisons = alternative.comparisons
    if not isinstance(comparisons, list) or len(comparisons) != expected:
        errors.append(MissingAlternativeComparisons(
            f'Missing or invalid number of comparisons for alternative "{alternative.name}" '
            f'(Expected {expected})'
        ))
        return errors

    for criterion in criteria or []:
        comparison = next(
            (comp for comp in comparisons if comp is not None and comp.criterion_id == criterion.id),
            None
        )
        if comparison is None:
            errors.append(MissingAlternativeComparison(
                f'Missing comparison for criterion "{criterion.name}" on alternative "{alternative.name}"'
            ))
            continue

        for pair in alternatives:
            if pair is alternative:
                continue
            measurement = _find_measurement(comparison.measurements, pair.id)
            if measurement is None or not is_valid_weight(measurement.weight):
                errors.append(MissingAlternativeMeasurement(
                    f'Missing or invalid measurement for alternative "{alternative.name}" '
                    f'with pair "{pair.name}" with respect to "{criterion.name}" '
                    f'(Weight "{_weight_text(measurement)}" not found in scale {SCALE_TEXT})'
                ))

    return errors
