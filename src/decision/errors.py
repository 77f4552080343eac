"""
Decision Errors
의사결정 검증 실패 유형
"""

from typing import List


class DecisionError(Exception):
    """의사결정 엔진 기본 예외"""

    @property
    def name(self) -> str:
        return type(self).__name__


class ValidationError(DecisionError):
    """입력 또는 구조 검증 실패"""


class InsufficientAlternatives(ValidationError):
    pass


class InsufficientCriteria(ValidationError):
    pass


class MissingAlternativeComparison(ValidationError):
    pass


class MissingAlternativeComparisons(ValidationError):
    pass


class MissingAlternativeId(ValidationError):
    pass


class MissingAlternativeMeasurement(ValidationError):
    pass


class MissingAlternativeName(ValidationError):
    pass


class MissingCriterionComparisons(ValidationError):
    pass


class MissingCriterionId(ValidationError):
    pass


class MissingCriterionMeasurement(ValidationError):
    pass


class MissingCriterionName(ValidationError):
    pass


class MissingDecisionGoal(ValidationError):
    pass


class MissingDecisionId(ValidationError):
    pass


class AggregateValidationError(DecisionError):
    """
    validate() 결과 발견된 모든 결함을 한 번에 전달하는 예외

    Args:
        errors: 개별 ValidationError 리스트
        message: 요약 메시지
    """

    def __init__(self, errors: List[ValidationError], message: str = "Validation failed"):
        self.errors = list(errors)
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        lines = [f"{self.message} ({len(self.errors)} errors)"]
        lines.extend(f"  - {err.name}: {err}" for err in self.errors)
        return "\n".join(lines)
