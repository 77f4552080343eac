"""
Decision Data Model
의사결정 구성요소 (기준, 대안, 쌍대 비교) 데이터 클래스

JSON 직렬화 형식:
    {
        "id": "...", "goal": "...",
        "criteria": [{"id", "name", "comparisons": [{"measurements": [{"pairId", "weight"?}]}]}],
        "alternatives": [{"id", "name", "comparisons": [{"criterionId", "measurements", "priority"?}]}],
        "summary"?: {"recommendedChoice": "...", "breakdown": {...}}
    }
값이 없는 선택 필드(weight, priority, summary)는 키 자체를 생략한다.
"""

import numbers
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from config.ahp_config import SAATY_SCALE
from .errors import ValidationError


def is_valid_weight(weight: Any) -> bool:
    """Saaty 척도(1~9 정수)에 속하는 가중치인지 확인"""
    if isinstance(weight, bool) or not isinstance(weight, numbers.Integral):
        return False
    return int(weight) in SAATY_SCALE


def _as_id(value: Any) -> Optional[str]:
    # JSON에서 숫자 id가 들어와도 문자열로 통일
    if value is None or value == "":
        return None
    return str(value)


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass
class Measurement:
    """다른 항목(pair_id)과의 단일 쌍대 비교 값. weight가 None이면 아직 비교하지 않음"""
    pair_id: str
    weight: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({"pairId": self.pair_id, "weight": self.weight})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Optional["Measurement"]:
        pair_id = _as_id(data.get("pairId"))
        if pair_id is None:
            return None
        return cls(pair_id=pair_id, weight=data.get("weight"))


def _measurements_from(data: Any) -> List[Measurement]:
    measurements = []
    for item in _as_list(data):
        if isinstance(item, Mapping):
            measurement = Measurement.from_dict(item)
            if measurement is not None:
                measurements.append(measurement)
    return measurements


@dataclass
class CriterionComparison:
    """기준 간 비교 (기준은 하나의 차원에서만 비교된다)"""
    measurements: List[Measurement] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"measurements": [m.to_dict() for m in self.measurements]}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CriterionComparison":
        return cls(measurements=_measurements_from(data.get("measurements")))


@dataclass
class AlternativeComparison:
    """특정 기준(criterion_id)에 대한 대안 간 비교. priority는 평가 후 지역 우선순위"""
    criterion_id: Optional[str] = None
    measurements: List[Measurement] = field(default_factory=list)
    priority: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "criterionId": self.criterion_id,
            "measurements": [m.to_dict() for m in self.measurements],
            "priority": self.priority,
        })

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AlternativeComparison":
        return cls(
            criterion_id=_as_id(data.get("criterionId")),
            measurements=_measurements_from(data.get("measurements")),
            priority=data.get("priority"),
        )


@dataclass
class Criterion:
    """평가 기준"""
    id: Optional[str] = None
    name: Optional[str] = None
    comparisons: Optional[List[CriterionComparison]] = None
    priority: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        comparisons = None
        if self.comparisons is not None:
            comparisons = [comp.to_dict() for comp in self.comparisons]
        return _drop_none({
            "id": self.id,
            "name": self.name,
            "comparisons": comparisons,
            "priority": self.priority,
        })

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Criterion":
        comparisons = None
        if isinstance(data.get("comparisons"), list):
            comparisons = [
                CriterionComparison.from_dict(comp)
                for comp in data["comparisons"]
                if isinstance(comp, Mapping)
            ]
        return cls(
            id=_as_id(data.get("id")),
            name=data.get("name"),
            comparisons=comparisons,
            priority=data.get("priority"),
        )


@dataclass
class Alternative:
    """대안 (후보). priority는 평가 후 전체 가중 점수"""
    id: Optional[str] = None
    name: Optional[str] = None
    comparisons: Optional[List[AlternativeComparison]] = None
    priority: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        comparisons = None
        if self.comparisons is not None:
            comparisons = [comp.to_dict() for comp in self.comparisons if comp is not None]
        return _drop_none({
            "id": self.id,
            "name": self.name,
            "comparisons": comparisons,
            "priority": self.priority,
        })

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Alternative":
        comparisons = None
        if isinstance(data.get("comparisons"), list):
            comparisons = [
                AlternativeComparison.from_dict(comp)
                for comp in data["comparisons"]
                if isinstance(comp, Mapping)
            ]
        return cls(
            id=_as_id(data.get("id")),
            name=data.get("name"),
            comparisons=comparisons,
            priority=data.get("priority"),
        )


@dataclass
class Summary:
    """평가 요약: 추천 대안과 기준별 기여도 표"""
    recommended_choice: str
    breakdown: Dict[str, Dict[str, float]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recommendedChoice": self.recommended_choice,
            "breakdown": self.breakdown,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Optional["Summary"]:
        if not data.get("recommendedChoice"):
            return None
        breakdown = data.get("breakdown")
        return cls(
            recommended_choice=data["recommendedChoice"],
            breakdown=dict(breakdown) if isinstance(breakdown, Mapping) else {},
        )


@dataclass
class ValidationResult:
    """validate() 결과"""
    valid: bool
    errors: List[ValidationError] = field(default_factory=list)

    def messages(self) -> List[str]:
        return [str(err) for err in self.errors]
