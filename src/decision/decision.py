"""
Decision Engine
AHP 의사결정 엔진

- fill(): 부분적으로 채워진 의사결정을 완전한 비교 구조로 보정 (멱등)
- add() / remove(): 기준/대안 추가 및 삭제
- compare(): 쌍대 비교 기록 (역수 일관성 유지)
- validate() / assert_valid(): 완결성 검사
- evaluate(): 고유벡터 기반 우선순위 계산 및 결과표 생성
"""

import copy
import json
import logging
import uuid
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Type, Union

from config.ahp_config import (
    BREAKDOWN_PRECISION,
    DEFAULT_GOAL,
    EIGEN_METHOD,
    EQUAL_WEIGHT,
    GOAL_COLUMN,
    SAATY_SCALE,
    TOTALS_ROW,
    Intensity,
)
from src.ranking.ahp import AHPCalculator
from src.reporting.breakdown import format_as_table
from .errors import AggregateValidationError, DecisionError, ValidationError
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
from .validation import validate_decision

logger = logging.getLogger(__name__)

Item = Union[Criterion, Alternative]
ItemRef = Union[str, Mapping[str, Any], Criterion, Alternative]


def _default_uid() -> str:
    return str(uuid.uuid4())


def _reference(ref: ItemRef) -> Tuple[Optional[str], Optional[str]]:
    """항목 참조를 (id, name) 으로 변환. 문자열은 이름으로 취급"""
    if isinstance(ref, str):
        return None, ref
    if isinstance(ref, (Criterion, Alternative)):
        return ref.id, ref.name
    if isinstance(ref, Mapping):
        ref_id = ref.get("id")
        return (str(ref_id) if ref_id not in (None, "") else None), ref.get("name")
    raise ValidationError(f"Unsupported item reference: {ref!r}")


def _to_item(value: Any, cls: Type[Item]) -> Item:
    if isinstance(value, str):
        return cls(name=value)
    if isinstance(value, cls):
        return copy.copy(value)
    if isinstance(value, Mapping):
        return cls.from_dict(value)
    raise ValidationError(f"Unsupported {cls.__name__.lower()} value: {value!r}")


def _coerce_items(values: Any, cls: Type[Item]) -> List[Item]:
    if not isinstance(values, list):
        return []
    # 호출자의 리스트를 공유하지 않도록 항상 새 리스트
    if all(isinstance(value, cls) for value in values):
        return list(values)
    items = []
    for value in values:
        if isinstance(value, (cls, str, Mapping)):
            items.append(value if isinstance(value, cls) else _to_item(value, cls))
    return items


def _complete_measurements(existing: Any, peer_ids: List[str]) -> List[Measurement]:
    """peer마다 정확히 하나의 슬롯. 기존 가중치는 유지하고 사라진 peer의 슬롯은 버린다"""
    by_pair: Dict[str, Measurement] = {}
    for measurement in existing or []:
        if isinstance(measurement, Measurement):
            by_pair.setdefault(measurement.pair_id, measurement)
    return [
        by_pair[pair_id] if pair_id in by_pair else Measurement(pair_id=pair_id)
        for pair_id in peer_ids
    ]


class Decision:
    """AHP 의사결정 (목표, 기준, 대안, 쌍대 비교)"""

    Intensity = Intensity

    def __init__(
        self,
        uid: Optional[Callable[[], str]] = None,
        id: Optional[str] = None,
        goal: Optional[str] = None,
        criteria: Optional[List[Criterion]] = None,
        alternatives: Optional[List[Alternative]] = None,
        summary: Optional[Summary] = None
    ):
        """
        초기화

        Args:
            uid: id 생성 함수 (None이면 UUID4 문자열)
            id: 의사결정 id (None이면 생성)
            goal: 의사결정 목표
            criteria: 기준 리스트
            alternatives: 대안 리스트
            summary: 평가 요약 (평가 후에만 존재)
        """
        self.uid = uid or _default_uid
        self.id = id
        self.goal = goal
        self.criteria = criteria
        self.alternatives = alternatives
        self.summary = summary
        self._criteria_index: Dict[str, Dict[str, Criterion]] = {"id": {}, "name": {}}
        self._alternatives_index: Dict[str, Dict[str, Alternative]] = {"id": {}, "name": {}}
        self.fill()

    # ============================================================
    # 직렬화
    # ============================================================
    @classmethod
    def from_json(
        cls,
        data: Union[str, bytes, Mapping[str, Any]],
        uid: Optional[Callable[[], str]] = None
    ) -> "Decision":
        """
        JSON 문자열 또는 딕셔너리로부터 Decision 생성 (fill 적용)

        Args:
            data: JSON 텍스트/바이트 또는 이미 파싱된 딕셔너리
            uid: id 생성 함수

        Returns:
            구조가 보정된 Decision
        """
        if isinstance(data, (bytes, bytearray)):
            data = data.decode("utf-8")
        if isinstance(data, str):
            data = json.loads(data)
        if not isinstance(data, Mapping):
            raise DecisionError(f"Decision data must be a JSON object, got {type(data).__name__}")

        summary = data.get("summary")
        return cls(
            uid=uid,
            id=str(data["id"]) if data.get("id") not in (None, "") else None,
            goal=data.get("goal"),
            criteria=data.get("criteria"),
            alternatives=data.get("alternatives"),
            summary=Summary.from_dict(summary) if isinstance(summary, Mapping) else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.id:
            data["id"] = self.id
        if self.goal is not None:
            data["goal"] = self.goal
        data["criteria"] = [criterion.to_dict() for criterion in self.criteria or []]
        data["alternatives"] = [alternative.to_dict() for alternative in self.alternatives or []]
        if self.summary is not None:
            data["summary"] = self.summary.to_dict()
        return data

    def to_json(self, indent: Optional[int] = None) -> str:
        """indent가 None이면 공백 없는 압축 형식"""
        separators = (",", ":") if indent is None else None
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent, separators=separators)

    # ============================================================
    # 구조 보정 (fill)
    # ============================================================
    def fill(self) -> None:
        """
        id, goal, 비교 구조를 보정한다.

        - 기준: 자신을 제외한 기준마다 측정 슬롯 하나
        - 대안: 기준마다 비교 하나, 그 안에 자신을 제외한 대안마다 측정 슬롯 하나
        기존 가중치는 유지되며 여러 번 호출해도 결과가 같다.
        """
        if not self.id:
            self.id = self.uid()

        if not self.goal:
            self.goal = DEFAULT_GOAL

        self.criteria = _coerce_items(self.criteria, Criterion)
        self.alternatives = _coerce_items(self.alternatives, Alternative)

        for criterion in self.criteria:
            if not criterion.id:
                criterion.id = self.uid()

        for criterion in self.criteria:
            peers = [cr.id for cr in self.criteria if cr is not criterion]
            comparisons = [
                comp for comp in (criterion.comparisons or [])
                if isinstance(comp, CriterionComparison)
            ]
            comparison = comparisons[0] if comparisons else CriterionComparison()
            comparison.measurements = _complete_measurements(comparison.measurements, peers)
            criterion.comparisons = [comparison]

        for alternative in self.alternatives:
            if not alternative.id:
                alternative.id = self.uid()

        for alternative in self.alternatives:
            peers = [alt.id for alt in self.alternatives if alt is not alternative]
            existing: Dict[str, AlternativeComparison] = {}
            for comp in alternative.comparisons or []:
                if isinstance(comp, AlternativeComparison) and comp.criterion_id:
                    existing.setdefault(comp.criterion_id, comp)

            comparisons = []
            for criterion in self.criteria:
                comparison = existing.get(criterion.id) or AlternativeComparison(criterion_id=criterion.id)
                comparison.measurements = _complete_measurements(comparison.measurements, peers)
                comparisons.append(comparison)
            alternative.comparisons = comparisons

        self._reindex()

    def _reindex(self) -> None:
        for items, index in (
            (self.criteria, self._criteria_index),
            (self.alternatives, self._alternatives_index),
        ):
            index["id"] = {item.id: item for item in items}
            index["name"] = {}
            for item in items:
                if item.name is not None:
                    index["name"].setdefault(item.name, item)

    def _resolve(self, index: Dict[str, Dict[str, Item]], ref: ItemRef, by_name_fallback: bool = True) -> Optional[Item]:
        """id 우선으로 찾고, 없으면 이름으로 찾는다"""
        ref_id, ref_name = _reference(ref)
        if ref_id:
            found = index["id"].get(ref_id)
            if found is not None or not by_name_fallback:
                return found
        if ref_name:
            return index["name"].get(ref_name)
        return None

    def _invalidate(self) -> None:
        # 구조나 가중치가 바뀌면 이전 평가 결과는 의미가 없다
        self.summary = None
        for criterion in self.criteria or []:
            criterion.priority = None
        for alternative in self.alternatives or []:
            alternative.priority = None
            for comparison in alternative.comparisons or []:
                if comparison is not None:
                    comparison.priority = None

    # ============================================================
    # 추가 / 삭제
    # ============================================================
    def add(
        self,
        criterion: Optional[Union[str, Mapping[str, Any], Criterion]] = None,
        alternative: Optional[Union[str, Mapping[str, Any], Alternative]] = None
    ) -> None:
        """
        기준 또는 대안 추가 (입력의 얕은 복사본을 추가)

        Args:
            criterion: 기준 이름 또는 부분 레코드
            alternative: 대안 이름 또는 부분 레코드

        Raises:
            ValidationError: 이름이 없거나 같은 종류에 동일한 이름이 이미 있을 때
        """
        new_criterion = _to_item(criterion, Criterion) if criterion is not None else None
        new_alternative = _to_item(alternative, Alternative) if alternative is not None else None

        if not ((new_criterion and new_criterion.name) or (new_alternative and new_alternative.name)):
            raise ValidationError("A Criterion or an Alternative should be provided")

        self.fill()

        if new_criterion is not None:
            if not new_criterion.name:
                raise ValidationError("A Criterion should have a name")
            if new_criterion.name in self._criteria_index["name"]:
                raise ValidationError(f'A Criterion named "{new_criterion.name}" already exists')
            if new_criterion.name == GOAL_COLUMN:
                raise ValidationError(f'"{GOAL_COLUMN}" is reserved for the breakdown table')

        if new_alternative is not None:
            if not new_alternative.name:
                raise ValidationError("An Alternative should have a name")
            if new_alternative.name in self._alternatives_index["name"]:
                raise ValidationError(f'An Alternative named "{new_alternative.name}" already exists')
            if new_alternative.name == TOTALS_ROW:
                raise ValidationError(f'"{TOTALS_ROW}" is reserved for the breakdown table')

        if new_criterion is not None:
            self.criteria.append(new_criterion)
            logger.debug("Added criterion %r", new_criterion.name)
        if new_alternative is not None:
            self.alternatives.append(new_alternative)
            logger.debug("Added alternative %r", new_alternative.name)

        self.fill()
        self._invalidate()

    def remove(
        self,
        criterion: Optional[ItemRef] = None,
        alternative: Optional[ItemRef] = None
    ) -> None:
        """
        기준 또는 대안 삭제 (id가 주어지면 id로만, 아니면 이름으로 찾음)

        찾지 못하면 아무 일도 하지 않는다. 삭제된 항목을 참조하던
        모든 측정 슬롯(과 그 가중치)도 함께 사라진다.
        """
        self.fill()
        changed = False

        if criterion is not None:
            target = self._resolve(self._criteria_index, criterion, by_name_fallback=False)
            if target is not None:
                self.criteria = [cr for cr in self.criteria if cr is not target]
                logger.debug("Removed criterion %r", target.name)
                changed = True

        if alternative is not None:
            target = self._resolve(self._alternatives_index, alternative, by_name_fallback=False)
            if target is not None:
                self.alternatives = [alt for alt in self.alternatives if alt is not target]
                logger.debug("Removed alternative %r", target.name)
                changed = True

        self.fill()
        if changed:
            self._invalidate()

    # ============================================================
    # 쌍대 비교
    # ============================================================
    @staticmethod
    def _find_comparison(
        item: Item,
        criterion_id: Optional[str] = None
    ) -> Optional[Union[CriterionComparison, AlternativeComparison]]:
        """기준이면 유일한 비교, 대안이면 criterion_id에 해당하는 비교"""
        comparisons = item.comparisons or []
        if criterion_id is None:
            return comparisons[0] if comparisons else None
        for comparison in comparisons:
            if isinstance(comparison, AlternativeComparison) and comparison.criterion_id == criterion_id:
                return comparison
        return None

    @classmethod
    def _find_measurement(cls, item: Item, pair: Item, criterion_id: Optional[str] = None) -> Optional[Measurement]:
        comparison = cls._find_comparison(item, criterion_id)
        if comparison is None:
            return None
        for measurement in comparison.measurements:
            if measurement.pair_id == pair.id:
                return measurement
        return None

    def compare(
        self,
        item: ItemRef,
        pair: ItemRef,
        weight: int,
        criterion: Optional[ItemRef] = None
    ) -> None:
        """
        item이 pair보다 weight만큼 선호됨을 기록

        Args:
            item: 선호되는 항목 (id 또는 이름)
            pair: 비교 대상 항목 (id 또는 이름)
            weight: Saaty 척도 정수 (1~9)
            criterion: 주어지면 해당 기준에 대한 대안 비교, 없으면 기준 간 비교

        weight가 1이 아니면 반대 방향(pair -> item) 가중치는 1로 덮어쓴다.
        weight가 1이면 반대 방향은 건드리지 않는다.
        """
        self.fill()

        target: Optional[Criterion] = None
        if criterion is not None:
            target = self._resolve(self._criteria_index, criterion)
            if target is None:
                raise ValidationError("Criterion not found among the criteria")

        if target is not None:
            index, kind = self._alternatives_index, "alternatives"
        else:
            index, kind = self._criteria_index, "criteria"

        first = self._resolve(index, item)
        second = self._resolve(index, pair)
        if first is None or second is None:
            raise ValidationError(f"Item and/or pair not found among the {kind}")
        if first is second:
            raise ValidationError(f'Cannot compare "{first.name}" with itself')

        if not is_valid_weight(weight):
            raise ValidationError(f"The weight should be in the scale {list(SAATY_SCALE)}, got {weight!r}")
        weight = int(weight)

        criterion_id = target.id if target is not None else None
        measurement = self._find_measurement(first, second, criterion_id)
        if measurement is None:
            raise ValidationError("Unexpected missing measurement")

        measurement.weight = weight

        # 약한 쪽은 항상 1: 한쪽이 1이 아니면 반대쪽을 1로 맞춘다
        if weight != EQUAL_WEIGHT:
            reverse = self._find_measurement(second, first, criterion_id)
            if reverse is None:
                raise ValidationError("Unexpected missing measurement")
            reverse.weight = EQUAL_WEIGHT

        self._invalidate()
        logger.debug(
            "Compared %r over %r by %d%s",
            first.name, second.name, weight,
            f" with respect to {target.name!r}" if target is not None else ""
        )

    # ============================================================
    # 검증
    # ============================================================
    def validate(self) -> ValidationResult:
        """모든 결함을 모아서 반환 (예외를 던지지 않음)"""
        return validate_decision(self)

    def assert_valid(self) -> None:
        """결함이 하나라도 있으면 AggregateValidationError"""
        result = self.validate()
        if not result.valid:
            logger.warning("Decision %s failed validation with %d errors", self.id, len(result.errors))
            raise AggregateValidationError(result.errors)

    # ============================================================
    # 평가
    # ============================================================
    def weights_matrix(self, items: List[Item], criterion_id: Optional[str] = None, calculator: Optional[AHPCalculator] = None):
        """
        역수 비교 행렬 생성: M[i][j] = weight(i->j) / weight(j->i), 대각선 1

        Args:
            items: 기준 리스트 또는 대안 리스트
            criterion_id: 대안 행렬일 때 기준 id
            calculator: 행렬을 만들 AHPCalculator

        Returns:
            numpy 정방행렬
        """
        calculator = calculator or AHPCalculator()
        ratios: Dict[Tuple[str, str], float] = {}
        for thing in items:
            for other in items:
                if thing is other:
                    continue
                thing_measurement = self._find_measurement(thing, other, criterion_id)
                other_measurement = self._find_measurement(other, thing, criterion_id)
                if (
                    thing_measurement is None or thing_measurement.weight is None
                    or other_measurement is None or other_measurement.weight is None
                ):
                    raise ValidationError("Unexpected missing weight")
                ratios[(thing.id, other.id)] = thing_measurement.weight / other_measurement.weight
        return calculator.build_comparison_matrix([item.id for item in items], ratios)

    def evaluate(self, method: str = EIGEN_METHOD, precision: int = BREAKDOWN_PRECISION) -> Summary:
        """
        우선순위 계산

        Args:
            method: 고유벡터 계산 방법 ("eig" 또는 "power")
            precision: 결과표 반올림 자릿수

        Returns:
            Summary (self.summary 에도 저장)

        Raises:
            AggregateValidationError: 검증 실패 시 (행렬 계산 전에 실패)
        """
        # 실패하면 이전 평가 결과가 남지 않도록 먼저 비운다
        self._invalidate()
        self.assert_valid()
        calculator = AHPCalculator(method=method)

        criteria_priorities = calculator.calculate_priorities(self.weights_matrix(self.criteria, calculator=calculator))
        for criterion, priority in zip(self.criteria, criteria_priorities):
            criterion.priority = priority

        for alternative in self.alternatives:
            alternative.priority = 0.0

        for criterion in self.criteria:
            local_priorities = calculator.calculate_priorities(
                self.weights_matrix(self.alternatives, criterion.id, calculator=calculator)
            )
            for alternative, local in zip(self.alternatives, local_priorities):
                comparison = self._find_comparison(alternative, criterion.id)
                comparison.priority = local
                alternative.priority += local * criterion.priority

        # max()는 동점일 때 먼저 나온 대안을 고른다
        best = max(self.alternatives, key=lambda alt: alt.priority)
        self.summary = Summary(
            recommended_choice=best.name,
            breakdown=format_as_table(self, precision),
        )
        logger.info(
            "Evaluated decision %s: criteria=%s, recommended=%r",
            self.id,
            {cr.name: round(cr.priority, precision) for cr in self.criteria},
            best.name
        )
        return self.summary

    # ============================================================
    # 조회
    # ============================================================
    def comparison_count(self) -> int:
        """완전한 의사결정에 필요한 방향성 비교 수: M(M-1)N + N(N-1)"""
        n_criteria = len(self.criteria)
        n_alternatives = len(self.alternatives)
        return n_alternatives * (n_alternatives - 1) * n_criteria + n_criteria * (n_criteria - 1)

    def pending_comparisons(self) -> List[Tuple[Item, Item, Optional[Criterion]]]:
        """
        아직 가중치가 없는 (item, pair, criterion) 목록.
        기준 간 비교(criterion=None)가 먼저, 이후 기준별 대안 비교.
        """
        self.fill()
        pending: List[Tuple[Item, Item, Optional[Criterion]]] = []
        for item in self.criteria:
            for pair in self.criteria:
                if item is not pair and self._find_measurement(item, pair).weight is None:
                    pending.append((item, pair, None))
        for criterion in self.criteria:
            for item in self.alternatives:
                for pair in self.alternatives:
                    if item is pair:
                        continue
                    if self._find_measurement(item, pair, criterion.id).weight is None:
                        pending.append((item, pair, criterion))
        return pending

    def ranking(self) -> List[Alternative]:
        """우선순위 내림차순 대안 리스트 (evaluate 이후)"""
        if self.summary is None:
            raise DecisionError("Decision has not been evaluated yet")
        return sorted(self.alternatives, key=lambda alt: alt.priority, reverse=True)

    def __repr__(self) -> str:
        return (
            f"Decision(id={self.id!r}, goal={self.goal!r}, "
            f"criteria={[cr.name for cr in self.criteria]}, "
            f"alternatives={[alt.name for alt in self.alternatives]})"
        )
