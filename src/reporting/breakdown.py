"""
Breakdown Table
평가된 의사결정의 대안 x 기준 기여도 표 생성

각 셀 = 대안의 기준별 지역 우선순위 x 기준 우선순위
"Goal" 열 = 대안의 전체 우선순위, "Totals" 행 = 열 합계
"""

from typing import Dict, Optional

import pandas as pd

from config.ahp_config import BREAKDOWN_PRECISION, GOAL_COLUMN, TOTALS_ROW


def breakdown_frame(decision, precision: Optional[int] = BREAKDOWN_PRECISION) -> pd.DataFrame:
    """
    기여도 표를 DataFrame으로 생성

    Args:
        decision: evaluate()가 끝난 Decision
        precision: 반올림 자릿수 (None이면 반올림하지 않음)

    Returns:
        index = 대안 이름 + "Totals", columns = 기준 이름 + "Goal"
    """
    if not decision.alternatives or any(alt.priority is None for alt in decision.alternatives):
        raise ValueError("Decision has not been evaluated yet")

    columns = [criterion.name for criterion in decision.criteria] + [GOAL_COLUMN]
    rows = {}
    for alternative in decision.alternatives:
        row = {}
        for criterion in decision.criteria:
            comparison = next(
                comp for comp in alternative.comparisons if comp.criterion_id == criterion.id
            )
            row[criterion.name] = comparison.priority * criterion.priority
        row[GOAL_COLUMN] = alternative.priority
        rows[alternative.name] = row

    frame = pd.DataFrame.from_dict(rows, orient="index", columns=columns)
    if precision is not None:
        frame = frame.round(precision)

    # 합계는 반올림된 셀 값을 더한 뒤 다시 반올림
    frame.loc[TOTALS_ROW] = frame.sum(axis=0)
    if precision is not None:
        frame = frame.round(precision)
    return frame


def format_as_table(decision, precision: int = BREAKDOWN_PRECISION) -> Dict[str, Dict[str, float]]:
    """summary.breakdown 에 저장되는 {행: {열: 값}} 딕셔너리"""
    frame = breakdown_frame(decision, precision)
    return {
        str(row): {str(col): float(value) for col, value in values.items()}
        for row, values in frame.to_dict(orient="index").items()
    }


def render_breakdown(decision, precision: int = BREAKDOWN_PRECISION) -> str:
    """콘솔 출력용 텍스트 표"""
    frame = breakdown_frame(decision, precision)
    return frame.to_string(float_format=lambda value: f"{value:.{precision}f}")
