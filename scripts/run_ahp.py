"""
AHP 평가 실행 스크립트
의사결정 JSON을 읽어서 우선순위를 계산하고 결과를 저장
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

sys.path.append(str(Path(__file__).parent.parent))

from config.ahp_config import BREAKDOWN_PRECISION, EIGEN_METHOD, INTENSITY_LABELS
from config.settings import LOG_DIR, LOG_FORMAT, LOG_LEVEL, RESULTS_DIR
from results.save_results import ResultsSaver
from src.decision import AggregateValidationError, Decision
from src.ranking import EIGEN_METHODS
from src.reporting import render_breakdown
from utils.helpers import ensure_dir, load_json

logger = logging.getLogger(__name__)

# 검증 실패 시 보여줄 남은 비교 개수
PENDING_PREVIEW = 5


# 로깅 설정 (콘솔 + 파일)
def setup_logging(log_to_file: bool = True) -> Optional[Path]:
    """로깅 설정 - 콘솔과 파일에 동시 출력"""
    root_logger = logging.getLogger()
    root_logger.setLevel(LOG_LEVEL)

    # 기존 핸들러 제거
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(LOG_LEVEL)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if not log_to_file:
        return None

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = ensure_dir(LOG_DIR) / f"run_ahp_{timestamp}.log"
    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(LOG_LEVEL)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    return log_file


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="AHP 의사결정 평가")
    parser.add_argument("decision_file", help="의사결정 JSON 파일 경로")
    parser.add_argument("--output-dir", default=RESULTS_DIR, help="결과 저장 디렉토리")
    parser.add_argument("--precision", type=int, default=BREAKDOWN_PRECISION, help="결과표 소수점 자릿수")
    parser.add_argument("--method", choices=EIGEN_METHODS, default=EIGEN_METHOD, help="고유벡터 계산 방법")
    parser.add_argument("--no-save", action="store_true", help="결과 파일을 저장하지 않음")
    parser.add_argument("--no-log-file", action="store_true", help="로그 파일을 남기지 않음")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """AHP 평가 실행"""
    args = parse_args(argv)
    setup_logging(log_to_file=not args.no_log_file)

    decision_file = Path(args.decision_file)
    if not decision_file.exists():
        print(f"Error: 의사결정 파일을 찾을 수 없습니다: {decision_file}")
        return 1

    decision = Decision.from_json(load_json(decision_file))

    print("=" * 60)
    print(f"Goal: {decision.goal}")
    print(f"Criteria ({len(decision.criteria)}): {', '.join(cr.name or '' for cr in decision.criteria)}")
    print(f"Alternatives ({len(decision.alternatives)}): {', '.join(alt.name or '' for alt in decision.alternatives)}")
    print("=" * 60)

    try:
        summary = decision.evaluate(method=args.method, precision=args.precision)
    except AggregateValidationError as e:
        print(f"의사결정이 완전하지 않습니다 ({len(e.errors)}개 문제):")
        for err in e.errors:
            print(f"  - {err}")
        pending = decision.pending_comparisons()
        if pending:
            print(f"남은 비교: {len(pending)} / {decision.comparison_count()}")
            for item, pair, criterion in pending[:PENDING_PREVIEW]:
                scope = f" ({criterion.name})" if criterion is not None else ""
                print(f"  ? {item.name} vs {pair.name}{scope}")
            legend = ", ".join(f"{int(value)}={label}" for value, label in INTENSITY_LABELS.items())
            print(f"척도: {legend}")
        return 1

    print(f"\n추천: {summary.recommended_choice}\n")
    print(render_breakdown(decision, args.precision))
    print()
    for rank, alternative in enumerate(decision.ranking(), start=1):
        print(f"  {rank}. {alternative.name}: {alternative.priority:.{args.precision}f}")

    if not args.no_save:
        output_file = ResultsSaver(args.output_dir).save_decision(decision)
        print(f"\n결과 파일: {output_file}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
