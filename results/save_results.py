"""
결과 저장 유틸리티
평가된 의사결정을 JSON 파일로 저장
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from config.settings import DECISION_FILE_PREFIX, RESULTS_DIR
from utils.helpers import ensure_dir, save_json

logger = logging.getLogger(__name__)


class ResultsSaver:
    """의사결정 평가 결과를 저장하는 클래스"""

    def __init__(self, results_dir: str = RESULTS_DIR):
        self.results_dir = ensure_dir(results_dir)

    def save_result(self, data: Any, filename: str, subdir: Optional[str] = None) -> str:
        """
        결과를 저장합니다.

        Args:
            data: 저장할 데이터 (dict/list는 JSON, 그 외는 텍스트)
            filename: 파일명
            subdir: 하위 디렉토리 (선택)

        Returns:
            저장된 파일 경로
        """
        output_dir = self.results_dir / subdir if subdir else self.results_dir
        output_file = output_dir / filename

        if isinstance(data, (dict, list)):
            save_json(data, output_file)
        else:
            ensure_dir(output_dir)
            output_file.write_text(str(data), encoding='utf-8')

        logger.info("결과가 저장되었습니다: %s", output_file)
        return str(output_file)

    def save_decision(self, decision, filename: Optional[str] = None, subdir: Optional[str] = None) -> str:
        """
        의사결정을 JSON으로 저장합니다.

        Args:
            decision: 저장할 Decision
            filename: 파일명 (None이면 "decision_<id>_<timestamp>.json")
            subdir: 하위 디렉토리 (선택)
        """
        if filename is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"{DECISION_FILE_PREFIX}_{decision.id}_{timestamp}.json"
        return self.save_result(decision.to_dict(), filename, subdir)

    def list_decisions(self, subdir: Optional[str] = None) -> list:
        """저장된 의사결정 파일 목록 (이름순)"""
        directory = self.results_dir / subdir if subdir else self.results_dir
        if not directory.exists():
            return []
        return sorted(str(path) for path in Path(directory).glob(f"{DECISION_FILE_PREFIX}_*.json"))
