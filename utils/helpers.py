"""
유틸리티 함수
"""

import json
from pathlib import Path
from typing import Any, Union

PathLike = Union[str, Path]


def load_json(file_path: PathLike) -> Any:
    """JSON 파일을 불러옵니다."""
    with open(file_path, 'r', encoding='utf-8') as f:
        return json.load(f)


def save_json(data: Any, file_path: PathLike) -> Path:
    """데이터를 JSON 파일로 저장합니다."""
    file_path = Path(file_path)
    ensure_dir(file_path.parent)
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    return file_path


def ensure_dir(dir_path: PathLike) -> Path:
    """디렉토리가 없으면 생성합니다."""
    dir_path = Path(dir_path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path
