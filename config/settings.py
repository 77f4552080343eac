"""
프로젝트 설정
"""

# 결과 / 로그 경로 설정
RESULTS_DIR = "results/decisions"
LOG_DIR = "logs"

# 로깅 설정
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_LEVEL = "INFO"

# 저장 파일명 접두사
DECISION_FILE_PREFIX = "decision"
