"""
AHP 설정
Saaty 척도, 검증 기준, 고유벡터 계산 및 결과표 설정
"""

from enum import IntEnum

# ============================================================
# Saaty 척도 (1~9)
# ============================================================
class Intensity(IntEnum):
    """쌍대 비교 강도 (Saaty scale)"""
    Equal = 1                    # 동등
    SlightlyModerate = 2
    Moderate = 3                 # 약간 중요
    ModeratelyStrong = 4
    Strong = 5                   # 중요
    StronglyToVeryStrong = 6
    VeryStrong = 7               # 매우 중요
    VeryToExtremelyStrong = 8
    Extreme = 9                  # 극히 중요


SAATY_SCALE = tuple(int(member) for member in Intensity)  # (1, 2, ..., 9)

# 한쪽 가중치가 1이 아니면 반대쪽은 항상 이 값으로 맞춘다
EQUAL_WEIGHT = int(Intensity.Equal)

# CLI 등에서 보여줄 척도 라벨
INTENSITY_LABELS = {
    Intensity.Equal: "Equal",
    Intensity.Moderate: "Moderate",
    Intensity.Strong: "Strong",
    Intensity.VeryStrong: "Very strong",
    Intensity.Extreme: "Extreme",
}

# ============================================================
# 검증 기준
# ============================================================
MINIMUM_CHARS = 3    # goal / 기준 / 대안 이름 최소 길이
MINIMUM_ITEMS = 2    # 기준 / 대안 최소 개수

# goal이 비어 있을 때 채워 넣는 값
DEFAULT_GOAL = "unknown"

# ============================================================
# 고유벡터 계산
# ============================================================
EIGEN_METHOD = "eig"                 # "eig" (numpy.linalg.eig) 또는 "power"
POWER_ITERATION_TOLERANCE = 1e-12
POWER_ITERATION_MAX_ITER = 1000

# ============================================================
# 결과표 (breakdown)
# ============================================================
BREAKDOWN_PRECISION = 3   # 소수점 자릿수
GOAL_COLUMN = "Goal"
TOTALS_ROW = "Totals"
