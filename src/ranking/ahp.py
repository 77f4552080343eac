"""
AHP (Analytic Hierarchy Process) Calculator
쌍대 비교 행렬 생성 및 주고유벡터(principal eigenvector) 기반 우선순위 계산 모듈
"""

import logging
from typing import Dict, List, Sequence, Tuple

import numpy as np

from config.ahp_config import (
    EIGEN_METHOD,
    POWER_ITERATION_MAX_ITER,
    POWER_ITERATION_TOLERANCE,
)

logger = logging.getLogger(__name__)

EIGEN_METHODS = ("eig", "power")


class AHPCalculator:
    """AHP 알고리즘 계산 클래스"""

    def __init__(
        self,
        method: str = EIGEN_METHOD,
        tolerance: float = POWER_ITERATION_TOLERANCE,
        max_iter: int = POWER_ITERATION_MAX_ITER
    ):
        """
        초기화

        Args:
            method: 고유벡터 계산 방법 ("eig": numpy.linalg.eig, "power": 거듭제곱법)
            tolerance: 거듭제곱법 수렴 기준 (L1 변화량)
            max_iter: 거듭제곱법 최대 반복 횟수
        """
        if method not in EIGEN_METHODS:
            raise ValueError(f"Unknown eigen method '{method}' (expected one of {EIGEN_METHODS})")
        self.method = method
        self.tolerance = tolerance
        self.max_iter = max_iter

    def build_comparison_matrix(
        self,
        labels: Sequence[str],
        comparisons: Dict[Tuple[str, str], float]
    ) -> np.ndarray:
        """
        쌍대 비교 딕셔너리로부터 비교 행렬 생성

        Args:
            labels: 행/열 순서대로의 항목 id 리스트
            comparisons: {(항목1, 항목2): 중요도비율} 형태의 딕셔너리.
                대각선을 제외한 모든 순서쌍이 있어야 한다.

        Returns:
            쌍대 비교 행렬 (대각선 = 1)
        """
        size = len(labels)
        matrix = np.ones((size, size), dtype=float)
        for i, row in enumerate(labels):
            for j, col in enumerate(labels):
                if i != j:
                    matrix[i, j] = comparisons[(row, col)]
        return matrix

    def calculate_weights(
        self,
        comparison_matrix: np.ndarray
    ) -> Tuple[np.ndarray, float]:
        """
        쌍대 비교 행렬로부터 가중치 계산 (고유벡터 방법)

        Args:
            comparison_matrix: 쌍대 비교 행렬 (n x n)

        Returns:
            (합이 1로 정규화된 가중치 벡터, 최대 고유값)
        """
        matrix = np.asarray(comparison_matrix, dtype=float)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1] or matrix.shape[0] == 0:
            raise ValueError(f"Comparison matrix must be square and non-empty, got shape {matrix.shape}")

        if self.method == "power":
            return self._power_iteration(matrix)

        eigenvalues, eigenvectors = np.linalg.eig(matrix)
        # eig는 고유값을 정렬해서 돌려주지 않으므로 절댓값 최대인 것을 직접 고른다
        index = int(np.argmax(np.abs(eigenvalues)))
        vector = np.real(eigenvectors[:, index])
        return self._normalize(vector), float(np.real(eigenvalues[index]))

    def calculate_priorities(self, comparison_matrix: np.ndarray) -> List[float]:
        """가중치 벡터만 float 리스트로 반환"""
        weights, max_eigenvalue = self.calculate_weights(comparison_matrix)
        logger.debug("lambda_max=%.6f, weights=%s", max_eigenvalue, np.round(weights, 6).tolist())
        return [float(w) for w in weights]

    def _power_iteration(self, matrix: np.ndarray) -> Tuple[np.ndarray, float]:
        size = matrix.shape[0]
        vector = np.full(size, 1.0 / size)
        eigenvalue = float(size)

        for iteration in range(1, self.max_iter + 1):
            product = matrix @ vector
            # vector의 합이 1이므로 합(Av)가 곧 고유값 추정치
            eigenvalue = float(product.sum())
            next_vector = product / eigenvalue
            delta = float(np.abs(next_vector - vector).sum())
            vector = next_vector
            if delta < self.tolerance:
                logger.debug("Power iteration converged after %d iterations", iteration)
                break
        else:
            logger.warning(
                "Power iteration did not converge within %d iterations (tolerance=%g)",
                self.max_iter, self.tolerance
            )

        return self._normalize(vector), eigenvalue

    @staticmethod
    def _normalize(vector: np.ndarray) -> np.ndarray:
        total = vector.sum()
        if total == 0:
            raise ValueError("Cannot normalize an eigenvector whose components sum to zero")
        # 부호가 뒤집힌 고유벡터도 합으로 나누면 양수가 된다
        return vector / total
