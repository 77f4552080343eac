import numpy as np
import pytest

from src.ranking import AHPCalculator, EIGEN_METHODS


@pytest.fixture(params=EIGEN_METHODS)
def calculator(request):
    return AHPCalculator(method=request.param)


def test_two_by_two(calculator):
    weights, max_eigenvalue = calculator.calculate_weights(np.array([[1.0, 3.0], [1 / 3, 1.0]]))
    assert weights == pytest.approx([0.75, 0.25])
    assert max_eigenvalue == pytest.approx(2.0)


def test_consistent_matrix(calculator):
    # w = (0.6, 0.3, 0.1) 에서 만든 완전 일관 행렬
    w = np.array([0.6, 0.3, 0.1])
    matrix = w[:, None] / w[None, :]
    weights, max_eigenvalue = calculator.calculate_weights(matrix)
    assert weights == pytest.approx(w)
    assert max_eigenvalue == pytest.approx(3.0)


def test_identity_of_ones(calculator):
    priorities = calculator.calculate_priorities(np.ones((4, 4)))
    assert priorities == pytest.approx([0.25] * 4)
    assert all(isinstance(p, float) for p in priorities)


def test_build_comparison_matrix():
    calculator = AHPCalculator()
    matrix = calculator.build_comparison_matrix(
        ["a", "b"], {("a", "b"): 5.0, ("b", "a"): 0.2}
    )
    assert matrix.tolist() == [[1.0, 5.0], [0.2, 1.0]]


def test_build_comparison_matrix_requires_all_pairs():
    with pytest.raises(KeyError):
        AHPCalculator().build_comparison_matrix(["a", "b"], {("a", "b"): 5.0})


def test_normalize_handles_sign_flip():
    weights = AHPCalculator._normalize(np.array([-0.6, -0.3, -0.1]))
    assert weights == pytest.approx([0.6, 0.3, 0.1])


def test_normalize_rejects_zero_sum():
    with pytest.raises(ValueError):
        AHPCalculator._normalize(np.zeros(3))


@pytest.mark.parametrize("matrix", [np.ones((2, 3)), np.ones(3), np.empty((0, 0))])
def test_rejects_non_square(matrix):
    with pytest.raises(ValueError):
        AHPCalculator().calculate_weights(matrix)


def test_unknown_method():
    with pytest.raises(ValueError):
        AHPCalculator(method="svd")


def test_power_iteration_warns_without_convergence(caplog):
    matrix = np.array([[1.0, 9.0, 1 / 5], [1 / 9, 1.0, 7.0], [5.0, 1 / 7, 1.0]])
    calculator = AHPCalculator(method="power", max_iter=1)
    with caplog.at_level("WARNING", logger="src.ranking.ahp"):
        weights, _ = calculator.calculate_weights(matrix)
    assert "did not converge" in caplog.text
    assert weights.sum() == pytest.approx(1.0)
