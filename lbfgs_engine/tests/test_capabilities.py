import warnings

import numpy as np
import pytest

from lbfgs_engine.config import LBFGSConfig
from lbfgs_engine.descent import SteepestDescentSolver
from lbfgs_engine.gradients import FiniteDifferenceGradient
from lbfgs_engine.lbfgs import LBFGSSolver
from lbfgs_engine.problems import Quadratic, Rosenbrock
from lbfgs_engine.protocols import (
    CallableGradient,
    CallableObjective,
    GradientFunction,
    ObjectiveFunction,
    as_gradient,
    as_objective,
)


def test_problems_satisfy_both_protocols():
    for problem in (Quadratic(np.eye(2)), Rosenbrock()):
        assert isinstance(problem, ObjectiveFunction)
        assert isinstance(problem, GradientFunction)
        assert as_objective(problem) is problem
        assert as_gradient(problem) is problem


def test_callables_are_wrapped():
    obj = as_objective(lambda x: x @ x)
    grad = as_gradient(lambda x: [2.0 * v for v in x])

    assert isinstance(obj, CallableObjective)
    assert isinstance(grad, CallableGradient)
    assert obj.compute_objective(np.array([1.0, 2.0])) == 5.0
    np.testing.assert_array_equal(grad.compute_gradient(np.array([1.0, 2.0])), [2.0, 4.0])


def test_length_one_objective_is_a_scalar():
    """A 1-D point through lambda x: x**2 gives a float without NumPy warnings."""
    obj = as_objective(lambda x: x ** 2)
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert obj.compute_objective(np.array([3.0])) == 9.0


def test_vector_valued_objective_rejected():
    obj = as_objective(lambda x: 2.0 * x)
    with pytest.raises(TypeError, match="scalar"):
        obj.compute_objective(np.array([1.0, 2.0]))


@pytest.mark.parametrize("bad", [42, "f", [1.0]])
def test_non_conforming_capability(bad):
    with pytest.raises(TypeError):
        as_objective(bad)
    with pytest.raises(TypeError):
        as_gradient(bad)


def test_quadratic_gradient_and_minimizer():
    problem = Quadratic([[2.0, 1.0], [1.0, 3.0]], b=[1.0, -1.0], c=4.0)
    x = np.array([0.5, -2.0])
    A = problem.A
    np.testing.assert_allclose(problem.compute_gradient(x), (A + A.T) @ x + problem.b)
    np.testing.assert_allclose(problem.compute_gradient(problem.minimizer()), 0.0, atol=1e-12)


def test_quadratic_rejects_bad_shapes():
    with pytest.raises(ValueError):
        Quadratic(np.ones((2, 3)))
    with pytest.raises(ValueError):
        Quadratic(np.eye(2), b=np.ones(3))


def test_shifted_quadratic_minimum():
    problem = Quadratic.shifted([1.0, -2.0], scale=[1.0, 4.0])
    np.testing.assert_allclose(problem.minimizer(), [1.0, -2.0])
    assert problem.compute_objective(np.array([1.0, -2.0])) == pytest.approx(0.0, abs=1e-12)
    assert problem.compute_objective(np.array([2.0, -2.0])) == pytest.approx(1.0)


def test_rosenbrock_values():
    problem = Rosenbrock()
    assert problem.compute_objective(np.array([1.0, 1.0])) == 0.0
    np.testing.assert_array_equal(problem.compute_gradient(np.array([1.0, 1.0])), [0.0, 0.0])
    assert problem.compute_objective(np.array([-1.2, 1.0])) == pytest.approx(24.2)


def test_central_differences_match_analytic_gradient():
    problem = Rosenbrock()
    fd = FiniteDifferenceGradient(problem)
    for x in (np.array([-1.2, 1.0]), np.array([0.3, 0.7]), np.array([2.0, 3.5])):
        np.testing.assert_allclose(fd.compute_gradient(x), problem.compute_gradient(x), rtol=1e-5, atol=1e-4)


def test_forward_differences_are_close():
    problem = Rosenbrock()
    fd = FiniteDifferenceGradient(problem.compute_objective, scheme="forward")
    x = np.array([0.3, 0.7])
    np.testing.assert_allclose(fd.compute_gradient(x), problem.compute_gradient(x), atol=1e-2)


def test_finite_difference_validation():
    with pytest.raises(ValueError):
        FiniteDifferenceGradient(lambda x: 0.0, step=0.0)
    with pytest.raises(ValueError):
        FiniteDifferenceGradient(lambda x: 0.0, scheme="backward")


def test_solver_with_finite_difference_gradient():
    """A numerical gradient drives L-BFGS to the same minimiser."""
    problem = Quadratic.shifted([1.0, 2.0, 3.0], scale=[1.0, 2.0, 3.0])
    result = LBFGSSolver().optimize(np.zeros(3), problem, FiniteDifferenceGradient(problem))

    assert result.converged
    np.testing.assert_allclose(result.point, [1.0, 2.0, 3.0], atol=1e-5)


@pytest.mark.parametrize("solver", [LBFGSSolver(), SteepestDescentSolver()])
def test_optimizers_are_interchangeable(solver):
    """Both solvers honour the same optimize() contract."""
    problem = Quadratic.shifted([1.0, 2.0])
    result = solver.optimize(np.zeros(2), problem, problem)

    assert result.converged
    np.testing.assert_allclose(result.point, [1.0, 2.0], atol=1e-6)
    assert result.value == pytest.approx(0.0, abs=1e-10)


def test_steepest_descent_budget_and_validation():
    problem = Rosenbrock()
    with pytest.raises(ValueError):
        SteepestDescentSolver().optimize(None, problem, problem)

    result = SteepestDescentSolver(LBFGSConfig(max_iterations=5)).optimize(np.array([-1.2, 1.0]), problem, problem)
    assert not result.converged
    assert result.iterations == 5
    assert result.value < 24.2
