import pytest

from scalar_aad import use_tape


@pytest.fixture(autouse=True)
def tape():
    """Every test records on its own tape."""
    with use_tape() as t:
        yield t


def central_difference(f, *vals, arg=0, epsilon=1e-6):
    """[f(x + eps) - f(x - eps)] / (2 eps) along argument `arg`, on plain floats."""
    plus = list(vals)
    minus = list(vals)
    plus[arg] = plus[arg] + epsilon
    minus[arg] = minus[arg] - epsilon
    return (f(*plus) - f(*minus)) / (2 * epsilon)


@pytest.fixture
def numeric_derivative():
    return central_difference
