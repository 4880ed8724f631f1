# scalar_aad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the tape. Every helper here records on its own fresh tape
# so repeated calls never see each other's nodes or grads.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List

from .var import Scalar
from .tape import use_tape
from .engine import backward


def value(x: Any) -> Any:
    """Return the numeric value of a Scalar; pass through plain numbers unchanged."""
    return x.data if isinstance(x, Scalar) else x


def _as_output(y: Any) -> Scalar:
    # f may return a plain number when its output does not depend on the inputs
    return y if isinstance(y, Scalar) else Scalar(y)


# ----------------------------- single-input grad ----------------------------- #
def grad_of(f: Callable[[Scalar], Any], x0: float) -> float:
    """
    Derivative of a scalar function y = f(x) at x0.
    Runs one reverse pass within a fresh, isolated tape.
    """
    with use_tape():
        x = Scalar(x0)
        backward(_as_output(f(x)))
        return x.grad


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Dict[str, Scalar]], Any],
          inputs: Dict[str, float]) -> Dict[str, float]:
    """
    Gradient of y = f(vars) w.r.t. ALL inputs (dict form), from ONE reverse pass.

    Parameters
    ----------
    f       : function taking a dict {name: Scalar} and returning a Scalar
    inputs  : dict {name: number}

    Returns
    -------
    dict {name: float}  # partials in the same key order as `inputs`
    """
    with use_tape():
        xs: Dict[str, Scalar] = {k: Scalar(v) for k, v in inputs.items()}
        backward(_as_output(f(xs)))
        return {k: xs[k].grad for k in inputs.keys()}


def grads_list(f: Callable[[List[Scalar]], Any],
               x0_list: Iterable[float]) -> List[float]:
    """
    Same as grads(), but the inputs are provided as a list and the result is a list
    of partials in the same order.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    grads_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    with use_tape():
        xs: List[Scalar] = [Scalar(v) for v in x0_list]
        backward(_as_output(f(xs)))
        return [x.grad for x in xs]
