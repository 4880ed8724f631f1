# scalar_aad/ops/arithmetic.py
import logging

import numpy as np

from ..core.var import Scalar, check_real
from ..core.node import OpKind
from ..core.errors import DomainError, OperandError
from ..core import config as config_mod  # module access for use_config() compatibility
from ..core import tape as tape_mod      # module access for use_tape() compatibility

log = logging.getLogger(__name__)


def _tape_of(*xs):
    """Tape shared by the Scalar operands; the active tape if there are none."""
    tape = None
    for x in xs:
        if isinstance(x, Scalar):
            if tape is None:
                tape = x.tape
            elif x.tape is not tape:
                raise OperandError("operands were recorded on different tapes")
    return tape if tape is not None else tape_mod.active_tape()


def _as_scalar(x, tape):
    """Ensure x is a Scalar on `tape`; otherwise record it there as a constant leaf."""
    if isinstance(x, Scalar):
        x.check_live()
        return x
    return Scalar(check_real(x), tape=tape)


def record(tape, op, data, operands, exponent=None):
    """Push one node computed from `operands` and return its handle."""
    if config_mod.active_config.check_finite and not np.isfinite(data):
        raise DomainError(f"{op.value} produced a non-finite value ({data})")
    idx = tape.push_node(op=op, data=data, operands=[x.idx for x in operands],
                         exponent=exponent)
    return Scalar._wrap(tape, idx)


def _binary(x, y, f, op):
    """
    Generic binary primitive:
      - coerces plain numbers to constant leaves on the operands' tape
      - computes out.data = f(x.data, y.data)
      - records a node with operands (x, y)
    """
    tape = _tape_of(x, y)
    x = _as_scalar(x, tape)
    y = _as_scalar(y, tape)
    return record(tape, op, f(x.node.data, y.node.data), (x, y))


def add(x, y): return _binary(x, y, lambda a, b: a + b, OpKind.ADD)
def mul(x, y): return _binary(x, y, lambda a, b: a * b, OpKind.MUL)


def pow(x, exponent):
    """
    Power by a constant real exponent:
      out.data = x.data ** exponent

    A non-finite result (0 to a negative power, a negative base to a
    fractional one) follows EngineConfig.pow_domain unless check_finite is
    on: "zero" records it and logs a warning, "raise" raises DomainError.
    The local partial n * x^(n-1) is applied by the backward driver under
    the same policy.
    """
    if isinstance(exponent, Scalar):
        raise OperandError("pow() exponent must be a constant real number, not a Scalar")
    n = check_real(exponent)
    tape = _tape_of(x)
    x = _as_scalar(x, tape)
    # 0 ** negative gives inf, negative ** fractional gives nan; both are
    # reported here (or through check_finite) rather than as numpy warnings
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        data = np.power(x.node.data, n)
    cfg = config_mod.active_config
    base = x.node.data
    undefined = (base == 0 and n < 0) or (base < 0 and not float(n).is_integer())
    if undefined and not cfg.check_finite:
        if cfg.pow_domain == "raise":
            raise DomainError(f"a**{n} is undefined at a = {float(base)} (gives {float(data)})")
        log.warning("a**%s is undefined at a = %s; recording %s",
                    n, float(base), float(data))
    return record(tape, OpKind.POW, data, (x,), exponent=n)


# Derived operations: compositions of the primitives above, no extra backward rules
def neg(x):
    return mul(x, -1.0)


def sub(x, y):
    tape = _tape_of(x, y)
    return add(_as_scalar(x, tape), neg(_as_scalar(y, tape)))


def reciprocal(x):
    return pow(x, -1.0)


def div(x, y):
    tape = _tape_of(x, y)
    return mul(_as_scalar(x, tape), reciprocal(_as_scalar(y, tape)))


# The functional name used by callers that do not go through operators
multiply = mul
