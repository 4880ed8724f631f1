# scalar_aad/core/errors.py
"""
Exception types raised by the engine.

All of them derive from AutodiffError, and each one also derives from the
builtin exception a caller would naturally catch (TypeError, LookupError,
ArithmeticError).
"""


class AutodiffError(Exception):
    """Base class for every error raised by scalar_aad."""


class OperandError(AutodiffError, TypeError):
    """An operation was given an operand it cannot record."""


class StaleNodeError(AutodiffError, LookupError):
    """A Scalar handle refers to a tape that has been reset since."""


class DomainError(AutodiffError, ArithmeticError):
    """A value or local derivative is outside the domain of its operation."""
