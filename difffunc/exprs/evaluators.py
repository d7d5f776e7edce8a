r"""@package difffunc.exprs.evaluators

Evaluation contexts and callable evaluators for numexpr.Expression objects.

An expression evaluates itself by recursively combining the values of its
sub expressions. The elementary functions (and division) used in that
recursion are taken from a *context* object, which is either

    * the floating point context FLOAT_CONTEXT, based on NumPy and accepting
      scalars as well as arrays, or
    * the arbitrary precision context MP_CONTEXT, based on `mpmath`.

Both contexts follow IEEE-754 conventions for domain violations, i.e. they
return infinities or NaN instead of raising.

The Evaluator class takes a *snapshot* of an expression and turns it into a
callable object, which can also evaluate derivatives of any order.
"""

import logging

import numpy as np
from mpmath import mp


__all__ = [
    "Evaluator",
    "FLOAT_CONTEXT",
    "MP_CONTEXT",
]


logger = logging.getLogger(__name__)


class _FloatContext(object):
    r"""Floating point evaluation using NumPy."""
    use_mp = False

    def evaluate(self, expr, x, dps=None):
        r"""Evaluate `expr` at a scalar or array `x`.

        Scalars produce a Python `float`, arrays an array of the same shape.
        The `dps` argument is ignored.
        """
        # pylint: disable=unused-argument,protected-access
        x = np.array(x, dtype=float)
        with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
            result = expr._eval(x, self)
        if np.ndim(result) == 0:
            return float(result)
        return result

    def constant(self, value, x):
        return np.full_like(x, value)

    def divide(self, a, b):
        return np.divide(a, b)

    def sin(self, x):
        return np.sin(x)

    def cos(self, x):
        return np.cos(x)

    def exp(self, x):
        return np.exp(x)

    def log(self, x):
        return np.log(x)


class _MpContext(object):
    r"""Arbitrary precision evaluation using `mpmath`.

    Only scalar arguments are supported.
    """
    use_mp = True

    def evaluate(self, expr, x, dps=None):
        r"""Evaluate `expr` at `x` using `dps` decimal places."""
        # pylint: disable=protected-access
        if dps is None:
            dps = mp.dps
        with mp.workdps(dps):
            return expr._eval(mp.mpf(x), self)

    def constant(self, value, x):
        # pylint: disable=unused-argument
        return mp.mpf(value)

    def divide(self, a, b):
        if b != 0:
            return a / b
        if mp.isnan(a) or mp.isnan(b) or a == 0:
            return mp.nan
        return mp.sign(a) * mp.inf

    def sin(self, x):
        return mp.sin(x)

    def cos(self, x):
        return mp.cos(x)

    def exp(self, x):
        return mp.exp(x)

    def log(self, x):
        if x > 0:
            return mp.log(x)
        if x == 0:
            return mp.ninf
        return mp.nan


## Context for floating point (NumPy) evaluation.
FLOAT_CONTEXT = _FloatContext()

## Context for arbitrary precision (`mpmath`) evaluation.
MP_CONTEXT = _MpContext()


class Evaluator(object):
    r"""Callable snapshot of an expression and its derivatives.

    Evaluators are created by numexpr.Expression.evaluator(). Calling one
    evaluates the expression, while diff() evaluates the n'th derivative.
    Derivative expressions are created on demand by repeatedly calling
    numexpr.Expression.differentiate() and are cached, so each order is built
    only once per evaluator.

    @b Examples

    ```
        ev = (Sin * Exp).evaluator()
        ev(0.5)          # sin(.5) exp(.5)
        ev.diff(0.5)     # (sin(.5) + cos(.5)) exp(.5)
        ev.diff(0.5, 2)  # 2 cos(.5) exp(.5)
    ```
    """
    def __init__(self, expr, use_mp=False, dps=None):
        r"""Create an evaluator for a given expression.

        @param expr
            The expression object for which this evaluator is created.
        @param use_mp
            Whether to evaluate using `mpmath` (if `True`) or NumPy floating
            point operations. Default is `False`.
        @param dps
            Decimal places for `mpmath` evaluation. Default is to use the
            value of `mp.dps` at the time of evaluation.
        """
        ## Boolean indicating if computation should use `mpmath`.
        self.use_mp = use_mp
        ## Decimal places used in `mpmath` computations.
        self.dps = dps
        ## Either MP_CONTEXT or FLOAT_CONTEXT, depending on `use_mp`.
        self.ctx = MP_CONTEXT if use_mp else FLOAT_CONTEXT
        self._exprs = [expr]

    def __call__(self, x):
        r"""Evaluate the expression at a point x."""
        return self.diff(x, 0)

    def diff(self, x, n=1):
        r"""Evaluate the n'th derivative of the expression at a point x."""
        return self.ctx.evaluate(self.expression(n), x, dps=self.dps)

    def expression(self, n=0):
        r"""Return the expression representing the n'th derivative."""
        if n < 0:
            raise ValueError("Derivative order must be non-negative (got %s)." % n)
        for i in range(len(self._exprs), n+1):
            logger.debug("Building derivative of order %d.", i)
            self._exprs.append(self._exprs[i-1].differentiate())
        return self._exprs[n]

    def function(self, n=0):
        r"""Return a callable for the n'th derivative."""
        expr = self.expression(n)
        ctx = self.ctx
        dps = self.dps
        return lambda x: ctx.evaluate(expr, x, dps=dps)
