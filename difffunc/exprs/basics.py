r"""@package difffunc.exprs.basics

Leaf expressions and the negation of an expression.

The leaves represent the elementary functions of one variable every larger
expression is built from. Since expressions are immutable, a single leaf
instance may be shared freely. This module provides such shared instances as
`Id`, `Sin`, `Cos`, `Exp` and `Log`, and `Const()` as short form for
ConstantExpression.
"""

import sympy as sp

from .common import VARIABLE_TOKEN, _format_value
from .numexpr import Expression


__all__ = [
    "ConstantExpression",
    "IdentityExpression",
    "SineExpression",
    "CosineExpression",
    "ExpExpression",
    "LogExpression",
    "NegationExpression",
    "Const",
    "Id",
    "Sin",
    "Cos",
    "Exp",
    "Log",
]


class ConstantExpression(Expression):
    r"""Represent an expression that is a constant.

    Represents an expression of the form \f$ f(x) = c = \mathrm{const} \f$.

    The value of the constant can be accessed through the `c` property.

    Equality and hashing follow float `==` on the values, so `Const(0.0)`
    equals `Const(-0.0)` (though they render differently) and a `nan`
    constant is in general not equal to another `nan` constant.
    """

    def __init__(self, value=0.0, name='const'):
        r"""Init function.

        Args:
            value:  The constant value (converted to `float`).
            name:   Name of the expression (e.g. for print_tree()).
        """
        super(ConstantExpression, self).__init__(name=name)
        self._c = float(value)

    @property
    def c(self):
        r"""The constant value this expression represents."""
        return self._c

    @property
    def nice_name(self):
        return "%s (%r)" % (self.name, self._c)

    def _key(self):
        return (self._c,)

    def _eval(self, x, ctx):
        return ctx.constant(self._c, x)

    def differentiate(self):
        return ConstantExpression(0.0)

    def render(self):
        return "(%s)" % _format_value(self._c)

    def _sympy(self, x):
        return sp.Float(self._c)


class IdentityExpression(Expression):
    r"""Identity expression \f$ f(x) = x \f$."""
    def __init__(self, name='Id'):
        super(IdentityExpression, self).__init__(name=name)

    def _eval(self, x, ctx):
        return x

    def differentiate(self):
        return ConstantExpression(1.0)

    def render(self):
        return VARIABLE_TOKEN

    def _sympy(self, x):
        return x


class SineExpression(Expression):
    r"""Sine expression \f$ f(x) = \sin(x) \f$."""
    def __init__(self, name='sin'):
        super(SineExpression, self).__init__(name=name)

    def _eval(self, x, ctx):
        return ctx.sin(x)

    def differentiate(self):
        return CosineExpression()

    def render(self):
        return "(sin%s)" % VARIABLE_TOKEN

    def _sympy(self, x):
        return sp.sin(x)


class CosineExpression(Expression):
    r"""Cosine expression \f$ f(x) = \cos(x) \f$."""
    def __init__(self, name='cos'):
        super(CosineExpression, self).__init__(name=name)

    def _eval(self, x, ctx):
        return ctx.cos(x)

    def differentiate(self):
        return NegationExpression(SineExpression())

    def render(self):
        return "(cos%s)" % VARIABLE_TOKEN

    def _sympy(self, x):
        return sp.cos(x)


class ExpExpression(Expression):
    r"""Exponential function \f$ f(x) = e^x \f$."""
    def __init__(self, name='exp'):
        super(ExpExpression, self).__init__(name=name)

    def _eval(self, x, ctx):
        return ctx.exp(x)

    def differentiate(self):
        return ExpExpression()

    def render(self):
        return "(exp%s)" % VARIABLE_TOKEN

    def _sympy(self, x):
        return sp.exp(x)


class LogExpression(Expression):
    r"""Natural logarithm \f$ f(x) = \ln(x) \f$.

    Non-positive arguments evaluate to `-inf` (for zero) or `nan`.
    """
    def __init__(self, name='ln'):
        super(LogExpression, self).__init__(name=name)

    def _eval(self, x, ctx):
        return ctx.log(x)

    def differentiate(self):
        from .composite import QuotientExpression
        return QuotientExpression(ConstantExpression(1.0), IdentityExpression())

    def render(self):
        return "(ln%s)" % VARIABLE_TOKEN

    def _sympy(self, x):
        return sp.log(x)


class NegationExpression(Expression):
    r"""Negate another expression.

    Represents an expression of the form \f$ f(x) = -g(x) \f$.

    Negations are not distributed during expansion, i.e. a negated sum forms
    a single term.
    """
    def __init__(self, expr, name='neg'):
        r"""Init function.

        Args:
            expr:   The expression to negate.
            name:   Name of the expression (e.g. for print_tree()).
        """
        super(NegationExpression, self).__init__(e=expr, name=name)

    def _eval(self, x, ctx):
        return -self.e._eval(x, ctx)

    def differentiate(self):
        return NegationExpression(self.e.differentiate())

    def render(self):
        return "-%s" % self.e.render()

    def _sympy(self, x):
        return -self.e._sympy(x)


def Const(value):
    r"""Short form for creating a ConstantExpression."""
    return ConstantExpression(value)


## Shared identity expression.
Id = IdentityExpression()

## Shared sine expression.
Sin = SineExpression()

## Shared cosine expression.
Cos = CosineExpression()

## Shared exponential function expression.
Exp = ExpExpression()

## Shared natural logarithm expression.
Log = LogExpression()
