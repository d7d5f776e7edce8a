r"""@package difffunc.exprs.composite

Expressions combining two other expressions.

Derivatives follow the usual sum, product, quotient and chain rules. They are
built structurally without any simplification, reusing the original sub
expressions where the rules contain them.
"""

from itertools import product

from .common import VARIABLE_TOKEN
from .numexpr import Expression
from .basics import ConstantExpression, NegationExpression


__all__ = [
    "SumExpression",
    "DifferenceExpression",
    "ProductExpression",
    "QuotientExpression",
    "CompositionExpression",
]


class SumExpression(Expression):
    r"""Sum of two expressions.

    Represents an expression of the form \f$ f(x) = g(x) + h(x) \f$.
    """
    def __init__(self, expr1, expr2, name='add'):
        r"""Init function.

        Args:
            expr1:  First expression.
            expr2:  Second expression.
            name:   Name of the expression (e.g. for print_tree()).
        """
        super(SumExpression, self).__init__(e1=expr1, e2=expr2, name=name)

    @property
    def nice_name(self):
        return "%s (e1 + e2)" % self.name

    def _eval(self, x, ctx):
        return self.e1._eval(x, ctx) + self.e2._eval(x, ctx)

    def differentiate(self):
        return SumExpression(self.e1.differentiate(), self.e2.differentiate())

    def expand_terms(self):
        return self.e1.expand_terms() + self.e2.expand_terms()

    def render(self):
        return "(%s + %s)" % (self.e1.render(), self.e2.render())

    def _sympy(self, x):
        return self.e1._sympy(x) + self.e2._sympy(x)


class DifferenceExpression(Expression):
    r"""Difference of two expressions.

    Represents an expression of the form \f$ f(x) = g(x) - h(x) \f$.
    """
    def __init__(self, expr1, expr2, name='sub'):
        r"""Init function.

        Args:
            expr1:  Expression to subtract from.
            expr2:  Expression to subtract.
            name:   Name of the expression (e.g. for print_tree()).
        """
        super(DifferenceExpression, self).__init__(e1=expr1, e2=expr2, name=name)

    @property
    def nice_name(self):
        return "%s (e1 - e2)" % self.name

    def _eval(self, x, ctx):
        return self.e1._eval(x, ctx) - self.e2._eval(x, ctx)

    def differentiate(self):
        return DifferenceExpression(self.e1.differentiate(),
                                    self.e2.differentiate())

    def expand_terms(self):
        return (self.e1.expand_terms()
                + [NegationExpression(t) for t in self.e2.expand_terms()])

    def render(self):
        return "(%s - %s)" % (self.e1.render(), self.e2.render())

    def _sympy(self, x):
        return self.e1._sympy(x) - self.e2._sympy(x)


class ProductExpression(Expression):
    r"""Multiply two expressions.

    Represents an expression of the form \f$ f(x) = g(x) h(x) \f$.

    Expanding a product distributes it over the terms of both factors, so
    factors with `m` and `n` terms produce `m*n` terms.
    """
    def __init__(self, expr1, expr2, name='mult'):
        r"""Init function.

        Args:
            expr1:  First expression.
            expr2:  Second expression.
            name:   Name of the expression (e.g. for print_tree()).
        """
        super(ProductExpression, self).__init__(e1=expr1, e2=expr2, name=name)

    @property
    def nice_name(self):
        return "%s (e1 * e2)" % self.name

    def _eval(self, x, ctx):
        return self.e1._eval(x, ctx) * self.e2._eval(x, ctx)

    def differentiate(self):
        e1, e2 = self.e1, self.e2
        return SumExpression(
            ProductExpression(e1.differentiate(), e2),
            ProductExpression(e2.differentiate(), e1),
        )

    def expand_terms(self):
        terms1 = self.e1.expand_terms()
        terms2 = self.e2.expand_terms()
        if len(terms1) == 1 and len(terms2) == 1:
            return [self]
        return [ProductExpression(t1, t2) for t1, t2 in product(terms1, terms2)]

    def render(self):
        return "(%s * %s)" % (self.e1.render(), self.e2.render())

    def _sympy(self, x):
        return self.e1._sympy(x) * self.e2._sympy(x)


class QuotientExpression(Expression):
    r"""Divide one expression by another.

    Represents an expression of the form \f$ f(x) = g(x) / h(x) \f$.

    Only the numerator is distributed during expansion, i.e. each of its
    terms is divided by the unchanged denominator. The denominator itself is
    never expanded.

    Points where the denominator vanishes evaluate to `inf` or `nan`. A
    denominator that is a constant zero is rejected on construction.
    """
    def __init__(self, top, bottom, name='divide'):
        r"""Init function.

        Args:
            top:    Numerator expression.
            bottom: Denominator expression. Must not be a
                    basics.ConstantExpression with value zero.
            name:   Name of the expression (e.g. for print_tree()).

        Raises:
            ValueError: If `bottom` is a constant zero.
        """
        super(QuotientExpression, self).__init__(top=top, bottom=bottom,
                                                 name=name)
        if isinstance(self.bottom, ConstantExpression) and self.bottom.c == 0:
            raise ValueError("Cannot divide by the constant zero.")

    @property
    def nice_name(self):
        return "%s (top / bottom)" % self.name

    def _eval(self, x, ctx):
        return ctx.divide(self.top._eval(x, ctx), self.bottom._eval(x, ctx))

    def differentiate(self):
        top, bottom = self.top, self.bottom
        numerator = DifferenceExpression(
            ProductExpression(top.differentiate(), bottom),
            ProductExpression(bottom.differentiate(), top),
        )
        return QuotientExpression(numerator, ProductExpression(bottom, bottom))

    def expand_terms(self):
        terms = self.top.expand_terms()
        if len(terms) == 1:
            return [self]
        return [QuotientExpression(t, self.bottom) for t in terms]

    def render(self):
        return "(%s / %s)" % (self.top.render(), self.bottom.render())

    def _sympy(self, x):
        return self.top._sympy(x) / self.bottom._sympy(x)


class CompositionExpression(Expression):
    r"""Compose two expressions.

    Represents an expression of the form \f$ f(x) = g(h(x)) \f$, where
    \f$ g \f$ is the `source` (outer) and \f$ h \f$ the `target` (inner)
    expression.

    Compositions are opaque to expansion: neither of the two expressions is
    expanded and no cancellation of inverse functions is attempted.
    """
    def __init__(self, source, target, name='compose'):
        r"""Init function.

        Args:
            source: Outer expression.
            target: Inner expression, whose value is passed to `source`.
            name:   Name of the expression (e.g. for print_tree()).
        """
        super(CompositionExpression, self).__init__(source=source,
                                                    target=target, name=name)

    @property
    def nice_name(self):
        return "%s (source o target)" % self.name

    def _eval(self, x, ctx):
        return self.source._eval(self.target._eval(x, ctx), ctx)

    def differentiate(self):
        target = self.target
        return ProductExpression(
            CompositionExpression(self.source.differentiate(), target),
            target.differentiate(),
        )

    def render(self):
        r"""Render by substituting the target into the source's rendering.

        Every occurrence of common.VARIABLE_TOKEN in the rendered source is
        replaced by the rendered target. This is a textual replacement and
        does not know about the structure of the source.
        """
        return self.source.render().replace(VARIABLE_TOKEN, self.target.render())

    def _sympy(self, x):
        return self.source._sympy(self.target._sympy(x))
