r"""@package difffunc.exprs.common

Utils used by multiple modules in difffunc.exprs.
"""

from mpmath import mp


__all__ = [
    "isclose",
    "sum_of",
    "VARIABLE_TOKEN",
]


## Rendering of the free variable, including its delimiting parentheses.
##
## Compositions are rendered by replacing each occurrence of this exact token
## in the rendered outer function by the rendering of the inner function.
## This is purely textual: a variant whose own rendering happens to contain
## this token would have it replaced as well.
VARIABLE_TOKEN = "(x)"


def isclose(a, b, rel_tol=None, abs_tol=None, use_mp=False):
    r"""Test if two numbers agree within an absolute/relative tolerance.

    For floating point comparison (i.e. if `use_mp==False`), the default
    relative tolerance is `1e-9` and the absolute one `0.0`.
    """
    if use_mp:
        return mp.almosteq(a, b, rel_eps=rel_tol, abs_eps=abs_tol)
    if rel_tol is None:
        rel_tol = 1e-9
    if abs_tol is None:
        abs_tol = 0.0
    return abs(a-b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)


def sum_of(terms):
    r"""Combine a sequence of expressions into a single sum expression.

    The sequence is split in halves recursively and the sums of both halves
    are added, i.e. `[a, b, c, d]` becomes ``(a + b) + (c + d)`` and
    `[a, b, c]` becomes ``a + (b + c)``. The resulting tree has a depth of
    about `log2(len(terms))`, so even expansions into many terms can be
    evaluated and rendered recursively. A single term is returned as is.

    @param terms
        Sequence of numexpr.Expression objects. It must not be empty, since
        there is no meaningful sum of nothing here. Every variant produces at
        least one term on expansion, so an empty sequence points to a broken
        variant rather than to bad input.

    @return The combined expression.
    """
    terms = list(terms)
    if not terms:
        raise ValueError("Cannot build a sum of an empty sequence of terms.")
    if len(terms) == 1:
        return terms[0]
    from .composite import SumExpression
    k = len(terms) // 2
    return SumExpression(sum_of(terms[:k]), sum_of(terms[k:]))


def _format_value(value):
    r"""Format a constant's value for rendering."""
    return "%r" % float(value)
