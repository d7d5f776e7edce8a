r"""@package difffunc.exprs.numexpr

Base of the Expression system.

An expression represents a real valued function of one variable \f$ x \f$ as
an immutable tree of nodes. Leaves are elementary functions (constants, the
identity, \f$ \sin \f$, \f$ \cos \f$, \f$ \exp \f$, \f$ \ln \f$) and inner
nodes combine the functions represented by their children (sums, products,
quotients, compositions, ...).

Every expression can
    * be evaluated numerically at a point (evaluate()),
    * produce a new expression representing its exact derivative
      (differentiate()),
    * be distributed into a flat sum of product terms (expand_terms() and
      expand()),
    * be rendered as a fully parenthesized string (render()).

None of these operations ever modifies an expression. Instead, new nodes are
created which may reference (i.e. share) nodes of the original tree. Since
nodes cannot change after construction, this sharing is never observable.

As a simple example, let's build \f$ \sin(x)/x \f$ and compute its
derivative:

~~~.py
f = Sin / Id
df = f.differentiate()
print("f'(x) =", df)
print("f'(2) =", df.evaluate(2.0))
~~~
"""

from abc import ABCMeta, abstractmethod
import logging
import numbers

import sympy as sp

from .common import sum_of
from .evaluators import Evaluator, FLOAT_CONTEXT


__all__ = [
    "Expression",
]


logger = logging.getLogger(__name__)


class _ExpressionMeta(ABCMeta):
    r"""Metaclass locking expression objects once they are fully constructed."""
    def __call__(cls, *args, **kwargs):
        obj = super(_ExpressionMeta, cls).__call__(*args, **kwargs)
        obj.__dict__['_frozen'] = True
        return obj


class Expression(metaclass=_ExpressionMeta):
    """Parent class for all expressions.

    Sub expressions are passed as keyword arguments to the base class init
    and are then available as attributes under these keys.

    The methods a child has to override are:
        * _eval() computing the value from the values of any sub expressions
        * differentiate() creating the derivative expression
        * render() returning the textual representation
        * _sympy() converting the expression into a SymPy expression

    Children combining other expressions additionally override
    expand_terms() if they take part in distributing products over sums.
    """

    def __init__(self, name=None, **sub_exprs):
        r"""Base class init for expressions.

        Args:
            name: (string, optional)
                Name for the expression. By default, the current class name
                is used as name.
            **sub_exprs:
                Sub expressions stored under the given keys. Numeric values
                are converted to basics.ConstantExpression objects.
        """
        self.__name = name if name else self.__class__.__name__
        self.__sub_expressions = dict(
            (k, self._ensure_expr(e)) for k, e in sub_exprs.items()
        )
        for k, e in self.__sub_expressions.items():
            setattr(self, k, e)

    def __setattr__(self, attr, value):
        if self.__dict__.get('_frozen', False):
            raise AttributeError("Expressions are immutable. Cannot set `%s`."
                                 % attr)
        super(Expression, self).__setattr__(attr, value)

    def __delattr__(self, attr):
        if self.__dict__.get('_frozen', False):
            raise AttributeError("Expressions are immutable. Cannot delete `%s`."
                                 % attr)
        super(Expression, self).__delattr__(attr)

    def __getstate__(self):
        r"""Return a picklable state object representing the whole expression."""
        state = dict(self.__dict__)
        state.pop('_hash', None)
        return state

    def __setstate__(self, state):
        r"""Restore a complete expression from the given unpickled state."""
        self.__dict__.update(state)

    @property
    def name(self):
        r"""Name given to this instance of the expression."""
        return self.__name

    @property
    def nice_name(self):
        r"""More descriptive name, which may be overridden by sub classes."""
        return self.__name

    def sub_expressions(self):
        r"""Return a list of `(key, expr)` pairs of the direct sub expressions."""
        return list(self.__sub_expressions.items())

    def traverse_tree(self, include_root=False, parents=None):
        r"""Generator that walks through a complete expression tree.

        In each iteration, the returned values represent the current node's
        parents (as a list from root to immediate parent), its key under which
        it is stored in its parent, and the node itself.

        Shared sub expressions are visited once per path leading to them.

        Args:
            include_root: Whether to include the root as first item. Default
                is `False`.
            parents: Optional list of parents of the root. Normally only used
                internally for the recursion.

        @b Examples
        \code
            for parents, name, expr in root_expr.traverse_tree():
                print("-"*len(parents), name)
        \endcode
        """
        if parents is None:
            parents = []
        if include_root:
            yield parents, "", self
        parents = parents + [self]
        for name, expr in self.__sub_expressions.items():
            yield parents, name, expr
            for node in expr.traverse_tree(include_root=False, parents=parents):
                yield node

    def print_tree(self, root_name='root', nice_names=True):
        r"""Print the whole expression tree.

        Each expression's key under which it is stored as sub expression will
        be shown as well as its actual name and the class name.

        Args:
            root_name: Key name to print for the root expression.
            nice_names: Whether to use the nice more descriptive name (when
                implemented) or the usually shorter abstract names.
        """
        def _p(expr, name, parents=()):
            n = expr.nice_name if nice_names else expr.name
            print("%s%s [%s] <%s>" % (
                ". " * len(parents), name, n, type(expr).__name__
            ))
        _p(self, root_name)
        for parents, name, expr in self.traverse_tree():
            _p(expr, name, parents)

    def evaluate(self, x):
        r"""Evaluate the function at `x`.

        `x` may be a real number or a NumPy array of real numbers. In the
        latter case, the function is evaluated elementwise and an array of
        the same shape is returned.

        Domain violations, such as division by zero or the logarithm of a
        non-positive number, are not reported. They result in `inf` or `nan`
        following IEEE-754 floating point semantics.
        """
        return FLOAT_CONTEXT.evaluate(self, x)

    def evaluator(self, use_mp=False, dps=None):
        r"""Create a callable evaluator for this expression and its derivatives.

        Args:
            use_mp: Boolean indicating whether the evaluator should use
                `mpmath` arbitrary precision arithmetics instead of standard
                (and faster) floating point operations.
            dps: Decimal places to use for `mpmath` computations. Ignored for
                floating point evaluators. Default is the current `mp.dps`.
        """
        return Evaluator(self, use_mp=use_mp, dps=dps)

    @abstractmethod
    def _eval(self, x, ctx):
        r"""Compute the value at `x` using the math functions of `ctx`.

        Child classes need to implement this in terms of the `_eval()` results
        of their sub expressions. The `ctx` is one of the contexts in
        evaluators, which supplies the elementary functions for the current
        evaluation mode.
        """
        pass

    @abstractmethod
    def differentiate(self):
        r"""Return a new expression representing the derivative w.r.t. `x`."""
        pass

    def expand_terms(self):
        r"""Return the list of additive terms this expression distributes into.

        The sum of all returned terms equals this expression. By default, an
        expression is opaque to expansion and forms a single term on its own.
        """
        return [self]

    def expand(self):
        r"""Return an equivalent expression as a sum of product terms.

        This combines the result of expand_terms() into a single expression
        using common.sum_of().
        """
        terms = self.expand_terms()
        logger.debug("Expanded %s into %d term(s).", self.name, len(terms))
        return sum_of(terms)

    @abstractmethod
    def render(self):
        r"""Return a fully parenthesized textual form of the expression.

        The variable is always rendered as ``(x)``, which is the placeholder
        replaced when rendering compositions.
        """
        pass

    def to_sympy(self, symbol=None):
        r"""Convert the expression into an equivalent SymPy expression.

        Args:
            symbol: SymPy symbol to use as variable. Default is a new symbol
                named `x`.
        """
        if symbol is None:
            symbol = sp.Symbol('x')
        return self._sympy(symbol)

    @abstractmethod
    def _sympy(self, x):
        r"""Child classes need to implement this and convert themselves here."""
        pass

    def _key(self):
        r"""Tuple identifying the structure of this node for comparisons.

        Children carrying parameters (e.g. constants) should extend this.
        """
        return tuple(e for _, e in self.__sub_expressions.items())

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, Expression):
            return NotImplemented
        if type(self) is not type(other):
            return False
        return self._key() == other._key()

    def __hash__(self):
        try:
            return self.__dict__['_hash']
        except KeyError:
            h = hash((type(self).__name__,) + self._key())
            self.__dict__['_hash'] = h
            return h

    def __str__(self):
        return self.render()

    def __repr__(self):
        r"""Return a string representing the whole expression tree."""
        cls = self.__class__.__name__
        return "<%s%s>" % (cls, self.render())

    def of(self, other):
        r"""Return the composition `self(other(x))`."""
        from .composite import CompositionExpression
        return CompositionExpression(self, other)

    def add(self, other):
        r"""Return the sum `self(x) + other(x)`."""
        from .composite import SumExpression
        return SumExpression(self, other)

    def sub(self, other):
        r"""Return the difference `self(x) - other(x)`."""
        from .composite import DifferenceExpression
        return DifferenceExpression(self, other)

    def neg(self):
        r"""Return the negation `-self(x)`."""
        from .basics import NegationExpression
        return NegationExpression(self)

    def mul(self, other):
        r"""Return the product `self(x) * other(x)`."""
        from .composite import ProductExpression
        return ProductExpression(self, other)

    def div(self, other):
        r"""Return the quotient `self(x) / other(x)`."""
        from .composite import QuotientExpression
        return QuotientExpression(self, other)

    def __add__(self, other):
        if not self._is_operand(other):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other):
        if not self._is_operand(other):
            return NotImplemented
        return self._ensure_expr(other).add(self)

    def __sub__(self, other):
        if not self._is_operand(other):
            return NotImplemented
        return self.sub(other)

    def __rsub__(self, other):
        if not self._is_operand(other):
            return NotImplemented
        return self._ensure_expr(other).sub(self)

    def __mul__(self, other):
        if not self._is_operand(other):
            return NotImplemented
        return self.mul(other)

    def __rmul__(self, other):
        if not self._is_operand(other):
            return NotImplemented
        return self._ensure_expr(other).mul(self)

    def __truediv__(self, other):
        if not self._is_operand(other):
            return NotImplemented
        return self.div(other)

    def __rtruediv__(self, other):
        if not self._is_operand(other):
            return NotImplemented
        return self._ensure_expr(other).div(self)

    def __neg__(self):
        return self.neg()

    @staticmethod
    def _is_operand(obj):
        r"""Return whether `obj` can take part in an expression operation."""
        return isinstance(obj, (Expression, numbers.Real))

    @staticmethod
    def _ensure_expr(expr):
        """Ensure an object is an expression, converting it if necessary.

        If `expr` is a real number, it is converted to a
        basics.ConstantExpression. Any other non-expression raises a
        `TypeError`.
        """
        if isinstance(expr, Expression):
            return expr
        if isinstance(expr, numbers.Real):
            from .basics import ConstantExpression
            return ConstantExpression(expr)
        raise TypeError("Cannot use object of type `%s` as expression."
                        % type(expr).__name__)
