r"""@package difffunc.exprs

Expression system for composing functions of one variable, evaluating them,
and deriving their exact derivatives.

The idea is to have each expression represent either an elementary function
(like \f$ \sin(x) \f$ or a constant) or a composite expression of one or two
other functions (like \f$ f_1(x) + f_2(x) \f$ or \f$ f_1(f_2(x)) \f$, where
\f$ f_i \f$ are other expressions).

By implementing the derivative of each expression in terms of its composing
sub-expressions and their derivatives, the derivative of arbitrary expression
trees is obtained as a new expression tree.

Expressions are built from the shared leaves and the combinator methods or
operators:

~~~.py
from difffunc.exprs import Const, Id, Sin, Log, Cos

f = Sin.div(Id)                  # sin(x)/x
g = Log.of(Log.of(Cos))          # ln(ln(cos(x)))
h = Const(2.0) * Id + Sin        # 2x + sin(x)
print(f.differentiate())
print(h.evaluate(0.5))
~~~

Expressions are immutable. Operations like differentiate() and expand()
always return new expressions, which may share nodes with the original.
"""

from .common import isclose, sum_of, VARIABLE_TOKEN
from .numexpr import Expression
from .basics import ConstantExpression, IdentityExpression
from .basics import SineExpression, CosineExpression
from .basics import ExpExpression, LogExpression, NegationExpression
from .basics import Const, Id, Sin, Cos, Exp, Log
from .composite import SumExpression, DifferenceExpression
from .composite import ProductExpression, QuotientExpression
from .composite import CompositionExpression
from .evaluators import Evaluator
