#!/usr/bin/env python3
r"""@package difffunc.exprs.test_composite

Test suite for sums, differences, products, quotients and compositions.
"""

import unittest
import sys
import math

import sympy as sp

from testutils import ExprTestCase
from .basics import ConstantExpression, NegationExpression
from .basics import Const, Id, Sin, Cos, Exp, Log
from .composite import SumExpression, DifferenceExpression
from .composite import ProductExpression, QuotientExpression
from .composite import CompositionExpression


_points = [-2.0, -0.5, 0.25, 1.0, 2.5]
_positive_points = [0.3, 0.7, 1.3, 2.1]


def _sample_functions():
    r"""Return a few expressions defined (at least) for positive `x`."""
    return [
        Id,
        Const(3.0),
        Sin * Exp + Id,
        Cos / (Id + Const(2.0)),
        Exp.of(Sin) - Id * Id,
        Log.of(Id * Id + Const(1.0)),
    ]


class TestEvaluation(ExprTestCase):
    r"""Test evaluating combined expressions."""
    def test_scenarios(self):
        self.assertEqual(SumExpression(Const(3.0), Const(2.0)).evaluate(8.0), 5.0)
        self.assertEqual(DifferenceExpression(Const(3.0), Id).evaluate(9.0), -6.0)
        self.assertEqual(NegationExpression(Id).evaluate(10.0), -10.0)
        self.assertEqual(ProductExpression(Id, Id).evaluate(11.0), 121.0)
        self.assertEqual(QuotientExpression(Const(1.0), Id).evaluate(12.0), 1.0/12.0)
        self.assertAlmostEqual(Sin.of(ProductExpression(Id, Id)).evaluate(-1.0),
                               math.sin(1.0), delta=1e-15)

    def test_composition_order(self):
        f = Exp.of(Sin)
        self.assertEvaluatesLike(f, lambda x: math.exp(math.sin(x)), _points)
        f = Sin.of(Exp)
        self.assertEvaluatesLike(f, lambda x: math.sin(math.exp(x)), _points)

    def test_nested(self):
        f = (Sin * Cos + Const(0.5)) / (Exp - Id)
        self.assertEvaluatesLike(
            f, lambda x: (math.sin(x)*math.cos(x) + .5) / (math.exp(x) - x),
            _points
        )

    def test_division_by_zero(self):
        self.assertEqual(QuotientExpression(Const(1.0), Id).evaluate(0.0), math.inf)
        self.assertEqual(QuotientExpression(Const(-2.0), Id).evaluate(0.0), -math.inf)
        self.assertTrue(math.isnan(QuotientExpression(Const(0.0), Id).evaluate(0.0)))
        self.assertTrue(math.isnan(Sin.div(Id).evaluate(0.0)))

    def test_constant_zero_denominator(self):
        with self.assertRaises(ValueError):
            Id / 0
        with self.assertRaises(ValueError):
            Sin.div(Const(-0.0))
        with self.assertRaises(ValueError):
            QuotientExpression(Id, ConstantExpression(0.0))
        self.assertEqual((Id / Const(2.0)).evaluate(3.0), 1.5)
        self.assertEqual(Const(0.0).div(Id).render(), "((0.0) / (x))")

    def test_shared_subexpressions(self):
        s = Sin + Id
        shared = s * s
        copied = (Sin + Id) * (Sin + Id)
        self.assertIs(shared.e1, shared.e2)
        for x in _points:
            self.assertEqual(shared.evaluate(x), copied.evaluate(x))
            self.assertEqual(shared.differentiate().evaluate(x),
                             copied.differentiate().evaluate(x))
        self.assertEqual(shared.differentiate(), copied.differentiate())
        self.assertEqual(shared.expand(), copied.expand())


class TestDifferentiation(ExprTestCase):
    r"""Test the derivative rules."""
    def test_sum(self):
        d = (Sin + Exp).differentiate()
        self.assertIsType(d, SumExpression)
        self.assertEvaluatesLike(d, lambda x: math.cos(x) + math.exp(x), _points)

    def test_difference(self):
        d = (Sin - Id).differentiate()
        self.assertIsType(d, DifferenceExpression)
        self.assertEvaluatesLike(d, lambda x: math.cos(x) - 1.0, _points)

    def test_product_structure(self):
        f, g = Sin, Exp + Id
        p = ProductExpression(f, g)
        d = p.differentiate()
        self.assertIsType(d, SumExpression)
        self.assertIsType(d.e1, ProductExpression)
        self.assertIsType(d.e2, ProductExpression)
        self.assertIs(d.e1.e2, g)
        self.assertIs(d.e2.e2, f)
        self.assertEqual(d.e1.e1, Cos)

    def test_product_rule(self):
        for f in _sample_functions():
            for g in _sample_functions():
                d = (f * g).differentiate()
                df, dg = f.differentiate(), g.differentiate()
                for x in _positive_points:
                    expected = df.evaluate(x)*g.evaluate(x) + dg.evaluate(x)*f.evaluate(x)
                    self.assertAlmostEqual(d.evaluate(x), expected, delta=1e-9)

    def test_quotient_structure(self):
        top, bottom = Sin, Id + Const(1.0)
        d = QuotientExpression(top, bottom).differentiate()
        self.assertIsType(d, QuotientExpression)
        self.assertIsType(d.top, DifferenceExpression)
        self.assertIs(d.top.e1.e2, bottom)
        self.assertIs(d.top.e2.e2, top)
        self.assertIsType(d.bottom, ProductExpression)
        self.assertIs(d.bottom.e1, bottom)
        self.assertIs(d.bottom.e2, bottom)

    def test_quotient_rule(self):
        d = Sin.div(Id).differentiate()
        self.assertEvaluatesLike(
            d, lambda x: (math.cos(x)*x - math.sin(x)) / x**2, _positive_points
        )
        d = Log.div(Id).differentiate()
        self.assertEvaluatesLike(
            d, lambda x: (1.0 - math.log(x)) / x**2, _positive_points
        )

    def test_chain_rule_structure(self):
        g = Id * Id
        d = Sin.of(g).differentiate()
        self.assertIsType(d, ProductExpression)
        self.assertIsType(d.e1, CompositionExpression)
        self.assertIs(d.e1.target, g)
        self.assertEqual(d.e1.source, Cos)

    def test_chain_rule(self):
        for f in (Sin, Exp, Log, Cos * Id):
            for g in _sample_functions():
                d = f.of(g).differentiate()
                df, dg = f.differentiate(), g.differentiate()
                for x in _positive_points:
                    expected = df.evaluate(g.evaluate(x)) * dg.evaluate(x)
                    value = d.evaluate(x)
                    if math.isnan(expected):
                        self.assertTrue(math.isnan(value))
                    else:
                        self.assertAlmostEqual(value, expected, delta=1e-9)

    def test_against_sympy(self):
        x = sp.Symbol('x')
        for f in _sample_functions() + [Sin.div(Id), Log.of(Exp.of(Id) + Cos)]:
            expected = sp.diff(f.to_sympy(x), x)
            d = f.differentiate()
            for val in _positive_points:
                self.assertAlmostEqual(d.evaluate(val),
                                       float(expected.subs(x, val)),
                                       delta=1e-9)

    def test_constant_rules(self):
        d = (Const(2.0) * Id).differentiate()
        self.assertEvaluatesLike(d, lambda x: 2.0, _points)
        d = ConstantExpression(0.0).of(Sin).differentiate()
        self.assertEvaluatesLike(d, lambda x: 0.0, _points)

    def test_no_mutation(self):
        f = Sin.div(Id) + Exp.of(Cos)
        before = f.render()
        f.differentiate()
        f.expand()
        self.assertEqual(f.render(), before)


class TestRendering(ExprTestCase):
    r"""Test the textual form of combined expressions."""
    def test_binary(self):
        self.assertEqual((Id + Const(1.0)).render(), "((x) + (1.0))")
        self.assertEqual((Sin - Cos).render(), "((sin(x)) - (cos(x)))")
        self.assertEqual((Const(2.0) * Id).render(), "((2.0) * (x))")
        self.assertEqual((Sin / Id).render(), "((sin(x)) / (x))")

    def test_sum_of_leaves(self):
        for a in (Id, Sin, Const(4.0), Log):
            for b in (Cos, Exp, Const(-1.0)):
                self.assertEqual(SumExpression(a, b).render(),
                                 "(%s + %s)" % (a.render(), b.render()))

    def test_composition(self):
        self.assertEqual(Sin.of(Cos).render(), "(sin(cos(x)))")
        self.assertEqual(Sin.of(Id * Id).render(), "(sin((x) * (x)))")
        self.assertEqual(Log.of(Log.of(Cos)).render(), "(ln(ln(cos(x))))")
        self.assertEqual(Id.of(Sin).render(), "(sin(x))")
        self.assertEqual((Sin + Id).of(Exp).render(), "((sin(exp(x))) + (exp(x)))")
        self.assertEqual(Const(3.0).of(Sin).render(), "(3.0)")

    def test_composition_keeps_function_names(self):
        # The "x" in "exp" must survive substitution.
        self.assertEqual(Exp.of(Sin).render(), "(exp(sin(x)))")
        self.assertEqual(Sin.of(Exp).render(), "(sin(exp(x)))")
        self.assertEqual(Exp.of(Exp).render(), "(exp(exp(x)))")

    def test_derivatives(self):
        self.assertEqual(
            Sin.div(Id).differentiate().render(),
            "((((cos(x)) * (x)) - ((1.0) * (sin(x)))) / ((x) * (x)))"
        )
        self.assertEqual(
            Log.of(Cos).differentiate().render(),
            "(((1.0) / (cos(x))) * -(sin(x)))"
        )


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
