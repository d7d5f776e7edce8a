r"""@package difffunc

Symbolic differentiation of real functions of one variable.

Functions are represented as immutable expression trees in the
difffunc.exprs package. They can be evaluated numerically, differentiated
symbolically, expanded into sums of products and rendered as text.
"""
