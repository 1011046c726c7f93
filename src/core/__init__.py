"""
Core: precision context, numeric capabilities, exact arithmetic.

Foundational building blocks independent of any I/O: the rational number
type, the arbitrary-precision root solver, the parallel reduction framework
and the power-series evaluators built on top of them.
"""
