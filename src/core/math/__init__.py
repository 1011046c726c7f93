"""
Core math modules

Точная рациональная арифметика и приближение трансцендентных констант и
функций с управляемой точностью.
"""

# Rational Core
from src.core.math.rational import (
    DROP_GUARD_DIGITS,
    HALF,
    ONE,
    QUARTER,
    TEN,
    TENTH,
    THIRD,
    TWO,
    ZERO,
    Rational,
)

# Root Solver
from src.core.math.roots import (
    ROOT_GUARD_DIGITS,
    cbrt,
    hypot,
    integer_root,
    nth_root,
    sqrt,
)

# Parallel Reduction
from src.core.math.reduction import (
    FACTORIAL_THRESHOLD,
    SERIES_THRESHOLD,
    ReductionConfig,
    ReductionTask,
    parallel_reduce,
    reduce_with_config,
)
from src.core.math.factorial import factorial

# Series Evaluators
from src.core.math.series import (
    ATAN_DOMAIN_BOUND,
    EXP_DOMAIN_BOUND,
    LOG_DOMAIN_BOUND,
    TRIG_DOMAIN_BOUND,
    atan,
    cos,
    exp,
    log,
    sin,
)

# Pi Orchestrator
from src.core.math.pi import (
    DIGITS_PER_TERM,
    LOW_PRECISION_LIMIT,
    PiCache,
    PiConfig,
    PiGenerator,
    pi,
    ramanujan_term,
)

# Surds
from src.core.math.surd import SimpleSurd

__all__ = [
    # Rational — Constants
    "DROP_GUARD_DIGITS",
    "ZERO",
    "ONE",
    "TWO",
    "TEN",
    "HALF",
    "QUARTER",
    "THIRD",
    "TENTH",
    # Rational — Types
    "Rational",
    # Roots
    "ROOT_GUARD_DIGITS",
    "nth_root",
    "integer_root",
    "sqrt",
    "cbrt",
    "hypot",
    # Reduction
    "FACTORIAL_THRESHOLD",
    "SERIES_THRESHOLD",
    "ReductionConfig",
    "ReductionTask",
    "parallel_reduce",
    "reduce_with_config",
    "factorial",
    # Series
    "ATAN_DOMAIN_BOUND",
    "EXP_DOMAIN_BOUND",
    "LOG_DOMAIN_BOUND",
    "TRIG_DOMAIN_BOUND",
    "exp",
    "log",
    "sin",
    "cos",
    "atan",
    # Pi
    "DIGITS_PER_TERM",
    "LOW_PRECISION_LIMIT",
    "PiCache",
    "PiConfig",
    "PiGenerator",
    "pi",
    "ramanujan_term",
    # Surds
    "SimpleSurd",
]
