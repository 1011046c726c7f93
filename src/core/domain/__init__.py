"""
Domain value objects: precision context and numeric capabilities.
"""

from src.core.domain.numeric import (
    RealNumber,
    decimal_from,
    integer_from,
    is_fractional,
)
from src.core.domain.precision import (
    DECIMAL32,
    DECIMAL64,
    DECIMAL128,
    DOUBLE_CONTEXT,
    EXACT_DECIMAL_CONTEXT,
    PrecisionContext,
    RoundingMode,
    expand_context,
)

__all__ = [
    # Precision context
    "PrecisionContext",
    "RoundingMode",
    "expand_context",
    "DECIMAL32",
    "DECIMAL64",
    "DECIMAL128",
    "DOUBLE_CONTEXT",
    "EXACT_DECIMAL_CONTEXT",
    # Numeric capabilities
    "RealNumber",
    "is_fractional",
    "decimal_from",
    "integer_from",
]
