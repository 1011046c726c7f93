"""
Exceptions — таксономия ошибок точной арифметики

Все ошибки поднимаются синхронно в точке некорректного вызова и не
восстанавливаются внутри библиотеки: обработка — ответственность вызывающего.

ИЕРАРХИЯ:
    RationalEngineError
    ├── InvalidArgumentError (ValueError)
    │   └── ZeroDenominatorError (+ ZeroDivisionError)
    ├── ArithmeticDomainError (ArithmeticError)
    └── PrecisionConfigurationError (ArithmeticError)
"""


class RationalEngineError(Exception):
    """Базовое исключение для всех ошибок движка."""

    pass


class InvalidArgumentError(RationalEngineError, ValueError):
    """
    Некорректный аргумент.

    Примеры: None вместо числа, нераспознаваемая строка, NaN/Inf,
    неподдерживаемый тип, пустой или перевёрнутый диапазон редукции.
    """

    pass


class ZeroDenominatorError(InvalidArgumentError, ZeroDivisionError):
    """
    Нулевой знаменатель.

    Поднимается при построении дроби с нулевым знаменателем, а также при
    обращении или делении на нулевой Rational. Является одновременно
    InvalidArgumentError и ZeroDivisionError (ArithmeticError).
    """

    pass


class ArithmeticDomainError(RationalEngineError, ArithmeticError):
    """
    Аргумент вне области определения операции.

    Примеры: корень чётной степени из отрицательного числа, факториал
    дробного или отрицательного числа, логарифм неположительного числа.
    """

    pass


class PrecisionConfigurationError(RationalEngineError, ArithmeticError):
    """Дробная степень запрошена без PrecisionContext."""

    pass
