"""
Helpers para literales de reglas y valores de entidades.
"""
import math
from typing import Any, Optional, Union

Number = Union[int, float]


def is_empty_value(value: Any) -> bool:
    """None o "" significan "valor sin especificar"."""
    return value is None or value == ""


def to_number(value: Any) -> Optional[Number]:
    """
    Convierte un literal a número.

    Los enteros se conservan como int ("4" → 4, 4.0 → 4) para que una
    regla normalizada dos veces quede idéntica. Los int no pasan por float:
    un entero arbitrariamente grande sigue siendo comparable.

    Returns:
        int/float finito, o None si el valor no es numérico.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value

    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except (OverflowError, ValueError):
            return None
    elif isinstance(value, float):
        number = value
    else:
        return None

    if not math.isfinite(number):
        return None
    if number.is_integer():
        return int(number)
    return number


def format_value(value: Any) -> str:
    """Texto de un literal para chips: 4.0 → "4", 3.5 → "3.5", None → ""."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
