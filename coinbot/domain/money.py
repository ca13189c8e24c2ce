# coinbot/domain/money.py
from __future__ import annotations
import math
from decimal import Decimal

# Montants = entiers. Les facteurs fractionnaires passent par Decimal(str(x))
# pour que floor(1000 * 1.95) donne bien 1950 et pas 1949.

def _dec(x) -> Decimal:
    return x if isinstance(x, Decimal) else Decimal(str(x))

def floor_mul(amount: int, factor) -> int:
    return int(math.floor(_dec(amount) * _dec(factor)))

def floor_growth(base: int, multiplier, steps: int) -> int:
    """floor(base * multiplier ** steps), exact."""
    return int(math.floor(_dec(base) * _dec(multiplier) ** int(steps)))
