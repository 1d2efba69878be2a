from __future__ import annotations
from decimal import Decimal
from typing import Union

Number = Union[float, int, Decimal]


def is_high_precision(price: Number) -> bool:
    """
    Check whether a unit price needs 4 decimal places instead of Xero's default 2.

    Both roundings go through their text form so binary float artifacts
    (12.3 stored as 12.2999...) do not flag a price that displays as 2dp.
    Xero itself rounds the 4th place up when the 5th is >= 5.
    """
    four_dp = Decimal(format(price, ".4f"))
    two_dp = Decimal(format(price, ".2f"))
    return four_dp != two_dp
