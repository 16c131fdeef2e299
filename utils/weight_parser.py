"""
Weight Parsing Utility

Turns free-text size labels ("250g", "1.5 kg", "2 kilogram") into kilograms
for the shipping calculation.

Parsing never fails: labels without a usable number ("Large", "Standard", "")
count as 1 kg per unit. This keeps quote computation total, but it also means
non-weight sizes (apparel, storage capacity) are billed as 1 kg.
"""

import logging
import math
import re
from typing import Iterable

from models.cart import CartLineDTO

logger = logging.getLogger(__name__)

DEFAULT_WEIGHT_KG = 1.0

_NON_NUMERIC = re.compile(r'[^\d.]')
# Leading float portion of a digits-and-dots string ("1.5.2" -> "1.5", "5." -> "5.")
_LEADING_FLOAT = re.compile(r'\d+(?:\.\d*)?|\.\d+')


def parse_weight(size_label: str | None) -> float:
    """
    Convert a size label to kilograms.

    Rules:
    - Missing or empty label -> 1 kg
    - Every character except digits and '.' is dropped, the leading number
      of what remains is the quantity
    - No number found -> 1 kg
    - Label mentions grams ("g", "gm", "gram") but not "kg"/"kilogram"
      -> quantity is grams, divided by 1000
    - Anything else (kg, kilogram, or no unit) -> quantity is kilograms

    Args:
        size_label: Free-text size descriptor from the cart line

    Returns:
        float: Weight in kilograms, always finite and >= 0

    Example:
        >>> parse_weight("250g")
        0.25
        >>> parse_weight("2.5kg")
        2.5
        >>> parse_weight("Large")
        1.0
    """
    if not size_label:
        return DEFAULT_WEIGHT_KG

    clean_label = size_label.lower().strip()
    match = _LEADING_FLOAT.match(_NON_NUMERIC.sub('', clean_label))

    if match is None:
        return DEFAULT_WEIGHT_KG

    numeric_part = float(match.group())
    if not math.isfinite(numeric_part):
        logger.warning(f"Size label '{size_label}' overflows, using default weight")
        return DEFAULT_WEIGHT_KG

    is_grams = ('g' in clean_label or 'gram' in clean_label) and \
        'kg' not in clean_label and 'kilogram' not in clean_label
    if is_grams:
        return numeric_part / 1000

    return numeric_part


def total_weight(lines: Iterable[CartLineDTO]) -> float:
    """
    Sum the weight of all cart lines in kilograms (weight per unit x quantity).

    Args:
        lines: Cart lines

    Returns:
        float: Total cart weight in kilograms (0 for an empty cart)
    """
    return sum((parse_weight(line.size_label) * line.quantity for line in lines), 0.0)
