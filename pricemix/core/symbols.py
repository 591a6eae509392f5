"""Symbol expression parsing.

An expression is a bare ticker (``SPY``), a ticker list (``SPY,QQQ``) or a
weighted ticker list (``SPY:2,QQQ:1``). Separators come from
:class:`~pricemix.config.SymbolConfig`.
"""

import math
from typing import Optional

from pricemix.config import SymbolConfig

DEFAULT_SYMBOL_CONFIG = SymbolConfig()


def _parse_weight(text: str) -> Optional[float]:
    """Parse a weight, returning None when it is not a finite number."""
    try:
        weight = float(text)
    except ValueError:
        return None
    if not math.isfinite(weight):
        return None
    return weight


def parse_weighted_symbols(
    expression: str, config: SymbolConfig = DEFAULT_SYMBOL_CONFIG
) -> dict[str, float]:
    """Parse a symbol expression into a mapping of ticker to weight.

    Entries without a parseable weight keep their whole text as the symbol
    and get ``1 / number_of_entries``, the same share whether or not other
    entries carry explicit weights.

    Args:
        expression: Symbol expression.
        config: Separator configuration.

    Returns:
        Ticker to weight mapping, in expression order.
    """
    weights: dict[str, float] = {}
    parts = expression.split(config.tickers_separator)

    for raw_part in parts:
        part = raw_part.strip()
        pieces = part.split(config.weight_separator)
        weight = _parse_weight(pieces[1]) if len(pieces) > 1 else None

        if weight is None:
            weights[part] = 1 / len(parts)
        else:
            weights[pieces[0]] = weight

    return weights


def split_symbols(
    expression: str, config: SymbolConfig = DEFAULT_SYMBOL_CONFIG
) -> list[str]:
    """Split a plain ticker list into stripped symbols."""
    return [part.strip() for part in expression.split(config.tickers_separator)]


def is_weighted(expression: str, config: SymbolConfig = DEFAULT_SYMBOL_CONFIG) -> bool:
    """Whether the expression carries explicit weights."""
    return config.weight_separator in expression


def is_list(expression: str, config: SymbolConfig = DEFAULT_SYMBOL_CONFIG) -> bool:
    """Whether the expression names more than one ticker."""
    return config.tickers_separator in expression
