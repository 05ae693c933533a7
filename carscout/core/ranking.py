import functools
import re
from typing import List, Optional, Sequence

from carscout.data.models import Listing

NON_PRICE_CHARS_RE = re.compile(r"[^\d,]")
LEADING_NUMBER_RE = re.compile(r"^\d+(?:\.\d+)?")


def parse_price_value(price: str) -> Optional[float]:
    """
    Read a cleaned price as a number. Dots are dropped as thousand separators
    and the first comma becomes the decimal point, so "45.900,50" -> 45900.5.
    """
    digits = NON_PRICE_CHARS_RE.sub("", price or "").replace(",", ".", 1)
    match = LEADING_NUMBER_RE.match(digits)
    if not match:
        return None
    return float(match.group(0))


def compare_listings(a: Listing, b: Listing) -> int:
    if a.has_price != b.has_price:
        return -1 if a.has_price else 1

    if a.has_price and b.has_price:
        price_a = parse_price_value(a.price)
        price_b = parse_price_value(b.price)
        if price_a is not None and price_b is not None and price_a != price_b:
            return -1 if price_a < price_b else 1

    return b.completeness() - a.completeness()


def rank_listings(listings: Sequence[Listing]) -> List[Listing]:
    # sorted() is stable, so equal keys keep their fan-in order.
    return sorted(listings, key=functools.cmp_to_key(compare_listings))


def cap_listings(listings: Sequence[Listing], per_source_limit: int, multiplier: int = 3) -> List[Listing]:
    return list(listings[: per_source_limit * multiplier])
