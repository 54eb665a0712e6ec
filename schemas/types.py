from decimal import Decimal, ROUND_HALF_UP
from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator, Field, HttpUrl, PlainSerializer

CENT = Decimal("0.01")
MAX_PRICE = Decimal("9999999999.99")  # Numeric(12, 2)


def to_cents(value: float) -> Decimal:
    """Exact two-place decimal for a float amount."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def _decimal_to_float(value: Any) -> Any:
    """Exact decimals from the store leave the API as plain numbers."""
    if isinstance(value, Decimal):
        return float(value)
    return value


def _check_cents(value: float) -> float:
    cents = to_cents(value)
    if cents < CENT:
        raise ValueError("must be at least 0.01")
    if cents > MAX_PRICE:
        raise ValueError(f"must not exceed {MAX_PRICE}")
    return value


# Validated as an http(s) URL, dumped back to a plain string for storage
UrlStr = Annotated[HttpUrl, PlainSerializer(lambda url: str(url), return_type=str)]

# Positive amount that is still positive once rounded to cents
Price = Annotated[float, Field(gt=0), AfterValidator(_check_cents)]

# Numeric(12, 2) column rendered as a JSON number
Money = Annotated[float, BeforeValidator(_decimal_to_float)]
