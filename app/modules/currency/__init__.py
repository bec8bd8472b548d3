"""Currency conversion exports"""

from .service import USD_INR_RATE_KEY, CurrencyConverter

__all__ = ["USD_INR_RATE_KEY", "CurrencyConverter"]
