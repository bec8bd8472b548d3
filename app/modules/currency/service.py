"""USD to INR conversion for QR/UPI deposits."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_CEILING, Decimal, InvalidOperation
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.infrastructure.database.repositories.setting_repository import SqlSettingRepository
from app.modules.common import InvalidAmountError, to_amount

logger = logging.getLogger(__name__)

USD_INR_RATE_KEY = "usd_inr_rate"


class SettingStore(Protocol):
    async def get_value(self, key: str) -> str | None:
        ...

    async def set_value(self, key: str, value: str):
        ...


@dataclass(slots=True)
class CurrencyConverter:
    """Converts USD amounts to whole rupees.

    The rate comes from the ``usd_inr_rate`` setting when an admin has stored
    one, otherwise from configuration. Results are rounded up so an INR
    payment never falls short of the USD amount.
    """

    settings_store: SettingStore
    default_rate: Decimal

    @classmethod
    def with_session(cls, session: AsyncSession) -> "CurrencyConverter":
        return cls(SqlSettingRepository(session), default_rate=get_settings().wallet.usd_inr_rate)

    async def get_rate(self) -> Decimal:
        stored = await self.settings_store.get_value(USD_INR_RATE_KEY)
        if stored is None:
            return self.default_rate
        try:
            rate = Decimal(stored)
        except InvalidOperation:
            logger.warning("Ignoring malformed %s setting: %r", USD_INR_RATE_KEY, stored)
            return self.default_rate
        if not rate.is_finite() or rate <= 0:
            logger.warning("Ignoring non-positive %s setting: %r", USD_INR_RATE_KEY, stored)
            return self.default_rate
        return rate

    async def set_rate(self, rate: Decimal | str | float) -> Decimal:
        try:
            value = rate if isinstance(rate, Decimal) else Decimal(str(rate))
        except InvalidOperation as exc:
            raise InvalidAmountError(f"Invalid exchange rate: {rate!r}") from exc
        if not value.is_finite() or value <= 0:
            raise InvalidAmountError("Exchange rate must be positive")
        await self.settings_store.set_value(USD_INR_RATE_KEY, str(value))
        logger.info("USD/INR rate set to %s", value)
        return value

    async def convert(self, amount_usd: Decimal | int | float | str) -> int:
        amount = to_amount(amount_usd)
        if amount < 0:
            raise InvalidAmountError("Amount to convert must not be negative")
        rate = await self.get_rate()
        return int((amount * rate).to_integral_value(rounding=ROUND_CEILING))
