# talent_matcher/currency.py
from __future__ import annotations

import logging
import math
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from talent_matcher.errors import ConfigurationError
from talent_matcher.models import Currency
from talent_matcher.utils import FrozenDict

logger = logging.getLogger(__name__)


# Static reference rates: 1 unit of currency = N EUR.
DEFAULT_RATES: Mapping[Currency, float] = MappingProxyType({
    Currency.EUR: 1.0,
    Currency.USD: 0.92,
    Currency.GBP: 1.17,
    Currency.CHF: 1.05,
    Currency.AED: 0.25,
    Currency.JPY: 0.0062,
    Currency.HKD: 0.118,
    Currency.SGD: 0.68,
    Currency.CNY: 0.127,
})


def parse_currency(code: Any) -> Optional[Currency]:
    if not isinstance(code, str):
        return None
    c = code.strip().upper()
    try:
        return Currency(c)
    except ValueError:
        return None


class ExchangeRateTable(BaseModel):
    """
    Versioned currency -> reference multiplier table. Immutable once built.
    """
    model_config = ConfigDict(frozen=True)

    version: str = "2026-01"
    reference: Currency = Currency.EUR
    rates: Dict[Currency, float] = Field(default_factory=lambda: dict(DEFAULT_RATES), validate_default=True)

    @field_validator("rates")
    @classmethod
    def _rates_positive(cls, v: Dict[Currency, float]) -> Dict[Currency, float]:
        for cur, rate in v.items():
            if not math.isfinite(rate) or rate <= 0:
                raise ValueError(f"Exchange rate for {cur.value} must be a positive number (got {rate})")
        return FrozenDict(v)

    @model_validator(mode="after")
    def _reference_is_unit(self) -> "ExchangeRateTable":
        ref_rate = self.rates.get(self.reference)
        if ref_rate is None or abs(ref_rate - 1.0) > 1e-9:
            raise ValueError(
                f"Reference currency {self.reference.value} must have rate 1.0 (got {ref_rate})"
            )
        return self

    def rate(self, currency: Union[Currency, str, None]) -> Optional[float]:
        cur = currency if isinstance(currency, Currency) else parse_currency(currency)
        if cur is None:
            return None
        return self.rates.get(cur)

    def normalize(self, amount: Optional[float], currency: Union[Currency, str, None]) -> Optional[float]:
        """
        Convert `amount` into the reference currency.
        Returns None when the amount is absent/non-finite or the currency is not in the table.
        """
        if amount is None or isinstance(amount, bool):
            return None
        try:
            x = float(amount)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(x):
            return None

        r = self.rate(currency)
        if r is None:
            logger.debug("No exchange rate for currency %r (table %s)", currency, self.version)
            return None
        return x * r


def load_exchange_rates(path: Union[str, Path]) -> ExchangeRateTable:
    """
    Explicit reload of the FX table from YAML:

        version: "2026-02"
        reference: EUR
        rates: {EUR: 1.0, USD: 0.93, ...}

    Returns a new table; existing tables are never modified.
    """
    p = Path(path)
    if not p.exists():
        raise ConfigurationError(f"Exchange rate file not found: {p}")
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in {p}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Exchange rate file must be a YAML mapping: {p}")

    try:
        table = ExchangeRateTable(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid exchange rate table in {p}: {e}") from e

    logger.info("Loaded exchange rates %s (%d currencies, reference %s)", table.version, len(table.rates), table.reference.value)
    return table
