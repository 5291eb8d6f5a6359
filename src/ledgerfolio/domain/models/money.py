"""Currency-tagged amounts."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Mapping, Optional

from ledgerfolio.core.exceptions import MissingExchangeRateError

ZERO = Decimal("0")


@dataclass(frozen=True)
class Money:
    """An amount together with the currency it is expressed in."""

    amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "currency", (self.currency or "").upper())

    def __neg__(self) -> "Money":
        return Money(-self.amount, self.currency)


def convert_amount(
    amount: Decimal,
    from_currency: str,
    to_currency: str,
    rates: Mapping[str, Decimal],
) -> Decimal:
    """
    Convert an amount between currencies using a caller-supplied table.

    ``rates`` maps each currency to the value of one unit of it in a common
    reference currency (e.g. {"GBP": 1, "USD": 0.79}). Same-currency
    conversion needs no rate.
    """
    source = from_currency.upper()
    target = to_currency.upper()
    if source == target:
        return amount
    if source not in rates:
        raise MissingExchangeRateError(source)
    if target not in rates or not rates[target]:
        raise MissingExchangeRateError(target)
    return amount * Decimal(rates[source]) / Decimal(rates[target])


@dataclass
class CurrencyTotals:
    """
    Running totals kept apart per currency.

    Realized figures accumulate in whatever currency each disposal resolved
    to, so a single holding can carry several. There is deliberately no
    plain-number total: summing requires an explicit convert().
    """

    amounts: dict[str, Decimal] = field(default_factory=dict)

    def add(self, money: Money) -> None:
        self.amounts[money.currency] = self.amounts.get(money.currency, ZERO) + money.amount

    def subtract(self, money: Money) -> None:
        self.add(-money)

    def get(self, currency: str) -> Decimal:
        return self.amounts.get(currency.upper(), ZERO)

    @property
    def currencies(self) -> list[str]:
        return list(self.amounts)

    def as_money(self) -> list[Money]:
        return [Money(amount, currency) for currency, amount in self.amounts.items()]

    def single_currency(self) -> Optional[str]:
        """Return the only currency present, or None if zero or several."""
        if len(self.amounts) == 1:
            return next(iter(self.amounts))
        return None

    def is_zero(self) -> bool:
        return all(amount == ZERO for amount in self.amounts.values())

    def convert(self, to_currency: str, rates: Mapping[str, Decimal]) -> Money:
        """Collapse every currency into one using the supplied rate table."""
        total = ZERO
        for currency, amount in self.amounts.items():
            total += convert_amount(amount, currency, to_currency, rates)
        return Money(total, to_currency)

    def copy(self) -> "CurrencyTotals":
        return CurrencyTotals(dict(self.amounts))
