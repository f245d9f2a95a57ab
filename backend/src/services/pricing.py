"""
Pricing rules for service records.

A record's monetary value is computed once, at creation time, from the
procedure's price configuration, the record status and whether any extras were
selected. The result is stored with the record and never recomputed, so later
price changes do not alter history.
"""
from typing import Iterable, Optional, Sequence
from decimal import Decimal, ROUND_HALF_UP
import logging

from core.constants import MONEY_QUANTUM
from models import PriceConfig, ServiceStatus

logger = logging.getLogger(__name__)


def quantize_money(amount: Decimal) -> Decimal:
    """Round an amount to cents (half up)."""
    return amount.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def money_to_float(amount: Decimal) -> float:
    """Convert an internal Decimal amount to a two-decimal float for JSON output."""
    return float(quantize_money(amount))


class PriceResolver:
    """Finds the price configuration of a procedure."""

    @staticmethod
    def resolve_price(
        price_configs: Iterable[PriceConfig],
        procedure_id: str
    ) -> Optional[PriceConfig]:
        """
        Get the price configuration for a procedure.

        Only one active configuration per procedure is meaningful; it wins over
        inactive ones. When no configuration is active, the first configuration
        for the procedure is used.

        Args:
            price_configs: All price configurations
            procedure_id: Procedure to price

        Returns:
            Matching PriceConfig, or None if the procedure has no price yet
        """
        fallback: Optional[PriceConfig] = None
        for config in price_configs:
            if config.procedure_id != procedure_id:
                continue
            if config.active:
                return config
            if fallback is None:
                fallback = config
        return fallback


class ValueCalculator:
    """Computes the value frozen into a new service record."""

    @staticmethod
    def compute_value(
        price_config: Optional[PriceConfig],
        status: ServiceStatus,
        extras: Sequence[str]
    ) -> Decimal:
        """
        Compute a record's value.

        Rules:
        - No price configuration: 0
        - Base: value_done if Done, value_not_done otherwise
        - Any extras selected: add value_additional once (flat, not per extra)

        Args:
            price_config: Configuration from PriceResolver, or None
            status: Record status
            extras: Selected extras

        Returns:
            Non-negative amount rounded to cents
        """
        if price_config is None:
            return Decimal('0.00')

        if status == ServiceStatus.DONE:
            value = price_config.value_done
        else:
            value = price_config.value_not_done

        if extras:
            value += price_config.value_additional

        if value < 0:
            logger.warning(
                f"Negative computed value for procedure {price_config.procedure_id}: {value}, using 0"
            )
            value = Decimal('0')

        return quantize_money(value)
