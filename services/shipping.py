"""
Shipping Rate Service

Weight- and region-based shipping fee calculation for checkout.

Tiers (defaults, all configurable via .env):
- Subtotal above 1999 -> free shipping
- Local region (Gujarat) -> 50 per kg, every other region -> 80 per kg
- Cart heavier than 1 kg -> per-kg rate doubles
- Weight is rounded up to whole kilograms before multiplying
"""

import logging
import math

from models.shipping import ShippingRatesDTO, ShippingQuoteDTO

logger = logging.getLogger(__name__)


class ShippingService:
    """Service for calculating shipping costs in checkout context."""

    @staticmethod
    def get_rate_per_kg(
        total_weight_kg: float,
        region_code: str | None,
        rates: ShippingRatesDTO | None = None
    ) -> float:
        """
        Per-kilogram rate for a region and total weight.

        A missing region is treated like any other non-local region.

        Args:
            total_weight_kg: Total cart weight in kilograms
            region_code: Destination state/region (None if not selected yet)
            rates: Tier parameters, defaults to config values

        Returns:
            float: Rate per started kilogram
        """
        rates = rates or ShippingRatesDTO.from_config()

        if region_code is not None and region_code == rates.local_region:
            rate_per_kg = rates.local_rate_per_kg
        else:
            rate_per_kg = rates.default_rate_per_kg

        if total_weight_kg > rates.heavy_weight_threshold_kg:
            rate_per_kg *= 2

        return rate_per_kg

    @staticmethod
    def quote(
        subtotal: float,
        total_weight_kg: float,
        region_code: str | None,
        rates: ShippingRatesDTO | None = None
    ) -> ShippingQuoteDTO:
        """
        Calculate the shipping quote for a cart.

        Algorithm:
        1. Subtotal strictly above the free shipping threshold -> fee 0
        2. Pick local or default per-kg rate by region
        3. Double the rate if total weight is strictly above the heavy threshold
        4. fee = ceil(total weight) x rate (partial kilograms are billed in full)

        Example with default rates:
            - 0.5 kg to Gujarat, subtotal 500: ceil(0.5)=1 x 50 = 50
            - 1.5 kg to Maharashtra, subtotal 500: ceil(1.5)=2 x 160 = 320
            - 2.5 kg anywhere, subtotal 2500: free

        Args:
            subtotal: Sum of item prices x quantities
            total_weight_kg: Total cart weight in kilograms
            region_code: Destination state/region
            rates: Tier parameters, defaults to config values

        Returns:
            ShippingQuoteDTO with weight, applied per-kg rate and fee
        """
        rates = rates or ShippingRatesDTO.from_config()

        if subtotal > rates.free_shipping_threshold:
            return ShippingQuoteDTO(total_weight_kg=total_weight_kg, fee_per_unit=0.0, fee=0.0)

        rate_per_kg = ShippingService.get_rate_per_kg(total_weight_kg, region_code, rates)
        fee = math.ceil(total_weight_kg) * rate_per_kg

        logger.debug(
            f"Shipping quote: weight={total_weight_kg:.3f}kg region={region_code} "
            f"rate={rate_per_kg}/kg fee={fee}"
        )
        return ShippingQuoteDTO(total_weight_kg=total_weight_kg, fee_per_unit=rate_per_kg, fee=float(fee))

    @staticmethod
    def compute_shipping(
        subtotal: float,
        total_weight_kg: float,
        region_code: str | None,
        rates: ShippingRatesDTO | None = None
    ) -> float:
        """
        Shipping fee in the same currency unit as subtotal.

        See quote() for the tier rules.
        """
        return ShippingService.quote(subtotal, total_weight_kg, region_code, rates).fee
