from pydantic import BaseModel

import config


class ShippingRatesDTO(BaseModel):
    """Shipping tier parameters, see ShippingService.compute_shipping()."""
    local_region: str
    local_rate_per_kg: float
    default_rate_per_kg: float
    free_shipping_threshold: float
    heavy_weight_threshold_kg: float

    @classmethod
    def from_config(cls) -> 'ShippingRatesDTO':
        return cls(
            local_region=config.LOCAL_SHIPPING_REGION,
            local_rate_per_kg=config.LOCAL_RATE_PER_KG,
            default_rate_per_kg=config.DEFAULT_RATE_PER_KG,
            free_shipping_threshold=config.FREE_SHIPPING_THRESHOLD,
            heavy_weight_threshold_kg=config.HEAVY_WEIGHT_THRESHOLD_KG,
        )


class ShippingQuoteDTO(BaseModel):
    total_weight_kg: float
    fee_per_unit: float  # Per-kilogram rate after the heavy-weight doubling (0 when free)
    fee: float
