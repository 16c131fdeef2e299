from enum import Enum


class OrderStatus(str, Enum):
    PROCESSING = "Processing"   # Initial status of every new order
    SHIPPED = "Shipped"         # Set by admin once handed to the courier
    CANCELED = "Canceled"       # Set by admin, order will not be fulfilled

    @classmethod
    def from_string(cls, value: str) -> 'OrderStatus':
        """
        Convert string to OrderStatus enum.

        Matching is case-insensitive and ignores surrounding whitespace,
        so "shipped" and " Shipped " both resolve to SHIPPED.

        Raises:
            ValueError: If value is not a valid status
        """
        normalized = (value or "").strip().lower()
        for status in cls:
            if status.value.lower() == normalized:
                return status

        valid_statuses = [s.value for s in cls]
        raise ValueError(
            f"Invalid status '{value}'. Valid statuses: {', '.join(valid_statuses)}"
        )
