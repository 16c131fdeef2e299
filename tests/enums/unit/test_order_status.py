import pytest

from enums.order_status import OrderStatus


class TestOrderStatus:
    """Test OrderStatus enum"""

    def test_values(self):
        assert [status.value for status in OrderStatus] == ["Processing", "Shipped", "Canceled"]

    @pytest.mark.parametrize("raw, expected", [
        ("Processing", OrderStatus.PROCESSING),
        ("shipped", OrderStatus.SHIPPED),
        (" CANCELED ", OrderStatus.CANCELED),
    ])
    def test_from_string(self, raw, expected):
        assert OrderStatus.from_string(raw) == expected

    @pytest.mark.parametrize("raw", ["Delivered", "", None, "Cancelled"])
    def test_from_string_invalid(self, raw):
        with pytest.raises(ValueError) as exc_info:
            OrderStatus.from_string(raw)

        assert "Valid statuses: Processing, Shipped, Canceled" in str(exc_info.value)

    def test_is_string_comparable(self):
        assert OrderStatus.SHIPPED == "Shipped"
