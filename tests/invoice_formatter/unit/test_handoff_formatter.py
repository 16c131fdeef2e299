"""
Unit tests for HandoffFormatterService.

Tests the WhatsApp order message layout and deep link construction.
"""

from urllib.parse import urlsplit, parse_qs

import pytest

from enums.order_status import OrderStatus
from models.customer import CustomerDetailsDTO
from models.order import OrderDTO, OrderItemDTO
from services.handoff_formatter import HandoffFormatterService, BANNER


@pytest.fixture
def customer(customer_fields):
    return CustomerDetailsDTO(**customer_fields)


@pytest.fixture
def order():
    return OrderDTO(
        id=42,
        customer_name="Asha Patel",
        customer_email="asha@example.com",
        customer_phone="9876543210",
        shipping_address="12 MG Road, Near Bus Stand, Surat, Gujarat - 395003",
        order_items=[
            OrderItemDTO(product_id=1, name="Almonds", price=1000.0, quantity=1, size_label="500g"),
            OrderItemDTO(product_id=3, name="Gift Card", price=250.0, quantity=2),
        ],
        shipping_fee=50.0,
        total_amount="1550.00",
        status=OrderStatus.PROCESSING,
    )


class TestFormatHandoffMessage:
    """Test message layout"""

    def test_message_sections(self, order, customer):
        message = HandoffFormatterService.format_handoff_message(order, customer, 50.0, 0.5)
        lines = message.split("\n")

        assert lines[0] == BANNER
        assert "Order ID: #42" in lines
        assert "Name: Asha Patel" in lines
        assert "Email: asha@example.com" in lines
        assert "Phone: 9876543210" in lines
        assert "12 MG Road, Near Bus Stand, Surat, Gujarat - 395003" in lines

    def test_item_lines(self, order, customer):
        message = HandoffFormatterService.format_handoff_message(order, customer, 50.0, 0.5)

        assert "1. Almonds (500g) x 1 = ₹1000.00" in message
        # No size -> no parentheses
        assert "2. Gift Card x 2 = ₹500.00" in message

    def test_summary_uses_two_decimals(self, order, customer):
        message = HandoffFormatterService.format_handoff_message(order, customer, 50.0, 0.5)

        assert "Subtotal: ₹1500.00" in message
        assert "Shipping: ₹50.00" in message
        assert "Total: ₹1550.00" in message
        assert "Total Weight: 0.50 kg" in message

    def test_zero_shipping_shows_free(self, order, customer):
        free_order = order.model_copy(update={"shipping_fee": 0.0, "total_amount": "1500.00"})

        message = HandoffFormatterService.format_handoff_message(free_order, customer, 0.0, 2.0)

        assert "Shipping: FREE" in message
        assert "Total: ₹1500.00" in message

    def test_custom_currency_symbol(self, order, customer):
        message = HandoffFormatterService.format_handoff_message(order, customer, 50.0, 0.5, currency_symbol="Rs. ")

        assert "Total: Rs. 1550.00" in message

    def test_order_without_id_omits_id_line(self, order, customer):
        draft_like = order.model_copy(update={"id": None})

        message = HandoffFormatterService.format_handoff_message(draft_like, customer, 50.0, 0.5)

        assert "Order ID" not in message


class TestBuildHandoffUrl:
    """Test deep link construction"""

    def test_number_is_reduced_to_digits(self):
        url = HandoffFormatterService.build_handoff_url("hi", "+91 98765-43210")

        assert url.startswith("https://wa.me/919876543210?text=")

    def test_message_is_percent_encoded(self):
        message = "🛒 *New Order*\nTotal: ₹1050.00 & more?"

        url = HandoffFormatterService.build_handoff_url(message, "919876543210")
        query = urlsplit(url).query

        assert " " not in query
        assert "\n" not in query
        assert "&" not in query.removeprefix("text=")
        assert parse_qs(query)["text"] == [message]

    @pytest.mark.parametrize("number", [None, "", "   ", "call us"])
    def test_no_usable_number_gives_none(self, number):
        assert HandoffFormatterService.build_handoff_url("hi", number) is None


class TestCreateHandoffLink:
    """Test full handoff link creation"""

    def test_link_contains_message(self, order, customer):
        url = HandoffFormatterService.create_handoff_link(order, customer, 50.0, 0.5, "+91 98765 43210")
        text = parse_qs(urlsplit(url).query)["text"][0]

        assert text == HandoffFormatterService.format_handoff_message(order, customer, 50.0, 0.5)

    def test_missing_number_gives_none(self, order, customer):
        assert HandoffFormatterService.create_handoff_link(order, customer, 50.0, 0.5, None) is None
