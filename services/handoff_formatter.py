"""
Handoff Formatter Service

Formats a placed order as a WhatsApp message and wraps it in a wa.me deep
link, so the customer can send the order summary to the shop directly.

Message layout:
    banner + order id
    customer name / email / phone
    one line per item: name (size) x qty = line total
    shipping address
    subtotal, shipping (or FREE), total
    total weight
"""

import logging
import re
from urllib.parse import quote

import config
from models.customer import CustomerDetailsDTO
from models.order import OrderDTO

logger = logging.getLogger(__name__)

BANNER = "🛒 *New Order Received*"


class HandoffFormatterService:
    """WhatsApp order message formatting"""

    @staticmethod
    def format_money(amount: float, currency_symbol: str | None = None) -> str:
        """Currency amount with exactly two decimals, e.g. ₹1050.00"""
        symbol = config.CURRENCY_SYMBOL if currency_symbol is None else currency_symbol
        return f"{symbol}{amount:.2f}"

    @staticmethod
    def _format_items_section(order: OrderDTO, currency_symbol: str | None) -> list[str]:
        lines = ["*Order Items*"]
        for index, item in enumerate(order.order_items, start=1):
            size = f" ({item.size_label})" if item.size_label else ""
            line_total = HandoffFormatterService.format_money(item.line_total, currency_symbol)
            lines.append(f"{index}. {item.name}{size} x {item.quantity} = {line_total}")
        return lines

    @staticmethod
    def format_handoff_message(
        order: OrderDTO,
        customer: CustomerDetailsDTO,
        shipping_fee: float,
        total_weight_kg: float,
        currency_symbol: str | None = None
    ) -> str:
        """
        Build the plain-text order message (WhatsApp markdown, *bold*).

        Args:
            order: Stored order (items snapshot, address, total)
            customer: Checkout fields of the customer
            shipping_fee: Fee charged at submission (0 renders as FREE)
            total_weight_kg: Aggregate cart weight
            currency_symbol: Override for config.CURRENCY_SYMBOL

        Returns:
            Multi-line message, not yet URL-encoded
        """
        money = HandoffFormatterService.format_money
        subtotal = order.subtotal
        shipping_text = "FREE" if shipping_fee == 0 else money(shipping_fee, currency_symbol)
        total = float(order.total_amount) if order.total_amount else subtotal + shipping_fee

        lines = [BANNER]
        if order.id is not None:
            lines.append(f"Order ID: #{order.id}")
        lines += [
            "",
            "*Customer Details*",
            f"Name: {customer.name}",
            f"Email: {customer.email}",
            f"Phone: {customer.phone}",
            "",
        ]
        lines += HandoffFormatterService._format_items_section(order, currency_symbol)
        lines += [
            "",
            "*Shipping Address*",
            order.shipping_address or "",
            "",
            "*Order Summary*",
            f"Subtotal: {money(subtotal, currency_symbol)}",
            f"Shipping: {shipping_text}",
            f"Total: {money(total, currency_symbol)}",
            f"Total Weight: {total_weight_kg:.2f} kg",
        ]
        return "\n".join(lines)

    @staticmethod
    def build_handoff_url(message: str, destination_number: str | None) -> str | None:
        """
        Wrap a message into a WhatsApp deep link.

        Every non-digit character is stripped from the destination number
        ("+91 98765-43210" -> "919876543210"), the message is percent-encoded.

        Args:
            message: Text from format_handoff_message()
            destination_number: Shop number from settings

        Returns:
            https://wa.me/<digits>?text=<encoded message>, or None when no
            usable number is configured
        """
        if not destination_number:
            return None

        digits = re.sub(r'\D', '', destination_number)
        if not digits:
            logger.warning("Configured WhatsApp number contains no digits, handoff unavailable")
            return None

        return f"https://{config.WHATSAPP_HOST}/{digits}?text={quote(message, safe='')}"

    @staticmethod
    def create_handoff_link(
        order: OrderDTO,
        customer: CustomerDetailsDTO,
        shipping_fee: float,
        total_weight_kg: float,
        destination_number: str | None
    ) -> str | None:
        """Format the order message and return its deep link (None if unavailable)."""
        if not destination_number:
            logger.info(f"No WhatsApp number configured, order {order.id} uses fallback confirmation")
            return None

        message = HandoffFormatterService.format_handoff_message(
            order, customer, shipping_fee, total_weight_kg
        )
        return HandoffFormatterService.build_handoff_url(message, destination_number)
