"""
==============================================================================
Order Hand-off Service Module
==============================================================================

Turns a selected product into a WhatsApp chat link pre-filled with the
order message. The storefront takes no orders itself.

Message format:
--------------
    I want the {product name} {product id}.

==============================================================================
"""

from __future__ import annotations

import re
from urllib.parse import quote

from storefront.catalog.models import Product


WHATSAPP_BASE_URL = "https://wa.me"

# Characters encodeURIComponent leaves alone beyond quote()'s defaults
_UNRESERVED_EXTRA = "!~*'()"


class OrderLinkBuilder:
    """
    Builds wa.me links for product selections.

    Example:
        >>> builder = OrderLinkBuilder("+96171294697")
        >>> builder.message(product)
        'I want the High-Speed Blender 4152.'
    """

    def __init__(self, phone: str) -> None:
        self._phone_digits = re.sub(r"\D", "", phone)

    @property
    def phone_digits(self) -> str:
        return self._phone_digits

    def message(self, product: Product) -> str:
        return f"I want the {product.name} {product.id}."

    def build(self, product: Product) -> str:
        text = quote(self.message(product), safe=_UNRESERVED_EXTRA)
        return f"{WHATSAPP_BASE_URL}/{self._phone_digits}?text={text}"
