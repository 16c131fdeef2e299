# cart lines live on the client side until checkout: name and unit price are
# copied when the product is added, so later catalog edits don't change the cart.
# A line is identified by (product_id, size_label), the same product in another
# size is a separate line.
from pydantic import BaseModel, Field


class CartLineDTO(BaseModel):
    product_id: int
    name: str
    unit_price: float = Field(ge=0)
    quantity: int = Field(ge=1)
    size_label: str | None = None
    image_url: str | None = None

    @property
    def key(self) -> tuple[int, str | None]:
        return self.product_id, self.size_label

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity
