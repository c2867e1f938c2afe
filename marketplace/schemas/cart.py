from pydantic import BaseModel, ConfigDict


class CartItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: str
    product_name: str
    price: float
    quantity: int


class Cart(BaseModel):
    id: str
    items: list[CartItem] = []
    total_amount: float

    @classmethod
    def from_model(cls, cart) -> "Cart":
        return cls(
            id=cart.id,
            items=[
                CartItem(
                    product_id=item.product.id,
                    product_name=item.product.name,
                    price=item.product.price,
                    quantity=item.quantity,
                )
                for item in cart.items
            ],
            total_amount=cart.total_amount,
        )


class CartItemAdd(BaseModel):
    product_id: str
    quantity: int
