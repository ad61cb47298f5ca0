from typing import Any, Dict, List
from pico_fastapi import controller, get, post
from .models import ProductIn
from .store import CartStore

@controller(prefix="/cart", tags=["Cart"])
class CartController:
    """HTTP view over the container's CartStore, resolved per request."""

    def __init__(self, cart: CartStore):
        self.cart = cart

    def _items(self) -> List[Dict[str, Any]]:
        return [item.model_dump() for item in self.cart.products]

    @get("/items")
    async def list_items(self):
        return self._items()

    @post("/items")
    async def add_item(self, product: ProductIn):
        await self.cart.add_to_cart(product)
        return self._items(), 201

    @post("/items/{product_id}/increment")
    async def increment_item(self, product_id: str):
        await self.cart.increment(product_id)
        return self._items()

    @post("/items/{product_id}/decrement")
    async def decrement_item(self, product_id: str):
        await self.cart.decrement(product_id)
        return self._items()

    @get("/summary")
    async def summary(self):
        products = self.cart.products
        return {"count": len(products), "quantity": sum(item.quantity for item in products)}
