from fastapi import APIRouter, Depends, FastAPI, HTTPException

from pico_fastapi import FastApiConfigurer
from pico_ioc import component

from pico_cart import CartStore, ProductIn, get_cart

CATALOG = {
    "p1": ProductIn(id="p1", title="Shirt", image_url="https://example.com/shirt.png", price=10.0),
    "p2": ProductIn(id="p2", title="Mug", image_url="https://example.com/mug.png", price=4.5),
}


@component
class CatalogConfigurer(FastApiConfigurer):
    """Adds catalog routes that drop products straight into the cart."""

    priority = 0

    def configure_app(self, app: FastAPI) -> None:
        router = APIRouter(prefix="/catalog", tags=["Catalog"])

        @router.get("")
        async def list_catalog():
            return [product.model_dump() for product in CATALOG.values()]

        @router.post("/{product_id}/buy")
        async def buy(product_id: str, cart: CartStore = Depends(get_cart)):
            product = CATALOG.get(product_id)
            if product is None:
                raise HTTPException(status_code=404, detail="Unknown product")
            await cart.add_to_cart(product)
            return {"quantity": next(i.quantity for i in cart.products if i.id == product_id)}

        app.include_router(router)
