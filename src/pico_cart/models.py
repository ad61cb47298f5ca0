from typing import Iterable, List, Tuple
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from .exceptions import CorruptCartStateError

class ProductIn(BaseModel):
    """A product as offered to the cart, before it has a quantity."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    image_url: str
    price: float

class CartItem(ProductIn):
    quantity: int = Field(default=1, ge=1)

    @classmethod
    def from_product(cls, product: ProductIn, quantity: int = 1) -> "CartItem":
        return cls(**product.model_dump(exclude={"quantity"}), quantity=quantity)

CartState = Tuple[CartItem, ...]

_CART_ADAPTER: TypeAdapter[List[CartItem]] = TypeAdapter(List[CartItem])

def dump_cart(state: Iterable[CartItem]) -> str:
    return _CART_ADAPTER.dump_json(list(state)).decode("utf-8")

def load_cart(raw: str | bytes) -> CartState:
    """Decode the persisted JSON array into a cart state.

    Raises CorruptCartStateError when the payload is not a JSON array of
    valid items or when two entries share an id.
    """
    try:
        items = _CART_ADAPTER.validate_json(raw)
    except ValidationError as e:
        first = e.errors()[0]
        loc = ".".join(str(part) for part in first.get("loc", ()))
        reason = f"{loc}: {first['msg']}" if loc else first["msg"]
        raise CorruptCartStateError(reason) from e

    seen = set()
    for item in items:
        if item.id in seen:
            raise CorruptCartStateError(f"duplicate item id {item.id!r}")
        seen.add(item.id)
    return tuple(items)
