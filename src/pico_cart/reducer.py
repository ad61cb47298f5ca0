from dataclasses import dataclass
from typing import Union
from .models import CartItem, CartState, ProductIn

@dataclass(frozen=True)
class Hydrate:
    state: CartState

@dataclass(frozen=True)
class AddToCart:
    product: ProductIn

@dataclass(frozen=True)
class Increment:
    id: str

@dataclass(frozen=True)
class Decrement:
    id: str

CartAction = Union[Hydrate, AddToCart, Increment, Decrement]

def _add(state: CartState, product: ProductIn) -> CartState:
    for index, item in enumerate(state):
        if item.id == product.id:
            refreshed = CartItem.from_product(product, quantity=item.quantity + 1)
            return state[:index] + (refreshed,) + state[index + 1:]
    return state + (CartItem.from_product(product),)

def _bump(state: CartState, id: str, delta: int) -> CartState:
    # quantity never drops below 1, decrement clamps instead of removing
    return tuple(
        item.model_copy(update={"quantity": max(1, item.quantity + delta)}) if item.id == id else item
        for item in state
    )

def reduce_cart(state: CartState, action: CartAction) -> CartState:
    """Compute the next cart state from the current one.

    Pure: `state` is never modified. Unknown ids leave the state equal by value.
    """
    if isinstance(action, Hydrate):
        return tuple(action.state)
    if isinstance(action, AddToCart):
        return _add(state, action.product)
    if isinstance(action, Increment):
        return _bump(state, action.id, 1)
    if isinstance(action, Decrement):
        return _bump(state, action.id, -1)
    raise TypeError(f"Unsupported cart action: {action!r}")
