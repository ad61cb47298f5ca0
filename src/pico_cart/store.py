import asyncio
import logging
from typing import Any, Callable, List, Mapping, Optional, Union
from pico_ioc import component
from .config import CartSettings
from .exceptions import CorruptCartStateError
from .models import CartState, ProductIn, dump_cart, load_cart
from .reducer import AddToCart, CartAction, Decrement, Hydrate, Increment, reduce_cart
from .storage import KeyValueStore

logger = logging.getLogger(__name__)

Listener = Callable[[CartState], Any]

@component
class CartStore:
    """Owns the cart state and keeps it in sync with a key/value store.

    Every mutation goes through `dispatch`, which reduces from the state held
    right now, then the resulting snapshot is written back to storage. Writes
    are serialized and always store the latest snapshot, so the persisted
    value ends up equal to the in-memory one.

    Mutations wait for hydration to finish, so a persisted cart that is
    still being read can never replace changes made in the meantime.
    """

    def __init__(self, storage: KeyValueStore, settings: CartSettings):
        self.storage = storage
        self.settings = settings
        self._state: CartState = ()
        self._listeners: List[Listener] = []
        self._initialized = False
        self._hydrate_lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()

    @property
    def products(self) -> CartState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: CartAction) -> CartState:
        new_state = reduce_cart(self._state, action)
        if new_state == self._state:
            return self._state
        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.exception("Cart listener %r failed", listener)
        return new_state

    async def _read_persisted(self) -> Optional[str]:
        keys = [self.settings.storage_key]
        if self.settings.legacy_storage_key and self.settings.legacy_storage_key != self.settings.storage_key:
            keys.append(self.settings.legacy_storage_key)
        for key in keys:
            raw = await self.storage.get(key)
            if raw is not None:
                logger.debug("Loaded persisted cart from %r", key)
                return raw
        return None

    async def initialize(self) -> None:
        async with self._hydrate_lock:
            if self._initialized:
                return
            try:
                await self._hydrate()
            finally:
                self._initialized = True

    async def _hydrate(self) -> None:
        try:
            raw = await self._read_persisted()
        except Exception:
            logger.warning("Could not read persisted cart, starting empty", exc_info=True)
            return
        if raw is None:
            return
        try:
            state = load_cart(raw)
        except CorruptCartStateError as e:
            logger.warning("Discarding persisted cart: %s", e)
            return
        self.dispatch(Hydrate(state))
        logger.debug("Hydrated cart with %d item(s)", len(state))

    async def _hydrated(self) -> None:
        if not self._initialized:
            await self.initialize()

    async def flush(self) -> None:
        async with self._write_lock:
            key = self.settings.storage_key
            try:
                await self.storage.set(key, dump_cart(self._state))
            except Exception:
                logger.warning("Failed to persist cart under %r", key, exc_info=True)

    async def add_to_cart(self, product: Union[ProductIn, Mapping[str, Any]]) -> None:
        if not isinstance(product, ProductIn):
            product = ProductIn.model_validate(product)
        await self._hydrated()
        self.dispatch(AddToCart(product))
        logger.debug("Added %r to cart", product.id)
        await self.flush()

    async def increment(self, id: str) -> None:
        await self._hydrated()
        self.dispatch(Increment(id))
        await self.flush()

    async def decrement(self, id: str) -> None:
        await self._hydrated()
        self.dispatch(Decrement(id))
        await self.flush()
