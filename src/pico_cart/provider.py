from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Optional
from pico_ioc import ContextConfig, PicoContainer, init
from .config import CartSettings, settings_configuration
from .exceptions import CartProviderError
from .storage import KeyValueStore
from .store import CartStore

CART_MODULES = ("pico_cart.config", "pico_cart.storage", "pico_cart.store")

def _storage_overrides(storage: Optional[KeyValueStore]) -> Dict[Any, Any]:
    # pico calls callable overrides; the lambda keeps mocks from being called
    return {KeyValueStore: (lambda: storage)} if storage is not None else {}

def build_container(
    modules: Iterable[Any] = (),
    config: Optional[ContextConfig] = None,
    storage: Optional[KeyValueStore] = None,
) -> PicoContainer:
    return init(
        modules=[*CART_MODULES, *modules],
        config=config if config is not None else settings_configuration(),
        overrides=_storage_overrides(storage),
    )

class CartProvider:
    """Mounts one CartStore and makes it visible to code running inside it.

    The store lives in a pico-ioc container; binding the provider makes that
    container the current one, which is what ``use_cart()`` looks up.

    Usage:
        async with CartProvider(storage) as cart:
            await handle_screen()   # handle_screen() calls use_cart()
    """

    def __init__(
        self,
        storage: Optional[KeyValueStore] = None,
        settings: Optional[CartSettings] = None,
        container: Optional[PicoContainer] = None,
    ):
        if container is None:
            container = build_container(config=settings_configuration(cart_settings=settings), storage=storage)
        self.container = container
        self._entered: List[Any] = []

    @property
    def store(self) -> CartStore:
        return self.container.get(CartStore)

    async def mount(self) -> CartStore:
        store = self.store
        await store.initialize()
        return store

    @contextmanager
    def as_current(self) -> Iterator[CartStore]:
        with self.container.as_current():
            yield self.store

    async def __aenter__(self) -> CartStore:
        token = self.container.activate()
        self._entered.append(token)
        try:
            return await self.mount()
        except BaseException:
            self.container.deactivate(self._entered.pop())
            raise

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.container.deactivate(self._entered.pop())

def use_cart() -> CartStore:
    container = PicoContainer.get_current()
    if container is None or not container.has(CartStore):
        raise CartProviderError()
    return container.get(CartStore)

async def get_cart() -> CartStore:
    return use_cart()
