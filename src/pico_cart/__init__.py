from .config import CartSettings, load_configuration, settings_configuration
from .controllers import CartController
from .exceptions import (
    PicoCartError,
    CartProviderError,
    CorruptCartStateError,
    InvalidSettingsError,
)
from .factory import create_app
from .models import CartItem, CartState, ProductIn, dump_cart, load_cart
from .provider import CartProvider, build_container, get_cart, use_cart
from .storage import FileKeyValueStore, InMemoryKeyValueStore, KeyValueStore
from .store import CartStore

__all__ = [
    "CartSettings",
    "load_configuration",
    "settings_configuration",
    "CartController",
    "PicoCartError",
    "CartProviderError",
    "CorruptCartStateError",
    "InvalidSettingsError",
    "create_app",
    "CartItem",
    "CartState",
    "ProductIn",
    "dump_cart",
    "load_cart",
    "CartProvider",
    "build_container",
    "get_cart",
    "use_cart",
    "FileKeyValueStore",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "CartStore",
]
