import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
from pico_fastapi import FastApiSettings
from pico_ioc import ContextConfig, DictSource, YamlTreeSource, configuration, configured
from .exceptions import InvalidSettingsError

STORAGE_BACKENDS = ("memory", "file")

@configured(target="self", prefix="cart", mapping="tree")
@dataclass
class CartSettings:
    """Cart persistence settings, bound from the ``cart`` config prefix.

    An empty ``legacy_storage_key`` disables the fallback read.

    Example:
        .. code-block:: yaml

            cart:
              storage_key: "@gomarketplace:products"
              storage_backend: file
              storage_path: .data/cart.json
    """

    storage_key: str = "@gomarketplace:products"
    legacy_storage_key: str = "@gomarketplace:product"
    storage_backend: str = "memory"
    storage_path: str = "cart-storage.json"

    def __post_init__(self):
        if self.storage_backend not in STORAGE_BACKENDS:
            raise InvalidSettingsError(
                "cart", f"storage_backend must be one of {', '.join(STORAGE_BACKENDS)}, got {self.storage_backend!r}"
            )

def load_configuration(path: str | Path) -> ContextConfig:
    return configuration(YamlTreeSource(str(path)))

def settings_configuration(
    app_settings: Optional[FastApiSettings] = None,
    cart_settings: Optional[CartSettings] = None,
) -> ContextConfig:
    """Turn settings objects into a config tree the container can bind from."""
    tree: Dict[str, Any] = {}
    if app_settings is not None:
        tree["fastapi"] = {
            f.name: getattr(app_settings, f.name) for f in dataclasses.fields(app_settings)
        }
    if cart_settings is not None:
        tree["cart"] = dataclasses.asdict(cart_settings)
    return configuration(DictSource(tree))
