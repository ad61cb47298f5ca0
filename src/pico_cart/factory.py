import logging
from contextlib import asynccontextmanager
from typing import Any, Iterable, Optional
from fastapi import FastAPI
from pico_ioc import ContextConfig, PicoContainer
from .provider import build_container
from .storage import KeyValueStore
from .store import CartStore

logger = logging.getLogger(__name__)

FASTAPI_MODULES = ("pico_fastapi.config", "pico_fastapi.factory", "pico_cart.controllers")

def _hydrate_on_startup(app: FastAPI, container: PicoContainer) -> None:
    pico_lifespan = app.router.lifespan_context

    @asynccontextmanager
    async def lifespan_manager(app_instance):
        with container.as_current():
            store = await container.aget(CartStore)
            await store.initialize()
        logger.debug("Cart hydrated with %d item(s)", len(store.products))
        async with pico_lifespan(app_instance):
            yield

    app.router.lifespan_context = lifespan_manager

def create_app(
    config: Optional[ContextConfig] = None,
    storage: Optional[KeyValueStore] = None,
    modules: Iterable[Any] = (),
) -> FastAPI:
    """Build the FastAPI app from a container holding one CartStore.

    ``modules`` are scanned next to the cart's own: components there can be
    ``FastApiConfigurer`` hooks or extra controllers. ``storage`` replaces
    the backend chosen by ``cart.storage_backend``.
    """
    container = build_container(modules=[*FASTAPI_MODULES, *modules], config=config, storage=storage)
    app = container.get(FastAPI)
    _hydrate_on_startup(app, container)
    return app
