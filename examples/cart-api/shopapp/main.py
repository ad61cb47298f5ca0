import logging

from fastapi import FastAPI

from pico_cart import create_app, load_configuration


def build_app() -> FastAPI:
    logging.basicConfig(level=logging.INFO)
    return create_app(load_configuration("application.yaml"), modules=["shopapp.catalog"])


app = build_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
