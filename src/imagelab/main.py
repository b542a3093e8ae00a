"""FastAPI application entry point."""

from fastapi import FastAPI

from .api import ApiFacade
from .config import AppConfig, load_config
from .logging import configure_logging, request_context_middleware
from .providers.providers_factory import ProviderRegistry


def create_app(
    config: AppConfig | None = None, providers: ProviderRegistry | None = None
) -> FastAPI:
    """Build FastAPI instance with configured vendor drivers."""
    cfg = config or load_config()
    configure_logging(cfg.log_level)
    app = FastAPI(title="imagelab")
    app.state.config = cfg
    app.middleware("http")(request_context_middleware)
    ApiFacade(providers=providers or ProviderRegistry.from_config(cfg)).mount(app)
    return app


app = create_app()
