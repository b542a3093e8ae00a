"""HTTP facade mounting every vendor router on a FastAPI application."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol

from fastapi import APIRouter, FastAPI

from ..providers.providers_factory import ProviderRegistry
from .errors import install_error_handlers


class RouterBinder(Protocol):
    """Interface of a web framework adapter able to register routers."""

    def include_router(self, router: APIRouter) -> None:
        """Register an ``APIRouter`` with the host application."""


@dataclass(slots=True)
class ApiFacade:
    """Thin layer between the HTTP stack and the vendor drivers."""

    providers: ProviderRegistry

    def mount(self, app: FastAPI) -> None:
        """Attach providers, error handlers and all routers to ``app``."""

        if getattr(app.state, "providers", None) is None:
            app.state.providers = self.providers
        install_error_handlers(app)
        self.include_routers(app)

    def include_routers(self, binder: RouterBinder) -> None:
        for router in self._iter_routers():
            binder.include_router(router)

    @staticmethod
    def _iter_routers() -> Iterable[APIRouter]:
        from .routes import (
            claid,
            cloudinary,
            health,
            meshy,
            product_recognition,
            remove_bg,
            vision,
        )

        return (
            health.router,
            remove_bg.router,
            meshy.router,
            vision.router,
            claid.router,
            cloudinary.router,
            product_recognition.router,
        )


__all__ = ["ApiFacade", "RouterBinder"]
