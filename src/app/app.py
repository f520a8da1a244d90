"""Entrypoint do serviço de notificações Nylas.

Este módulo é o ponto de entrada principal do serviço.
Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 3002

Uso (desenvolvimento):
    python -m app.app

Endpoints:
    GET/POST /webhook/nylas  (challenge + notificações assinadas)
    POST     /pubsub/nylas   (push do Pub/Sub)
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import create_api_router
from app.bootstrap import initialize_app, validate_runtime_settings
from config.logging import get_logger
from config.settings import get_base_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup: valida configurações (falha rápido fora de development).
    Shutdown: apenas registra; o core não mantém conexões.
    """
    settings = get_base_settings()
    logger.info("app_starting", extra={"service": settings.service_name})
    validate_runtime_settings()
    logger.info(
        "endpoints_available",
        extra={
            "webhook_endpoint": "/webhook/nylas",
            "pubsub_endpoint": "/pubsub/nylas",
            "port": settings.port,
        },
    )

    yield

    logger.info("app_shutting_down", extra={"service": settings.service_name})


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI."""
    fastapi_app = FastAPI(
        title="Nylas Notifications",
        description="Recebimento de notificações Nylas via webhook e Pub/Sub",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Webhooks são server-to-server; CORS liberado como no serviço original
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": get_base_settings().service_name})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    settings = get_base_settings()
    logger.info("Starting Nylas notifications in development mode")
    uvicorn.run(
        "app.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    main()
