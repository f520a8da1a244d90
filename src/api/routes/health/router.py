"""Endpoints de health check e probe raiz."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.infra.secrets import resolve_webhook_secret
from config.settings import get_base_settings, get_nylas_settings
from utils.errors import SecretUnavailableError

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "degraded", "failed"]
    latency_ms: float | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "latency_ms": self.latency_ms,
            "error": self.error,
        }


@router.post("/")
async def root_probe() -> dict[str, str]:
    """Probe raiz (útil para validar túneis/ingress)."""
    return {"hello": "world"}


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe — verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=get_base_settings().service_name,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check() -> JSONResponse:
    """Readiness probe: o secret do webhook precisa ser resolvível.

    Sem secret configurado o serviço fica `degraded` (verificação pulada),
    mas continua pronto para receber notificações.
    """
    secret_check = await _check_webhook_secret()
    ready = secret_check.status in {"ok", "degraded"}

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {"webhook_secret": secret_check.as_dict()},
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


async def _check_webhook_secret() -> DependencyCheck:
    settings = get_nylas_settings()
    if not settings.verification_configured:
        return DependencyCheck(status="degraded", error="not_configured")
    started_at = time.perf_counter()
    try:
        await resolve_webhook_secret(settings, get_base_settings().gcp_project)
    except SecretUnavailableError:
        return DependencyCheck(status="failed", error="secret_unavailable")
    latency_ms = (time.perf_counter() - started_at) * 1000
    return DependencyCheck(status="ok", latency_ms=round(latency_ms, 2))
