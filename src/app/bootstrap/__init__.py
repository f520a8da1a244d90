"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings
e expõe o use case de processamento de notificações.

Uso:
    from app.bootstrap import initialize_app, get_notification_use_case

    # Na inicialização do serviço
    initialize_app()

    # Nas rotas
    use_case = get_notification_use_case()
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_nylas_settings,
    get_pubsub_settings,
)

if TYPE_CHECKING:
    from app.use_cases.nylas import ProcessNotificationUseCase

# Nome do serviço para logs e métricas
SERVICE_NAME = "nylas_notifications"

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação com as configurações necessárias.

    Deve ser chamada uma vez no início do serviço.
    Configura logging estruturado JSON com correlation_id.
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local; o
    webhook sem secret aceita POSTs sem verificar assinatura.
    """
    environment = os.getenv("ENVIRONMENT", "development").lower()
    strict_mode = environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in get_base_settings().validate())
    errors.extend(f"nylas: {error}" for error in get_nylas_settings().validate())
    errors.extend(f"pubsub: {error}" for error in get_pubsub_settings().validate())

    if not get_nylas_settings().verification_configured:
        logger.warning(
            "webhook_signature_verification_disabled",
            extra={
                "component": "bootstrap",
                "environment": environment,
                "reason": "NYLAS_WEBHOOK_SECRET not configured",
            },
        )

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


@lru_cache(maxsize=1)
def get_notification_use_case() -> ProcessNotificationUseCase:
    """Obtém o use case de processamento (singleton, sem estado mutável)."""
    from app.bootstrap.dependencies import create_process_notification_use_case

    return create_process_notification_use_case()
