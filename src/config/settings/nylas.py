"""Settings específicas da Nylas.

Configurações do webhook Nylas (v3) e da API usada pelos scripts de setup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Constantes da Nylas API
NYLAS_API_BASE_URL: str = "https://api.us.nylas.com"
NYLAS_SIGNATURE_HEADER: str = "x-nylas-signature"
NYLAS_MAX_BODY_BYTES: int = 1024 * 1024  # 1MB


@dataclass(frozen=True)
class NylasSettings:
    """Configurações do canal Nylas.

    Attributes:
        environment: Ambiente em que as settings foram carregadas
        webhook_secret: Secret para validação HMAC (vazio = verificação desligada)
        webhook_secret_id: ID do secret no Secret Manager (alternativa ao env)
        signature_header: Header que carrega a assinatura hex
        max_body_bytes: Tamanho máximo aceito para o corpo do request
        log_full_payload: Loga o objeto completo em INFO (senão só em DEBUG)
        api_key: API key da Nylas (scripts de registro de webhook)
        api_base_url: URL base da Nylas API
        request_timeout_seconds: Timeout para requisições HTTP à API
    """

    environment: str = "development"

    # Webhook
    webhook_secret: str = ""
    webhook_secret_id: str = ""
    signature_header: str = NYLAS_SIGNATURE_HEADER
    max_body_bytes: int = NYLAS_MAX_BODY_BYTES
    log_full_payload: bool = False

    # API
    api_key: str = ""
    api_base_url: str = NYLAS_API_BASE_URL
    request_timeout_seconds: float = 30.0

    @property
    def webhooks_endpoint(self) -> str:
        """URL do recurso de webhooks da API v3."""
        return f"{self.api_base_url.rstrip('/')}/v3/webhooks/"

    @property
    def verification_configured(self) -> bool:
        """True se há alguma fonte de secret para verificar assinaturas."""
        return bool(self.webhook_secret or self.webhook_secret_id)

    def validate(self) -> list[str]:
        """Valida configurações mínimas da Nylas.

        Sem secret a verificação de assinatura é pulada. Em desenvolvimento
        isso é aceito (com warning); fora dele é erro de configuração.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.verification_configured and self.environment != "development":
            errors.append(
                "NYLAS_WEBHOOK_SECRET ou NYLAS_WEBHOOK_SECRET_ID não configurado"
            )

        if not self.signature_header:
            errors.append("NYLAS_SIGNATURE_HEADER não pode ser vazio")

        if self.max_body_bytes <= 0:
            errors.append("NYLAS_MAX_BODY_BYTES deve ser > 0")

        if self.request_timeout_seconds <= 0:
            errors.append("NYLAS_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_from_env() -> NylasSettings:
    """Carrega NylasSettings a partir de variáveis de ambiente."""
    return NylasSettings(
        environment=os.getenv("ENVIRONMENT", "development").lower(),
        webhook_secret=os.getenv("NYLAS_WEBHOOK_SECRET", ""),
        webhook_secret_id=os.getenv("NYLAS_WEBHOOK_SECRET_ID", ""),
        signature_header=os.getenv(
            "NYLAS_SIGNATURE_HEADER", NYLAS_SIGNATURE_HEADER
        ).lower(),
        max_body_bytes=int(
            os.getenv("NYLAS_MAX_BODY_BYTES", str(NYLAS_MAX_BODY_BYTES))
        ),
        log_full_payload=os.getenv("NYLAS_LOG_FULL_PAYLOAD", "").lower()
        in ("true", "1", "yes"),
        api_key=os.getenv("NYLAS_API_KEY", ""),
        api_base_url=os.getenv("NYLAS_API_BASE_URL", NYLAS_API_BASE_URL),
        request_timeout_seconds=float(
            os.getenv("NYLAS_REQUEST_TIMEOUT_SECONDS", "30")
        ),
    )


@lru_cache(maxsize=1)
def get_nylas_settings() -> NylasSettings:
    """Retorna instância cacheada de NylasSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
