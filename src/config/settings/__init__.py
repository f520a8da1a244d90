"""Agregador de settings do serviço de notificações Nylas.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    DEFAULT_PORT,
    BaseSettings,
    Environment,
    get_base_settings,
)

# Infrastructure settings
from config.settings.infra import (
    PubSubSettings,
    get_pubsub_settings,
)

# Provider settings
from config.settings.nylas import (
    NYLAS_API_BASE_URL,
    NYLAS_MAX_BODY_BYTES,
    NYLAS_SIGNATURE_HEADER,
    NylasSettings,
    get_nylas_settings,
)

__all__ = [
    # Constants
    "DEFAULT_PORT",
    "NYLAS_API_BASE_URL",
    "NYLAS_MAX_BODY_BYTES",
    "NYLAS_SIGNATURE_HEADER",
    # Base
    "BaseSettings",
    "Environment",
    # Provider
    "NylasSettings",
    # Infrastructure
    "PubSubSettings",
    "get_base_settings",
    "get_nylas_settings",
    "get_pubsub_settings",
]
