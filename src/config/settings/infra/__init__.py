"""Agregador de settings de infraestrutura GCP.

Re-exporta todas as settings de infraestrutura para uso externo.
"""

from __future__ import annotations

from config.settings.infra.pubsub import (
    PubSubSettings,
    get_pubsub_settings,
)

__all__ = [
    "PubSubSettings",
    "get_pubsub_settings",
]
