"""Observabilidade — logs estruturados, correlation_id e métricas.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_dispatch_latency, record_notification_received
"""

from app.observability.correlation import (
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_dispatch_latency,
    record_notification_received,
    record_signature_check,
)

__all__ = [
    "generate_correlation_id",
    "get_correlation_id",
    "record_dispatch_latency",
    "record_notification_received",
    "record_signature_check",
    "reset_correlation_id",
    "set_correlation_id",
]
