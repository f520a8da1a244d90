"""Normalizers — conversão de payloads externos para modelos internos.

Estrutura:
- nylas/: classificador de notificações e resumos por categoria
"""

from .nylas import classify_notification

__all__ = [
    "classify_notification",
]
