"""Connectors — adapters de borda para provedores externos.

Estrutura:
- nylas/: webhook Nylas v3 (challenge, assinatura) e envelope Pub/Sub
"""

__all__: list[str] = []
