"""Rotas HTTP da API — adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (webhook, push Pub/Sub, health)
- Captura do corpo bruto e validação inicial do request
- Delegação para connectors/use_cases
- Respostas HTTP apropriadas

Estrutura:
- routes/nylas/: webhook direto e push do Pub/Sub
- routes/health/: health checks e readiness

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
