"""Routers da Nylas — webhook direto e push do Pub/Sub."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.nylas.pubsub import router as pubsub_router
from api.routes.nylas.webhook import router as webhook_router

WEBHOOK_PREFIX = "/webhook/nylas"
PUBSUB_PREFIX = "/pubsub/nylas"

router = APIRouter()

# Webhook endpoints (GET para challenge, POST para notificações)
router.include_router(webhook_router, prefix=WEBHOOK_PREFIX)
# Push do Pub/Sub (envelope base64)
router.include_router(pubsub_router, prefix=PUBSUB_PREFIX)
