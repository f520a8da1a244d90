#!/usr/bin/env python3
"""Registra o webhook do serviço na Nylas API v3.

Uso:
    NYLAS_API_KEY=... python scripts/register_webhook.py \\
        --webhook-url https://meu-servico.run.app/webhook/nylas \\
        --notification-email ops@example.com

A resposta traz o `webhook_secret`: configure-o em NYLAS_WEBHOOK_SECRET
(ou no Secret Manager) para ativar a verificação de assinatura.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

import httpx

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from config.settings import get_nylas_settings  # noqa: E402

DEFAULT_TRIGGER_TYPES = (
    "grant.created",
    "grant.deleted",
    "grant.expired",
    "message.created",
    "message.updated",
    "message.send_success",
    "message.send_failed",
)


def build_registration_payload(
    webhook_url: str,
    notification_email: str,
    trigger_types: list[str],
    description: str,
) -> dict[str, object]:
    return {
        "trigger_types": trigger_types,
        "description": description,
        "webhook_url": webhook_url,
        "notification_email_addresses": [notification_email],
    }


def register_webhook(
    endpoint: str,
    api_key: str,
    payload: dict[str, object],
    timeout: float,
) -> httpx.Response:
    return httpx.post(
        endpoint,
        json=payload,
        headers={"Authorization": f"Bearer {api_key}"},
        timeout=timeout,
    )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Registra webhook na Nylas")
    parser.add_argument("--webhook-url", default=os.getenv("WEBHOOK_URL", ""))
    parser.add_argument("--notification-email", default=os.getenv("NOTIFICATION_EMAIL", ""))
    parser.add_argument("--description", default="Email Webhook")
    parser.add_argument(
        "--trigger",
        action="append",
        dest="triggers",
        help="Trigger type (repetível). Default: grant.*, message.*",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    settings = get_nylas_settings()
    if not settings.api_key:
        print("NYLAS_API_KEY não configurada")
        sys.exit(2)
    if not args.webhook_url or not args.notification_email:
        print("Informe --webhook-url e --notification-email")
        sys.exit(2)

    payload = build_registration_payload(
        args.webhook_url,
        args.notification_email,
        args.triggers or list(DEFAULT_TRIGGER_TYPES),
        args.description,
    )
    print(f"Registrando webhook em {settings.webhooks_endpoint}")
    print(f"Webhook URL: {args.webhook_url}")

    try:
        response = register_webhook(
            settings.webhooks_endpoint,
            settings.api_key,
            payload,
            settings.request_timeout_seconds,
        )
    except httpx.HTTPError as exc:
        print(f"Erro ao registrar webhook: {exc}")
        sys.exit(1)

    try:
        data = response.json()
    except ValueError:
        data = {"raw": response.text}

    if response.is_success:
        webhook = data.get("data", data)
        print("Webhook registrado com sucesso!")
        print(f"Webhook ID: {webhook.get('id')}")
        print(f"Webhook Secret: {webhook.get('webhook_secret')}")
        print("IMPORTANTE: guarde o webhook_secret em NYLAS_WEBHOOK_SECRET")
        return

    print(f"Falha ao registrar webhook: {response.status_code} {response.reason_phrase}")
    print(json.dumps(data, indent=2, ensure_ascii=False))
    sys.exit(1)


if __name__ == "__main__":
    main()
