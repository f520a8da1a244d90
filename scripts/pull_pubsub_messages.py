#!/usr/bin/env python3
"""Puxa mensagens de uma assinatura pull do Pub/Sub e decodifica o payload.

Alternativa ao push para inspeção manual. Usa o gcloud CLI com
--auto-ack: as mensagens puxadas são confirmadas.

Uso:
    python scripts/pull_pubsub_messages.py --project-id meu-projeto --limit 5
"""

from __future__ import annotations

import argparse
import json
import subprocess
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from api.connectors.nylas.envelope import (  # noqa: E402
    NotificationEnvelope,
    PubSubMessage,
    decode_envelope_data,
)
from config.settings import get_pubsub_settings  # noqa: E402
from utils.errors import DecodeError  # noqa: E402


def pull_messages(project_id: str, subscription: str, limit: int) -> list[dict]:
    command = [
        "gcloud",
        "pubsub",
        "subscriptions",
        "pull",
        subscription,
        f"--project={project_id}",
        "--auto-ack",
        f"--limit={limit}",
        "--format=json",
    ]
    print(f"Executando: {' '.join(command)}")
    output = subprocess.run(command, check=True, capture_output=True, text=True).stdout
    if not output.strip():
        return []
    return json.loads(output)


def render_message(index: int, received: dict) -> None:
    # gcloud devolve {"ackId": ..., "message": {...}}; versões antigas, a mensagem direto
    raw_message = received.get("message", received)
    message = PubSubMessage.model_validate(raw_message)

    print(f"\n--- Mensagem {index} ---")
    print(f"Message ID: {message.message_id}")
    print(f"Publish Time: {message.publish_time}")
    for key, value in (message.attributes or {}).items():
        print(f"  {key}: {value}")

    try:
        decoded = decode_envelope_data(NotificationEnvelope(message=message))
    except DecodeError as exc:
        print(f"Não foi possível decodificar data ({exc})")
        return

    try:
        print(json.dumps(json.loads(decoded), indent=2, ensure_ascii=False))
    except json.JSONDecodeError:
        print(decoded)


def subscription_exists(project_id: str, subscription: str) -> bool:
    result = subprocess.run(
        ["gcloud", "pubsub", "subscriptions", "describe", subscription, f"--project={project_id}"],
        capture_output=True,
        check=False,
    )
    return result.returncode == 0


def parse_args() -> argparse.Namespace:
    settings = get_pubsub_settings()
    parser = argparse.ArgumentParser(description="Pull manual de notificações Nylas no Pub/Sub")
    parser.add_argument("--project-id", default=settings.project_id)
    parser.add_argument("--subscription", default=settings.pull_subscription)
    parser.add_argument("--topic", default=settings.topic)
    parser.add_argument("--limit", type=int, default=settings.pull_max_messages)
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    if not args.project_id:
        print("Informe --project-id ou PUBSUB_PROJECT_ID/GCP_PROJECT")
        sys.exit(2)

    try:
        messages = pull_messages(args.project_id, args.subscription, args.limit)
    except subprocess.CalledProcessError as exc:
        print(f"Erro ao puxar mensagens: {exc.stderr or exc}")
        if not subscription_exists(args.project_id, args.subscription):
            print(
                f'Assinatura "{args.subscription}" não existe. Crie com:\n'
                f"gcloud pubsub subscriptions create {args.subscription} "
                f"--topic={args.topic} --project={args.project_id}"
            )
        sys.exit(1)

    if not messages:
        print("Nenhuma mensagem disponível na assinatura.")
        return

    print(f"Recebidas {len(messages)} mensagem(ns):")
    for index, received in enumerate(messages, start=1):
        render_message(index, received)
    print("\nMensagens confirmadas automaticamente (--auto-ack).")


if __name__ == "__main__":
    main()
