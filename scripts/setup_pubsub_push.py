#!/usr/bin/env python3
"""Recria a assinatura push do Pub/Sub apontando para /pubsub/nylas.

Uso:
    python scripts/setup_pubsub_push.py --project-id meu-projeto \\
        --push-endpoint https://meu-servico.run.app/pubsub/nylas

Se a assinatura já existir ela é removida e criada de novo.
"""

from __future__ import annotations

import argparse
import subprocess
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from config.settings import get_pubsub_settings  # noqa: E402


def _gcloud(*args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
    command = ["gcloud", "pubsub", "subscriptions", *args]
    print(f"Executando: {' '.join(command)}")
    return subprocess.run(command, check=check, capture_output=True, text=True)


def setup_push_subscription(
    project_id: str,
    topic: str,
    subscription: str,
    push_endpoint: str,
    ack_deadline_seconds: int,
) -> str:
    exists = _gcloud("describe", subscription, f"--project={project_id}", check=False)
    if exists.returncode == 0:
        print(f"Assinatura {subscription} já existe. Removendo...")
        _gcloud("delete", subscription, f"--project={project_id}", "--quiet")
    else:
        print(f"Assinatura {subscription} ainda não existe. Criando...")

    _gcloud(
        "create",
        subscription,
        f"--topic={topic}",
        f"--push-endpoint={push_endpoint}",
        f"--ack-deadline={ack_deadline_seconds}",
        f"--project={project_id}",
    )
    return _gcloud("describe", subscription, f"--project={project_id}").stdout


def parse_args() -> argparse.Namespace:
    settings = get_pubsub_settings()
    parser = argparse.ArgumentParser(description="Cria assinatura push para /pubsub/nylas")
    parser.add_argument("--project-id", default=settings.project_id)
    parser.add_argument("--topic", default=settings.topic)
    parser.add_argument("--subscription", default=settings.push_subscription)
    parser.add_argument("--push-endpoint", default=settings.push_endpoint)
    parser.add_argument("--ack-deadline", type=int, default=settings.ack_deadline_seconds)
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    if not args.project_id or not args.push_endpoint:
        print("Informe --project-id e --push-endpoint (ou PUBSUB_PROJECT_ID/PUBSUB_PUSH_ENDPOINT)")
        sys.exit(2)

    try:
        details = setup_push_subscription(
            args.project_id,
            args.topic,
            args.subscription,
            args.push_endpoint,
            args.ack_deadline,
        )
    except subprocess.CalledProcessError as exc:
        print(f"Erro ao configurar assinatura: {exc.stderr or exc}")
        sys.exit(1)

    print("\nAssinatura push criada:")
    print(details)
    print(f"O serviço precisa estar acessível em {args.push_endpoint}")


if __name__ == "__main__":
    main()
