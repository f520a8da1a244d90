#!/usr/bin/env python3
"""Testa o handshake de challenge do webhook (como a Nylas faz).

Uso:
    python scripts/check_webhook_challenge.py --url http://localhost:3002/webhook/nylas

A Nylas compara a resposta byte a byte; o script aponta os desvios
comuns (aspas, JSON, conteúdo extra).
"""

from __future__ import annotations

import argparse
import os
import secrets
import sys

import httpx

DEFAULT_URL = "http://localhost:3002/webhook/nylas"


def diagnose(expected: str, received: str) -> list[str]:
    """Lista problemas encontrados na resposta do challenge."""
    if received == expected:
        return []
    problems = [f'Esperado "{expected}", recebido "{received}"']
    if expected in received:
        problems.append("O challenge está na resposta, mas com conteúdo extra")
    if '"' in received and expected in received:
        problems.append("A resposta tem aspas em volta do challenge")
    if received.startswith(("{", "[")):
        problems.append("A resposta parece JSON em vez de texto puro")
    return problems


def check_challenge(url: str, timeout: float = 10.0) -> bool:
    challenge = f"test-challenge-{secrets.token_hex(4)}"
    print(f"GET {url}?challenge={challenge}")

    response = httpx.get(
        url,
        params={"challenge": challenge},
        headers={"Accept": "text/plain"},
        timeout=timeout,
    )
    print(f"Status: {response.status_code} {response.reason_phrase}")
    print(f"Content-Type: {response.headers.get('content-type')}")
    print(f"Content-Length: {response.headers.get('content-length')}")

    problems = diagnose(challenge, response.text)
    if response.status_code == 200 and not problems:
        print("OK: challenge devolvido exatamente como enviado")
        return True

    print("FALHOU: challenge não foi devolvido exatamente")
    for problem in problems:
        print(f"- {problem}")
    return False


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--url",
        default=os.getenv("WEBHOOK_URL", DEFAULT_URL),
        help="URL do endpoint de webhook (default: env WEBHOOK_URL)",
    )
    parser.add_argument("--timeout", type=float, default=10.0)
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    try:
        ok = check_challenge(args.url, args.timeout)
    except httpx.HTTPError as exc:
        print(f"Erro ao chamar o webhook: {exc}")
        sys.exit(2)
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
