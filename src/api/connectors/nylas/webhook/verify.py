"""Handshake de challenge exigido pela Nylas antes de ativar o webhook.

A Nylas envia GET ?challenge=<token> e compara byte a byte a resposta.
Qualquer desvio (aspas, JSON, espaço, newline) reprova o endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

CHALLENGE_MEDIA_TYPE = "text/plain"


class ChallengeState(Enum):
    """Estados do handshake (por request)."""

    AWAITING_CHALLENGE = "awaiting-challenge"
    ANSWERED = "answered"


@dataclass(frozen=True, slots=True)
class ChallengeReply:
    """Resposta do handshake.

    Attributes:
        state: Estado final do handshake
        body: Bytes exatos do token (vazio se ausente)
        token_present: False quando o GET veio sem challenge (probe)
    """

    state: ChallengeState
    body: bytes
    token_present: bool
    media_type: str = CHALLENGE_MEDIA_TYPE


def answer_challenge(challenge: str | None) -> ChallengeReply:
    """Monta a resposta do challenge.

    Ausência de token não é erro: responde vazio como probe no-op.
    """
    if challenge is None:
        return ChallengeReply(
            state=ChallengeState.ANSWERED,
            body=b"",
            token_present=False,
        )
    return ChallengeReply(
        state=ChallengeState.ANSWERED,
        body=challenge.encode("utf-8"),
        token_present=True,
    )
