"""API — camada de borda da entrada de notificações Nylas.

Responsabilidades:
- Receber requests do webhook direto e do push do Pub/Sub
- Validar assinaturas e desembrulhar envelopes
- Classificar notificações em modelos internos

Subpastas:
- connectors/: assinatura HMAC, challenge e envelope Pub/Sub
- normalizers/: classificação e resumos por categoria
- routes/: endpoints HTTP (webhook, pubsub, health)

NÃO PODE conter: orquestração de use cases ou IO de infraestrutura.
"""
