"""App — orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- coordinators/: roteamento de notificações por categoria
- use_cases/: casos de uso (classificar e despachar)
- infra/: implementações concretas de IO (secrets, sinks)
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas via logs

Padrão: app executa; api adapta; config configura; utils apoia.
"""
