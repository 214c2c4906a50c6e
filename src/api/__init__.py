"""API: camada de borda e adapters do WhatsApp.

Responsabilidades:
- Receber requests externos (webhook, cron)
- Validar assinaturas e payloads
- Normalizar dados para modelos internos
- Construir payloads para a Graph API

Subpastas:
- connectors/: adapters HTTP
- normalizers/: conversão de payloads externos para modelos internos
- payload_builders/: construção de payloads para APIs externas
- routes/: endpoints HTTP (webhook, cron, health)

NÃO PODE conter: regras de negócio, persistência, orquestração de use cases.
"""
