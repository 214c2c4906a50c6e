"""App: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: despacho de lembretes e mensagens recebidas
- services/: serviços de aplicação (telefone, parser, textos, compromissos)
- domain/: modelos de domínio (compromissos, lembretes, auditoria)
- infra/: implementações concretas de IO (stores, cache)
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas via logs
- constants/: constantes da aplicação

Padrão: app executa; api adapta; utils apoia.
"""
