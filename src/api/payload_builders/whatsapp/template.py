"""Builder para mensagens de template."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.protocols.models import OutboundMessageRequest


class TemplatePayloadBuilder:
    """Builder para templates com parâmetros posicionais no body."""

    def build(self, request: OutboundMessageRequest) -> dict[str, Any]:
        """Constrói o objeto template.

        Os parâmetros preenchem {{1}}, {{2}}... na ordem recebida.
        """
        template_obj: dict[str, Any] = {
            "name": request.template_name,
            "language": {"code": request.language or "pt_BR"},
        }

        if request.template_params:
            template_obj["components"] = [
                {
                    "type": "body",
                    "parameters": [
                        {"type": "text", "text": str(p)} for p in request.template_params
                    ],
                }
            ]

        return {"template": template_obj}
