"""
Persistência do EstadoQuadro na sessão Django.

O estado de edição de descrições vive na sessão do usuário entre os
redirects do quadro.
"""

from django.http import HttpRequest

from src.core.bilhetes.estado import EstadoQuadro


CHAVE_SESSAO = 'bilhetes_estado_quadro'


def carregar_estado(request: HttpRequest) -> EstadoQuadro:
    return EstadoQuadro.from_dict(request.session.get(CHAVE_SESSAO))


def salvar_estado(request: HttpRequest, estado: EstadoQuadro) -> None:
    if len(estado):
        request.session[CHAVE_SESSAO] = estado.to_dict()
    else:
        request.session.pop(CHAVE_SESSAO, None)
