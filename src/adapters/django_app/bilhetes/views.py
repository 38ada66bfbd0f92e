"""
Views Django para o domínio de Bilhetes.

DRIVING ADAPTERS - direcionam requisições HTTP para o Core.

Responsabilidades:
- Receber requisições HTTP
- Validar entrada (Forms)
- Invocar Use Cases via Container DI
- Formatar resposta (HTML, CSV/XLSX)
- Tratamento de erros

Padrões:
- Dependency Injection via Container
- Redirect-after-post: toda escrita volta ao quadro, que busca de novo
- Flash messages para feedback

Princípios:
- Views são THIN (lógica mínima)
- Lógica de negócio fica nos Use Cases
"""

import logging
from datetime import datetime
from typing import Any, Dict, List

from django.views import View
from django.http import HttpResponse, HttpRequest, JsonResponse
from django.shortcuts import render, redirect
from django.contrib import messages
from django.urls import reverse
from django.utils.http import url_has_allowed_host_and_scheme, urlencode

from src.core.bilhetes.dtos import (
    CriarBilheteInputDTO,
    AlterarStatusInputDTO,
    EditarDescricaoInputDTO,
    EnviarImagemInputDTO,
    QuadroOutputDTO,
    RelatorioAnualDTO,
    SerieMensalDTO,
)
from src.core.bilhetes.use_cases import ANO_TODOS
from src.core.shared.exceptions import (
    ValidationError,
    EntityNotFoundError,
    DomainException,
)
from src.config.container import get_container

from .forms import (
    BilheteCreateForm,
    BilheteFiltroForm,
    AlterarStatusForm,
    DescricaoForm,
    ImagemUploadForm,
)
from .sessao import carregar_estado, salvar_estado

logger = logging.getLogger(__name__)


MESES = ("Jan", "Fev", "Mar", "Abr", "Mai", "Jun", "Jul", "Ago", "Set", "Out", "Nov", "Dez")

CORES_GRUPOS = {
    "software": "#3b82f6",
    "hardware": "#f59e0b",
    "ajuda/duvida": "#8b5cf6",
    "suprimentos": "#10b981",
    "busca de imagens": "#ef4444",
    "redes": "#7c3aed",
}

CORES_TIPOS = {
    "preventiva": "#3b82f6",
    "corretiva": "#f59e0b",
    "configuração": "#8b5cf6",
    "suporte usuario": "#10b981",
    "suprimento": "#ef4444",
    "CFTV": "#7c3aed",
}


# =============================================================================
# Mixins
# =============================================================================

class ContainerMixin:
    """
    Mixin que fornece acesso ao DI Container.

    Permite obter services de forma consistente em todas as views.
    """

    def get_container(self):
        return get_container()

    def get_service(self, service_name: str):
        """
        Obtém service do container.

        Args:
            service_name: Nome do provider no container
        """
        return getattr(self.get_container(), service_name)()

    def get_fuso(self):
        return self.get_container().fuso()


class FlashMessageMixin:
    """
    Mixin para adicionar flash messages de forma consistente.
    """

    def success_message(self, request: HttpRequest, message: str) -> None:
        messages.success(request, message)

    def error_message(self, request: HttpRequest, message: str) -> None:
        messages.error(request, message)

    def warning_message(self, request: HttpRequest, message: str) -> None:
        messages.warning(request, message)


class QuadroRedirectMixin:
    """
    Mixin para voltar ao quadro preservando os filtros.

    Os forms do quadro enviam `retorno` com o caminho atual (incluindo a
    query string dos filtros).
    """

    def redirect_quadro(self, request: HttpRequest):
        retorno = request.POST.get('retorno') or ''
        if retorno and url_has_allowed_host_and_scheme(
            retorno,
            allowed_hosts={request.get_host()},
            require_https=request.is_secure(),
        ):
            return redirect(retorno)
        return redirect('bilhetes:quadro')


# =============================================================================
# Novo Bilhete
# =============================================================================

class BilheteCreateView(ContainerMixin, FlashMessageMixin, View):
    """
    Cria novo bilhete.

    GET / - Formulário
    POST / - Processa criação
    """

    template_name = 'bilhetes/novo.html'

    def get(self, request: HttpRequest) -> HttpResponse:
        return render(request, self.template_name, {'form': BilheteCreateForm()})

    def post(self, request: HttpRequest) -> HttpResponse:
        form = BilheteCreateForm(request.POST)

        if not form.is_valid():
            return render(request, self.template_name, {'form': form})

        criar_service = self.get_service('criar_bilhete_service')

        try:
            input_dto = CriarBilheteInputDTO(
                titulo=form.cleaned_data['titulo'],
                descricao=form.cleaned_data['descricao'],
                responsavel=form.cleaned_data['responsavel'],
                grupo=form.cleaned_data['grupo'],
                tipo=form.cleaned_data['tipo'],
            )

            criar_service.execute(input_dto)

            self.success_message(request, "Bilhete criado!")
            return redirect('bilhetes:novo')

        except ValidationError as e:
            logger.warning(f"Validação falhou ao criar bilhete: {e}")
            campo = e.field if e.field in form.fields else None
            form.add_error(campo, str(e))
            return render(request, self.template_name, {'form': form})

        except DomainException as e:
            logger.error(f"Erro ao salvar bilhete: {e}")
            form.add_error(None, str(e))
            return render(request, self.template_name, {'form': form})

        except Exception as e:
            logger.exception(f"Erro inesperado ao criar bilhete: {e}")
            form.add_error(None, "Erro ao criar bilhete. Tente novamente.")
            return render(request, self.template_name, {'form': form})


# =============================================================================
# Quadro
# =============================================================================

class BilheteBoardView(ContainerMixin, FlashMessageMixin, View):
    """
    Quadro de bilhetes em três colunas, com filtros.

    GET /bilhetes/
    GET /bilhetes/?titulo=impressora&status=aberto&data_inicio=2024-01-01
    """

    template_name = 'bilhetes/quadro.html'

    def get(self, request: HttpRequest) -> HttpResponse:
        filtro_form = BilheteFiltroForm(request.GET or None)
        filtro = filtro_form.to_filtro(self.get_fuso())

        listar_service = self.get_service('listar_quadro_service')

        try:
            quadro = listar_service.execute(filtro)
        except DomainException as e:
            logger.error(f"Erro ao carregar quadro: {e}")
            self.error_message(request, f"Erro ao carregar bilhetes: {e}")
            quadro = None
        except Exception as e:
            logger.exception(f"Erro inesperado ao carregar quadro: {e}")
            self.error_message(request, "Erro ao carregar bilhetes.")
            quadro = None

        estado = carregar_estado(request)

        context = {
            'filtro_form': filtro_form,
            'filtros_ativos': not filtro.vazio,
            'colunas': self._montar_colunas(quadro, estado) if quadro else [],
            'total_filtrado': quadro.total_filtrado if quadro else 0,
            'total_geral': quadro.total_geral if quadro else 0,
            'status_choices': AlterarStatusForm.base_fields['status'].choices,
            'retorno': request.get_full_path(),
        }

        return render(request, self.template_name, context)

    @staticmethod
    def _montar_colunas(quadro: QuadroOutputDTO, estado) -> List[Dict[str, Any]]:
        """Junta cada bilhete ao seu estado de edição para o template."""
        colunas = []
        for coluna in quadro.colunas:
            cartoes = [
                {
                    'bilhete': bilhete,
                    'em_edicao': estado.em_edicao(bilhete.id),
                    'rascunho': estado.rascunho(bilhete.id),
                }
                for bilhete in coluna.bilhetes
            ]
            colunas.append({
                'status': coluna.status,
                'rotulo': coluna.rotulo,
                'cartoes': cartoes,
            })
        return colunas


class AlterarStatusView(ContainerMixin, FlashMessageMixin, QuadroRedirectMixin, View):
    """
    Move bilhete para outro status.

    POST /bilhetes/<id>/status/
    """

    def post(self, request: HttpRequest, pk: str) -> HttpResponse:
        form = AlterarStatusForm(request.POST)

        if not form.is_valid():
            self.warning_message(request, "Status inválido.")
            return self.redirect_quadro(request)

        alterar_service = self.get_service('alterar_status_service')

        try:
            alterar_service.execute(
                AlterarStatusInputDTO(bilhete_id=pk, status=form.cleaned_data['status'])
            )

        except EntityNotFoundError:
            logger.warning(f"Bilhete {pk} não encontrado ao alterar status")
            self.warning_message(request, "Bilhete não encontrado.")

        except DomainException as e:
            logger.error(f"Erro ao alterar status do bilhete {pk}: {e}")
            self.warning_message(request, f"Não foi possível alterar o status: {e}")

        except Exception as e:
            logger.exception(f"Erro inesperado ao alterar status do bilhete {pk}: {e}")
            self.warning_message(request, "Não foi possível alterar o status.")

        return self.redirect_quadro(request)


class IniciarEdicaoDescricaoView(QuadroRedirectMixin, View):
    """
    Entra em modo edição da descrição.

    POST /bilhetes/<id>/descricao/editar/
    """

    def post(self, request: HttpRequest, pk: str) -> HttpResponse:
        estado = carregar_estado(request)
        estado.iniciar_edicao(pk, request.POST.get('descricao', ''))
        salvar_estado(request, estado)
        return self.redirect_quadro(request)


class DescricaoView(ContainerMixin, FlashMessageMixin, QuadroRedirectMixin, View):
    """
    Confirma ou cancela a edição da descrição.

    POST /bilhetes/<id>/descricao/  (acao=salvar | acao=cancelar)
    """

    def post(self, request: HttpRequest, pk: str) -> HttpResponse:
        form = DescricaoForm(request.POST)
        estado = carregar_estado(request)

        if not form.is_valid():
            self.warning_message(request, "Dados de descrição inválidos.")
            return self.redirect_quadro(request)

        if form.cleaned_data['acao'] == DescricaoForm.ACAO_CANCELAR:
            estado.cancelar(pk)
            salvar_estado(request, estado)
            return self.redirect_quadro(request)

        editar_service = self.get_service('editar_descricao_service')

        try:
            descricao = estado.confirmar(pk, form.cleaned_data['descricao'])
            editar_service.execute(EditarDescricaoInputDTO(bilhete_id=pk, descricao=descricao))

        except EntityNotFoundError:
            logger.warning(f"Bilhete {pk} não encontrado ao salvar descrição")
            self.warning_message(request, "Bilhete não encontrado.")

        except DomainException as e:
            logger.error(f"Erro ao salvar descrição do bilhete {pk}: {e}")
            self.warning_message(request, f"Não foi possível salvar a descrição: {e}")

        except Exception as e:
            logger.exception(f"Erro inesperado ao salvar descrição do bilhete {pk}: {e}")
            self.warning_message(request, "Não foi possível salvar a descrição.")

        salvar_estado(request, estado)
        return self.redirect_quadro(request)


class EnviarImagemView(ContainerMixin, FlashMessageMixin, QuadroRedirectMixin, View):
    """
    Anexa imagem a um bilhete.

    POST /bilhetes/<id>/imagens/ (multipart)
    """

    def post(self, request: HttpRequest, pk: str) -> HttpResponse:
        form = ImagemUploadForm(request.POST, request.FILES)

        if not form.is_valid():
            erros = "; ".join(form.errors.get('imagem', [])) or "Imagem inválida."
            self.warning_message(request, erros)
            return self.redirect_quadro(request)

        arquivo = form.cleaned_data['imagem']
        enviar_service = self.get_service('enviar_imagem_service')

        try:
            enviar_service.execute(
                EnviarImagemInputDTO(
                    bilhete_id=pk,
                    nome_arquivo=arquivo.name,
                    conteudo=arquivo.read(),
                    content_type=arquivo.content_type,
                )
            )
            self.success_message(request, "Imagem enviada!")

        except DomainException as e:
            logger.error(f"Erro ao enviar imagem do bilhete {pk}: {e}")
            self.warning_message(request, f"Não foi possível enviar a imagem: {e}")

        except Exception as e:
            logger.exception(f"Erro inesperado ao enviar imagem do bilhete {pk}: {e}")
            self.warning_message(request, "Não foi possível enviar a imagem.")

        return self.redirect_quadro(request)


# =============================================================================
# Dashboard
# =============================================================================

class AnoSelecionadoMixin:
    """Interpreta ?ano= (vazio = ano corrente, "todos" = sem filtro)."""

    def resolver_ano(self, request: HttpRequest, relatorio_service):
        return relatorio_service.resolver_ano(request.GET.get('ano'))


class DashboardView(ContainerMixin, FlashMessageMixin, AnoSelecionadoMixin, View):
    """
    Dashboard anual com cartões, gráficos e tabelas.

    GET /dashboard/
    GET /dashboard/?ano=2024
    GET /dashboard/?ano=todos
    """

    template_name = 'bilhetes/dashboard.html'

    def get(self, request: HttpRequest) -> HttpResponse:
        relatorio_service = self.get_service('relatorio_anual_service')
        fuso = self.get_fuso()

        try:
            ano = self.resolver_ano(request, relatorio_service)
        except ValidationError as e:
            self.warning_message(request, str(e))
            return redirect('bilhetes:dashboard')

        try:
            relatorio = relatorio_service.execute(ano)
        except DomainException as e:
            logger.error(f"Erro ao carregar dashboard: {e}")
            self.error_message(request, f"Erro ao carregar dados: {e}")
            relatorio = None
        except Exception as e:
            logger.exception(f"Erro inesperado ao carregar dashboard: {e}")
            self.error_message(request, "Erro ao carregar dados.")
            relatorio = None

        ano_param = ANO_TODOS if ano is None else str(ano)
        anos = relatorio.anos_disponiveis if relatorio else []
        if ano is not None and ano not in anos:
            anos = sorted(anos + [ano])

        context = {
            'relatorio': relatorio,
            'ano': ano,
            'ano_param': ano_param,
            'anos': anos,
            'ano_todos': ANO_TODOS,
            'meses': MESES,
            'tabela_grupos': self._tabela_mensal(relatorio.mensal_por_grupo) if relatorio else [],
            'tabela_tipos': self._tabela_mensal(relatorio.mensal_por_tipo) if relatorio else [],
            'graficos': self._dados_graficos(relatorio) if relatorio else {},
            'atualizado_em': datetime.now(fuso),
        }

        return render(request, self.template_name, context)

    @staticmethod
    def _tabela_mensal(series: List[SerieMensalDTO]) -> List[Dict[str, Any]]:
        """Linhas mês × categoria, mais a linha de totais."""
        linhas = [
            {'mes': mes, 'valores': [serie.dados[i] for serie in series]}
            for i, mes in enumerate(MESES)
        ]
        linhas.append({'mes': 'Total', 'valores': [serie.total for serie in series]})
        return linhas

    @staticmethod
    def _dados_graficos(relatorio: RelatorioAnualDTO) -> Dict[str, Any]:
        """Payload do Chart.js, embutido via json_script."""

        def barras(estatisticas, cores):
            return {
                'labels': [e.nome for e in estatisticas],
                'datasets': [{
                    'label': 'Total',
                    'data': [e.count for e in estatisticas],
                    'backgroundColor': [cores.get(e.nome, '#9ca3af') for e in estatisticas],
                }],
            }

        def linhas(series, cores):
            return {
                'labels': list(MESES),
                'datasets': [
                    {
                        'label': serie.nome,
                        'data': serie.dados,
                        'borderColor': cores.get(serie.nome, '#9ca3af'),
                        'backgroundColor': cores.get(serie.nome, '#9ca3af'),
                        'tension': 0.3,
                    }
                    for serie in series
                ],
            }

        return {
            'barras_grupos': barras(relatorio.por_grupo, CORES_GRUPOS),
            'barras_tipos': barras(relatorio.por_tipo, CORES_TIPOS),
            'linhas_grupos': linhas(relatorio.mensal_por_grupo, CORES_GRUPOS),
            'linhas_tipos': linhas(relatorio.mensal_por_tipo, CORES_TIPOS),
        }


class ExportarView(ContainerMixin, FlashMessageMixin, AnoSelecionadoMixin, View):
    """
    Exporta o conjunto do dashboard.

    GET /dashboard/exportar/csv/?ano=2024
    GET /dashboard/exportar/xlsx/?ano=2024
    """

    BOM = "\ufeff".encode("utf-8")

    def get(self, request: HttpRequest, formato: str) -> HttpResponse:
        relatorio_service = self.get_service('relatorio_anual_service')
        exportar_service = self.get_service('exportar_bilhetes_service')

        try:
            ano = self.resolver_ano(request, relatorio_service)
            arquivo = exportar_service.execute(ano, formato)

        except ValidationError as e:
            self.warning_message(request, str(e))
            return redirect('bilhetes:dashboard')

        except DomainException as e:
            logger.error(f"Erro ao exportar bilhetes: {e}")
            self.error_message(request, f"Falha ao exportar: {e}")
            return redirect(self._url_dashboard(request))

        except Exception as e:
            logger.exception(f"Erro inesperado ao exportar bilhetes: {e}")
            self.error_message(request, "Falha ao gerar o arquivo.")
            return redirect(self._url_dashboard(request))

        conteudo = arquivo.conteudo
        if arquivo.nome_arquivo.endswith('.csv'):
            conteudo = self.BOM + conteudo

        response = HttpResponse(conteudo, content_type=arquivo.content_type)
        response['Content-Disposition'] = f'attachment; filename="{arquivo.nome_arquivo}"'
        return response

    @staticmethod
    def _url_dashboard(request: HttpRequest) -> str:
        ano = request.GET.get('ano')
        url = reverse('bilhetes:dashboard')
        return f"{url}?{urlencode({'ano': ano})}" if ano else url


def health(request: HttpRequest) -> JsonResponse:
    return JsonResponse({'status': 'ok'})
