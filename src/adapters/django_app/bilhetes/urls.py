"""
URL patterns para o domínio de Bilhetes.

Endpoints HTML:
- GET/POST / - Novo bilhete
- GET /bilhetes/ - Quadro com filtros
- POST /bilhetes/<id>/status/ - Alterar status
- POST /bilhetes/<id>/descricao/editar/ - Entrar em modo edição
- POST /bilhetes/<id>/descricao/ - Salvar ou cancelar edição
- POST /bilhetes/<id>/imagens/ - Enviar imagem
- GET /dashboard/ - Dashboard anual

Downloads:
- GET /dashboard/exportar/csv/ - CSV do ano selecionado
- GET /dashboard/exportar/xlsx/ - Planilha do ano selecionado
"""

from django.urls import path
from . import views

app_name = 'bilhetes'

urlpatterns = [
    # Novo bilhete
    path('', views.BilheteCreateView.as_view(), name='novo'),

    # Quadro
    path('bilhetes/', views.BilheteBoardView.as_view(), name='quadro'),

    # Ações do quadro
    path('bilhetes/<str:pk>/status/', views.AlterarStatusView.as_view(), name='status'),
    path(
        'bilhetes/<str:pk>/descricao/editar/',
        views.IniciarEdicaoDescricaoView.as_view(),
        name='descricao_editar',
    ),
    path('bilhetes/<str:pk>/descricao/', views.DescricaoView.as_view(), name='descricao'),
    path('bilhetes/<str:pk>/imagens/', views.EnviarImagemView.as_view(), name='imagens'),

    # Dashboard
    path('dashboard/', views.DashboardView.as_view(), name='dashboard'),
    path(
        'dashboard/exportar/<str:formato>/',
        views.ExportarView.as_view(),
        name='exportar',
    ),
]
