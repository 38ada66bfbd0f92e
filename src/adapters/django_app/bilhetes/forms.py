"""
Django Forms para validação de entrada.

Forms são DRIVING ADAPTERS que validam dados antes de
passar para os Use Cases.

Responsabilidades:
- Validação estrutural (campos obrigatórios, escolhas, datas)
- Sanitização de entrada
- Mensagens de erro amigáveis

Princípios:
- Forms NÃO contêm lógica de negócio
- Lógica de negócio fica nas Entities/Use Cases
"""

from datetime import tzinfo

from django import forms

from src.core.bilhetes.entities import BilheteStatus, RESPONSAVEIS, GRUPOS, TIPOS
from src.core.bilhetes.filtros import FiltroBilhetes


def _choices(valores):
    return [(v, v) for v in valores]


def _choices_com_todos(valores, rotulo="Todos"):
    return [('', rotulo)] + _choices(valores)


STATUS_CHOICES = [(s.value, s.rotulo) for s in BilheteStatus]


class BilheteCreateForm(forms.Form):
    """
    Form para criação de bilhete.

    Valida dados básicos antes de passar para CriarBilheteService.
    Status não é editável: todo bilhete nasce "aberto".
    """

    titulo = forms.CharField(
        label='Título',
        max_length=200,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': 'Título do bilhete...',
        }),
        error_messages={
            'required': 'Título é obrigatório',
            'max_length': 'Título deve ter no máximo 200 caracteres',
        },
    )

    descricao = forms.CharField(
        label='Descrição',
        required=False,
        max_length=5000,
        widget=forms.Textarea(attrs={
            'class': 'form-control',
            'rows': 4,
            'placeholder': 'Descreva o problema...',
        }),
    )

    responsavel = forms.ChoiceField(
        label='Responsável',
        choices=_choices(RESPONSAVEIS),
        initial=RESPONSAVEIS[0],
        widget=forms.RadioSelect(attrs={'class': 'btn-check'}),
    )

    grupo = forms.ChoiceField(
        label='Grupo',
        choices=_choices(GRUPOS),
        initial=GRUPOS[0],
        widget=forms.RadioSelect(attrs={'class': 'btn-check'}),
    )

    tipo = forms.ChoiceField(
        label='Tipo',
        choices=_choices(TIPOS),
        initial=TIPOS[0],
        widget=forms.RadioSelect(attrs={'class': 'btn-check'}),
    )

    def clean_titulo(self):
        titulo = self.cleaned_data['titulo'].strip()
        if not titulo:
            raise forms.ValidationError('Título é obrigatório')
        return titulo

    def clean_descricao(self):
        return (self.cleaned_data.get('descricao') or '').strip()


class BilheteFiltroForm(forms.Form):
    """
    Form de filtros do quadro (GET).

    Campos vazios não filtram. Campos inválidos (ex: data mal formada)
    são ignorados e o erro é exibido ao lado do campo.
    """

    titulo = forms.CharField(
        label='Título',
        required=False,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': 'Buscar por título...',
        }),
    )

    grupo = forms.ChoiceField(
        label='Grupo',
        required=False,
        choices=_choices_com_todos(GRUPOS),
        widget=forms.Select(attrs={'class': 'form-select'}),
    )

    tipo = forms.ChoiceField(
        label='Tipo',
        required=False,
        choices=_choices_com_todos(TIPOS),
        widget=forms.Select(attrs={'class': 'form-select'}),
    )

    status = forms.ChoiceField(
        label='Status',
        required=False,
        choices=[('', 'Todos')] + STATUS_CHOICES,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )

    data_inicio = forms.DateField(
        label='De',
        required=False,
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
    )

    data_fim = forms.DateField(
        label='Até',
        required=False,
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
    )

    def to_filtro(self, tz: tzinfo) -> FiltroBilhetes:
        """Converte os campos válidos em FiltroBilhetes."""
        if not self.is_bound:
            return FiltroBilhetes(tz=tz)

        self.is_valid()
        dados = self.cleaned_data

        return FiltroBilhetes(
            titulo=(dados.get('titulo') or '').strip(),
            grupo=dados.get('grupo') or '',
            tipo=dados.get('tipo') or '',
            status=dados.get('status') or '',
            data_inicio=dados.get('data_inicio'),
            data_fim=dados.get('data_fim'),
            tz=tz,
        )


class AlterarStatusForm(forms.Form):
    status = forms.ChoiceField(
        choices=STATUS_CHOICES,
        error_messages={
            'required': 'Status é obrigatório',
            'invalid_choice': 'Status inválido',
        },
    )


class DescricaoForm(forms.Form):
    """
    Confirmação ou cancelamento da edição de descrição.

    Descrição vazia é permitida.
    """

    ACAO_SALVAR = 'salvar'
    ACAO_CANCELAR = 'cancelar'

    descricao = forms.CharField(
        required=False,
        strip=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
    )

    acao = forms.ChoiceField(
        choices=[(ACAO_SALVAR, 'Salvar'), (ACAO_CANCELAR, 'Cancelar')],
        initial=ACAO_SALVAR,
    )


class ImagemUploadForm(forms.Form):
    """Upload de uma imagem para um bilhete (somente image/*)."""

    imagem = forms.FileField(
        label='Imagem',
        widget=forms.ClearableFileInput(attrs={
            'class': 'form-control form-control-sm',
            'accept': 'image/*',
        }),
        error_messages={
            'required': 'Selecione uma imagem',
            'empty': 'Arquivo vazio',
        },
    )

    def clean_imagem(self):
        arquivo = self.cleaned_data['imagem']
        content_type = getattr(arquivo, 'content_type', '') or ''
        if not content_type.startswith('image/'):
            raise forms.ValidationError('Apenas arquivos de imagem são aceitos')
        return arquivo
