#!/usr/bin/env python
"""
Popula o gateway configurado com bilhetes de exemplo.

Este script:
1. Configura Django settings
2. Verifica acesso ao gateway (lista bilhetes)
3. Insere bilhetes de exemplo (opcional)

Uso:
    python scripts/popular_bilhetes.py --check-only
    python scripts/popular_bilhetes.py --with-sample-data
"""

import os
import sys
import argparse

# Adicionar raiz do projeto ao path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


SAMPLE_BILHETES = [
    {
        'titulo': 'Impressora do financeiro travada',
        'descricao': 'Papel preso na bandeja 2, painel mostra erro E-302.',
        'responsavel': 'Erik',
        'grupo': 'hardware',
        'tipo': 'corretiva',
    },
    {
        'titulo': 'Instalar pacote Office na recepção',
        'descricao': 'Máquina nova, sem licença ativada.',
        'responsavel': 'Wesley',
        'grupo': 'software',
        'tipo': 'configuração',
    },
    {
        'titulo': 'Câmera do estacionamento sem imagem',
        'descricao': '',
        'responsavel': 'Wilson',
        'grupo': 'busca de imagens',
        'tipo': 'CFTV',
    },
    {
        'titulo': 'Repor toner da copiadora',
        'descricao': 'Modelo TN-1060.',
        'responsavel': 'Erik',
        'grupo': 'suprimentos',
        'tipo': 'suprimento',
    },
    {
        'titulo': 'Wi-Fi instável no salão social',
        'descricao': 'Quedas frequentes à noite.',
        'responsavel': 'Wesley',
        'grupo': 'redes',
        'tipo': 'preventiva',
    },
]


def setup_django():
    """Configura Django para uso standalone."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'src.config.settings')

    import django
    django.setup()


def check_connection() -> bool:
    """Verifica acesso ao gateway."""
    from src.config.container import get_container
    from src.core.shared.exceptions import DomainException

    print("🔍 Verificando acesso ao gateway...")

    try:
        total = len(get_container().gateway().listar_bilhetes())
        print(f"✅ Conexão OK! {total} bilhetes encontrados.")
        return True
    except DomainException as e:
        print(f"❌ Erro de conexão: {e}")
        return False


def create_sample_data():
    """Insere bilhetes de exemplo."""
    from src.config.container import get_container
    from src.core.bilhetes.dtos import CriarBilheteInputDTO

    service = get_container().criar_bilhete_service()

    print("📝 Criando bilhetes de exemplo...")

    for dados in SAMPLE_BILHETES:
        output = service.execute(CriarBilheteInputDTO(**dados))
        print(f"   ✓ #{output.id} {output.titulo[:50]}")

    print(f"✅ {len(SAMPLE_BILHETES)} bilhetes criados!")


def show_info():
    """Mostra informações do setup."""
    from django.conf import settings

    print("\n" + "=" * 60)
    print("📊 Informações do Setup")
    print("=" * 60)
    print(f"  Gateway: {settings.BILHETES_GATEWAY}")
    print(f"  Supabase URL: {settings.SUPABASE_URL or '(não definida)'}")
    print(f"  Fuso: {settings.BILHETES_TIME_ZONE}")
    print(f"  Debug Mode: {settings.DEBUG}")
    print("=" * 60)
    print("\n🚀 Próximos passos:")
    print("   1. python manage.py runserver")
    print("   2. Acesse: http://localhost:8000/")
    print("   3. Acesse: http://localhost:8000/dashboard/")
    print("\n")


def main():
    parser = argparse.ArgumentParser(description='Popula o gateway com bilhetes de exemplo')
    parser.add_argument(
        '--with-sample-data',
        action='store_true',
        help='Inserir bilhetes de exemplo'
    )
    parser.add_argument(
        '--check-only',
        action='store_true',
        help='Apenas verificar acesso ao gateway'
    )

    args = parser.parse_args()

    print("\n" + "=" * 60)
    print("🔧 Bilhetes - Popular dados")
    print("=" * 60 + "\n")

    setup_django()

    if not check_connection():
        print("\n⚠️  Verifique SUPABASE_URL e SUPABASE_KEY no .env.")
        return

    if args.check_only:
        return

    if args.with_sample_data:
        create_sample_data()

    show_info()


if __name__ == '__main__':
    main()
