"""
Core Domain Layer - O Hexágono.

Lógica de negócio pura do sistema de Bilhetes, sem dependências de
frameworks. O serviço remoto de dados é acessado apenas através do
port BilheteGateway.
"""
