"""
Modelos Pydantic dos payloads da API.

Separados dos modelos SQLModel para desacoplar a representação pública
(camelCase, sem hash de senha nem códigos) da persistência.
"""
