from sqlmodel import SQLModel
from app.model import Account, Client


# Importa todos os modelos para que o SQLModel os registre
__all__ = ["Base", "Account", "Client"]


# Base para criar tabelas
Base = SQLModel.metadata
