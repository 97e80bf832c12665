from app.model.base import BaseModel
from app.model.account import Account, AccountRole
from app.model.client import Client, Gender

__all__ = ["BaseModel", "Account", "AccountRole", "Client", "Gender"]
