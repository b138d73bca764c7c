"""
Authentication and identity related use cases.
"""

from __future__ import annotations

from gestor_produtos.db.errors import StoreError
from gestor_produtos.domain.records import UserRecord
from gestor_produtos.repositories.product_repository import ProductRepository

INVALID_CREDENTIALS = "E-mail ou senha incorretos."
ACCOUNT_EXISTS = "Este e-mail já está cadastrado."
ACCOUNT_CREATED = "Conta criada com sucesso! Faça login para continuar."


class AuthError(Exception):
    """Base class for authentication-related exceptions."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RegistrationError(AuthError):
    pass


class AccountExistsError(AuthError):
    pass


class InvalidCredentialsError(AuthError):
    pass


class AuthService:
    """Handles registration and login against the users collection."""

    def __init__(self, repository: ProductRepository) -> None:
        self.repository = repository

    # -------------------------------------- login --------------------------------------
    def login(self, email: str, password: str) -> UserRecord:
        """
        Point lookup followed by exact password comparison. Unknown e-mail and
        wrong password produce the same error. StoreError propagates.
        """
        user = self.repository.get_user(email or "")
        if user is None or user.password != (password or ""):
            raise InvalidCredentialsError(INVALID_CREDENTIALS)
        return user

    # -------------------------------------- registro --------------------------------------
    def register(self, name: str, email: str, password: str) -> UserRecord:
        raw_email = email or ""
        if not raw_email.strip():
            raise RegistrationError("Erro ao criar conta: e-mail obrigatorio")
        try:
            if self.repository.get_user(raw_email) is not None:
                raise AccountExistsError(ACCOUNT_EXISTS)
            user = UserRecord(name=name or "", email=raw_email, password=password or "")
            # Not atomic with the lookup above: a concurrent registration can win the insert.
            self.repository.add_user(user)
        except StoreError as exc:
            raise RegistrationError(f"Erro ao criar conta: {exc.code}") from exc
        return user
