"""
Application controller: turns user actions into service calls and keeps the
state of the three screens (login, register, products).

Every flow catches its own failures and reports them as a message on the
current screen or as a blocking alert; nothing is retried.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from gestor_produtos.db.result import capture
from gestor_produtos.domain.records import format_price
from gestor_produtos.services.auth_service import (
    ACCOUNT_CREATED,
    AccountExistsError,
    AuthService,
    InvalidCredentialsError,
    RegistrationError,
)
from gestor_produtos.services.context import AppContext
from gestor_produtos.services.product_service import ProductError, ProductService

logger = logging.getLogger(__name__)

EMPTY_PLACEHOLDER = "Nenhum produto cadastrado."
DELETE_CONFIRMATION = "Tem certeza que deseja excluir este produto?"


class View(str, enum.Enum):
    LOGIN = "login"
    REGISTER = "register"
    PRODUCTS = "products"


@dataclass(frozen=True)
class Message:
    text: str
    kind: str  # "success" | "danger"


@dataclass(frozen=True)
class ProductRow:
    id: int
    name: str
    description: str
    price: str
    quantity: int


@dataclass
class ViewState:
    view: View = View.LOGIN
    user_name: str = ""
    message: Optional[Message] = None
    alert: Optional[str] = None
    rows: list[ProductRow] = field(default_factory=list)

    @property
    def placeholder(self) -> Optional[str]:
        if self.view is View.PRODUCTS and not self.rows:
            return EMPTY_PLACEHOLDER
        return None


class AppController:
    def __init__(self, context: AppContext) -> None:
        self.context = context
        self.state = ViewState()
        repository = context.repository
        self.auth = AuthService(repository) if repository else None
        self.products = ProductService(repository) if repository else None

    # -------------------------------------- helpers --------------------------------------
    def _open_failed(self, message_view: View) -> bool:
        """Report the startup failure on the current screen; True when the store is missing."""
        error = self.context.open_error
        if self.context.ready:
            return False
        text = error.message if error else "Erro ao abrir o banco de dados"
        self.state.view = message_view
        self.state.message = Message(text, "danger")
        return True

    def _show(self, view: View, message: Optional[Message] = None) -> None:
        self.state.view = view
        self.state.message = message
        self.state.alert = None
        if view is not View.PRODUCTS:
            self.state.rows = []
            self.state.user_name = ""

    def take_alert(self) -> Optional[str]:
        alert, self.state.alert = self.state.alert, None
        return alert

    # -------------------------------------- telas --------------------------------------
    def start(self) -> ViewState:
        if self._open_failed(View.LOGIN):
            return self.state
        user = self.context.session.restore()
        if user:
            self._show_products()
        else:
            self._show(View.LOGIN)
        return self.state

    def show_login(self, message: Optional[Message] = None) -> ViewState:
        self._show(View.LOGIN, message)
        return self.state

    def show_register(self) -> ViewState:
        self._show(View.REGISTER)
        return self.state

    def _show_products(self) -> None:
        user = self.context.session.current
        self._show(View.PRODUCTS)
        self.state.user_name = user.name if user else ""
        self.load_products()

    # -------------------------------------- fluxos --------------------------------------
    def submit_login(self, email: str, password: str) -> ViewState:
        if self._open_failed(View.LOGIN):
            return self.state
        try:
            result = capture(self.auth.login, email, password)
        except InvalidCredentialsError as exc:
            self.state.message = Message(exc.message, "danger")
            return self.state
        if not result.ok:
            self.state.message = Message(f"Erro ao fazer login: {result.error_code}", "danger")
            return self.state
        self.context.session.start(result.value)
        self._show_products()
        return self.state

    def submit_register(self, name: str, email: str, password: str) -> ViewState:
        if self._open_failed(View.REGISTER):
            return self.state
        try:
            self.auth.register(name, email, password)
        except (AccountExistsError, RegistrationError) as exc:
            self.state.view = View.REGISTER
            self.state.message = Message(exc.message, "danger")
            return self.state
        return self.show_login(Message(ACCOUNT_CREATED, "success"))

    def submit_product(self, name: str, description: str, price, quantity) -> ViewState:
        user = self.context.session.current
        if user is None:
            return self.show_login()
        if self._open_failed(View.PRODUCTS):
            return self.state
        try:
            result = capture(self.products.add_product, user.email, name, description, price, quantity)
        except ProductError as exc:
            self.state.alert = f"Erro ao adicionar produto: {exc.message}"
            return self.state
        if not result.ok:
            self.state.alert = f"Erro ao adicionar produto: {result.error_code}"
            return self.state
        self.load_products()
        return self.state

    def request_delete(self, product_id: int, confirm: Callable[[str], bool]) -> ViewState:
        if self.context.session.current is None:
            return self.show_login()
        if self._open_failed(View.PRODUCTS):
            return self.state
        if not confirm(DELETE_CONFIRMATION):
            return self.state
        result = capture(self.products.delete_product, product_id)
        if not result.ok:
            self.state.alert = f"Erro ao excluir produto: {result.error_code}"
            return self.state
        self.load_products()
        return self.state

    def load_products(self) -> list[ProductRow]:
        user = self.context.session.current
        self.state.rows = []
        if user is None or self.products is None:
            return self.state.rows
        result = capture(self.products.list_products, user.email)
        if not result.ok:
            logger.error("Erro ao carregar produtos", extra={"email": user.email, "code": result.error_code})
            return self.state.rows
        self.state.rows = [
            ProductRow(
                id=p.id,
                name=p.name,
                description=p.description or "-",
                price=format_price(p.price),
                quantity=p.quantity,
            )
            for p in result.value
        ]
        return self.state.rows

    def logout(self) -> ViewState:
        self.context.session.clear()
        return self.show_login()
