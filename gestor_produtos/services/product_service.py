"""Product use cases: parse form input, check ownership, list and delete."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from gestor_produtos.domain.records import ProductRecord, to_money
from gestor_produtos.repositories.product_repository import ProductRepository

# products.price is Numeric(12, 2); products.quantity is a signed 64-bit integer
MAX_PRICE = Decimal("9999999999.99")
MAX_QUANTITY = 2**63 - 1


class ProductError(Exception):
    """Base exception for product workflow."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidProductError(ProductError):
    """Raised when name, price or quantity cannot be accepted."""


class OwnerNotFoundError(ProductError):
    """Raised when the owner e-mail does not match any user."""


def parse_price(value) -> Decimal:
    try:
        price = Decimal(str(value).strip().replace(",", "."))
        if not price.is_finite() or price < 0:
            raise InvalidProductError("Preco invalido")
        price = to_money(price)
    except InvalidOperation:
        raise InvalidProductError("Preco invalido")
    if price > MAX_PRICE:
        raise InvalidProductError("Preco invalido")
    return price


def parse_quantity(value) -> int:
    try:
        quantity = int(str(value).strip())
    except ValueError:
        raise InvalidProductError("Quantidade invalida")
    if quantity < 0 or quantity > MAX_QUANTITY:
        raise InvalidProductError("Quantidade invalida")
    return quantity


class ProductService:
    def __init__(self, repository: ProductRepository) -> None:
        self.repository = repository

    def add_product(self, owner_email: str, name: str, description: str, price, quantity) -> int:
        name_value = (name or "").strip()
        if not name_value:
            raise InvalidProductError("Nome obrigatorio")
        product = ProductRecord(
            name=name_value,
            description=(description or "").strip(),
            price=parse_price(price),
            quantity=parse_quantity(quantity),
            owner_email=owner_email,
        )
        if self.repository.get_user(owner_email) is None:
            raise OwnerNotFoundError(f"Usuario {owner_email} nao encontrado")
        return self.repository.add_product(product)

    def list_products(self, owner_email: str) -> list[ProductRecord]:
        return self.repository.get_products_by_owner(owner_email)

    def delete_product(self, product_id: int) -> None:
        self.repository.delete_product(int(product_id))
