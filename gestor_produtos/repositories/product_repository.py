"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from gestor_produtos.db.errors import ConstraintError, StoreError
from gestor_produtos.db.models import Product, User
from gestor_produtos.db.session import Database
from gestor_produtos.domain.records import ProductRecord, UserRecord, to_money

logger = logging.getLogger(__name__)


def _user_record(entity: User) -> UserRecord:
    return UserRecord(name=entity.name or "", email=entity.email, password=entity.password or "")


def _product_record(entity: Product) -> ProductRecord:
    return ProductRecord(
        id=entity.id,
        name=entity.name,
        description=entity.description or "",
        price=to_money(entity.price),
        quantity=int(entity.quantity or 0),
        owner_email=entity.owner_email,
    )


def _store_error(exc: SQLAlchemyError) -> StoreError:
    code = type(exc).__name__
    return StoreError(code, f"{code}: {getattr(exc, 'orig', None) or exc}")


class ProductRepository:
    """Single-record operations over the users and products collections."""

    def __init__(self, database: Database) -> None:
        self.database = database

    # -------------------------- users --------------------------
    def get_user(self, email: str) -> Optional[UserRecord]:
        try:
            with self.database.session() as session:
                entity = session.get(User, email)
                return _user_record(entity) if entity else None
        except SQLAlchemyError as exc:
            raise _store_error(exc) from exc

    def add_user(self, user: UserRecord) -> None:
        entity = User(email=user.email, name=user.name, password=user.password)
        with self.database.session() as session:
            session.add(entity)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                logger.warning("Usuario duplicado", extra={"email": user.email})
                raise ConstraintError("ConstraintError", f"Usuario {user.email} ja existe") from exc
            except SQLAlchemyError as exc:
                session.rollback()
                raise _store_error(exc) from exc

    # -------------------------- products --------------------------
    def add_product(self, product: ProductRecord) -> int:
        entity = Product(
            name=product.name,
            description=product.description or None,
            price=to_money(product.price),
            quantity=int(product.quantity),
            owner_email=product.owner_email,
        )
        with self.database.session() as session:
            session.add(entity)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                logger.warning("Produto rejeitado pelo banco", extra={"email": product.owner_email})
                raise ConstraintError("ConstraintError", "Produto rejeitado pelo banco") from exc
            except SQLAlchemyError as exc:
                session.rollback()
                raise _store_error(exc) from exc
            return int(entity.id)

    def get_products_by_owner(self, email: str) -> list[ProductRecord]:
        try:
            with self.database.session() as session:
                stmt = select(Product).where(Product.owner_email == email).order_by(Product.id)
                return [_product_record(p) for p in session.execute(stmt).scalars().all()]
        except SQLAlchemyError as exc:
            raise _store_error(exc) from exc

    def delete_product(self, product_id: int) -> None:
        with self.database.session() as session:
            try:
                session.execute(delete(Product).where(Product.id == product_id))
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                raise _store_error(exc) from exc
