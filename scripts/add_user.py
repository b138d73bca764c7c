#!/usr/bin/env python3
"""
Cadastrar um usuario diretamente no banco local.

Uso:
  python scripts/add_user.py --email ana@exemplo.com --name "Ana" [--password 123456]
"""
from __future__ import annotations

import argparse
import secrets

from gestor_produtos.core.config import get_settings
from gestor_produtos.db import ConstraintError, OpenError, open_database
from gestor_produtos.domain.records import UserRecord
from gestor_produtos.repositories.product_repository import ProductRepository


def gen_password(length: int = 6) -> str:
    digits = "0123456789"
    return "".join(secrets.choice(digits) for _ in range(length))


def main() -> None:
    ap = argparse.ArgumentParser(description="Cadastrar usuario no banco local")
    ap.add_argument("--email", required=True, help="E-mail do usuario (chave unica)")
    ap.add_argument("--name", default="", help="Nome exibido no cabecalho")
    ap.add_argument("--password", help="Senha (default: aleatoria de 6 digitos)")
    args = ap.parse_args()

    email = (args.email or "").strip()
    if not email:
        raise SystemExit("E-mail invalido")
    password = args.password or gen_password()

    settings = get_settings()
    try:
        database = open_database(settings.database_url, seed_demo_user=settings.seed_demo_user)
    except OpenError as exc:
        raise SystemExit(exc.message) from exc
    repo = ProductRepository(database)
    try:
        repo.add_user(UserRecord(name=args.name, email=email, password=password))
    except ConstraintError:
        raise SystemExit(f"Usuario '{email}' ja existe no banco")
    finally:
        database.dispose()
    print("OK: usuario cadastrado")
    print(f"  E-mail: {email}")
    print(f"  Senha: {password}")


if __name__ == "__main__":
    main()
