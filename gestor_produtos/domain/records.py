"""Plain records exchanged between the store, the services and the views."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Mapping, Optional

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class UserRecord:
    name: str
    email: str
    password: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UserRecord":
        return cls(
            name=str(data.get("name") or ""),
            email=str(data["email"]),
            password=str(data.get("password") or ""),
        )


@dataclass(frozen=True)
class ProductRecord:
    name: str
    price: Decimal
    quantity: int
    owner_email: str
    description: str = ""
    id: Optional[int] = None


def to_money(value: Decimal | float | int | str) -> Decimal:
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def format_price(value: Decimal | float | int | str) -> str:
    """Render a price the way the product table shows it: ``R$ 9.99``."""
    return f"R$ {to_money(value)}"
