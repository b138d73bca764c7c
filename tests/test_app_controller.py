from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Garante que o pacote seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gestor_produtos.core.config import Settings  # noqa: E402
from gestor_produtos.db.errors import StoreError  # noqa: E402
from gestor_produtos.services.app_controller import (  # noqa: E402
    DELETE_CONFIRMATION,
    EMPTY_PLACEHOLDER,
    AppController,
    View,
)
from gestor_produtos.services.context import build_context  # noqa: E402


def _settings(tmp_path, database_url: str | None = None) -> Settings:
    return Settings(
        app_env="test",
        data_dir=str(tmp_path),
        database_url=database_url or f"sqlite:///{tmp_path / 'ProductManagementDB.sqlite3'}",
        local_storage_path=str(tmp_path / "local_storage.json"),
        seed_demo_user=True,
        log_level="INFO",
    )


@pytest.fixture()
def make_controller(tmp_path):
    contexts = []

    def _make(**kwargs) -> AppController:
        context = build_context(_settings(tmp_path, **kwargs))
        contexts.append(context)
        controller = AppController(context)
        controller.start()
        return controller

    yield _make
    for context in contexts:
        context.close()


def _login_demo(controller: AppController) -> None:
    controller.submit_login("demo@email.com", "123456")
    assert controller.state.view is View.PRODUCTS


def test_starts_on_login_without_session(make_controller):
    controller = make_controller()
    assert controller.state.view is View.LOGIN
    assert controller.state.message is None


def test_register_then_login_shows_products(make_controller):
    controller = make_controller()
    controller.show_register()
    assert controller.state.view is View.REGISTER

    controller.submit_register("Ana", "ana@example.com", "segredo")
    assert controller.state.view is View.LOGIN
    assert controller.state.message.kind == "success"

    controller.submit_login("ana@example.com", "segredo")
    assert controller.state.view is View.PRODUCTS
    assert controller.state.user_name == "Ana"
    assert controller.state.rows == []
    assert controller.state.placeholder == EMPTY_PLACEHOLDER


def test_duplicate_registration_stays_on_register(make_controller):
    controller = make_controller()
    controller.show_register()
    controller.submit_register("Demo 2", "demo@email.com", "x")
    assert controller.state.view is View.REGISTER
    assert controller.state.message.text == "Este e-mail já está cadastrado."
    assert controller.state.message.kind == "danger"


def test_cancel_register_returns_to_login(make_controller):
    controller = make_controller()
    controller.show_register()
    controller.show_login()
    assert controller.state.view is View.LOGIN


def test_wrong_password_reports_generic_message(make_controller):
    controller = make_controller()
    controller.submit_login("demo@email.com", "errada")
    assert controller.state.view is View.LOGIN
    assert controller.state.message.text == "E-mail ou senha incorretos."


def test_added_product_is_listed_with_formatted_price(make_controller):
    controller = make_controller()
    _login_demo(controller)
    controller.submit_product("X", "", "9.99", "3")
    rows = controller.load_products()
    assert len(rows) == 1
    row = rows[0]
    assert (row.name, row.description, row.price, row.quantity) == ("X", "-", "R$ 9.99", 3)
    assert controller.state.placeholder is None


def test_products_are_not_visible_to_other_users(make_controller):
    controller = make_controller()
    _login_demo(controller)
    controller.submit_product("Do demo", "", "1", "1")
    controller.logout()

    controller.show_register()
    controller.submit_register("Bia", "bia@example.com", "senha")
    controller.submit_login("bia@example.com", "senha")
    assert controller.state.rows == []


def test_invalid_price_raises_alert(make_controller):
    controller = make_controller()
    _login_demo(controller)
    controller.submit_product("X", "", "abc", "1")
    assert controller.take_alert().startswith("Erro ao adicionar produto")
    assert controller.take_alert() is None
    assert controller.state.rows == []


def test_delete_requires_confirmation(make_controller):
    controller = make_controller()
    _login_demo(controller)
    controller.submit_product("X", "", "9.99", "3")
    product_id = controller.state.rows[0].id
    questions = []

    def decline(question):
        questions.append(question)
        return False

    controller.request_delete(product_id, decline)
    assert questions == [DELETE_CONFIRMATION]
    assert len(controller.state.rows) == 1

    controller.request_delete(product_id, lambda _q: True)
    assert controller.state.rows == []


def test_delete_missing_id_keeps_list(make_controller):
    controller = make_controller()
    _login_demo(controller)
    controller.submit_product("X", "", "9.99", "3")
    before = list(controller.state.rows)
    controller.request_delete(12345, lambda _q: True)
    assert controller.take_alert() is None
    assert controller.state.rows == before


def test_session_survives_restart_and_logout_clears_it(make_controller):
    controller = make_controller()
    _login_demo(controller)

    restarted = make_controller()
    assert restarted.state.view is View.PRODUCTS
    assert restarted.state.user_name == "Usuário Demo"

    restarted.logout()
    assert restarted.state.view is View.LOGIN
    assert make_controller().state.view is View.LOGIN


def test_listing_failure_is_logged_and_leaves_table_empty(make_controller, monkeypatch, caplog):
    controller = make_controller()
    _login_demo(controller)

    def boom(email):
        raise StoreError("UnknownError")

    monkeypatch.setattr(controller.products, "list_products", boom)
    assert controller.load_products() == []
    assert "Erro ao carregar produtos" in caplog.text


def test_open_failure_is_reported_on_login(make_controller, tmp_path):
    controller = make_controller(database_url=f"sqlite:///{tmp_path}")
    assert controller.state.view is View.LOGIN
    assert controller.state.message.text.startswith("Erro ao abrir o banco de dados")

    controller.submit_login("demo@email.com", "123456")
    assert controller.state.view is View.LOGIN
    assert controller.state.message.kind == "danger"
