from __future__ import annotations

import html

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from gestor_produtos.services.app_controller import DELETE_CONFIRMATION, AppController

router = APIRouter(tags=["pages"])


def _controller(request: Request) -> AppController:
    controller = getattr(getattr(request.app, "state", None), "controller", None)
    if controller:
        return controller
    raise RuntimeError("Controller nao configurado")


def _templates(request: Request):
    tpl = getattr(getattr(request.app, "state", None), "templates", None)
    if tpl:
        return tpl
    raise RuntimeError("Templates nao configurados")


def _home() -> RedirectResponse:
    return RedirectResponse("/", status_code=303)


@router.get("/", response_class=HTMLResponse)
def index(request: Request):
    controller = _controller(request)
    alert = controller.take_alert()
    context = {
        "request": request,
        "state": controller.state,
        "alert": alert,
    }
    return _templates(request).TemplateResponse(request, "index.html", context)


@router.post("/login")
def login(request: Request, email: str = Form(""), password: str = Form("")):
    _controller(request).submit_login(email, password)
    return _home()


@router.get("/login")
def back_to_login(request: Request):
    _controller(request).show_login()
    return _home()


@router.get("/register")
def show_register(request: Request):
    _controller(request).show_register()
    return _home()


@router.post("/register")
def register(
    request: Request,
    name: str = Form("", alias="regName"),
    email: str = Form("", alias="regEmail"),
    password: str = Form("", alias="regPassword"),
):
    _controller(request).submit_register(name, email, password)
    return _home()


@router.post("/products")
def add_product(
    request: Request,
    name: str = Form("", alias="productName"),
    description: str = Form("", alias="productDescription"),
    price: str = Form("", alias="productPrice"),
    quantity: str = Form("", alias="productQuantity"),
):
    _controller(request).submit_product(name, description, price, quantity)
    return _home()


@router.get("/products/{product_id}/delete", response_class=HTMLResponse)
def confirm_delete(request: Request, product_id: int):
    """Confirmation step, the server-side counterpart of a confirm() dialog."""
    question = html.escape(DELETE_CONFIRMATION)
    html_doc = f"""
    <!doctype html><html lang='pt-br'><head>
      <meta charset='utf-8'><meta name='viewport' content='width=device-width,initial-scale=1'>
      <title>Excluir produto</title>
    </head><body><main class='wrap'>
      <p>{question}</p>
      <form method='post' action='/products/{product_id}/delete'>
        <button name='confirm' value='1' class='btn btn-danger'>Excluir</button>
        <button name='confirm' value='0' class='btn'>Cancelar</button>
      </form>
    </main></body></html>
    """
    return HTMLResponse(html_doc)


@router.post("/products/{product_id}/delete")
def delete_product(request: Request, product_id: int, confirm: str = Form("0")):
    accepted = confirm.strip().lower() in {"1", "true", "yes", "on"}
    _controller(request).request_delete(product_id, lambda _question: accepted)
    return _home()


@router.post("/logout")
def logout(request: Request):
    _controller(request).logout()
    return _home()
