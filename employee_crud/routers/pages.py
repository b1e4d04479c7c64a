from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, PlainTextResponse

router = APIRouter(prefix="", tags=["pages"])


def _templates(request: Request):
    tpl = getattr(getattr(request.app, "state", None), "templates", None)
    if tpl:
        return tpl
    raise RuntimeError("Templates nao configurados")


@router.get("/", response_class=HTMLResponse)
def index(request: Request):
    templates = _templates(request)
    assets = request.app.state.assets
    return templates.TemplateResponse(
        request,
        "index.html",
        {"css_href": assets["css"], "js_href": assets["js"], "api_base": "/api/employees"},
    )


# Silencia requisições de debug do Chrome (evita 404 ruidoso em logs)
@router.get("/.well-known/appspecific/com.chrome.devtools.json")
def chrome_devtools_wellknown():
    return PlainTextResponse("", status_code=204)
