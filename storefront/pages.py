"""
HTML pages and static assets of the shop frontend.

The frontend itself is plain HTML/JS kept outside this package; these routes
only map URLs onto files in ``frontend_dir``.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, FastAPI, HTTPException
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from storefront.config import Settings, get_settings

PAGES = {
    "/": "Home.html",
    "/home": "Home.html",
    "/coaches": "Coaches.html",
    "/shop": "shop.html",
    "/plans": "PlansPage.html",
    "/plansCheckout": "plansCheckout.html",
    "/cart": "cart.html",
    "/about": "about.html",
    "/checkout": "checkout.html",
    "/contact": "contact.html",
    "/login": "login.html",
    "/signup": "signup.html",
    "/cancel": "cancellation.html",
    "/faq": "FAQ.html",
    "/refund": "refund.html",
    "/terms": "terms.html",
    "/products": "product.html",
    "/product.html": "product.html",
    "/admin": "admin.html",
}

pages_router = APIRouter(include_in_schema=False)


def send_page(filename: str) -> FileResponse:
    path = Path(get_settings().frontend_dir) / filename
    if not path.is_file():
        raise HTTPException(status_code=404, detail="Page not found")
    return FileResponse(path, media_type="text/html")


def _page_route(filename: str):
    def page():
        return send_page(filename)

    return page


for _path, _filename in PAGES.items():
    pages_router.add_api_route(_path, _page_route(_filename), methods=["GET"])


@pages_router.get("/admin/{subpath:path}")
def admin_shell(subpath: str):
    # The admin shell does its own client-side routing.
    return send_page(PAGES["/admin"])


def mount_static(app: FastAPI, settings: Settings) -> None:
    frontend = Path(settings.frontend_dir)
    mounts = {
        "/uploads": Path(settings.uploads_dir),
        "/styles": frontend / "styles",
        "/admin_settings": frontend / "admin_settings",
        "/frontend": frontend,
    }
    for url, directory in mounts.items():
        app.mount(url, StaticFiles(directory=directory, check_dir=False), name=url.strip("/"))
