"""Reflex application: the login page and the authenticated area it redirects to."""

import reflex as rx

from gatehouse.login import get_login_settings
from gatehouse.ui.pages import dashboard_page, login_page

settings = get_login_settings()

app = rx.App()

app.add_page(login_page, route=settings.LOGIN_ROUTE, title="Gatehouse - Login")
app.add_page(dashboard_page, route=settings.AUTHENTICATED_ROUTE, title="Gatehouse - Dashboard")
