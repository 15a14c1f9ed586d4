"""
Login page.

Renders the banner, the two labeled inputs with the password visibility toggle, inline field errors and the submit
button. All state and event logic lives in `LoginState`.
"""

import reflex as rx

from gatehouse.ui.state import LoginState


def _banner() -> rx.Component:
    return rx.cond(
        LoginState.banner,
        rx.callout.root(
            rx.hstack(
                rx.callout.icon(rx.icon("triangle_alert")),
                rx.callout.text(LoginState.banner),
                rx.spacer(),
                rx.icon_button(
                    rx.icon("x", size=14),
                    on_click=LoginState.dismiss_banner,
                    variant="ghost",
                    color_scheme="red",
                    size="1",
                    aria_label="dismiss",
                ),
                align="center",
                width="100%",
            ),
            color_scheme="red",
            role="alert",
            width="100%",
        ),
    )


def _field_error(message) -> rx.Component:
    return rx.cond(message, rx.text(message, color="red", font_size="12px"))


def _email_field() -> rx.Component:
    return rx.vstack(
        rx.el.label("email", html_for="email", font_size="12px", font_weight="600"),
        rx.input(
            id="email",
            type="text",
            placeholder="you@example.com",
            value=LoginState.email,
            on_change=LoginState.edit_email,
            disabled=LoginState.disabled,
            auto_complete="email",
            color_scheme=rx.cond(LoginState.email_error, "red", "gray"),
            width="100%",
        ),
        _field_error(LoginState.email_error),
        spacing="1",
        width="100%",
    )


def _password_field() -> rx.Component:
    return rx.vstack(
        rx.el.label("password", html_for="password", font_size="12px", font_weight="600"),
        rx.hstack(
            rx.input(
                id="password",
                type=LoginState.password_input_type,
                placeholder="8+ characters with letters and digits",
                value=LoginState.password,
                on_change=LoginState.edit_password,
                disabled=LoginState.disabled,
                auto_complete="current-password",
                color_scheme=rx.cond(LoginState.password_error, "red", "gray"),
                width="100%",
            ),
            rx.icon_button(
                rx.cond(LoginState.password_input_type == "password", rx.icon("eye_off"), rx.icon("eye")),
                type="button",
                on_click=LoginState.toggle_password,
                variant="ghost",
                aria_label=LoginState.toggle_label,
            ),
            align="center",
            width="100%",
        ),
        _field_error(LoginState.password_error),
        spacing="1",
        width="100%",
    )


def login_form() -> rx.Component:
    return rx.form(
        rx.vstack(
            _banner(),
            _email_field(),
            _password_field(),
            rx.button(
                rx.cond(
                    LoginState.busy,
                    rx.hstack(rx.spinner(size="1"), rx.text(LoginState.submit_label), align="center"),
                    rx.text(LoginState.submit_label),
                ),
                type="submit",
                disabled=LoginState.disabled,
                width="100%",
            ),
            spacing="3",
            width="100%",
        ),
        on_submit=LoginState.submit,
        width="100%",
    )


def login_page() -> rx.Component:
    return rx.center(
        rx.card(
            rx.vstack(
                rx.heading("welcome back", size="5", weight="bold"),
                rx.text("log in to continue", font_size="12px", color_scheme="gray"),
                login_form(),
                rx.cond(LoginState.demo_hint, rx.text(LoginState.demo_hint, font_size="11px", color_scheme="gray")),
                spacing="3",
                align="center",
                width="100%",
            ),
            width="min(420px, 92vw)",
        ),
        on_mount=LoginState.mount,
        on_unmount=LoginState.unmount,
        min_height="100vh",
    )
