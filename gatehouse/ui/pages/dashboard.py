import reflex as rx

from gatehouse.ui.state import DashboardState


def dashboard_page() -> rx.Component:
    """Placeholder authenticated area."""
    return rx.center(
        rx.vstack(
            rx.heading("dashboard", size="6"),
            rx.text("signed in as ", DashboardState.user_email),
            rx.hstack(
                rx.button("log out", on_click=DashboardState.logout, variant="soft"),
                rx.button(
                    "expire session", on_click=DashboardState.expire_session, variant="outline", color_scheme="red"
                ),
                spacing="2",
            ),
            spacing="4",
            align="center",
        ),
        on_mount=DashboardState.guard,
        min_height="100vh",
    )
