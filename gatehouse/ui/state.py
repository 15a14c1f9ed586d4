import reflex as rx

from gatehouse.login import LoginFormView, get_login_settings
from gatehouse.ui.registry import ClientLogin, forget_client, get_client


def _client_token(state) -> str:
    return state.router.session.client_token


def _client(state) -> ClientLogin:
    return get_client(_client_token(state))


def _sync(state, view: LoginFormView):
    for name, value in view.model_dump().items():
        setattr(state, name, value)


class LoginState(rx.State):
    """Mirror of `LoginFormView` for the current browser. All decisions are made by the `LoginForm`."""

    email: str = ""
    password: str = ""
    password_input_type: str = "password"
    toggle_label: str = "show password"
    disabled: bool = False
    busy: bool = False
    submit_label: str = "log in"
    banner: str = ""
    email_error: str = ""
    password_error: str = ""
    demo_hint: str = ""

    @rx.event
    def mount(self):
        client = _client(self)
        form = client.login_form(get_login_settings())
        # A page reload fires on_mount again without on_unmount; mount() starts the form over
        form.mount()
        _sync(self, form.view())
        return client.navigator.drain()

    @rx.event
    def unmount(self):
        form = _client(self).login_form()
        form.unmount()
        _sync(self, form.view())

    @rx.event
    def edit_email(self, value: str):
        form = _client(self).login_form()
        form.set_email(value)
        _sync(self, form.view())

    @rx.event
    def edit_password(self, value: str):
        form = _client(self).login_form()
        form.set_password(value)
        _sync(self, form.view())

    @rx.event
    def toggle_password(self):
        form = _client(self).login_form()
        form.toggle_password_visibility()
        _sync(self, form.view())

    @rx.event
    def dismiss_banner(self):
        form = _client(self).login_form()
        form.dismiss_banner()
        _sync(self, form.view())

    @rx.event
    async def submit(self, form_data: dict):
        client = _client(self)
        form = client.login_form()
        outcome = form.begin_submit()
        _sync(self, form.view())
        if outcome is None:
            # Push the disabled/busy surface before awaiting the credential service
            yield
            await form.complete_submit()
            _sync(self, form.view())
        for event in client.navigator.drain():
            yield event


class DashboardState(rx.State):
    user_email: str = ""

    @rx.event
    def guard(self):
        client = _client(self)
        if not client.session.is_authenticated:
            return rx.redirect(get_login_settings().LOGIN_ROUTE, replace=True)
        self.user_email = (client.session.user or {}).get("email", "")

    @rx.event
    def logout(self):
        forget_client(_client_token(self))
        self.user_email = ""
        return rx.redirect(get_login_settings().LOGIN_ROUTE)

    @rx.event
    def expire_session(self):
        _client(self).session.expire()
        return rx.redirect(get_login_settings().LOGIN_ROUTE)
