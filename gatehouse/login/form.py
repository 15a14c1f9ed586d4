"""Login form composition root: one input model, one submission controller and one session watcher per instance."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from gatehouse.core import Gatehouse, ifnone
from gatehouse.login.config import LoginSettings
from gatehouse.login.controller import SubmissionController
from gatehouse.login.types import (
    Authenticator,
    FormInput,
    Navigator,
    SessionProvider,
    SubmissionOutcome,
    SubmissionState,
)
from gatehouse.login.validator import LoginValidator
from gatehouse.login.watcher import SessionWatcher

SUBMIT_LABEL = "log in"
BUSY_LABEL = "logging in..."
SHOW_PASSWORD_LABEL = "show password"
HIDE_PASSWORD_LABEL = "hide password"


class LoginFormView(BaseModel):
    """Everything the rendered form shows. Inputs and the submit control share the ``disabled`` flag."""

    model_config = ConfigDict(frozen=True)

    email: str = ""
    password: str = ""
    password_input_type: str = "password"
    toggle_label: str = SHOW_PASSWORD_LABEL
    disabled: bool = False
    busy: bool = False
    submit_label: str = SUBMIT_LABEL
    banner: str = ""
    email_error: str = ""
    password_error: str = ""
    demo_hint: str = ""


class LoginForm(Gatehouse):
    """A login form instance bound to an authenticator, a session provider and a navigator.

    Typical use from a UI layer::

        form = LoginForm(store, store, navigator, settings=settings)
        form.mount()
        form.set_email("ada@example.com")
        form.set_password("analytical1")
        outcome = await form.submit()
        render(form.view())
        ...
        form.unmount()

    Nothing survives an unmount: the next mount starts from empty input and an idle state. A submission still in
    flight at unmount time is abandoned and its result is discarded.
    """

    def __init__(
        self,
        authenticator: Authenticator,
        session: SessionProvider,
        navigator: Navigator,
        *,
        settings: Optional[LoginSettings] = None,
        demo_hint: str = "",
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.authenticator = authenticator
        self.session = session
        self.navigator = navigator
        self.settings = ifnone(settings, LoginSettings())
        self.demo_hint = demo_hint
        self.validator = LoginValidator(self.settings.PASSWORD_MIN_LENGTH)
        self.input = FormInput()
        self._mounted = False
        self._build()

    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def state(self) -> SubmissionState:
        return self.controller.state

    def mount(self) -> None:
        """Attach to the session provider. Mounting a form that is already mounted starts it over from scratch."""
        if self._mounted:
            self.unmount()
        self._mounted = True
        self.logger.debug("Login form mounted.")
        self.watcher.attach()

    def unmount(self) -> None:
        if not self._mounted:
            return
        self._mounted = False
        self.watcher.detach()
        self.controller.dispose()
        self.input.reset()
        self._build()
        self.logger.debug("Login form unmounted.")

    def set_email(self, value: str) -> None:
        if self._editable():
            self.input.email = value

    def set_password(self, value: str) -> None:
        if self._editable():
            self.input.password = value

    def toggle_password_visibility(self) -> None:
        if self._mounted:
            self.input.toggle_password_visibility()

    def dismiss_banner(self) -> None:
        self.controller.dismiss_banner()

    def begin_submit(self) -> Optional[SubmissionOutcome]:
        """Synchronous half of `submit`. Returns None when `complete_submit` must be awaited."""
        if not self._mounted:
            return SubmissionOutcome.ABANDONED
        self.logger.debug("Submit requested.")
        return self.controller.begin(self.input)

    async def complete_submit(self) -> SubmissionOutcome:
        return await self.controller.complete()

    async def submit(self) -> SubmissionOutcome:
        outcome = self.begin_submit()
        if outcome is not None:
            return outcome
        return await self.complete_submit()

    def view(self) -> LoginFormView:
        state = self.controller.state
        validation = self.controller.validation
        return LoginFormView(
            email=self.input.email,
            password=self.input.password,
            password_input_type=self.input.password_input_type,
            toggle_label=HIDE_PASSWORD_LABEL if self.input.password_visible else SHOW_PASSWORD_LABEL,
            disabled=state.locked,
            busy=state.locked,
            submit_label=BUSY_LABEL if state.locked else SUBMIT_LABEL,
            banner=self.controller.banner,
            email_error=validation.email_error,
            password_error=validation.password_error,
            demo_hint=self.demo_hint,
        )

    def _build(self) -> None:
        self.controller = SubmissionController(
            self.authenticator,
            validator=self.validator,
            fallback_message=self.settings.FAILURE_MESSAGE,
        )
        self.watcher = SessionWatcher(
            self.session,
            self.navigator,
            self.controller.show_banner,
            destination=self.settings.AUTHENTICATED_ROUTE,
        )

    def _editable(self) -> bool:
        if not self._mounted or self.controller.locked:
            self.logger.debug("Ignoring edit on a form that is unmounted or submitting.")
            return False
        return True
