"""Login and registration views."""

from ..auth.guard import HOME_PATH
from ..models.forms import LoginForm, RegisterForm
from .base import View


class LoginView(View):
    """Login screen.

    Incomplete forms are rejected locally by the session manager, so an
    empty submission never reaches the backend.
    """

    requires_auth = False
    error_action = "login"

    def __init__(self, app):
        super().__init__(app)
        self.form = LoginForm()

    async def submit(self, form: LoginForm) -> bool:
        self.form = form
        ok = await self.run(self.app.sessions.login(form))
        if ok:
            self.navigate(HOME_PATH)
        return ok


class RegisterView(View):
    """Registration screen."""

    requires_auth = False
    error_action = "register"

    def __init__(self, app):
        super().__init__(app)
        self.form = RegisterForm()

    async def submit(self, form: RegisterForm) -> bool:
        self.form = form
        ok = await self.run(self.app.sessions.register(form))
        if ok:
            self.navigate(HOME_PATH)
        return ok
