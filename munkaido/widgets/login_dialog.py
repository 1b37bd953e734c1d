"""Dialog for signing in or registering."""

from typing import ClassVar

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Grid, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static


class LoginDialog(ModalScreen):
    """Modal dialog collecting credentials; dismisses with the requested action."""

    BINDINGS: ClassVar[list[Binding | tuple[str, str] | tuple[str, str, str]]] = [
        ("escape", "dismiss", "Kilépés"),
    ]

    CSS = """
    LoginDialog {
        align: center middle;
    }

    #dialog {
        width: 60;
        height: auto;
        background: $panel;
        border: thick $primary;
        padding: 1 2;
    }

    #dialog-title {
        width: 100%;
        text-align: center;
        margin-bottom: 1;
        text-style: bold;
    }

    .input-row {
        grid-size: 2;
        grid-columns: 14 1fr;
        height: auto;
        margin: 1 0 0 0;
    }

    #button-row {
        grid-size: 2;
        width: 100%;
        height: auto;
        margin-top: 1;
    }

    Button {
        margin: 0 1;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.is_login = True

    def compose(self) -> ComposeResult:
        """Compose the dialog."""
        with Vertical(id="dialog"):
            yield Static("Munkaidő Kalkulátor", id="dialog-title")

            with Grid(classes="input-row", id="full-name-row"):
                yield Label("Teljes név:")
                yield Input(placeholder="Kovács János", id="full-name")

            with Grid(classes="input-row"):
                yield Label("Email:")
                yield Input(placeholder="email@example.com", id="email")

            with Grid(classes="input-row"):
                yield Label("Jelszó:")
                yield Input(password=True, id="password")

            with Grid(id="button-row"):
                yield Button("Bejelentkezés", id="submit-button", variant="primary")
                yield Button("Nincs még fiókod? Regisztrálj", id="toggle-button")

    def on_mount(self) -> None:
        self.query_one("#full-name-row").display = False
        self.query_one("#email", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == "submit-button":
            self.submit()
        elif event.button.id == "toggle-button":
            self.toggle_mode()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.submit()

    def toggle_mode(self) -> None:
        """Switch between sign-in and registration."""
        self.is_login = not self.is_login
        self.query_one("#full-name-row").display = not self.is_login
        self.query_one("#submit-button", Button).label = (
            "Bejelentkezés" if self.is_login else "Regisztráció"
        )
        self.query_one("#toggle-button", Button).label = (
            "Nincs még fiókod? Regisztrálj" if self.is_login else "Van már fiókod? Jelentkezz be"
        )

    def submit(self) -> None:
        """Check required fields and dismiss with the credentials."""
        email = self.query_one("#email", Input).value.strip()
        password = self.query_one("#password", Input).value
        full_name = self.query_one("#full-name", Input).value.strip()

        if self.is_login:
            if not email or not password:
                self.notify("Kérlek add meg az email címed és a jelszavad", severity="error")
                return
            self.dismiss({"action": "sign_in", "email": email, "password": password})
            return

        if not email or not password or not full_name:
            self.notify("Kérlek töltsd ki az összes mezőt", severity="error")
            return
        self.dismiss(
            {"action": "sign_up", "email": email, "password": password, "full_name": full_name}
        )
