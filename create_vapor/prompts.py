"""Input collection for create-vapor.

Options come either from command-line flags (non-interactive mode, which
fails fast on bad input) or from sequential prompts (interactive mode,
which keeps asking until the answer is usable).
"""

from typing import Optional

from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.prompt import Prompt, Confirm

from .config import Settings
from .exceptions import ValidationError
from .models.options import ScaffoldOptions, STORE_URL_SUFFIX, is_valid_store_url

STORE_URL_RETRY_MESSAGE = f"Store URL must end with {STORE_URL_SUFFIX}. Please try again."


def parse_flag_value(value: Optional[str]) -> Optional[str]:
    """Normalize a raw flag value.

    Short flags written as ``-s=value`` reach us as ``=value``.
    """
    if value is None:
        return None
    if value.startswith("="):
        value = value[1:]
    return value


def parse_bool_flag(value: Optional[str], default: bool = True) -> bool:
    """Interpret a ``true``/``false`` flag value.

    Only ``true`` (any case) is true; any other given value is false.
    """
    value = parse_flag_value(value)
    if value is None:
        return default
    return value.strip().lower() == "true"


def _first_error_message(error: PydanticValidationError) -> str:
    message = error.errors()[0]["msg"]
    return message.removeprefix("Value error, ")


def collect_from_flags(
    theme_name: Optional[str],
    store: Optional[str] = None,
    git: Optional[str] = None,
    install: Optional[str] = None,
) -> ScaffoldOptions:
    """Build options from command-line flags only.

    Args:
        theme_name: Positional theme name
        store: Raw --store value
        git: Raw --git value
        install: Raw --install value

    Returns:
        Validated options

    Raises:
        ValidationError: If the theme name is missing or the store URL is invalid
    """
    if not theme_name or not theme_name.strip():
        raise ValidationError("Theme name is required in non-interactive mode")

    store_url = (parse_flag_value(store) or "").strip()
    if not is_valid_store_url(store_url):
        raise ValidationError(
            f"Store URL must end with {STORE_URL_SUFFIX}",
            details={"store_url": store_url},
        )

    try:
        return ScaffoldOptions(
            theme_name=theme_name,
            store_url=store_url,
            init_git=parse_bool_flag(git),
            install_deps=parse_bool_flag(install),
        )
    except PydanticValidationError as e:
        raise ValidationError(_first_error_message(e))


class InputCollector:
    """Asks the user for scaffold options one question at a time."""

    def __init__(self, settings: Settings, console: Optional[Console] = None) -> None:
        self.settings = settings
        self.console = console or Console()

    def prompt_theme_name(self) -> str:
        """Ask for the theme name; empty input means the default."""
        while True:
            answer = Prompt.ask(
                "What would you like to name your theme?",
                default=self.settings.default_theme_name,
                console=self.console,
            )
            theme_name = answer.strip() or self.settings.default_theme_name
            try:
                ScaffoldOptions(theme_name=theme_name)
            except PydanticValidationError as e:
                self.console.print(f"[red]{_first_error_message(e)}[/red]")
                continue
            return theme_name

    def prompt_store_url(self) -> str:
        """Ask for the store URL until it is valid or empty.

        Empty input means the default store URL.
        """
        while True:
            answer = Prompt.ask(
                f"What is your Shopify store URL? (yourstore{STORE_URL_SUFFIX})",
                default="",
                show_default=False,
                console=self.console,
            )
            url = answer.strip()
            if not url:
                return self.settings.default_store_url
            if is_valid_store_url(url):
                return url
            self.console.print(STORE_URL_RETRY_MESSAGE)

    def confirm(self, question: str) -> bool:
        """Ask a yes/no question that defaults to yes."""
        return Confirm.ask(question, default=True, console=self.console)

    def collect(
        self,
        theme_name: Optional[str] = None,
        store: Optional[str] = None,
        git: Optional[str] = None,
        install: Optional[str] = None,
    ) -> ScaffoldOptions:
        """Collect options interactively.

        Values already given on the command line answer their question and
        the prompt is skipped. A store URL given by flag that fails
        validation is asked for again.
        """
        if theme_name and theme_name.strip():
            resolved_name = theme_name.strip()
        else:
            resolved_name = self.prompt_theme_name()

        store_url = (parse_flag_value(store) or "").strip()
        if store_url and not is_valid_store_url(store_url):
            self.console.print(STORE_URL_RETRY_MESSAGE)
            store_url = ""
        if not store_url:
            store_url = self.prompt_store_url()

        if git is not None:
            init_git = parse_bool_flag(git)
        else:
            init_git = self.confirm("Would you like to initialize a git repository?")

        if install is not None:
            install_deps = parse_bool_flag(install)
        else:
            install_deps = self.confirm("Would you like to install dependencies now?")

        try:
            return ScaffoldOptions(
                theme_name=resolved_name,
                store_url=store_url,
                init_git=init_git,
                install_deps=install_deps,
            )
        except PydanticValidationError as e:
            raise ValidationError(_first_error_message(e))
