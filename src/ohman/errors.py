"""Exception types raised by ohman."""


class OhmanError(Exception):
    """Base class for errors reported to the user by the CLI."""


class ConfigError(OhmanError):
    """The configuration file could not be read, parsed, or written."""


class ApiKeyMissing(OhmanError):
    """No API key is configured for a provider that needs one."""

    def __init__(self) -> None:
        super().__init__("API Key not configured, please run 'ohman config'")


class ManPageNotFound(OhmanError):
    """Neither a man page nor help output exists for a command."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"man page for {command} not found")


class NoFailedCommand(OhmanError):
    """No recent failed command was recorded by the shell hook."""


class LLMError(OhmanError):
    """The chat-completion request failed or returned nothing."""


class LogReadError(OhmanError):
    """A log file or journal could not be read."""


class SessionError(OhmanError):
    """The session history file could not be loaded or saved."""


class InputInterrupted(OhmanError):
    """The user pressed Ctrl-C while a line was being read."""

    def __init__(self) -> None:
        super().__init__("interrupted")


class InputReadError(OhmanError):
    """The input stream failed or closed while a line was being read."""


class RawModeUnavailable(OhmanError):
    """The terminal could not be switched into raw mode."""
