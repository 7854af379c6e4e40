"""Shell detection."""

import os


def classify_shell(candidate: str) -> str | None:
    """Return the shell kind for an executable name or path."""
    name = os.path.basename(candidate).lower()
    if name in {"bash", "bash.exe"}:
        return "bash"
    if name in {"zsh", "zsh.exe"}:
        return "zsh"
    if name in {"fish", "fish.exe"}:
        return "fish"
    return None


def detect_shell() -> str:
    """Return the user's shell kind from $SHELL, or "unknown"."""
    env_shell = os.environ.get("SHELL", "").strip()
    if not env_shell:
        return "unknown"
    return classify_shell(env_shell) or "unknown"
