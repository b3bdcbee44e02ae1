"""User-facing wording for collaborator failures."""


def failure_text(fallback: str, exc: Exception, environment: str) -> str:
    """Return a user-facing error message with local debug info."""
    if environment == "local":
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            return f"{fallback} (debug: {detail})"
    return fallback
