"""Authorization for catalog-mutating actions."""

from dataclasses import dataclass, field


@dataclass
class AuthorizationGate:
    """Decides whether a Telegram user may add or edit songs.

    Callers ask on every privileged step instead of remembering the answer,
    so changes to ``privileged_ids`` apply to dialogs already in progress.
    """

    privileged_ids: set[int] = field(default_factory=set)

    def is_privileged(self, user_id: int) -> bool:
        return user_id in self.privileged_ids
