"""Credential handling for pushing release tags."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import pygit2

from git_semver.exceptions import GitOperationError

if TYPE_CHECKING:
    from pygit2.enums import CredentialType


@dataclass(frozen=True)
class BasicAuth:
    """Username/password (or token) for HTTPS remotes."""

    username: str
    password: str = field(repr=False)


class PushCallbacks(pygit2.RemoteCallbacks):
    """
    RemoteCallbacks for release pushes.

    Supports:
    - HTTPS via explicit basic-auth credentials
    - SSH via KeypairFromAgent (uses system SSH agent)

    Rejected ref updates are collected and raised after the push.
    """

    def __init__(self, auth: BasicAuth | None = None) -> None:
        super().__init__()
        self._auth = auth
        self._attempts = 0
        self.rejected: dict[str, str] = {}

    def credentials(  # type: ignore[override]
        self,
        url: str,
        username_from_url: str | None,
        allowed_types: CredentialType,
    ) -> pygit2.UserPass | pygit2.Keypair:
        """Provide credentials for remote operations."""
        # libgit2 asks again after a rejected attempt; answer only once
        self._attempts += 1
        if self._attempts > 1:
            raise pygit2.Passthrough

        if self._auth and allowed_types & pygit2.enums.CredentialType.USERPASS_PLAINTEXT:
            return pygit2.UserPass(self._auth.username, self._auth.password)

        if allowed_types & pygit2.enums.CredentialType.SSH_KEY:
            username = username_from_url or "git"
            return pygit2.KeypairFromAgent(username)

        raise pygit2.Passthrough

    def push_update_reference(self, refname: str, message: str | None) -> None:
        if message:
            self.rejected[refname] = message

    def raise_for_rejected(self) -> None:
        if self.rejected:
            detail = ", ".join(f"{ref} ({msg})" for ref, msg in sorted(self.rejected.items()))
            raise GitOperationError("push", f"remote rejected {detail}")
