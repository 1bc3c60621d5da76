"""
Authentication Primitives
=========================
Value types shared by the login flow:

    - ``Credentials`` — immutable (identifier, secret) pair, resolved from an
      injected environment mapping or an interactive prompt
    - ``Outcome``     — the three terminal results of one login attempt

Security:
    - The secret never appears in ``repr`` or in logs.
    - Only ``Credentials.masked_identifier`` is safe to log.
"""

from __future__ import annotations

import getpass
import logging
import os
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_IDENTIFIER_VAR = "LINKEDIN_EMAIL"
DEFAULT_SECRET_VAR = "LINKEDIN_PASSWORD"


class Outcome(str, Enum):
    """Terminal result of one login attempt."""

    AUTHENTICATED = "authenticated"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


# ---------------------------------------------------------------------------
# Credentials container
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Credentials:
    """Plain credential container — resolved once, read-only afterwards."""
    identifier: str = ""
    secret: str = field(default="", repr=False)

    @property
    def is_complete(self) -> bool:
        return bool(self.identifier and self.secret)

    @property
    def masked_identifier(self) -> str:
        """Identifier with everything but the first character hidden.

        ``jane.doe@example.com`` → ``j*******@example.com``
        """
        if not self.identifier:
            return "<empty>"
        local, sep, domain = self.identifier.partition("@")
        return f"{local[:1]}{'*' * max(len(local) - 1, 3)}{sep}{domain}"

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        identifier_var: str = DEFAULT_IDENTIFIER_VAR,
        secret_var: str = DEFAULT_SECRET_VAR,
    ) -> "Credentials":
        """Read the pair from *environ* (``os.environ`` when omitted).

        Missing variables come back as empty strings; the login flow
        reports them as a configuration failure rather than raising here.
        """
        env = os.environ if environ is None else environ
        creds = cls(
            identifier=(env.get(identifier_var) or "").strip(),
            secret=env.get(secret_var) or "",
        )
        if creds.is_complete:
            logger.info(f"[AUTH] Credentials resolved from environment ({identifier_var})")
        else:
            missing = [
                name for name, value in
                ((identifier_var, creds.identifier), (secret_var, creds.secret))
                if not value
            ]
            logger.debug(f"[AUTH] Missing credential variables: {', '.join(missing)}")
        return creds


def prompt_credentials(creds: Credentials, portal_name: str = "LinkedIn") -> Credentials:
    """Prompt for missing fields in the terminal.

    Uses ``getpass`` for the secret (no echo). Returns a new instance;
    *creds* itself is never modified.
    """
    if creds.is_complete:
        return creds

    print(f"\n{'=' * 55}")
    print(f"  {portal_name} Authentication Required")
    print(f"{'=' * 55}")

    identifier = creds.identifier
    if not identifier:
        identifier = input(f"  {portal_name} Email: ").strip()
    else:
        print(f"  Email: {creds.masked_identifier}")

    secret = creds.secret
    if not secret:
        secret = getpass.getpass(f"  {portal_name} Password: ")

    print(f"{'=' * 55}\n")
    return replace(creds, identifier=identifier, secret=secret)
