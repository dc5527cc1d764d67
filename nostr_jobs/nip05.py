"""NIP-05 employer verification.

A NIP-05 identifier `name@domain` is verified by fetching
`https://domain/.well-known/nostr.json?name=name` and checking that the
returned `names` map points `name` at the employer's hex public key.

Docs: https://github.com/nostr-protocol/nips/blob/master/05.md
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import httpx

from . import config

logger = logging.getLogger(__name__)


def split_identifier(identifier: str) -> Tuple[str, str]:
    """'alice@example.com' -> ('alice', 'example.com'); a bare domain means '_'."""
    identifier = identifier.strip().lower()
    if "@" in identifier:
        name, domain = identifier.split("@", 1)
    else:
        name, domain = "_", identifier
    if not name or not domain:
        raise ValueError(f"Invalid NIP-05 identifier: {identifier!r}")
    return name, domain


class Nip05Verifier:
    """Resolve NIP-05 identifiers over HTTPS.

    Redirects are not followed: NIP-05 requires the well-known document to be
    served by the identifier's own domain. A response that is not a JSON
    object with a `names` map raises ValueError.
    """

    def __init__(self, timeout_s: Optional[float] = None, client: Optional[httpx.Client] = None) -> None:
        self._timeout = config.HTTP_TIMEOUT_SECONDS if timeout_s is None else timeout_s
        self._client = client

    def resolve(self, identifier: str) -> Optional[str]:
        """Return the hex pubkey published for `identifier`, or None if the name is not listed."""
        name, domain = split_identifier(identifier)
        url = f"https://{domain}/.well-known/nostr.json"

        if self._client is not None:
            resp = self._client.get(url, params={"name": name})
        else:
            with httpx.Client(timeout=self._timeout, follow_redirects=False) as client:
                resp = client.get(url, params={"name": name})
        resp.raise_for_status()

        try:
            data = resp.json()
        except ValueError as exc:
            raise ValueError(f"{url} did not return JSON") from exc
        names = data.get("names") if isinstance(data, dict) else None
        if not isinstance(names, dict):
            raise ValueError(f"{url} has no 'names' object")
        pubkey = names.get(name)
        return pubkey.lower() if isinstance(pubkey, str) else None

    def verify(self, identifier: str, pubkey_hex: str) -> bool:
        """True when `identifier` resolves to `pubkey_hex`. HTTP errors propagate."""
        resolved = self.resolve(identifier)
        verified = resolved is not None and resolved == pubkey_hex.lower()
        logger.info(f"NIP-05 {identifier}: {'verified' if verified else 'not verified'}")
        return verified
