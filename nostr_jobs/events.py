"""JobListing <-> Nostr event conversion.

Kind 39993 events carry the full record as pretty-printed JSON content plus
the searchable tags from `tags.encode_tags`. Decoding prefers the content and
falls back to tags only when the content cannot be parsed as a record; a
record that parses but breaks an invariant is an error, not a fallback.

Signing is delegated to a caller-supplied `Signer`, so this module stays free
of any particular secp256k1 implementation.
"""

from __future__ import annotations

import json
import logging
import time
from typing import List, Optional, Protocol

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .errors import InvalidKind
from .models import JobListing
from .tags import TagDiagnostics, decode_tags, encode_tags
from .utils import sha256_hex

logger = logging.getLogger(__name__)

KIND_JOB_LISTING = 39993
KIND_JOB_APPLICATION = 39994  # reserved for applications


class Signer(Protocol):
    """Anything that holds a key pair: hex public key plus a signature over bytes."""

    public_key: str

    def sign(self, message: bytes) -> str:
        ...


class UnsignedEvent(BaseModel):
    """Event payload ready for an external signer/publisher."""

    pubkey: str
    created_at: int
    kind: int
    tags: List[List[str]]
    content: str

    def compute_id(self) -> str:
        """NIP-01 id: sha256 of the compact JSON array [0, pubkey, created_at, kind, tags, content]."""
        serialized = json.dumps(
            [0, self.pubkey, self.created_at, self.kind, self.tags, self.content],
            separators=(",", ":"),
            ensure_ascii=False,
        )
        return sha256_hex(serialized)

    def sign(self, signer: Signer) -> "Event":
        event_id = self.compute_id()
        return Event(
            id=event_id,
            sig=signer.sign(bytes.fromhex(event_id)),
            **self.model_dump(include={"pubkey", "created_at", "kind", "tags", "content"}),
        )


class Event(UnsignedEvent):
    """A signed event as exchanged with relays."""

    id: str
    sig: str = ""


def build_unsigned(job: JobListing, pubkey_hex: str, created_at: Optional[int] = None) -> UnsignedEvent:
    """Validate `job` and wrap it as a kind 39993 payload authored by `pubkey_hex`."""
    job.validate()
    return UnsignedEvent(
        pubkey=pubkey_hex,
        created_at=int(time.time()) if created_at is None else created_at,
        kind=KIND_JOB_LISTING,
        tags=encode_tags(job, pubkey_hex),
        content=job.to_content(),
    )


def encode(job: JobListing, signer: Signer, created_at: Optional[int] = None) -> Event:
    """Build and sign a job-listing event with the signer's key."""
    return build_unsigned(job, signer.public_key, created_at).sign(signer)


def decode(event: Event, diagnostics: Optional[TagDiagnostics] = None) -> JobListing:
    """Parse a job-listing event back into a validated record.

    Raises InvalidKind for other kinds, a ValidationError subclass when the
    parsed (or tag-reconstructed) record breaks an invariant, and MissingField
    when the tag fallback lacks d/title/company.
    """
    if event.kind != KIND_JOB_LISTING:
        raise InvalidKind(KIND_JOB_LISTING, event.kind)

    try:
        job = JobListing.from_content(event.content)
    except (ValueError, PydanticValidationError) as exc:
        logger.info(f"Event {event.id[:8]} content is not a job record ({type(exc).__name__}); decoding from tags")
        if diagnostics is not None:
            diagnostics.used_fallback = True
        return decode_tags(event.tags, event.content, event.created_at, diagnostics)

    job.validate()
    return job
