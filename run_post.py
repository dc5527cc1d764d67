"""CLI entry point.

This script reads a job file, builds a validated JobListing, and writes the
unsigned kind 39993 event (content + tags) as JSON, ready for a signer and
publisher.

Examples:
    python run_post.py my-job.json
    python run_post.py my-job.json --out event.json --pubkey <hex>
    python run_post.py my-job.json --nip05 jobs@acme.com

The author key comes from --pubkey or NOSTR_PUBKEY in .env.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys

import httpx
from pydantic import ValidationError as PydanticValidationError

from nostr_jobs import config
from nostr_jobs.errors import ValidationError
from nostr_jobs.events import build_unsigned
from nostr_jobs.inputs import JobPostInput
from nostr_jobs.nip05 import Nip05Verifier

logger = logging.getLogger("run_post")


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Build a Nostr job-listing event from a job file.")
    p.add_argument("job_file", type=str, help="Path to the job JSON file.")
    p.add_argument("--out", type=str, default="event.json", help="Output JSON file path.")
    p.add_argument("--pubkey", type=str, default=None, help="Author hex public key (default: NOSTR_PUBKEY).")
    p.add_argument("--nip05", type=str, default=None, help="NIP-05 identifier to verify against the pubkey.")
    return p.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    pubkey = (args.pubkey or config.NOSTR_PUBKEY).strip().lower()
    if len(pubkey) != 64 or any(c not in "0123456789abcdef" for c in pubkey):
        logger.error("A 64-character hex public key is required (--pubkey or NOSTR_PUBKEY)")
        return 2

    try:
        post = JobPostInput.load(Path(args.job_file).expanduser())
        builder = post.to_builder(pubkey)
        if args.nip05:
            if Nip05Verifier().verify(args.nip05, pubkey):
                builder.nip05(args.nip05)
            else:
                logger.warning(f"{args.nip05} does not resolve to {pubkey[:8]}; not marking as verified")
        job = builder.build()
    except (OSError, ValueError, PydanticValidationError, ValidationError, httpx.HTTPError) as exc:
        logger.error(f"Could not build job listing: {exc}")
        return 1

    event = build_unsigned(job, pubkey)
    logger.info(f"Built job {job.identifier!r} with {len(event.tags)} tags")

    out_path = Path(args.out).expanduser().resolve()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(event.model_dump(), indent=2, ensure_ascii=False), encoding="utf-8")

    print(f"Wrote unsigned event to: {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
