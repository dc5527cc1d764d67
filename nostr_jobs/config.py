"""Configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root, then allow the process environment.
load_dotenv(Path(__file__).resolve().parent.parent / ".env")
load_dotenv()

# Hex public key used as the event author when none is given on the command line.
NOSTR_PUBKEY: str = os.getenv("NOSTR_PUBKEY", "")

# HTTP settings (NIP-05 lookups)
HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "20"))

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
