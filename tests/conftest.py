"""Shared test fixtures for the nostr_jobs test suite."""

import pytest

from nostr_jobs.events import KIND_JOB_LISTING, Event
from nostr_jobs.models import (
    CapabilityLevel,
    CapabilityRequirement,
    EmploymentType,
    InterfaceType,
    JobListing,
    JobLocationType,
    TranslatedJob,
)

PUBKEY = "ab" * 32

# 2025-01-15 10:00:00 UTC
CREATED_AT = 1736935200


class FakeSigner:
    """Stands in for a secp256k1 key pair; records what it was asked to sign."""

    public_key = PUBKEY

    def __init__(self):
        self.messages = []

    def sign(self, message: bytes) -> str:
        self.messages.append(message)
        return "cd" * 64


@pytest.fixture
def signer():
    return FakeSigner()


@pytest.fixture
def make_builder():
    """Factory fixture for builders pre-filled with the mandatory fields."""

    def _make(**overrides):
        defaults = {
            "identifier": "job-001",
            "title": "Senior Rust Developer",
            "description": "Build decentralized systems",
            "company": "Acme Corp",
            "date": "2025-01-15",
            "apply_url": "https://acme.com/apply",
        }
        defaults.update(overrides)
        return JobListing.builder(**defaults)

    return _make


@pytest.fixture
def human_job(make_builder):
    return (
        make_builder()
        .for_humans()
        .employment_type([EmploymentType.FULL_TIME])
        .remote()
        .salary(120000.0, 180000.0, "USD", "YEAR")
        .skills(["Rust", "Nostr"])
        .build()
    )


@pytest.fixture
def agent_job(make_builder):
    return (
        make_builder(
            identifier="task-001",
            title="Image Classification Task",
            description="Classify product images",
            company="TaskPlatform",
            apply_url="https://api.taskplatform.com/apply",
        )
        .for_ai_agents()
        .employment_type([EmploymentType.TASK_BASED])
        .salary(0.05, 0.10, "USD", "TASK")
        .response_time(5.0, "SECOND")
        .accuracy(95.0)
        .interface_type(InterfaceType.API)
        .protocol("REST")
        .capabilities([CapabilityRequirement(name="Image Classification", level=CapabilityLevel.ADVANCED)])
        .build()
    )


@pytest.fixture
def rich_job(make_builder):
    """A hybrid listing touching every optional area of the record."""
    return (
        make_builder()
        .for_hybrid()
        .employment_type([EmploymentType.FULL_TIME, EmploymentType.CONTRACTOR])
        .location_type([JobLocationType.HYBRID, JobLocationType.ON_SITE])
        .location(country="US", region="CA", locality="San Francisco")
        .location(country="DE")
        .salary(120000.0, 180000.0, "USD", "YEAR")
        .skills(["Rust", "Nostr"])
        .benefits(["Remote stipend"])
        .response_time(2.5, "SECOND")
        .interface_type(InterfaceType.WEBHOOK)
        .valid_through("2025-03-01")
        .company_url("https://acme.com")
        .nostr_pubkey(PUBKEY)
        .apply_via_nostr()
        .lightning_address("jobs@acme.com")
        .translations({"es": TranslatedJob(title="Desarrollador Rust", description="Sistemas descentralizados")})
        .extra("x-referral", {"bonus": 500, "currency": "USD", "notes": None})
        .build()
    )


@pytest.fixture
def make_event():
    """Factory fixture for inbound events."""

    def _make(**overrides):
        defaults = {
            "id": "ef" * 32,
            "pubkey": PUBKEY,
            "created_at": CREATED_AT,
            "kind": KIND_JOB_LISTING,
            "tags": [],
            "content": "",
            "sig": "",
        }
        defaults.update(overrides)
        return Event(**defaults)

    return _make
