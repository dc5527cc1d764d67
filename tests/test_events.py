"""Tests for events.py: the kind 39993 envelope."""

import hashlib
import json

import pytest

from nostr_jobs.errors import InvalidConfiguration, InvalidKind, MissingField
from nostr_jobs.events import KIND_JOB_LISTING, Event, build_unsigned, decode, encode
from nostr_jobs.models import EligibleWorkerType, EmploymentType, JobListing
from nostr_jobs.tags import TagDiagnostics, encode_tags
from tests.conftest import CREATED_AT, PUBKEY


# --- encode ---


def test_encode_binds_kind_tags_and_content(human_job, signer):
    event = encode(human_job, signer, created_at=CREATED_AT)
    assert event.kind == KIND_JOB_LISTING == 39993
    assert event.pubkey == PUBKEY
    assert event.created_at == CREATED_AT
    assert event.tags == encode_tags(human_job, PUBKEY)
    assert json.loads(event.content) == human_job.to_payload()


def test_event_id_is_nip01_hash(human_job, signer):
    event = encode(human_job, signer, created_at=CREATED_AT)
    serialized = json.dumps(
        [0, PUBKEY, CREATED_AT, KIND_JOB_LISTING, event.tags, event.content],
        separators=(",", ":"),
        ensure_ascii=False,
    )
    assert event.id == hashlib.sha256(serialized.encode("utf-8")).hexdigest()


def test_signer_signs_event_id(human_job, signer):
    event = encode(human_job, signer, created_at=CREATED_AT)
    assert signer.messages == [bytes.fromhex(event.id)]
    assert event.sig == "cd" * 64


def test_build_unsigned_refuses_invalid_record(human_job):
    with pytest.raises(MissingField):
        build_unsigned(human_job.model_copy(update={"title": ""}), PUBKEY)


def test_unsigned_event_defaults_created_at_to_now(human_job):
    event = build_unsigned(human_job, PUBKEY)
    assert event.created_at > CREATED_AT


# --- decode ---


@pytest.mark.parametrize("fixture_name", ["human_job", "agent_job", "rich_job"])
def test_round_trip_through_content(request, signer, fixture_name):
    job = request.getfixturevalue(fixture_name)
    diagnostics = TagDiagnostics()
    decoded = decode(encode(job, signer, created_at=CREATED_AT), diagnostics)
    assert decoded == job
    assert diagnostics.used_fallback is False
    decoded.validate()


def test_round_trip_from_relay_json(rich_job, signer):
    """Events arrive as plain JSON from relays."""
    raw = json.loads(json.dumps(encode(rich_job, signer).model_dump()))
    assert decode(Event.model_validate(raw)) == rich_job


def test_kind_mismatch_fails_before_parsing(make_event):
    event = make_event(kind=1, content="not json", tags=[])
    with pytest.raises(InvalidKind) as exc_info:
        decode(event)
    assert exc_info.value.actual == 1


def test_unparseable_content_falls_back_to_tags(make_event):
    event = make_event(
        content="We are hiring a Rust developer!",
        tags=[
            ["d", "acme-test-1"],
            ["t", "Jobs"],
            ["title", "Test Job"],
            ["company", "Acme"],
            ["employment-type", "FULLTIME"],
            ["skill", "Rust"],
            ["skill", "Nostr"],
        ],
    )
    diagnostics = TagDiagnostics()
    job = decode(event, diagnostics)
    assert diagnostics.used_fallback is True
    assert job.title == "Test Job"
    assert job.hiring_organization.name == "Acme"
    assert job.employment_type == [EmploymentType.FULL_TIME]
    assert job.skills == ["Rust", "Nostr"]
    assert job.eligible_worker_type == [EligibleWorkerType.HUMAN]


def test_fallback_drops_ai_fields_of_source_job(agent_job, signer):
    """Tags cannot carry AI requirements, so the fallback path loses them."""
    event = encode(agent_job, signer, created_at=CREATED_AT)
    broken = event.model_copy(update={"content": event.content[:-1]})
    job = decode(broken)
    assert job.eligible_worker_type == [EligibleWorkerType.HUMAN]
    assert job.response_time_max is None
    assert job.identifier == agent_job.identifier
    assert job.skills is None


def test_wrong_shape_json_falls_back_to_tags(make_event):
    event = make_event(
        content=json.dumps({"title": 5}),
        tags=[["d", "x-1"], ["title", "Test Job"], ["company", "Acme"]],
    )
    diagnostics = TagDiagnostics()
    assert decode(event, diagnostics).title == "Test Job"
    assert diagnostics.used_fallback is True


def test_invalid_record_content_is_not_recovered_from_tags(human_job, make_event):
    """Content that parses but breaks an invariant is an error, even with good tags."""
    bad = human_job.model_copy(update={"protocol": "REST"})
    event = make_event(content=bad.to_content(), tags=encode_tags(human_job, PUBKEY))
    diagnostics = TagDiagnostics()
    with pytest.raises(InvalidConfiguration):
        decode(event, diagnostics)
    assert diagnostics.used_fallback is False


def test_fallback_missing_tag_is_surfaced(make_event):
    event = make_event(content="plain text", tags=[["d", "x-1"], ["company", "Acme"]])
    with pytest.raises(MissingField) as exc_info:
        decode(event)
    assert exc_info.value.field == "title"


def test_fallback_tolerates_bad_company_url_tag(make_event):
    tags = [["d", "x-1"], ["t", "Jobs"], ["title", "Dev"], ["company", "Acme"], ["company-url", "acme.com"]]
    diagnostics = TagDiagnostics()
    job = decode(make_event(content="plain text", tags=tags), diagnostics)
    assert job.title == "Dev"
    assert job.hiring_organization.url is None
    assert diagnostics.skipped == [("company-url", "acme.com")]


def test_decoded_record_is_a_new_instance(human_job, signer):
    decoded = decode(encode(human_job, signer))
    assert decoded is not human_job
    assert isinstance(decoded, JobListing)
