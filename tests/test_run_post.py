"""Tests for run_post.py: the job file to event CLI."""

import json
import sys

import run_post
from nostr_jobs import config
from nostr_jobs.models import JobListing
from tests.conftest import PUBKEY
from tests.test_inputs import SIMPLE_JOB


def _run(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["run_post.py", *argv])
    return run_post.main()


def _job_file(tmp_path, data=None):
    path = tmp_path / "job.json"
    path.write_text(json.dumps(data or SIMPLE_JOB), encoding="utf-8")
    return path


def test_writes_unsigned_event(monkeypatch, tmp_path):
    out = tmp_path / "out" / "event.json"
    assert _run(monkeypatch, str(_job_file(tmp_path)), "--out", str(out), "--pubkey", PUBKEY) == 0

    event = json.loads(out.read_text(encoding="utf-8"))
    assert event["kind"] == 39993
    assert event["pubkey"] == PUBKEY
    assert ["t", "Jobs"] in event["tags"]
    assert JobListing.from_content(event["content"]).title == "Senior Rust Developer"


def test_pubkey_from_environment(monkeypatch, tmp_path):
    monkeypatch.setattr(config, "NOSTR_PUBKEY", PUBKEY)
    out = tmp_path / "event.json"
    assert _run(monkeypatch, str(_job_file(tmp_path)), "--out", str(out)) == 0
    assert json.loads(out.read_text(encoding="utf-8"))["pubkey"] == PUBKEY


def test_missing_pubkey_exits_2(monkeypatch, tmp_path):
    monkeypatch.setattr(config, "NOSTR_PUBKEY", "")
    assert _run(monkeypatch, str(_job_file(tmp_path)), "--out", str(tmp_path / "e.json")) == 2


def test_malformed_job_file_exits_1(monkeypatch, tmp_path):
    path = tmp_path / "job.json"
    path.write_text("{not json", encoding="utf-8")
    out = tmp_path / "event.json"
    assert _run(monkeypatch, str(path), "--out", str(out), "--pubkey", PUBKEY) == 1
    assert not out.exists()


def test_nip05_recorded_when_verified(monkeypatch, tmp_path):
    class _Verifier:
        def verify(self, identifier, pubkey_hex):
            return identifier == "jobs@acme.com" and pubkey_hex == PUBKEY

    monkeypatch.setattr(run_post, "Nip05Verifier", _Verifier)
    out = tmp_path / "event.json"
    args = [str(_job_file(tmp_path)), "--out", str(out), "--pubkey", PUBKEY, "--nip05", "jobs@acme.com"]
    assert _run(monkeypatch, *args) == 0
    content = json.loads(json.loads(out.read_text(encoding="utf-8"))["content"])
    assert content["nip05Verified"] == "jobs@acme.com"


def test_nip05_left_out_when_not_verified(monkeypatch, tmp_path):
    class _Verifier:
        def verify(self, identifier, pubkey_hex):
            return False

    monkeypatch.setattr(run_post, "Nip05Verifier", _Verifier)
    out = tmp_path / "event.json"
    args = [str(_job_file(tmp_path)), "--out", str(out), "--pubkey", PUBKEY, "--nip05", "jobs@acme.com"]
    assert _run(monkeypatch, *args) == 0
    content = json.loads(json.loads(out.read_text(encoding="utf-8"))["content"])
    assert "nip05Verified" not in content


def test_bad_nip05_identifier_exits_1(monkeypatch, tmp_path):
    out = tmp_path / "event.json"
    args = [str(_job_file(tmp_path)), "--out", str(out), "--pubkey", PUBKEY, "--nip05", "@"]
    assert _run(monkeypatch, *args) == 1
    assert not out.exists()


def test_non_json_nip05_document_exits_1(monkeypatch, tmp_path):
    class _Verifier:
        def verify(self, identifier, pubkey_hex):
            raise ValueError("https://acme.com/.well-known/nostr.json did not return JSON")

    monkeypatch.setattr(run_post, "Nip05Verifier", _Verifier)
    out = tmp_path / "event.json"
    args = [str(_job_file(tmp_path)), "--out", str(out), "--pubkey", PUBKEY, "--nip05", "jobs@acme.com"]
    assert _run(monkeypatch, *args) == 1
    assert not out.exists()
