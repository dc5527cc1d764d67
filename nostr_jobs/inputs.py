"""Job file formats accepted by the CLI.

Two shapes share one model: the simple format (title, company, location,
employment type, skills, salary) and the enhanced format, which adds worker
eligibility and AI-agent requirements. String fields are parsed leniently:
an unrecognized value maps to a sensible default rather than failing, since
these files are hand-written.
"""

from __future__ import annotations

from datetime import datetime, timezone
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .builder import JobListingBuilder
from .models import (
    CapabilityLevel,
    CapabilityRequirement,
    EligibleWorkerType,
    EmploymentType,
    InterfaceType,
    JobListing,
    JobLocationType,
    OversightRequirement,
)
from .utils import slug


_EMPLOYMENT_TYPES: Dict[str, EmploymentType] = {
    "full-time": EmploymentType.FULL_TIME,
    "fulltime": EmploymentType.FULL_TIME,
    "part-time": EmploymentType.PART_TIME,
    "parttime": EmploymentType.PART_TIME,
    "contractor": EmploymentType.CONTRACTOR,
    "contract": EmploymentType.CONTRACTOR,
    "intern": EmploymentType.INTERN,
    "internship": EmploymentType.INTERN,
    "temporary": EmploymentType.TEMPORARY,
    "temp": EmploymentType.TEMPORARY,
    "volunteer": EmploymentType.VOLUNTEER,
    "per-diem": EmploymentType.PER_DIEM,
    "task-based": EmploymentType.TASK_BASED,
    "taskbased": EmploymentType.TASK_BASED,
    "micro-task": EmploymentType.MICRO_TASK,
    "microtask": EmploymentType.MICRO_TASK,
}

_LOCATION_TYPES: Dict[str, JobLocationType] = {
    "remote": JobLocationType.TELECOMMUTE,
    "telecommute": JobLocationType.TELECOMMUTE,
    "onsite": JobLocationType.ON_SITE,
    "on-site": JobLocationType.ON_SITE,
    "office": JobLocationType.ON_SITE,
    "hybrid": JobLocationType.HYBRID,
}

_INTERFACE_TYPES: Dict[str, InterfaceType] = {
    "API": InterfaceType.API,
    "RPC": InterfaceType.RPC,
    "WEBHOOK": InterfaceType.WEBHOOK,
    "WEB_PORTAL": InterfaceType.WEB_PORTAL,
    "WEBPORTAL": InterfaceType.WEB_PORTAL,
}

_WORKER_TYPES: Dict[str, EligibleWorkerType] = {
    "HUMAN": EligibleWorkerType.HUMAN,
    "AIAGENT": EligibleWorkerType.AI_AGENT,
    "AI_AGENT": EligibleWorkerType.AI_AGENT,
    "AI": EligibleWorkerType.AI_AGENT,
}


def parse_employment_type(value: str) -> EmploymentType:
    return _EMPLOYMENT_TYPES.get(value.strip().lower(), EmploymentType.OTHER)


def parse_location_type(value: str) -> JobLocationType:
    return _LOCATION_TYPES.get(value.strip().lower(), JobLocationType.TELECOMMUTE)


def parse_capability_level(value: str) -> CapabilityLevel:
    try:
        return CapabilityLevel(value.strip().lower())
    except ValueError:
        return CapabilityLevel.INTERMEDIATE


def parse_interface_type(value: str) -> InterfaceType:
    return _INTERFACE_TYPES.get(value.strip().upper(), InterfaceType.API)


def parse_oversight(value: str) -> OversightRequirement:
    try:
        return OversightRequirement(value.strip().lower())
    except ValueError:
        return OversightRequirement.OPTIONAL


def parse_worker_types(values: List[str]) -> List[EligibleWorkerType]:
    """Unknown worker types are dropped; duplicates keep their first position."""
    out: List[EligibleWorkerType] = []
    for value in values:
        worker = _WORKER_TYPES.get(value.strip().upper())
        if worker is not None and worker not in out:
            out.append(worker)
    return out


class _InputModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SalaryInput(_InputModel):
    currency: str
    min: float
    max: float
    unit: Optional[str] = None


class CapabilityInput(_InputModel):
    name: str
    level: str = Field(..., description="basic, intermediate, advanced or expert.")


class MetricInput(_InputModel):
    value: float
    unit: str


class PerformanceInput(_InputModel):
    response_time_max: Optional[MetricInput] = None
    accuracy_min: Optional[MetricInput] = None
    throughput_min: Optional[MetricInput] = None


class InterfaceInput(_InputModel):
    interface_type: str = Field(..., description="API, RPC, WEBHOOK or WEB_PORTAL.")
    protocol: str
    authentication: Optional[str] = None
    input_format: Optional[str] = None
    output_format: Optional[str] = None


class JobPostInput(_InputModel):
    """A hand-written job file (simple or enhanced)."""

    job_type: str = Field(..., alias="type")
    version: int
    title: str
    company: str
    location: str
    employment_type: str
    description: str
    skills: List[str] = Field(default_factory=list)
    salary: SalaryInput

    eligible_worker_type: Optional[List[str]] = None
    required_capabilities: Optional[List[CapabilityInput]] = None
    performance_requirements: Optional[PerformanceInput] = None
    interface_requirements: Optional[InterfaceInput] = None
    human_oversight: Optional[str] = None
    quality_assurance: Optional[Dict[str, Any]] = None
    compliance: Optional[Dict[str, Any]] = None

    identifier: Optional[str] = None
    valid_through: Optional[str] = None
    lightning_address: Optional[str] = None
    apply_url: Optional[str] = None

    @classmethod
    def load(cls, path: Path) -> "JobPostInput":
        """Read and validate a job file. Raises pydantic's ValidationError on bad shape."""
        return cls.model_validate_json(path.read_text(encoding="utf-8"))

    @property
    def has_agent_requirements(self) -> bool:
        return any(
            section is not None
            for section in (self.required_capabilities, self.performance_requirements, self.interface_requirements)
        )

    def generated_identifier(self) -> str:
        """'<company>-<first 20 chars of title>-<8 hex chars>'."""
        short = uuid.uuid4().hex[:8]
        return f"{slug(self.company)}-{slug(self.title)[:20]}-{short}"

    def worker_types(self) -> List[EligibleWorkerType]:
        # Files without an explicit list are AI-agent postings only if they
        # describe agent requirements.
        if self.eligible_worker_type is not None:
            return parse_worker_types(self.eligible_worker_type)
        if self.has_agent_requirements:
            return [EligibleWorkerType.AI_AGENT]
        return [EligibleWorkerType.HUMAN]

    def to_builder(self, pubkey: str, today: Optional[str] = None) -> JobListingBuilder:
        date_posted = today or datetime.now(timezone.utc).strftime("%Y-%m-%d")
        builder = (
            JobListing.builder(
                self.identifier or self.generated_identifier(),
                self.title,
                self.description,
                self.company,
                date_posted,
                self.apply_url or "",
            )
            .eligible_worker_type(self.worker_types())
            .employment_type([parse_employment_type(self.employment_type)])
            .location_type([parse_location_type(self.location)])
            .skills(self.skills)
            .nostr_pubkey(pubkey)
            .salary(self.salary.min, self.salary.max, self.salary.currency, self.salary.unit or "YEAR")
        )

        if self.required_capabilities:
            builder.capabilities([
                CapabilityRequirement(name=cap.name, level=parse_capability_level(cap.level))
                for cap in self.required_capabilities
            ])

        perf = self.performance_requirements
        if perf is not None:
            if perf.response_time_max is not None:
                builder.response_time(perf.response_time_max.value, perf.response_time_max.unit)
            if perf.accuracy_min is not None:
                builder.accuracy(perf.accuracy_min.value)
            if perf.throughput_min is not None:
                builder.throughput(perf.throughput_min.value, perf.throughput_min.unit)

        interface = self.interface_requirements
        if interface is not None:
            builder.interface_type(parse_interface_type(interface.interface_type))
            builder.protocol(interface.protocol)

        if self.human_oversight is not None:
            builder.human_oversight(parse_oversight(self.human_oversight))

        # No schema fields for these; carry them in content as-is.
        if self.quality_assurance is not None:
            builder.extra("qualityAssurance", self.quality_assurance)
        if self.compliance is not None:
            builder.extra("compliance", self.compliance)

        if self.valid_through is not None:
            builder.valid_through(self.valid_through)
        if self.lightning_address is not None:
            builder.lightning_address(self.lightning_address)

        return builder

    def to_listing(self, pubkey: str, today: Optional[str] = None) -> JobListing:
        """Convert to a validated JobListing authored by `pubkey`."""
        return self.to_builder(pubkey, today).build()
