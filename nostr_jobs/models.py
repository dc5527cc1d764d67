"""Data models for job listings.

The record follows Schema.org's JobPosting vocabulary with Nostr-specific
extensions (worker eligibility, AI-agent requirements, Lightning/NIP-05
fields). Field names on the wire are camelCase; Python code uses snake_case.

Unknown top-level fields found in content are kept in `extra` and written
back verbatim, so newer publishers' fields survive a decode/encode cycle.

This file uses Pydantic v2.
"""

from __future__ import annotations

from enum import Enum
import json
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, JsonValue, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from .errors import InvalidConfiguration, InvalidDateFormat, InvalidUrl, MissingField

if TYPE_CHECKING:
    from .builder import JobListingBuilder


SCHEMA_CONTEXT = "https://schema.org"

_HTTP_URL = TypeAdapter(HttpUrl)


class _LabelledEnum(str, Enum):
    @property
    def label(self) -> str:
        """CamelCase member name, e.g. FULL_TIME -> 'FullTime'. Used in tags."""
        return "".join(part.capitalize() for part in self.name.split("_"))


class EligibleWorkerType(_LabelledEnum):
    HUMAN = "Human"
    AI_AGENT = "AIAgent"


class EmploymentType(_LabelledEnum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACTOR = "CONTRACTOR"
    TEMPORARY = "TEMPORARY"
    INTERN = "INTERN"
    VOLUNTEER = "VOLUNTEER"
    PER_DIEM = "PER_DIEM"
    TASK_BASED = "TASK_BASED"
    MICRO_TASK = "MICRO_TASK"
    OTHER = "OTHER"


class JobLocationType(_LabelledEnum):
    TELECOMMUTE = "TELECOMMUTE"
    ON_SITE = "ON_SITE"
    HYBRID = "HYBRID"


class CapabilityLevel(_LabelledEnum):
    BASIC = "basic"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class InterfaceType(_LabelledEnum):
    API = "API"
    RPC = "RPC"
    WEBHOOK = "WEBHOOK"
    WEB_PORTAL = "WEB_PORTAL"


class OversightRequirement(_LabelledEnum):
    REQUIRED = "required"
    OPTIONAL = "optional"
    NONE = "none"


class _SchemaModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class HiringOrganization(_SchemaModel):
    schema_type: str = Field(default="Organization", alias="@type")
    name: str
    url: Optional[str] = None
    logo: Optional[str] = None
    same_as: Optional[List[str]] = None


class PostalAddress(_SchemaModel):
    schema_type: str = Field(default="PostalAddress", alias="@type")
    street_address: Optional[str] = None
    address_locality: Optional[str] = None
    address_region: Optional[str] = None
    postal_code: Optional[str] = None
    address_country: Optional[str] = None


class JobLocation(_SchemaModel):
    schema_type: str = Field(default="Place", alias="@type")
    address: Optional[PostalAddress] = None


class MonetaryAmountDistribution(_SchemaModel):
    """Salary expressed as percentiles over a duration (e.g. 'P1Y')."""

    schema_type: str = Field(default="MonetaryAmountDistribution", alias="@type")
    duration: str
    median: Optional[float] = None
    percentile10: Optional[float] = None
    percentile25: Optional[float] = None
    percentile75: Optional[float] = None
    percentile90: Optional[float] = None


class QuantitativeValue(_SchemaModel):
    """Salary expressed as a min/max range per unit (YEAR, MONTH, HOUR, TASK)."""

    schema_type: str = Field(default="QuantitativeValue", alias="@type")
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    unit_text: str


class BaseSalary(_SchemaModel):
    schema_type: str = Field(default="MonetaryAmount", alias="@type")
    currency: str
    value: Union[MonetaryAmountDistribution, QuantitativeValue]


class ApplicantLocationRequirement(_SchemaModel):
    schema_type: str = Field(default="Country", alias="@type")
    name: str


class ExperienceRequirement(_SchemaModel):
    schema_type: str = Field(default="OccupationalExperienceRequirements", alias="@type")
    months_of_experience: Optional[int] = None


class CapabilityRequirement(_SchemaModel):
    name: str
    level: CapabilityLevel


class PerformanceRequirement(_SchemaModel):
    value: float
    unit: str


class TranslatedJob(_SchemaModel):
    title: str
    description: str


class JobListing(_SchemaModel):
    """A job posting record.

    Instances are immutable. Build them with `JobListing.builder(...)` so that
    `validate()` runs exactly once before the record is handed out; records
    decoded from events are re-validated by the event codec.
    """

    context: str = Field(default=SCHEMA_CONTEXT, alias="@context")
    schema_type: str = Field(default="JobPosting", alias="@type")

    identifier: str
    title: str
    description: str
    date_posted: str
    valid_through: Optional[str] = None

    eligible_worker_type: List[EligibleWorkerType] = Field(default_factory=list)

    hiring_organization: HiringOrganization
    job_location: List[JobLocation] = Field(default_factory=list)
    employment_type: List[EmploymentType] = Field(default_factory=list)

    apply_url: Optional[str] = None

    base_salary: Optional[BaseSalary] = None
    job_location_type: Optional[List[JobLocationType]] = None
    qualifications: Optional[str] = None
    responsibilities: Optional[str] = None
    skills: Optional[List[str]] = None
    work_hours: Optional[str] = None
    applicant_location_requirements: Optional[List[ApplicantLocationRequirement]] = None
    job_benefits: Optional[List[str]] = None
    experience_requirements: Optional[ExperienceRequirement] = None

    # Agent requirements. Response time, accuracy, throughput, interface and
    # protocol need the AIAgent worker type (see validate()).
    required_capabilities: Optional[List[CapabilityRequirement]] = None
    response_time_max: Optional[PerformanceRequirement] = None
    accuracy_min: Optional[PerformanceRequirement] = None
    throughput_min: Optional[PerformanceRequirement] = None
    interface_type: Optional[InterfaceType] = None
    protocol: Optional[str] = Field(default=None, description="e.g. 'REST', 'GraphQL', 'gRPC'.")
    human_oversight: Optional[OversightRequirement] = None

    nostr_employer_pubkey: Optional[str] = Field(default=None, description="npub or hex.")
    apply_via_nostr: Optional[bool] = None
    lightning_address: Optional[str] = None
    nip05_verified: Optional[str] = None

    translations: Optional[Dict[str, TranslatedJob]] = None

    extra: Dict[str, JsonValue] = Field(
        default_factory=dict,
        exclude=True,
        description="Unrecognized top-level content fields, preserved verbatim.",
    )

    @classmethod
    def builder(
        cls,
        identifier: str,
        title: str,
        description: str,
        company: str,
        date: str,
        apply_url: str,
    ) -> "JobListingBuilder":
        from .builder import JobListingBuilder

        return JobListingBuilder(identifier, title, description, company, date, apply_url)

    @property
    def accepts_ai_agents(self) -> bool:
        return EligibleWorkerType.AI_AGENT in self.eligible_worker_type

    def validate(self) -> None:  # type: ignore[override]
        """Raise the first violated invariant, or return None if the record is valid."""
        if not self.identifier:
            raise MissingField("identifier")
        if not self.title:
            raise MissingField("title")
        if not self.description:
            raise MissingField("description")
        if not self.hiring_organization.name:
            raise MissingField("hiring_organization.name")
        if self.apply_url is None:
            raise MissingField("apply_url")
        if not self.eligible_worker_type:
            raise MissingField("eligible_worker_type")

        if "-" not in self.date_posted:
            raise InvalidDateFormat("date_posted")

        if not self.accepts_ai_agents and any(
            value is not None
            for value in (
                self.response_time_max,
                self.accuracy_min,
                self.throughput_min,
                self.interface_type,
                self.protocol,
            )
        ):
            raise InvalidConfiguration("AI agent fields require the AIAgent worker type")

        # An empty apply URL counts as present; only a non-empty one is shape-checked.
        if self.apply_url and not is_http_url(self.apply_url):
            raise InvalidUrl("apply_url")
        if self.hiring_organization.url is not None and not is_http_url(self.hiring_organization.url):
            raise InvalidUrl("hiring_organization.url")

    def to_payload(self) -> Dict[str, Any]:
        """Wire dict: camelCase keys, absent fields omitted, `extra` merged in."""
        payload = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        for key, value in self.extra.items():
            payload.setdefault(key, value)
        return payload

    def to_content(self) -> str:
        return json.dumps(self.to_payload(), indent=2, ensure_ascii=False)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "JobListing":
        """Build a record from a wire dict without checking invariants.

        Raises pydantic's ValidationError when fields have the wrong shape.
        """
        known = wire_names()
        data: Dict[str, Any] = {k: v for k, v in payload.items() if k in known}
        data["extra"] = {k: v for k, v in payload.items() if k not in known}
        return cls.model_validate(data)

    @classmethod
    def from_content(cls, content: str) -> "JobListing":
        """Parse JSON content. Raises ValueError if it is not a JSON object of the right shape."""
        payload = json.loads(content)
        if not isinstance(payload, dict):
            raise ValueError("content is not a JSON object")
        return cls.from_payload(payload)


def wire_names() -> frozenset:
    """Top-level content keys owned by the record schema."""
    return frozenset(
        field.alias or name for name, field in JobListing.model_fields.items() if name != "extra"
    )


def is_http_url(value: str) -> bool:
    try:
        _HTTP_URL.validate_python(value)
    except PydanticValidationError:
        return False
    return True
