"""Staged construction of JobListing records.

Staging calls only record values; `build()` is the single place where
invariants are checked, so a builder can pass through invalid intermediate
states (e.g. AI fields set before `for_ai_agents()`).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import JsonValue, TypeAdapter

from .models import (
    BaseSalary,
    CapabilityRequirement,
    EligibleWorkerType,
    EmploymentType,
    HiringOrganization,
    InterfaceType,
    JobListing,
    JobLocation,
    JobLocationType,
    OversightRequirement,
    PerformanceRequirement,
    PostalAddress,
    QuantitativeValue,
    TranslatedJob,
    wire_names,
)

_JSON_VALUE = TypeAdapter(JsonValue)


class JobListingBuilder:
    """Fluent builder; every staging method returns the builder itself."""

    def __init__(
        self,
        identifier: str,
        title: str,
        description: str,
        company: str,
        date: str,
        apply_url: str,
    ) -> None:
        self._job = JobListing(
            identifier=identifier,
            title=title,
            description=description,
            date_posted=date,
            hiring_organization=HiringOrganization(name=company),
            apply_url=apply_url,
            eligible_worker_type=[EligibleWorkerType.HUMAN],
        )

    def _set(self, **changes: Any) -> "JobListingBuilder":
        self._job = self._job.model_copy(update=changes)
        return self

    def valid_through(self, date: str) -> "JobListingBuilder":
        return self._set(valid_through=date)

    def eligible_worker_type(self, types: List[EligibleWorkerType]) -> "JobListingBuilder":
        return self._set(eligible_worker_type=list(types))

    def for_humans(self) -> "JobListingBuilder":
        return self._set(eligible_worker_type=[EligibleWorkerType.HUMAN])

    def for_ai_agents(self) -> "JobListingBuilder":
        return self._set(eligible_worker_type=[EligibleWorkerType.AI_AGENT])

    def for_hybrid(self) -> "JobListingBuilder":
        return self._set(eligible_worker_type=[EligibleWorkerType.HUMAN, EligibleWorkerType.AI_AGENT])

    def employment_type(self, types: List[EmploymentType]) -> "JobListingBuilder":
        return self._set(employment_type=list(types))

    def location_type(self, types: List[JobLocationType]) -> "JobListingBuilder":
        return self._set(job_location_type=list(types))

    def remote(self) -> "JobListingBuilder":
        return self._set(job_location_type=[JobLocationType.TELECOMMUTE])

    def location(
        self,
        country: Optional[str] = None,
        region: Optional[str] = None,
        locality: Optional[str] = None,
    ) -> "JobListingBuilder":
        """Append a physical location with a postal address."""
        address = PostalAddress(address_country=country, address_region=region, address_locality=locality)
        return self._set(job_location=[*self._job.job_location, JobLocation(address=address)])

    def salary(self, min_value: float, max_value: float, currency: str, period: str) -> "JobListingBuilder":
        """Set a salary range; `period` is the unit (YEAR, MONTH, HOUR, TASK)."""
        salary = BaseSalary(
            currency=currency,
            value=QuantitativeValue(min_value=min_value, max_value=max_value, unit_text=period),
        )
        return self._set(base_salary=salary)

    def skills(self, skills: List[str]) -> "JobListingBuilder":
        return self._set(skills=list(skills))

    def benefits(self, benefits: List[str]) -> "JobListingBuilder":
        return self._set(job_benefits=list(benefits))

    def capabilities(self, capabilities: List[CapabilityRequirement]) -> "JobListingBuilder":
        return self._set(required_capabilities=list(capabilities))

    def response_time(self, value: float, unit: str) -> "JobListingBuilder":
        return self._set(response_time_max=PerformanceRequirement(value=value, unit=unit))

    def accuracy(self, value: float) -> "JobListingBuilder":
        return self._set(accuracy_min=PerformanceRequirement(value=value, unit="PERCENT"))

    def throughput(self, value: float, unit: str) -> "JobListingBuilder":
        return self._set(throughput_min=PerformanceRequirement(value=value, unit=unit))

    def interface_type(self, interface: InterfaceType) -> "JobListingBuilder":
        return self._set(interface_type=interface)

    def protocol(self, protocol: str) -> "JobListingBuilder":
        return self._set(protocol=protocol)

    def human_oversight(self, oversight: OversightRequirement) -> "JobListingBuilder":
        return self._set(human_oversight=oversight)

    def company_url(self, url: str) -> "JobListingBuilder":
        organization = self._job.hiring_organization.model_copy(update={"url": url})
        return self._set(hiring_organization=organization)

    def nostr_pubkey(self, pubkey: str) -> "JobListingBuilder":
        return self._set(nostr_employer_pubkey=pubkey)

    def apply_via_nostr(self, enabled: bool = True) -> "JobListingBuilder":
        return self._set(apply_via_nostr=enabled)

    def lightning_address(self, address: str) -> "JobListingBuilder":
        return self._set(lightning_address=address)

    def nip05(self, identifier: str) -> "JobListingBuilder":
        return self._set(nip05_verified=identifier)

    def translations(self, translations: Dict[str, TranslatedJob]) -> "JobListingBuilder":
        return self._set(translations=dict(translations))

    def extra(self, key: str, value: Any) -> "JobListingBuilder":
        """Attach a field outside the fixed schema; it is written to content as-is.

        Raises ValueError if `key` is a schema field name, and pydantic's
        ValidationError if `value` is not JSON data.
        """
        if key in wire_names():
            raise ValueError(f"{key!r} is a schema field; use its builder method instead")
        value = _JSON_VALUE.validate_python(value)
        return self._set(extra={**self._job.extra, key: value})

    def build(self) -> JobListing:
        """Validate and return the record. Raises a ValidationError subclass."""
        self._job.validate()
        return self._job
