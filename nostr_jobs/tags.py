"""Searchable tags for job-listing events.

Tags are a derived index of a JobListing: relays filter on them, while the
event content carries the full record. `TagName` is the single vocabulary
shared by the encoder, the fallback decoder and `JobsFilter`.

Decoding from tags is a lossy fallback for events whose content is not a
parseable record (e.g. legacy plain-text postings). AI-agent fields are never
tagged, so a record recovered this way is always a Human-only listing.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, Field

from .errors import MissingField
from .models import EmploymentType, JobListing, JobLocationType, QuantitativeValue, is_http_url
from .utils import format_number, timestamp_to_date, wire_identifier

logger = logging.getLogger(__name__)

Tag = List[str]

E = TypeVar("E", EmploymentType, JobLocationType)


class TagName:
    IDENTIFIER = "d"
    CATEGORY = "t"
    COMPANY = "company"
    JOB_ID = "job-id"
    TITLE = "title"
    DATE_POSTED = "date-posted"
    LOCATION = "location"
    LOCATION_TYPE = "location-type"
    EMPLOYMENT_TYPE = "employment-type"
    SKILL = "skill"
    SALARY = "salary"
    COUNTRY = "country"
    REGION = "region"
    EXPIRES = "expires"
    EMPLOYER_PUBKEY = "employer-pubkey"
    LIGHTNING = "lightning"
    COMPANY_URL = "company-url"


# Marks an event as a job listing regardless of its numeric kind.
CATEGORY_VALUE = "Jobs"

REMOTE_LOCATION = "Remote"

_LOCATION_ALIASES: Dict[str, JobLocationType] = {"REMOTE": JobLocationType.TELECOMMUTE}


class TagDiagnostics(BaseModel):
    """Optional collector for what a decode had to give up on."""

    used_fallback: bool = False
    skipped: List[Tuple[str, str]] = Field(default_factory=list)

    def skip(self, name: str, value: str) -> None:
        self.skipped.append((name, value))


def encode_tags(job: JobListing, pubkey_hex: str) -> List[Tag]:
    """Project a validated record onto its searchable tags, in emission order."""
    organization = job.hiring_organization
    tags: List[Tag] = [
        [TagName.IDENTIFIER, wire_identifier(organization.name, job.identifier, pubkey_hex)],
        [TagName.CATEGORY, CATEGORY_VALUE],
        [TagName.COMPANY, organization.name],
        [TagName.JOB_ID, job.identifier],
        [TagName.TITLE, job.title],
    ]

    location = job.job_location_type[0].label if job.job_location_type else REMOTE_LOCATION
    tags.append([TagName.LOCATION, location])

    for employment_type in job.employment_type:
        tags.append([TagName.EMPLOYMENT_TYPE, employment_type.label])

    for skill in job.skills or []:
        tags.append([TagName.SKILL, skill])

    salary = job.base_salary
    if salary is not None and isinstance(salary.value, QuantitativeValue):
        salary_range = salary.value
        if salary_range.min_value is not None and salary_range.max_value is not None:
            tags.append([
                TagName.SALARY,
                format_number(salary_range.min_value),
                format_number(salary_range.max_value),
                salary.currency,
                salary_range.unit_text,
            ])

    for place in job.job_location:
        address = place.address
        if address is None:
            continue
        if address.address_country is not None:
            tags.append([TagName.COUNTRY, address.address_country])
        if address.address_region is not None:
            tags.append([TagName.REGION, address.address_region])

    if job.valid_through is not None:
        tags.append([TagName.EXPIRES, job.valid_through])
    if job.nostr_employer_pubkey is not None:
        tags.append([TagName.EMPLOYER_PUBKEY, job.nostr_employer_pubkey])
    if job.lightning_address is not None:
        tags.append([TagName.LIGHTNING, job.lightning_address])
    if organization.url is not None:
        tags.append([TagName.COMPANY_URL, organization.url])

    return tags


def find_tag_value(tags: List[Tag], name: str) -> Optional[str]:
    """First value of the first tag called `name`."""
    for tag in tags:
        if len(tag) >= 2 and tag[0] == name:
            return tag[1]
    return None


def tag_values(tags: List[Tag], name: str) -> List[str]:
    """First value of every tag called `name`, in tag order."""
    return [tag[1] for tag in tags if len(tag) >= 2 and tag[0] == name]


def parse_enum_label(
    enum_cls: Type[E],
    value: str,
    aliases: Optional[Dict[str, E]] = None,
) -> Optional[E]:
    """Case- and separator-insensitive lookup: 'FULLTIME', 'FullTime' and 'full_time' all match."""
    key = re.sub(r"[\s_-]", "", value).upper()
    if aliases and key in aliases:
        return aliases[key]
    for member in enum_cls:
        if member.name.replace("_", "") == key:
            return member
    return None


def _parse_all(
    tags: List[Tag],
    names: List[str],
    enum_cls: Type[E],
    diagnostics: Optional[TagDiagnostics],
    aliases: Optional[Dict[str, E]] = None,
) -> List[E]:
    out: List[E] = []
    for name in names:
        for value in tag_values(tags, name):
            member = parse_enum_label(enum_cls, value, aliases)
            if member is None:
                logger.debug(f"Skipping unrecognized {name} tag value {value!r}")
                if diagnostics is not None:
                    diagnostics.skip(name, value)
                continue
            out.append(member)
        if out:
            break
    return out


def _parse_salary(tag: Tag, diagnostics: Optional[TagDiagnostics]) -> Optional[Tuple[float, float, str, str]]:
    if len(tag) < 5:
        return None
    try:
        return float(tag[1]), float(tag[2]), tag[3], tag[4]
    except ValueError:
        logger.debug(f"Skipping malformed salary tag {tag!r}")
        if diagnostics is not None:
            diagnostics.skip(TagName.SALARY, " ".join(tag[1:]))
        return None


def _addresses(tags: List[Tag]) -> List[Dict[str, str]]:
    """Regroup country/region tags into addresses; a repeated key starts a new one."""
    addresses: List[Dict[str, str]] = []
    for tag in tags:
        if len(tag) < 2 or tag[0] not in (TagName.COUNTRY, TagName.REGION):
            continue
        if not addresses or tag[0] in addresses[-1]:
            addresses.append({})
        addresses[-1][tag[0]] = tag[1]
    return addresses


def decode_tags(
    tags: List[Tag],
    content: str,
    created_at: int,
    diagnostics: Optional[TagDiagnostics] = None,
) -> JobListing:
    """Best-effort reconstruction of a record from tags alone.

    `d`, `title` and `company` are required (MissingField otherwise). The raw
    content becomes the description, so empty content raises
    MissingField("description") when the record is built. The apply URL is
    left empty.

    Unknown employment/location type values, malformed salaries and a
    company-url that is not an http(s) URL are skipped and reported to
    `diagnostics`.
    """
    wire_id = find_tag_value(tags, TagName.IDENTIFIER)
    if wire_id is None:
        raise MissingField(TagName.IDENTIFIER)
    title = find_tag_value(tags, TagName.TITLE)
    if title is None:
        raise MissingField(TagName.TITLE)
    company = find_tag_value(tags, TagName.COMPANY)
    if company is None:
        raise MissingField(TagName.COMPANY)

    identifier = find_tag_value(tags, TagName.JOB_ID) or wire_id
    date_posted = find_tag_value(tags, TagName.DATE_POSTED) or timestamp_to_date(created_at)

    builder = JobListing.builder(identifier, title, content, company, date_posted, "")

    employment_types = _parse_all(tags, [TagName.EMPLOYMENT_TYPE], EmploymentType, diagnostics)
    if employment_types:
        builder.employment_type(employment_types)

    location_types = _parse_all(
        tags,
        [TagName.LOCATION_TYPE, TagName.LOCATION],
        JobLocationType,
        diagnostics,
        _LOCATION_ALIASES,
    )
    if location_types:
        builder.location_type(location_types)

    skills = tag_values(tags, TagName.SKILL)
    if skills:
        builder.skills(skills)

    for tag in tags:
        if tag and tag[0] == TagName.SALARY:
            salary = _parse_salary(tag, diagnostics)
            if salary is not None:
                builder.salary(*salary)
            break

    for address in _addresses(tags):
        builder.location(country=address.get(TagName.COUNTRY), region=address.get(TagName.REGION))

    expires = find_tag_value(tags, TagName.EXPIRES)
    if expires is not None:
        builder.valid_through(expires)
    employer_pubkey = find_tag_value(tags, TagName.EMPLOYER_PUBKEY)
    if employer_pubkey is not None:
        builder.nostr_pubkey(employer_pubkey)
    lightning = find_tag_value(tags, TagName.LIGHTNING)
    if lightning is not None:
        builder.lightning_address(lightning)
    company_url = find_tag_value(tags, TagName.COMPANY_URL)
    if company_url is not None:
        if is_http_url(company_url):
            builder.company_url(company_url)
        else:
            logger.debug(f"Skipping company-url tag that is not an http(s) URL: {company_url!r}")
            if diagnostics is not None:
                diagnostics.skip(TagName.COMPANY_URL, company_url)

    return builder.build()
