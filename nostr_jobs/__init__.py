"""Nostr job listings.

The package is structured around one stable record and two wire views of it:
- `models.py` defines the JobListing schema and its invariants.
- `builder.py` is the only supported way to assemble a record.
- `tags.py` and `events.py` map records to kind 39993 events and back.
- `filters.py` builds relay queries from the same tag vocabulary.
"""

from .builder import JobListingBuilder
from .errors import (
    InvalidConfiguration,
    InvalidDateFormat,
    InvalidKind,
    InvalidUrl,
    JobListingError,
    MissingField,
    ValidationError,
)
from .events import KIND_JOB_LISTING, Event, Signer, UnsignedEvent, build_unsigned, decode, encode
from .filters import JobsFilter
from .models import (
    BaseSalary,
    EligibleWorkerType,
    EmploymentType,
    HiringOrganization,
    JobListing,
    JobLocation,
    JobLocationType,
)
from .tags import TagDiagnostics, TagName

__all__ = [
    "BaseSalary",
    "EligibleWorkerType",
    "EmploymentType",
    "Event",
    "HiringOrganization",
    "InvalidConfiguration",
    "InvalidDateFormat",
    "InvalidKind",
    "InvalidUrl",
    "JobListing",
    "JobListingBuilder",
    "JobListingError",
    "JobLocation",
    "JobLocationType",
    "JobsFilter",
    "KIND_JOB_LISTING",
    "MissingField",
    "Signer",
    "TagDiagnostics",
    "TagName",
    "UnsignedEvent",
    "ValidationError",
    "build_unsigned",
    "decode",
    "encode",
]
