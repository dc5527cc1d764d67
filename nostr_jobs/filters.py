"""Relay query filters for job listings.

Predicate tag names come from `tags.TagName`, the same table the encoder
uses, so a filter can only ask for tags that events actually carry.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from .events import KIND_JOB_LISTING, UnsignedEvent
from .models import EmploymentType
from .tags import CATEGORY_VALUE, TagName, parse_enum_label, tag_values


class JobsFilter:
    """Builds a NIP-01 filter scoped to job listings.

    Repeated calls for the same predicate widen it (any value matches);
    different predicates narrow it (all must match).
    """

    def __init__(self) -> None:
        self._tags: Dict[str, List[str]] = {TagName.CATEGORY: [CATEGORY_VALUE]}
        self._limit: Optional[int] = None

    def _add(self, name: str, value: str) -> "JobsFilter":
        values = self._tags.setdefault(name, [])
        if value not in values:
            values.append(value)
        return self

    def company(self, name: str) -> "JobsFilter":
        return self._add(TagName.COMPANY, name)

    def employment_type(self, employment_type: Union[EmploymentType, str]) -> "JobsFilter":
        """Accepts a member or any spelling the tag decoder understands ('FULL_TIME', 'full-time')."""
        if not isinstance(employment_type, EmploymentType):
            parsed = parse_enum_label(EmploymentType, employment_type)
            if parsed is None:
                raise ValueError(f"Unknown employment type: {employment_type!r}")
            employment_type = parsed
        return self._add(TagName.EMPLOYMENT_TYPE, employment_type.label)

    def skill(self, skill: str) -> "JobsFilter":
        return self._add(TagName.SKILL, skill)

    def limit(self, limit: int) -> "JobsFilter":
        if limit < 0:
            raise ValueError("limit must be non-negative")
        self._limit = limit
        return self

    def build(self) -> Dict[str, Any]:
        query: Dict[str, Any] = {"kinds": [KIND_JOB_LISTING]}
        for name, values in self._tags.items():
            query[f"#{name}"] = list(values)
        if self._limit is not None:
            query["limit"] = self._limit
        return query

    def matches(self, event: UnsignedEvent) -> bool:
        """Evaluate the filter locally, as a relay would (limit is not applied)."""
        if event.kind != KIND_JOB_LISTING:
            return False
        for name, wanted in self._tags.items():
            if not set(wanted) & set(tag_values(event.tags, name)):
                return False
        return True
