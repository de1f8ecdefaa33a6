"""
Data Models
===========
Pydantic records for the structured data scraped from the portal page.
All records are frozen and serialize to camelCase JSON for API consumers.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    """Base for every scraped record: immutable, camelCase on the wire."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


# ─── Fee Models ───────────────────────────────────────────────────────────────


class FeeSchedule(Record):
    """
    Itemized charges for one student status, split by academic track.
    "TOTAL" and "GRAND TOTAL" keys come from the full-text scan only.
    """
    science: dict[str, float] = Field(default_factory=dict)
    non_science: dict[str, float] = Field(default_factory=dict)


class ChargePair(Record):
    """An additional charge quoted for both tracks."""
    science: float = Field(ge=0)
    non_science: float = Field(ge=0)


class UndergraduateFees(Record):
    fresh_students: FeeSchedule = Field(default_factory=FeeSchedule)
    returning_students: FeeSchedule = Field(default_factory=FeeSchedule)
    additional_charges: dict[str, ChargePair] = Field(default_factory=dict)
    note: str = ""


class ProgramFeeEntry(Record):
    """One postgraduate program line: freshers and returning charges."""
    program: str = Field(min_length=1)
    freshers: float = Field(ge=0)
    returning: float = Field(ge=0)


class PostgraduateFees(Record):
    programs: list[ProgramFeeEntry] = Field(default_factory=list)


class HostelEntry(Record):
    """A hostel accommodation row. ``sn`` is kept as printed on the page."""
    sn: str
    hostel_name: str
    demarcation: str = "N/A"
    amount: float = Field(ge=0)


class AcceptanceFees(Record):
    """
    Acceptance fee items for medical sciences candidates and everyone else.
    A "-" on the page is recorded as 0.
    """
    medical_sciences: dict[str, float] = Field(default_factory=dict)
    other_candidates: dict[str, float] = Field(default_factory=dict)


# ─── Announcement / Requirement Models ───────────────────────────────────────


class Announcement(Record):
    title: str
    excerpt: str
    full_content: str


class RequirementDocument(Record):
    number: str
    document: str


class Requirements(Record):
    documents_required: list[RequirementDocument] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)


# ─── Snapshot ─────────────────────────────────────────────────────────────────


class AggregateSnapshot(Record):
    """
    Point-in-time composite of every extractor's output for one fetch.
    Never persisted.
    """
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    undergraduate_fees: UndergraduateFees
    postgraduate_fees: PostgraduateFees
    hostel_fees: list[HostelEntry] = Field(default_factory=list)
    acceptance_fees: AcceptanceFees
    announcements: list[Announcement] = Field(default_factory=list)
    requirements: Requirements
