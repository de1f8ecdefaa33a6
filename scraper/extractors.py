"""
Field Extractors
================
Pattern-matching parsers that turn the portal page's prose and tables into
typed records. Each public ``extract_*`` function takes a PageDocument and
returns one record; a failure inside one extractor is logged and replaced
by that extractor's empty record so sibling extractors are unaffected.

The page has no stable schema, so every pattern lives here as a named
constant behind a small function that can be tested on its own.
"""

from __future__ import annotations

import functools
import logging
import re
from typing import Callable, Optional

from .document import PageDocument, TableRow
from .models import (
    AcceptanceFees,
    Announcement,
    ChargePair,
    FeeSchedule,
    HostelEntry,
    PostgraduateFees,
    ProgramFeeEntry,
    RequirementDocument,
    Requirements,
    UndergraduateFees,
)
from .text import find_amount, locate_section, normalize, parse_amount

logger = logging.getLogger(__name__)

# ─── Shared Patterns ──────────────────────────────────────────────────────────

AMOUNT = r"\d[\d,]*\.\d{2}"

# "TOTAL 123,450.00 98,000.00", also matches inside "GRAND TOTAL ..."
TOTAL_PATTERN = re.compile(rf"TOTAL\s+({AMOUNT})\s+({AMOUNT})")
GRAND_TOTAL_PATTERN = re.compile(rf"GRAND TOTAL\s+({AMOUNT})\s+({AMOUNT})")

# ─── Undergraduate ────────────────────────────────────────────────────────────

ADDITIONAL_CHARGE_KEYWORDS = (
    "Orientation",
    "Certificate",
    "Academic Gown",
    "Forensic",
)
TOTAL_ROW_KEYWORDS = ("TOTAL", "GRAND")

ADDED_CHARGE_NOTE_PATTERN = re.compile(
    r"Please Note that there is added charge of N([\d,]+) for New Students"
    r".*?and N([\d,]+) for Returning Students"
)

# ─── Postgraduate ─────────────────────────────────────────────────────────────

PG_SECTION_START = re.compile(r"POST GRADUATE FULL TIME CHARGES")
PG_SECTION_END = re.compile(r"THE CHARGES FOR SCIENCE")
PROGRAM_AMOUNTS_PATTERN = re.compile(rf"({AMOUNT})\s+({AMOUNT})")

# ─── Hostel ───────────────────────────────────────────────────────────────────

HOSTEL_SECTION_START = re.compile(r"THE HOSTEL ACCOMMODATION FEES FROM 2024/2025")
HOSTEL_SECTION_END = re.compile(r"THE FORMER CHARGES|RETURNING STUDENTS")

# Wing/block designations that can follow a hostel name
DEMARCATION_KEYWORDS = (
    "WING",
    "BLOCK",
    "FLOOR",
    "ANNEXE",
    "ANNEX",
    "EXTENSION",
    "SECTION",
    "SIDE",
    "FEMALE",
    "MALE",
)
DEMARCATION = (
    r"(?:[A-Z]{2,}\s+)?"
    rf"(?:{'|'.join(DEMARCATION_KEYWORDS)})\b"
    r"(?:\s+[A-Z\d](?=\s))?"
)

# "1. HALL A NORTH WING 45,000.00" -> sn, name, demarcation, amount
HOSTEL_ROW_PATTERN = re.compile(
    r"(\d+)\.\s+"
    r"([A-Z\s()/\d]+?)"
    rf"(?:\s+({DEMARCATION}))?"
    rf"\s+({AMOUNT})"
)

# ─── Acceptance ───────────────────────────────────────────────────────────────

ACCEPTANCE_ITEMS = (
    "BANK/PORTAL CHARGES",
    "ADMISSION CLEARANCE",
    "ICT LEVY",
    "MAINTENANCE FEE",
    "MTN NET LIBRARY",
    "COLLEGE DEVELOPMENT LEVY",
)
ACCEPTANCE_ITEM_PATTERNS = {
    item: re.compile(
        rf"{re.escape(item)}\s+({AMOUNT})\s+({AMOUNT}|-)", re.IGNORECASE
    )
    for item in ACCEPTANCE_ITEMS
}

# ─── Announcements ────────────────────────────────────────────────────────────

ANNOUNCEMENT_PATTERNS = (
    (
        "Hostel Accommodation Guidelines",
        re.compile(
            r"UNIBEN HOSTEL ACCOMMODATION.*?GUIDELINES"
            r".*?(?=\*\* Accommodation Booking|\Z)",
            re.DOTALL,
        ),
    ),
    (
        "Accommodation Booking Information",
        re.compile(
            r"\*\* Accommodation Booking.*?(?=NEWLY ADMITTED|\Z)", re.DOTALL
        ),
    ),
    (
        "Requirements for Newly Admitted Students",
        re.compile(
            r"NEWLY ADMITTED STUDENTS REQUIREMENTS.*?(?=THE ACCEPTANCE FEE|\Z)",
            re.DOTALL,
        ),
    ),
    (
        "Information for Returning Students",
        re.compile(
            r"RETURNING STUDENTS.*?(?=NOTE THAT ALL STUDENTS|THE HOSTEL|\Z)",
            re.DOTALL,
        ),
    ),
)
BOOKING_DATE_PATTERN = re.compile(
    r"Accommodation Booking.*?SATURDAY (\d+ \w+ \d+)", re.DOTALL
)
EXCERPT_LENGTH = 500

# ─── Requirements ─────────────────────────────────────────────────────────────

REQUIRED_DOCUMENT_PATTERN = re.compile(
    r"(\d+)\.\s+([A-Za-z\s()/\-:]+"
    r"(?:Certificate|result|Card|letter|Affidavit|PASSPORT))",
    re.IGNORECASE,
)

INSTRUCTIONS = (
    "PAY YOUR ACCEPTANCE FEE",
    "UPLOAD RELEVANT DOCUMENTS",
    "REQUEST CLEARANCE",
    "REMEMBER TO UPLOAD SCAN OF SCRATCH CARD",
    "NO NEED TO COME INTO CAMPUS",
    "PAY SCHOOL CHARGES",
    "REGISTER YOUR COURSES ONLINE",
    "VISIT COURSE ADVISER FOR VALIDATION",
)


# ─── Failure Boundary ─────────────────────────────────────────────────────────


def isolated(label: str, default_factory: Callable):
    """
    Run an extractor so that any failure degrades to its empty record.

    The exception is logged with the extractor label; the caller always
    receives a record of the expected shape.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(document: PageDocument):
            try:
                return func(document)
            except Exception:
                logger.exception(f"Error extracting {label}")
                return default_factory()
        return wrapper
    return decorator


def _amount_pair(match: re.Match) -> Optional[tuple[float, float]]:
    """Parse both amount groups of a match; None if either is malformed."""
    first = parse_amount(match.group(1))
    second = parse_amount(match.group(2))
    if first is None or second is None:
        return None
    return first, second


# ─── Undergraduate Fees ───────────────────────────────────────────────────────


def classify_fee_rows(
    rows: list[TableRow],
) -> tuple[dict[str, tuple[float, float]], dict[str, ChargePair]]:
    """
    Split table rows into itemized fees and additional charges.

    Only rows whose two value cells both hold an amount qualify. Rows
    labelled with a total are dropped; totals come from the text scan.

    Returns:
        (itemized, additional) where itemized maps label -> (science, non-science).
    """
    itemized: dict[str, tuple[float, float]] = {}
    additional: dict[str, ChargePair] = {}

    for row in rows:
        if not row.label:
            continue
        science = find_amount(row.value_a)
        non_science = find_amount(row.value_b)
        if science is None or non_science is None:
            continue

        if any(k in row.label for k in ADDITIONAL_CHARGE_KEYWORDS):
            additional[row.label] = ChargePair(
                science=science, non_science=non_science
            )
        elif not any(k in row.label for k in TOTAL_ROW_KEYWORDS):
            itemized[row.label] = (science, non_science)

    return itemized, additional


def find_added_charge_note(text: str) -> str:
    """Render the added-charge sentence, keeping the amounts as printed."""
    match = ADDED_CHARGE_NOTE_PATTERN.search(text)
    if not match:
        return ""
    return (
        f"Additional charge: N{match.group(1)} for Freshers, "
        f"N{match.group(2)} for Returning Students"
    )


@isolated("undergraduate fees", UndergraduateFees)
def extract_undergraduate_fees(document: PageDocument) -> UndergraduateFees:
    itemized, additional = classify_fee_rows(document.rows)

    science = {label: pair[0] for label, pair in itemized.items()}
    non_science = {label: pair[1] for label, pair in itemized.items()}

    for key, pattern in (("TOTAL", TOTAL_PATTERN),
                         ("GRAND TOTAL", GRAND_TOTAL_PATTERN)):
        match = pattern.search(document.text)
        amounts = _amount_pair(match) if match else None
        if amounts:
            science[key], non_science[key] = amounts

    logger.info(
        f"Undergraduate fees: {len(itemized)} items, "
        f"{len(additional)} additional charges"
    )
    return UndergraduateFees(
        fresh_students=FeeSchedule(science=science, non_science=non_science),
        returning_students=FeeSchedule(),
        additional_charges=additional,
        note=find_added_charge_note(document.text),
    )


# ─── Postgraduate Fees ────────────────────────────────────────────────────────


def parse_program_lines(section: str) -> list[ProgramFeeEntry]:
    """
    Pair each line holding two amounts with the non-empty line before it.
    An amount line with nothing before it is skipped.
    """
    lines = [line for line in section.split("\n") if line.strip()]
    programs: list[ProgramFeeEntry] = []

    for i, line in enumerate(lines):
        match = PROGRAM_AMOUNTS_PATTERN.search(line)
        if not match or i == 0:
            continue
        amounts = _amount_pair(match)
        program = normalize(lines[i - 1])
        if not amounts or not program:
            continue
        programs.append(ProgramFeeEntry(
            program=program,
            freshers=amounts[0],
            returning=amounts[1],
        ))

    return programs


@isolated("postgraduate fees", PostgraduateFees)
def extract_postgraduate_fees(document: PageDocument) -> PostgraduateFees:
    # Line structure matters here, so work on the raw body text
    section = locate_section(document.raw_text, PG_SECTION_START, PG_SECTION_END)
    if section is None:
        logger.warning("Postgraduate fee section not found")
        return PostgraduateFees()

    programs = parse_program_lines(section)
    logger.info(f"Postgraduate fees: {len(programs)} programs")
    return PostgraduateFees(programs=programs)


# ─── Hostel Fees ──────────────────────────────────────────────────────────────


def parse_hostel_rows(section: str) -> list[HostelEntry]:
    """Scan a hostel section left to right for numbered hostel rows."""
    hostels: list[HostelEntry] = []
    for match in HOSTEL_ROW_PATTERN.finditer(section):
        amount = parse_amount(match.group(4))
        if amount is None:
            continue
        demarcation = normalize(match.group(3) or "")
        hostels.append(HostelEntry(
            sn=match.group(1),
            hostel_name=normalize(match.group(2)),
            demarcation=demarcation or "N/A",
            amount=amount,
        ))
    return hostels


@isolated("hostel fees", list)
def extract_hostel_fees(document: PageDocument) -> list[HostelEntry]:
    section = locate_section(
        document.text, HOSTEL_SECTION_START, HOSTEL_SECTION_END
    )
    if section is None:
        logger.warning("Hostel accommodation section not found")
        return []

    hostels = parse_hostel_rows(section)
    logger.info(f"Hostel fees: {len(hostels)} entries")
    return hostels


# ─── Acceptance Fees ──────────────────────────────────────────────────────────


def parse_acceptance_items(
    text: str,
) -> tuple[dict[str, float], dict[str, float]]:
    """
    Find each recognized acceptance fee item.

    Returns:
        (medical_sciences, other_candidates); "-" for other candidates is 0.
    """
    medical: dict[str, float] = {}
    other: dict[str, float] = {}

    for item, pattern in ACCEPTANCE_ITEM_PATTERNS.items():
        match = pattern.search(text)
        if not match:
            continue
        medical_amount = parse_amount(match.group(1))
        if medical_amount is None:
            continue
        if match.group(2) == "-":
            other_amount = 0.0
        else:
            other_amount = parse_amount(match.group(2))
            if other_amount is None:
                continue
        medical[item] = medical_amount
        other[item] = other_amount

    return medical, other


@isolated("acceptance fees", AcceptanceFees)
def extract_acceptance_fees(document: PageDocument) -> AcceptanceFees:
    medical, other = parse_acceptance_items(document.text)

    # Several fee tables end in a TOTAL line; the acceptance table is last
    totals = list(TOTAL_PATTERN.finditer(document.text))
    amounts = _amount_pair(totals[-1]) if totals else None
    if amounts:
        medical["TOTAL"], other["TOTAL"] = amounts

    if not medical:
        logger.warning("No acceptance fee items found")
    return AcceptanceFees(medical_sciences=medical, other_candidates=other)


# ─── Announcements ────────────────────────────────────────────────────────────


def _announcement(title: str, span: str) -> Announcement:
    return Announcement(
        title=title,
        excerpt=normalize(span[:EXCERPT_LENGTH]) + "...",
        full_content=normalize(span),
    )


@isolated("announcements", list)
def extract_announcements(document: PageDocument) -> list[Announcement]:
    text = document.text
    announcements: list[Announcement] = []

    for title, pattern in ANNOUNCEMENT_PATTERNS:
        match = pattern.search(text)
        if match:
            announcements.append(_announcement(title, match.group(0)))
        else:
            logger.debug(f"Announcement not found: {title}")

    booking = BOOKING_DATE_PATTERN.search(text)
    if booking:
        date = booking.group(1)
        announcements.append(Announcement(
            title="Accommodation Booking Start Date",
            excerpt=f"Booking starts on {date}",
            full_content=(
                f"Accommodation booking using HOS Activation Code "
                f"starts on {date}"
            ),
        ))

    logger.info(f"Announcements: {len(announcements)} found")
    return announcements


# ─── Requirements ─────────────────────────────────────────────────────────────


def find_document_checklist(text: str) -> list[RequirementDocument]:
    return [
        RequirementDocument(number=m.group(1), document=normalize(m.group(2)))
        for m in REQUIRED_DOCUMENT_PATTERN.finditer(text)
    ]


def find_instructions(text: str) -> list[str]:
    """Instructions present on the page, in the fixed list order."""
    return [phrase for phrase in INSTRUCTIONS if phrase in text]


@isolated("requirements", Requirements)
def extract_requirements(document: PageDocument) -> Requirements:
    return Requirements(
        documents_required=find_document_checklist(document.text),
        instructions=find_instructions(document.text),
    )


# ─── Registry ─────────────────────────────────────────────────────────────────

EXTRACTORS: dict[str, Callable[[PageDocument], object]] = {
    "undergraduate": extract_undergraduate_fees,
    "postgraduate": extract_postgraduate_fees,
    "hostel": extract_hostel_fees,
    "acceptance": extract_acceptance_fees,
    "announcements": extract_announcements,
    "requirements": extract_requirements,
}
