"""
Shared fixtures: a trimmed-down copy of the portal page layout.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from scraper.document import parse_document

SCHOOL_CHARGES = """
<h2>SCHOOL CHARGES FOR FRESH STUDENTS</h2>
<table>
  <tr><th>ITEM</th><th>SCIENCE</th><th>NON-SCIENCE</th></tr>
  <tr><td>Tuition</td><td>50,000.00</td><td>45,000.00</td></tr>
  <tr><td>Library</td><td>5,000.00</td><td>5,000.00</td></tr>
  <tr><td>Orientation Fee</td><td>2,500.00</td><td>2,500.00</td></tr>
  <tr><td>TOTAL</td><td>55,000.00</td><td>50,000.00</td></tr>
  <tr><td colspan="3">Charges are per session</td></tr>
</table>
<div>
TOTAL 55,000.00 50,000.00
GRAND TOTAL 57,500.00 52,500.00
Please Note that there is added charge of N5,000 for New Students in all
faculties and N3,000 for Returning Students.
</div>
"""

POSTGRADUATE = """
<div>
POST GRADUATE FULL TIME CHARGES
PROGRAM FRESHERS RETURNING
MBA
150,000.00 120,000.00
MSc Computer Science
100,000.00 80,000.00
</div>
<div>
THE CHARGES FOR SCIENCE BASED PROGRAMS ARE SHOWN ON THE PG PORTAL
</div>
"""

NOTICES = """
<div>
UNIBEN HOSTEL ACCOMMODATION 2024/2025 GUIDELINES
Students are to book rooms online through the portal.
** Accommodation Booking using HOS Activation Code starts on SATURDAY 12 October 2024
NEWLY ADMITTED STUDENTS REQUIREMENTS
1. JAMB Admission letter
2. WAEC result
3. Birth Certificate
4. Sworn Affidavit
5. Two recent PASSPORT
UPLOAD RELEVANT DOCUMENTS
PAY YOUR ACCEPTANCE FEE
REGISTER YOUR COURSES ONLINE
</div>
<div>
THE ACCEPTANCE FEE
BANK/PORTAL CHARGES 1,500.00 1,500.00
ADMISSION CLEARANCE 10,000.00 10,000.00
ICT LEVY 2,000.00 -
MAINTENANCE FEE 5,000.00 5,000.00
COLLEGE DEVELOPMENT LEVY 20,000.00 -
TOTAL 38,500.00 16,500.00
</div>
<div>
RETURNING STUDENTS should settle school charges before registration.
NOTE THAT ALL STUDENTS must complete registration within the stipulated time.
</div>
"""

HOSTELS = """
<div>
THE HOSTEL ACCOMMODATION FEES FROM 2024/2025
1. HALL A NORTH WING 45,000.00
2. BASIC STUDIES HOSTEL 30,000.00
3. NDDC HOSTEL FEMALE WING 50,000.00
THE FORMER CHARGES WERE LOWER
</div>
"""


def build_page(*sections: str) -> str:
    return "<html><body>" + "".join(sections) + "</body></html>"


SAMPLE_PAGE = build_page(SCHOOL_CHARGES, POSTGRADUATE, NOTICES, HOSTELS)
PAGE_WITHOUT_HOSTELS = build_page(SCHOOL_CHARGES, POSTGRADUATE, NOTICES)


def mock_response(html: str) -> MagicMock:
    """A stand-in for a successful requests.Response."""
    response = MagicMock()
    response.content = html.encode("utf-8")
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def sample_document():
    return parse_document(SAMPLE_PAGE)


@pytest.fixture
def empty_document():
    return parse_document("<html><body><p>Portal under maintenance</p></body></html>")
