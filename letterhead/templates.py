"""Starter content for new letterhead documents."""

from datetime import date
from typing import Optional

PROPOSAL_TEMPLATE = """\
# Project Proposal

**Date:** {date}

**To:** Client Name

**Subject:** Proposal for Software Development Services

Dear Sir/Madam,

On behalf of **{company}**, we are pleased to submit this proposal for your review. We are committed to delivering high-quality solutions that meet your business objectives.

### Scope of Work
1. Requirement Analysis & Planning
2. UI/UX Design & Prototyping
3. Core Development (Frontend & Backend)
4. Quality Assurance & Testing
5. Deployment & Maintenance

We look forward to the opportunity to work together.

Best Regards,
**{brand} Team**
"""


def default_document(today: Optional[date] = None,
                     company: str = "Talentronaut Technologies",
                     brand: str = "Talentronaut") -> str:
    """Return the proposal template dated ``today``."""
    today = today or date.today()
    return PROPOSAL_TEMPLATE.format(date=today.strftime("%d/%m/%Y"), company=company, brand=brand)
