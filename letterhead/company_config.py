"""Company details printed on the letterhead.

The header carries the brand name, the registered company name, address and
contact line, followed by a strip of registration numbers. The footer
carries social links, the copyright line, the website and the page number.
"""

import json
from dataclasses import dataclass, fields, replace
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union


class CompanyConfigError(Exception):
    """Raised when a letterhead configuration file cannot be used."""


@dataclass(frozen=True)
class CompanyConfig:
    """Letterhead details for one company.

    Attributes:
        brand: Large brand name at the top left of the header
        tagline: Small caps line under the brand name
        name: Registered company name
        address: Postal address
        contact: Phone and email line
        cin: Corporate identification number
        gstin: GST identification number
        msme: MSME (Udyam) registration number
        website: Website shown in the footer
        links: (label, url) pairs shown above the footer rule
        watermark: Logo image drawn faintly behind the body of every PDF
            sheet; empty for none
    """
    brand: str
    tagline: str
    name: str
    address: str
    contact: str
    cin: str
    gstin: str
    msme: str
    website: str
    links: Tuple[Tuple[str, str], ...] = ()
    watermark: str = ""

    def header_lines(self) -> List[str]:
        """Right-hand header block, one entry per printed line."""
        return [self.name, self.address, self.contact]

    def registration_line(self) -> str:
        parts = [
            f"CIN: {self.cin}" if self.cin else "",
            f"GSTIN: {self.gstin}" if self.gstin else "",
            f"MSME: {self.msme}" if self.msme else "",
        ]
        return "   ".join(p for p in parts if p)

    def copyright_line(self, year: Optional[int] = None) -> str:
        year = year or date.today().year
        return f"© {year} {self.brand}. All rights reserved."


DEFAULT_COMPANY = CompanyConfig(
    brand="Talentronaut",
    tagline="Workspace",
    name="Talentronaut Technologies Pvt. Ltd",
    address=("5-49, Maharaja Garden, Bajanai Kovil St, Andavar Nagar, "
             "Ramapuram, Chennai, Tamil Nadu 600089"),
    contact="+91 8220324802 | support@talentronaut.in",
    cin="U85499MH2024PTC421338",
    gstin="27AAKCT8463F1ZW",
    msme="UDYAM-MH-04-0177043",
    website="www.talentronaut.in",
    links=(
        ("LinkedIn", "https://www.linkedin.com/company/talentronaut-technologies-private-limited/"),
        ("Instagram", "https://www.instagram.com/talentronaut/"),
    ),
)


def company_from_dict(data: Dict[str, Any],
                      base: CompanyConfig = DEFAULT_COMPANY) -> CompanyConfig:
    """Apply a mapping of overrides on top of ``base``.

    Raises:
        CompanyConfigError: If a key is unknown or a value has the wrong type.
    """
    known = {f.name for f in fields(CompanyConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise CompanyConfigError(f"Unknown letterhead field(s): {', '.join(unknown)}")

    overrides: Dict[str, Any] = {}
    for key, value in data.items():
        if key == "links":
            if not isinstance(value, dict):
                raise CompanyConfigError("'links' must be an object mapping label to URL")
            overrides[key] = tuple((str(label), str(url)) for label, url in value.items())
        elif not isinstance(value, str):
            raise CompanyConfigError(f"'{key}' must be a string")
        else:
            overrides[key] = value
    return replace(base, **overrides)


def load_company_config(path: Union[str, Path]) -> CompanyConfig:
    """Load letterhead details from a JSON file of overrides.

    Args:
        path: JSON file containing an object; missing keys keep the defaults.
            A relative ``watermark`` is taken relative to this file.

    Raises:
        CompanyConfigError: If the file is unreadable or malformed.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CompanyConfigError(f"Could not read letterhead config {path}: {e}") from e

    if not isinstance(data, dict):
        raise CompanyConfigError("Letterhead config must be a JSON object")
    company = company_from_dict(data)
    if company.watermark and not Path(company.watermark).is_absolute():
        company = replace(company, watermark=str(Path(path).parent / company.watermark))
    return company
