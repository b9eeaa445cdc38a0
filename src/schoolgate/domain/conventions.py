"""
Smartschool Domain Conventions

Domain knowledge used to describe operations to the agent and to
annotate results: username conventions, absence codes, user roles,
co-account numbering and school-year labels.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from schoolgate.logging import get_logger

logger = get_logger("schoolgate.domain")

_NOT_USERNAME_CHARS = re.compile(r"[^a-z.]")

ABSENCE_CODES: Mapping[str, str] = MappingProxyType({
    "|": "Present - Student was in attendance",
    "L": "Late - Student arrived late to class",
    "Z": "Sick/Illness - Student was absent due to sickness",
    "D": "Doctor - Student had medical appointment",
    "B": "Known - Absence was notified in advance (excused)",
    "R": "Unforeseen - Existential reason (family emergency, etc.)",
    "-": "Unknown - Unexplained/unexcused absence",
    "G": "Spread - Spread of lesson program",
    "C": "Topsport - Absence due to top sports activities",
    "H": "Revalidation - Absence due to revalidation/therapy",
    "O": "Childcare - Absence due to childcare responsibilities",
    "Q": "Mourning - Absence due to mourning/bereavement",
    "P": "Personal - Personal reasons for absence",
    "W": "Internship work - Absence due to internship work",
    "M": "Absent internship - Absence from internship work",
    "J": "Maternity leave - Absence due to maternity leave",
    "Y": "Suspension - Absence due to suspension",
    "U": "Temporary termination - Temporary termination of student",
    "T": "Termination - Termination of student",
    "null": "No school/Holiday - Non-school day or holiday period",
})

USER_ROLES: Mapping[str, str] = MappingProxyType({
    "leerling": "Student - A student enrolled in the school",
    "leerkracht": "Teacher - A teaching staff member",
    "directie": "Management - School management/administrative staff",
    "andere": "Other - Other staff (secretary, janitor, etc.)",
})

CO_ACCOUNT_TYPES: Mapping[int, str] = MappingProxyType({
    0: "Main account",
    1: "First co-account (often parent/guardian)",
    2: "Second co-account (often second parent/guardian)",
    3: "Third co-account",
    4: "Fourth co-account",
    5: "Fifth co-account",
    6: "Sixth co-account",
})

CLASS_CODE_EXAMPLES = ("1A", "2B", "3C", "6WEWE", "STEM-GROUP-1")
CLASS_CODE_EXPLANATION = (
    "Classes typically follow patterns like [Grade][Section] (1A, 2B) "
    "or descriptive codes (STEM-GROUP-1)"
)

DOMAIN_KNOWLEDGE = """Domain Knowledge:
- Smartschool is a Belgian school management system
- Usernames follow 'firstname.lastname' pattern (John Doe -> john.doe)
- Classes use codes like '1A', '2B', or descriptive names like 'STEM-GROUP-1'
- Co-accounts are for parents/guardians (coaccount 1 = first parent, 2 = second parent)
- School years are referenced by starting year (2024 = 2024-2025 school year)"""


def generate_username(first_name: str, last_name: str) -> str:
    """'John', 'Doe' -> 'john.doe'. Anything outside [a-z.] is dropped."""
    return _NOT_USERNAME_CHARS.sub("", f"{first_name.lower()}.{last_name.lower()}")


def looks_like_full_name(value: Any) -> bool:
    return isinstance(value, str) and " " in value and "." not in value


def normalize_identifier(value: Any) -> Any:
    """Turn a 'First Last' free-text name into a 'first.last' username.

    Values that already contain a dot, contain no space, or are not
    strings come back unchanged. The result may be empty or odd for
    unusual input; this is a convenience, not a validation.
    """
    if not looks_like_full_name(value):
        return value
    first, _, rest = value.partition(" ")
    return generate_username(first, rest)


def format_user_roles() -> str:
    return "\n".join(f"- '{role}': {desc}" for role, desc in USER_ROLES.items())


def format_co_account_types() -> str:
    return "\n".join(f"- {num}: {desc}" for num, desc in CO_ACCOUNT_TYPES.items())


def format_absence_codes() -> str:
    return "\n".join(f"- '{code}': {desc}" for code, desc in ABSENCE_CODES.items())


def find_absence_codes(serialized: str) -> list[str]:
    """Known absence codes that appear as JSON string values in a serialized payload."""
    return [
        code
        for code in ABSENCE_CODES
        if code != "null" and json.dumps(code) in serialized
    ]


def annotate_absence_codes(payload: Any, serialized: str) -> str | None:
    """Explanation block for the absence codes found in a result.

    Only adds text; the payload itself is not touched.
    """
    codes = find_absence_codes(serialized)
    if not codes:
        return None
    logger.debug("Annotating absence codes", extra={"reason": ",".join(codes)})
    explanations = "\n".join(f"- '{code}': {ABSENCE_CODES[code]}" for code in codes)
    return f"Absence code explanations:\n{explanations}"
