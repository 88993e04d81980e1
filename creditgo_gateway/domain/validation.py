"""
Onboarding input validators.

Every function here is total: malformed input produces a negative
result, never an exception. Error strings are shown to the user as-is.
"""

import re
from urllib.parse import urlparse

from creditgo_gateway.domain.models import (
    CorporateEmailResult,
    EmailValidationResult,
    FreelanceLinkResult,
)

NIN_LENGTH = 11

FREE_EMAIL_PROVIDERS = frozenset(
    {
        "gmail.com",
        "yahoo.com",
        "hotmail.com",
        "outlook.com",
        "live.com",
        "aol.com",
        "icloud.com",
        "mail.com",
        "protonmail.com",
        "zoho.com",
        "yandex.com",
        "gmx.com",
        "inbox.com",
    }
)

VERIFIED_CORPORATE_DOMAINS = (
    "mtn.ng", "mtn.com", "dangote.com", "gtbank.com", "gtco.com",
    "accessbankplc.com", "zenithbank.com", "firstbanknigeria.com",
    "ubagroup.com", "sterlingbank.com", "flutterwave.com", "paystack.com",
    "interswitch.com", "andela.com", "microsoft.com", "google.com",
    "amazon.com", "meta.com", "kpmg.com", "pwc.com", "ey.com",
    "deloitte.com", "shell.com", "totalenergies.com", "chevron.com",
)

VERIFIED_FREELANCE_PLATFORMS = (
    "linkedin.com", "upwork.com", "fiverr.com", "toptal.com",
    "freelancer.com", "guru.com", "behance.net", "dribbble.com",
    "github.com", "medium.com",
)

ERROR_CONTAINS_SPACES = "Email address cannot contain spaces"
ERROR_MISSING_AT = 'Please include an "@" in the email address'
ERROR_MULTIPLE_AT = 'Email address should contain only one "@" symbol'
ERROR_MISSING_LOCAL_PART = 'Please enter text before the "@" symbol'
ERROR_MISSING_DOMAIN = 'Please enter a domain after the "@" symbol'
ERROR_INCOMPLETE_DOMAIN = "Please enter a complete domain (e.g., company.com)"
ERROR_DOMAIN_EDGE_DOT = "Domain cannot start or end with a dot"
ERROR_CONSECUTIVE_DOTS = "Domain cannot contain consecutive dots"
ERROR_INVALID_EMAIL = "Please enter a valid email address"

_NON_DIGITS = re.compile(r"\D")
_WHITESPACE = re.compile(r"\s")
_EMAIL_SHAPE = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
    r"\.[a-zA-Z]{2,}"
)
_LOOSE_EMAIL = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def validate_nin(nin: str) -> bool:
    """National Identification Number: exactly 11 digits once separators are stripped"""
    return len(_NON_DIGITS.sub("", nin)) == NIN_LENGTH


def format_nin(nin: str) -> str:
    """Group NIN digits as XXX-XXXX-XXXX, formatting partial input progressively"""
    digits = _NON_DIGITS.sub("", nin)
    if len(digits) <= 3:
        return digits
    if len(digits) <= 7:
        return f"{digits[:3]}-{digits[3:]}"
    return f"{digits[:3]}-{digits[3:7]}-{digits[7:11]}"


def parse_income(text: str) -> int:
    """Parse free-text income such as '300,000' or 'N 450 000' to whole naira"""
    digits = _NON_DIGITS.sub("", text)
    return int(digits) if digits else 0


def validate_email_format(email: str) -> EmailValidationResult:
    """
    Offline structural email check.

    Empty or whitespace-only input is invalid without an error message,
    since the user has not typed anything yet.
    """
    trimmed = email.strip()

    if not trimmed:
        return EmailValidationResult(is_valid=False, error=None)

    if _WHITESPACE.search(trimmed):
        return EmailValidationResult(is_valid=False, error=ERROR_CONTAINS_SPACES)

    if "@" not in trimmed:
        return EmailValidationResult(is_valid=False, error=ERROR_MISSING_AT)

    parts = trimmed.split("@")
    if len(parts) != 2:
        return EmailValidationResult(is_valid=False, error=ERROR_MULTIPLE_AT)

    local_part, domain = parts

    if not local_part:
        return EmailValidationResult(is_valid=False, error=ERROR_MISSING_LOCAL_PART)

    if not domain:
        return EmailValidationResult(is_valid=False, error=ERROR_MISSING_DOMAIN)

    if "." not in domain:
        return EmailValidationResult(is_valid=False, error=ERROR_INCOMPLETE_DOMAIN)

    if domain.startswith(".") or domain.endswith("."):
        return EmailValidationResult(is_valid=False, error=ERROR_DOMAIN_EDGE_DOT)

    if ".." in domain:
        return EmailValidationResult(is_valid=False, error=ERROR_CONSECUTIVE_DOTS)

    if not _EMAIL_SHAPE.fullmatch(trimmed):
        return EmailValidationResult(is_valid=False, error=ERROR_INVALID_EMAIL)

    return EmailValidationResult(is_valid=True, error=None)


def is_free_email_provider(email: str) -> bool:
    """Informational only: free webmail is not blocked"""
    if "@" not in email:
        return False
    return email.split("@")[1].lower() in FREE_EMAIL_PROVIDERS


def validate_corporate_email(email: str) -> CorporateEmailResult:
    """Match a work email against verified employer domains (exact or subdomain)"""
    if not _LOOSE_EMAIL.fullmatch(email):
        return CorporateEmailResult(is_valid=False, company=None)

    domain = email.split("@")[1].lower()
    if _matches_allow_list(domain, VERIFIED_CORPORATE_DOMAINS) is None:
        return CorporateEmailResult(is_valid=False, company=None)

    return CorporateEmailResult(is_valid=True, company=_display_name(domain))


def validate_freelance_link(url: str) -> FreelanceLinkResult:
    """Match a profile URL against verified freelance/professional platforms"""
    normalized = url.strip()
    if not normalized.startswith("http"):
        normalized = f"https://{normalized}"

    try:
        hostname = urlparse(normalized).hostname
    except ValueError:
        return FreelanceLinkResult(is_valid=False, platform=None)

    if not hostname:
        return FreelanceLinkResult(is_valid=False, platform=None)

    platform = _matches_allow_list(hostname.removeprefix("www."), VERIFIED_FREELANCE_PLATFORMS)
    if platform is None:
        return FreelanceLinkResult(is_valid=False, platform=None)

    return FreelanceLinkResult(is_valid=True, platform=_display_name(platform))


def _matches_allow_list(host: str, allowed: tuple) -> str | None:
    for candidate in allowed:
        if host == candidate or host.endswith(f".{candidate}"):
            return candidate
    return None


def _display_name(domain: str) -> str:
    label = domain.split(".")[0]
    return label[:1].upper() + label[1:]
