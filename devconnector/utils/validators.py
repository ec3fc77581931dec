"""Validators."""

from email_validator import EmailNotValidError, validate_email


def normalize_email(email: str) -> str:
    """Validate email format and return its normalized form.

    Raises ``ValueError`` for anything that is not a syntactically valid address.
    """
    try:
        return validate_email(email.strip(), check_deliverability=False).normalized
    except EmailNotValidError as e:
        raise ValueError(str(e))


def is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
