import re

from src.schemas.waitlistSchema import SignupRequest, ValidationErrors

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

FULL_NAME_REQUIRED = "Full name is required"
EMAIL_REQUIRED = "Email is required"
EMAIL_INVALID = "Please enter a valid email address"


def is_valid_email(email: str) -> bool:
    # fullmatch so a trailing newline can't sneak past "$"
    return EMAIL_PATTERN.fullmatch(email) is not None


def validate_signup(request: SignupRequest) -> ValidationErrors:
    """
    Build the full error map for a signup request.

    Only full_name and email are checked. The blank checks trim; the email
    pattern runs against the value as typed, so surrounding spaces fail it.
    The request is valid iff the returned map is empty.
    """
    errors: ValidationErrors = {}

    if not request.full_name.strip():
        errors["full_name"] = FULL_NAME_REQUIRED

    if not request.email.strip():
        errors["email"] = EMAIL_REQUIRED
    elif not is_valid_email(request.email):
        errors["email"] = EMAIL_INVALID

    return errors
