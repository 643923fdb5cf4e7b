import re

# demo login: any well-formed email and any non-blank password get in
_EMAIL_RE = re.compile(r"\S+@\S+\.\S+")


def validate_credentials(email: str, password: str) -> dict[str, str]:
    """Return field -> message for every problem; empty dict means OK."""
    errors: dict[str, str] = {}

    if not email.strip():
        errors["email"] = "Email is required"
    elif not _EMAIL_RE.search(email):
        errors["email"] = "Please enter a valid email"

    if not password.strip():
        errors["password"] = "Password is required"

    return errors
