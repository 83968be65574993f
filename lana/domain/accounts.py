"""Pure validation for the login and registration forms."""

import re

from lana.errors import ValidationError

_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_PHONE = re.compile(r"^\+?\d{10,15}$")


def normalize_phone(phone: str) -> str:
    """Drop the spaces and dashes people type into phone numbers."""
    return re.sub(r"[\s\-]", "", phone)


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL.match(email.strip()))


def is_valid_phone(phone: str) -> bool:
    return bool(_PHONE.match(normalize_phone(phone.strip())))


def split_identifier(identifier: str) -> tuple[str | None, str | None]:
    """Split a login identifier into (email, phone).

    Anything containing ``@`` is an email, everything else a phone number.

    Raises:
        ValidationError: If the identifier is empty or malformed.
    """
    identifier = identifier.strip()
    if not identifier:
        raise ValidationError("Enter your email or phone.")

    if "@" in identifier:
        if not is_valid_email(identifier):
            raise ValidationError("Enter a valid email.")
        return identifier, None

    if not is_valid_phone(identifier):
        raise ValidationError("Enter a valid phone number.")
    return None, normalize_phone(identifier)


def validate_login(identifier: str, password: str) -> tuple[str | None, str | None]:
    """Validate the login form, returning (email, phone).

    Raises:
        ValidationError: If a field is missing or malformed.
    """
    email, phone = split_identifier(identifier)
    if not password:
        raise ValidationError("Enter your password.")
    return email, phone


def validate_registration(
    name: str,
    lastname: str,
    email: str,
    phone: str,
    password: str,
    confirm: str,
) -> dict[str, str]:
    """Validate the registration form.

    Args:
        name: First name.
        lastname: Last name.
        email: Email address.
        phone: Phone number (spaces and dashes allowed).
        password: Password.
        confirm: Password confirmation.

    Returns:
        Registration body ready to send.

    Raises:
        ValidationError: On empty fields, malformed email or phone, or
            mismatched passwords.
    """
    fields = {"name": name, "lastname": lastname, "email": email, "phone": phone, "password": password}
    if any(not value or not value.strip() for value in fields.values()) or not confirm:
        raise ValidationError("Complete all fields.")
    if not is_valid_email(email):
        raise ValidationError("Enter a valid email.")
    if not is_valid_phone(phone):
        raise ValidationError("Enter a valid phone number.")
    if password != confirm:
        raise ValidationError("Passwords do not match.")

    return {
        "name": name.strip(),
        "lastname": lastname.strip(),
        "email": email.strip(),
        "phone": normalize_phone(phone.strip()),
        "password": password,
    }
