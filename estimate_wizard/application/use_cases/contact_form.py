from __future__ import annotations

import re

from estimate_wizard.application.exceptions import ContactValidationError
from estimate_wizard.domain.entities.contact import FormContact


EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
ZIP_RE = re.compile(r"^\d{5}(-\d{4})?$", re.ASCII)
MIN_PHONE_DIGITS = 10


def validate_contact(name: str | None, email: str | None, zip: str | None, phone: str | None) -> FormContact:
    """
    Check the estimate form fields and build a FormContact.
    Raises ContactValidationError with one message per invalid field.
    """
    name = (name or "").strip()
    email = (email or "").strip()
    zip_code = (zip or "").strip()
    phone = (phone or "").strip()

    errors: dict[str, str] = {}

    if not name:
        errors["name"] = "Name is required"

    if not email:
        errors["email"] = "Email is required"
    elif not EMAIL_RE.match(email):
        errors["email"] = "Please enter a valid email address"

    if not zip_code:
        errors["zip"] = "Zip code is required"
    elif not ZIP_RE.match(zip_code):
        errors["zip"] = "Please enter a valid zip code (e.g., 12345 or 12345-6789)"

    if not phone:
        errors["phone"] = "Phone number is required"
    elif len(re.sub(r"[^0-9]", "", phone)) < MIN_PHONE_DIGITS:
        errors["phone"] = "Please enter a valid phone number (at least 10 digits)"

    if errors:
        raise ContactValidationError(errors)

    return FormContact(name=name, email=email, zip=zip_code, phone=phone)
