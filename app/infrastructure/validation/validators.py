"""
Input validation utilities.
Sanitises free text and checks UK payment and contact details before they
reach the domain.
"""

import re
import urllib.parse
from typing import Any, Optional, Union
from decimal import Decimal, InvalidOperation

import bleach
import phonenumbers
from phonenumbers import NumberParseException

DEFAULT_PHONE_REGION = 'GB'

# Regex patterns for common validation
PATTERNS = {
    'email': re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'),
    'url': re.compile(r'^https?://[^\s/$.?#].[^\s]*$', re.IGNORECASE),
    'sort_code': re.compile(r'^\d{6}$'),
    'account_number': re.compile(r'^\d{8}$'),
}


class SecurityValidator:
    """Sanitisers for user supplied text."""

    @staticmethod
    def strip_html(value: Any) -> Any:
        """Remove every HTML tag, keeping the text content."""
        if not isinstance(value, str):
            return value
        return bleach.clean(value, tags=[], attributes={}, strip=True).strip()


class DataValidator:
    """Validators for common data formats."""

    @staticmethod
    def validate_email(email: str) -> str:
        """Validate email format with additional security checks."""
        if not isinstance(email, str):
            raise ValueError("Email must be a string")

        email = email.strip().lower()

        if not PATTERNS['email'].match(email):
            raise ValueError("Invalid email format")

        return email

    @staticmethod
    def validate_phone(phone: str, region: str = DEFAULT_PHONE_REGION) -> str:
        """Validate phone number using phonenumbers library."""
        if not isinstance(phone, str):
            raise ValueError("Phone must be a string")

        try:
            parsed = phonenumbers.parse(phone, region)
        except NumberParseException:
            raise ValueError("Invalid phone number format")

        if not phonenumbers.is_valid_number(parsed):
            raise ValueError("Invalid phone number")

        return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)

    @staticmethod
    def validate_url(url: str) -> str:
        """Validate URL format with security checks."""
        if not isinstance(url, str):
            raise ValueError("URL must be a string")

        url = url.strip()

        if not PATTERNS['url'].match(url):
            raise ValueError("Invalid URL format")

        parsed = urllib.parse.urlparse(url)
        if parsed.scheme not in ['http', 'https']:
            raise ValueError("URL must use HTTP or HTTPS protocol")

        return url

    @staticmethod
    def validate_decimal_amount(amount: Union[str, float, int, Decimal], min_value: float = 0) -> Decimal:
        """Validate and convert to decimal amount with precision checks."""
        try:
            if isinstance(amount, str):
                # Remove currency symbols and whitespace
                amount = re.sub(r'[$€£,\s]', '', amount)

            decimal_amount = Decimal(str(amount))
        except InvalidOperation:
            raise ValueError("Invalid amount format")

        if decimal_amount < Decimal(str(min_value)):
            raise ValueError(f"Amount must be at least {min_value}")

        # Check precision (max 2 decimal places for currency)
        if decimal_amount.as_tuple().exponent < -2:
            raise ValueError("Amount cannot have more than 2 decimal places")

        if decimal_amount > Decimal('999999.99'):
            raise ValueError("Amount exceeds maximum allowed value")

        return decimal_amount


class BankDetailsValidator:
    """UK bank account validators."""

    @staticmethod
    def validate_sort_code(sort_code: str) -> str:
        """Six digits; dashes and spaces are accepted and removed."""
        if not isinstance(sort_code, str):
            raise ValueError("Sort code must be a string")

        digits = re.sub(r'[\s-]', '', sort_code)
        if not PATTERNS['sort_code'].match(digits):
            raise ValueError("Sort code must be 6 digits")
        return digits

    @staticmethod
    def validate_account_number(account_number: str) -> str:
        if not isinstance(account_number, str):
            raise ValueError("Account number must be a string")

        digits = re.sub(r'\s', '', account_number)
        if not PATTERNS['account_number'].match(digits):
            raise ValueError("Account number must be 8 digits")
        return digits


def optional(validator_func):
    """Skip validation for None and blank strings."""
    def wrapper(value: Optional[Any]) -> Optional[Any]:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return validator_func(value)
    return wrapper


def clean_text(value: Any) -> Any:
    """Strip HTML from a string or from every string in a list."""
    if isinstance(value, list):
        return [SecurityValidator.strip_html(item) for item in value]
    return SecurityValidator.strip_html(value)
