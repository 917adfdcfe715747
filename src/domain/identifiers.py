"""
Identifier resolution - email address or numeric roll number.

Classification is total and exclusive: a string containing "@" must be a
valid email shape, a string of ASCII digits is a roll number, and
anything else is rejected with ValidationError before it reaches the
registration flow.
"""

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email

from .exceptions import ValidationError
from .ports import Account, AccountRepository

DEFAULT_MAIL_DOMAIN = "nitkkr.ac.in"

# users.roll_number is BIGINT; every 18-digit value fits below 2**63
MAX_ROLL_NUMBER_DIGITS = 18


@dataclass(frozen=True)
class EmailIdentifier:
    address: str

    @property
    def key(self) -> str:
        return self.address


@dataclass(frozen=True)
class RollNumberIdentifier:
    number: int
    raw: str

    @property
    def key(self) -> str:
        return self.raw


Identifier = EmailIdentifier | RollNumberIdentifier


def classify(raw: str) -> Identifier:
    """
    Classify a user-supplied identifier.

    Raises:
        ValidationError: If raw is neither an email address nor a roll number
            of at most MAX_ROLL_NUMBER_DIGITS digits.
    """
    identifier = raw.strip()
    if not identifier:
        raise ValidationError("Identifier is required")

    if "@" in identifier:
        try:
            validate_email(identifier, check_deliverability=False)
        except EmailNotValidError:
            raise ValidationError("Invalid email address") from None
        return EmailIdentifier(address=identifier)

    # str.isdigit() accepts non-ASCII digits such as "²"
    if not (identifier.isascii() and identifier.isdigit()):
        raise ValidationError("Invalid Roll Number")
    if len(identifier) > MAX_ROLL_NUMBER_DIGITS:
        raise ValidationError("Invalid Roll Number")
    return RollNumberIdentifier(number=int(identifier), raw=identifier)


@dataclass
class IdentifierResolver:
    """Derives notification addresses and performs existing-account lookup."""

    accounts: AccountRepository
    mail_domain: str = DEFAULT_MAIL_DOMAIN

    def classify(self, raw: str) -> Identifier:
        return classify(raw)

    def notification_address(self, identifier: Identifier) -> str:
        if isinstance(identifier, EmailIdentifier):
            return identifier.address
        return f"{identifier.raw}@{self.mail_domain}"

    def lookup_existing(self, identifier: Identifier) -> Account | None:
        if isinstance(identifier, EmailIdentifier):
            return self.accounts.find_by_email(identifier.address)
        return self.accounts.find_by_roll_number(identifier.number)
