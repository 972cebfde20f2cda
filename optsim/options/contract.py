"""Option contract model and payoff.

A contract is a small immutable value: type, strike, premium and expiry.
Payoff depends only on the type tag, so it is a plain function rather
than a method override per subclass.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from optsim.logging_setup import get_logger

logger = get_logger("options.contract")


class InvalidContractType(ValueError):
    """Raised when a type tag is neither "Call" nor "Put"."""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"Invalid option type: {tag!r} (expected 'Call' or 'Put')")


class OptionType(str, Enum):
    """Option contract type."""

    CALL = "Call"
    PUT = "Put"

    @classmethod
    def from_tag(cls, tag: str) -> "OptionType":
        """Parse an exact, case-sensitive type tag.

        Raises:
            InvalidContractType: If the tag is not "Call" or "Put".
        """
        for member in cls:
            if member.value == tag:
                return member
        raise InvalidContractType(tag)


def payoff(
    option_type: OptionType,
    strike: float,
    premium: float,
    market_price: float,
) -> float:
    """Value of a contract at expiry for a given market price, net of premium.

    Call: max(0, market - strike) - premium
    Put:  max(0, strike - market) - premium
    """
    if option_type == OptionType.CALL:
        intrinsic = max(0.0, market_price - strike)
    else:
        intrinsic = max(0.0, strike - market_price)
    return intrinsic - premium


def format_number(value: float) -> str:
    """Format a float the way a default C++ ostream does (6 significant digits)."""
    return f"{value:g}"


@dataclass(frozen=True)
class Contract:
    """Single option contract."""

    option_type: OptionType
    strike: float
    premium: float
    expiry: str  # YYYY-MM-DD, not validated

    def payoff(self, market_price: float) -> float:
        """Payoff of this contract at ``market_price``."""
        return payoff(self.option_type, self.strike, self.premium, market_price)

    def with_premium(self, premium: float) -> "Contract":
        """Return a copy with a new premium; type, strike and expiry are kept."""
        return replace(self, premium=premium)

    def describe(self) -> str:
        """One-line quote description."""
        return (
            f"{self.option_type.value} Option - "
            f"Strike Price: {format_number(self.strike)}, "
            f"Premium: {format_number(self.premium)}, "
            f"Expiry: {self.expiry}"
        )


def create_contract(
    tag: str,
    strike: float,
    premium: float,
    expiry: str,
) -> Optional[Contract]:
    """Create a contract from a type tag.

    Only the tag is validated; negative strikes and premiums are accepted.

    Args:
        tag: "Call" or "Put" (case-sensitive).
        strike: Strike price.
        premium: Premium paid.
        expiry: Expiry date string.

    Returns:
        The new Contract, or None if the tag is not recognized.
    """
    try:
        option_type = OptionType.from_tag(tag)
    except InvalidContractType as e:
        logger.info("Rejected contract: %s", e)
        return None

    contract = Contract(
        option_type=option_type,
        strike=float(strike),
        premium=float(premium),
        expiry=expiry,
    )
    logger.debug("Created %s", contract.describe())
    return contract
