"""Amount parsing utilities."""

from decimal import Decimal
import re

from valecashback.domain.errors import InvalidAmountError, invalid_amount
from valecashback.domain.settlement import validate_amount


def parse_amount(amount_str: str) -> Decimal:
    """Parse a sale amount typed on the command line.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "R$ 123.45"
    - "1,234.56"

    Args:
        amount_str: Amount string

    Returns:
        Positive Decimal amount with two decimal places

    Raises:
        InvalidAmountError: If the string is empty, not a number, not
            positive or has more than two decimal places
    """
    if not amount_str or not amount_str.strip():
        raise InvalidAmountError(invalid_amount(amount_str, "empty amount"))

    # Remove currency symbols and thousands separators
    cleaned = re.sub(r"R\$|[$€£]", "", amount_str.strip())
    cleaned = cleaned.replace(",", "").strip()

    return validate_amount(cleaned)
