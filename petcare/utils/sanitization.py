import re
from typing import Optional


def validate_and_sanitize_input(value: Optional[str], max_length: int = 2000) -> str:
    """
    Trim and length-check free text, dropping control characters.

    The text is otherwise stored as submitted so that sending back a value
    read from the API leaves it unchanged.

    Raises:
        ValueError: If input exceeds max_length
    """
    if not value:
        return ""

    value = str(value).strip()

    if len(value) > max_length:
        raise ValueError(f"Input exceeds maximum length of {max_length} characters")

    value = re.sub(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]", "", value)

    return value
