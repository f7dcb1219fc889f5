"""
Resolution of path parameters into lookup keys.

People are addressed by a URL-encoded ``"First Last"`` segment and
courses by their numeric id.  Both helpers raise a 400-class
``RegistryError`` when the segment cannot be used as a key.
"""

import re
from typing import Tuple, Union
from urllib.parse import unquote_plus

from ..core.errors import InvalidFormat, InvalidID

# A ``%`` must always introduce two hex digits.
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def decode_segment(segment: str) -> str:
    """Percent-decode a path segment with query-unescape rules.

    ``+`` decodes to a space.  Malformed escapes and byte sequences that
    are not valid UTF-8 raise ``InvalidFormat``.
    """
    if _BAD_ESCAPE.search(segment):
        raise InvalidFormat("Invalid full name format")
    try:
        return unquote_plus(segment, errors="strict")
    except UnicodeDecodeError as exc:
        raise InvalidFormat("Invalid full name format") from exc


def resolve_full_name(segment: str) -> Tuple[str, str]:
    """Turn ``"John%20Doe"`` into ``("John", "Doe")``.

    The decoded value is split on the first space only, so any further
    spaces stay in the last name (``"Mary Ann Lee"`` resolves to
    ``("Mary", "Ann Lee")``).  No case or whitespace normalisation is
    applied.
    """
    if not segment:
        raise InvalidFormat("Name parameter is missing")
    decoded = decode_segment(segment)
    first, sep, last = decoded.partition(" ")
    if not sep or not first or not last:
        raise InvalidFormat("Invalid full name format")
    return first, last


def format_full_name(first_name: str, last_name: str) -> str:
    return f"{first_name} {last_name}"


def parse_course_id(value: Union[str, int]) -> int:
    """Return ``value`` as a positive integer id or raise ``InvalidID``."""
    if isinstance(value, bool):
        raise InvalidID("Invalid ID")
    if isinstance(value, int):
        course_id = value
    else:
        text = str(value).strip()
        if not (text.isascii() and text.isdigit()):
            raise InvalidID("Invalid ID")
        course_id = int(text)
    if course_id <= 0:
        raise InvalidID("Invalid ID")
    return course_id
