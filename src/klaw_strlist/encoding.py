"""Packed encoding for ordered string lists.

Every element is stored as its UTF-8 bytes followed by one ``0xFF``
separator. ``0xFF`` never appears in well-formed UTF-8 (it is neither a lead
nor a continuation byte), so payloads need no escaping and the separator is
never ambiguous:

    ['a', 'bb', '']  ->  b'a\\xffbb\\xff\\xff'

Consequences relied on throughout the package:
    - zero bytes encode the empty list
    - a non-empty encoding always ends with the separator
    - the separator count equals the element count
"""

from __future__ import annotations

from klaw_strlist.errors import MalformedEncoding
from klaw_strlist.result import Err, Ok, Result

__all__ = [
    'DELIMITER',
    'count',
    'encode_element',
    'validate',
]

DELIMITER: int = 0xFF
"""Separator byte terminating every element."""


def encode_element(value: str) -> bytes:
    """Return the UTF-8 payload bytes for one element.

    Raises:
        TypeError: If value is not a str.
        UnicodeEncodeError: If value holds lone surrogates.
    """
    if not isinstance(value, str):
        msg = f'string list elements must be str, not {type(value).__name__}'
        raise TypeError(msg)
    return value.encode('utf-8')


def count(data: bytes | bytearray, start: int = 0, stop: int | None = None) -> int:
    """Number of elements packed in ``data[start:stop]``."""
    if stop is None:
        stop = len(data)
    return data.count(DELIMITER, start, stop)


def validate(data: bytes | bytearray) -> Result[None, MalformedEncoding]:
    """Check that foreign bytes satisfy the packed encoding.

    The bytes must be empty or end in the separator, and every element must
    decode as UTF-8. Each element is decoded once; since a UTF-8 sequence can
    never contain the separator, per-element decoding is equivalent to
    validating the whole payload.

    Returns:
        Ok(None) if the bytes are well-formed, otherwise Err(MalformedEncoding).

    Examples:
        >>> validate(b'a\\xffbb\\xff')
        Ok(value=None)
        >>> validate(b'a\\xffbb')
        Err(error=MalformedEncoding(reason='missing trailing separator', offset=4))
    """
    size = len(data)
    if size == 0:
        return Ok(None)
    if data[-1] != DELIMITER:
        return Err(MalformedEncoding('missing trailing separator', size))

    pos = 0
    index = 0
    while pos < size:
        end = data.find(DELIMITER, pos)
        try:
            data[pos:end].decode('utf-8')
        except UnicodeDecodeError as exc:
            return Err(MalformedEncoding(f'invalid UTF-8 in element {index}: {exc.reason}', pos + exc.start))
        pos = end + 1
        index += 1
    return Ok(None)
