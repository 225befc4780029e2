"""msgspec integration for packed string lists.

String lists cross msgspec as their packed bytes, an opaque MessagePack
``bin`` blob. Decoding always goes through the validating constructors, so a
corrupted or foreign blob fails with ``msgspec.ValidationError`` instead of
producing a view over malformed bytes.

Usage:
    >>> import msgspec
    >>> from klaw_strlist import StrListBuf
    >>> from klaw_strlist.codec import decode, dec_hook, enc_hook, encode
    >>>
    >>> data = encode(StrListBuf(['usr', 'local', 'bin']))
    >>> decode(data).to_list()
    ['usr', 'local', 'bin']
    >>>
    >>> # As a field of your own structs
    >>> class Entry(msgspec.Struct):
    ...     name: str
    ...     tags: StrListBuf
    >>> raw = msgspec.msgpack.encode(Entry('x', StrListBuf(['a'])), enc_hook=enc_hook)
    >>> msgspec.msgpack.decode(raw, type=Entry, dec_hook=dec_hook).tags
    StrListBuf(['a'])

Thread Safety:
    - Encoders are NOT thread-safe, so each thread gets its own
    - Decoders ARE thread-safe and are cached per target type
"""

from __future__ import annotations

import functools
import threading
from typing import Any

import msgspec

from klaw_strlist.buf import StrListBuf
from klaw_strlist.view import StrList, StrListMut

__all__ = [
    'dec_hook',
    'decode',
    'enc_hook',
    'encode',
]

_local = threading.local()


def enc_hook(obj: Any) -> Any:
    """msgspec ``enc_hook`` encoding string lists as their packed bytes.

    Raises:
        NotImplementedError: For any other type, as msgspec expects.
    """
    if isinstance(obj, StrList | StrListBuf):
        return bytes(obj)
    msg = f'Objects of type {type(obj).__name__} are not supported'
    raise NotImplementedError(msg)


def dec_hook(type: type, obj: Any) -> Any:  # noqa: A002
    """msgspec ``dec_hook`` rebuilding string lists from packed bytes.

    Raises:
        MalformedEncodingError: If the blob is not a packed string list.
        TypeError: If the encoded value is not a byte string.
        NotImplementedError: For any other target type.
    """
    if type not in (StrListBuf, StrList, StrListMut):
        msg = f'Objects of type {type!r} are not supported'
        raise NotImplementedError(msg)
    if not isinstance(obj, bytes | bytearray | memoryview):
        msg = f'Expected packed bytes for {type.__name__}, got {obj.__class__.__name__}'
        raise TypeError(msg)
    if type is StrListMut:
        return StrListMut.from_bytes(bytearray(obj))
    if type is StrList:
        return StrList.from_bytes(bytes(obj))
    return StrListBuf.from_bytes(obj)


def _encoder() -> msgspec.msgpack.Encoder:
    """Get or create the thread-local encoder."""
    encoder = getattr(_local, 'encoder', None)
    if encoder is None:
        encoder = msgspec.msgpack.Encoder(enc_hook=enc_hook)
        _local.encoder = encoder
    return encoder


@functools.cache
def _decoder(target: Any) -> msgspec.msgpack.Decoder:
    return msgspec.msgpack.Decoder(target, dec_hook=dec_hook)


def encode(obj: Any) -> bytes:
    """Encode a string list, or any msgspec value containing one, to MessagePack."""
    return _encoder().encode(obj)


def decode(data: bytes, type: Any = StrListBuf) -> Any:  # noqa: A002
    """Decode MessagePack produced by ``encode``.

    Args:
        data: MessagePack bytes.
        type: Target type; defaults to StrListBuf.

    Raises:
        msgspec.ValidationError: If the payload does not match the type or the
            packed bytes are malformed.
    """
    return _decoder(type).decode(data)
