"""klaw-strlist: ordered string lists packed into one byte buffer.

Each element is stored as its UTF-8 bytes followed by a 0xFF separator, a
byte that never occurs in UTF-8, so one bytearray holds the whole list with
no escaping and no per-element objects.

Flat imports (preferred):
    from klaw_strlist import StrListBuf, StrList, StrListMut, StrMut
    from klaw_strlist import Option, Some, Nothing, Result, Ok, Err

Submodule imports (for organization):
    from klaw_strlist.buf import StrListBuf
    from klaw_strlist.view import StrList, StrListMut
    from klaw_strlist.codec import enc_hook, dec_hook
"""

from klaw_strlist._config import StrListConfig, get_config, init
from klaw_strlist._logging import configure_logging, get_logger
from klaw_strlist.buf import StrListBuf
from klaw_strlist.encoding import DELIMITER
from klaw_strlist.errors import (
    MalformedEncoding,
    MalformedEncodingError,
    StaleView,
    StaleViewError,
)
from klaw_strlist.iter import Iter, IterMut, Rev
from klaw_strlist.option import Nothing, NothingType, Option, Some
from klaw_strlist.result import Err, Ok, Result
from klaw_strlist.view import StrList, StrListMut, StrMut

__all__ = [
    'DELIMITER',
    # Option / Result
    'Err',
    # Iterators
    'Iter',
    'IterMut',
    # Errors
    'MalformedEncoding',
    'MalformedEncodingError',
    'Nothing',
    'NothingType',
    'Ok',
    'Option',
    'Result',
    'Rev',
    'Some',
    'StaleView',
    'StaleViewError',
    # Core types
    'StrList',
    'StrListBuf',
    # Config
    'StrListConfig',
    'StrListMut',
    'StrMut',
    # Logging
    'configure_logging',
    'get_config',
    'get_logger',
    'init',
]
