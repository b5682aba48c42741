"""
Common utilities, data model and error types for cryptoguard.
"""

from .utils import is_null_or_empty, to_hex_string, is_non_empty_base64, b64encode, b64decode
from .models import RsaKeyMaterial, KeySizeDescriptor
from .result import ErrorKind, Failure, Result
from .exceptions import *

__all__ = [
    'is_null_or_empty',
    'to_hex_string',
    'is_non_empty_base64',
    'b64encode',
    'b64decode',
    'RsaKeyMaterial',
    'KeySizeDescriptor',
    'ErrorKind',
    'Failure',
    'Result',
]
