"""
Public-key XML interchange.

A public RSA key travels as::

    <?xml version="1.0" encoding="utf-8"?>
    <RSAParameters><Exponent>AQAB</Exponent><Modulus>...</Modulus></RSAParameters>

with base64 element content. Only ``Exponent`` and ``Modulus`` are ever
written; the private CRT fields are left out entirely, even when the
record being serialized is a private key.
"""

import binascii
import xml.etree.ElementTree as ET

from ..common.exceptions import NullOrEmptyInputError
from ..common.models import RsaKeyMaterial
from ..common.result import ErrorKind, Result, fail
from ..common.utils import b64decode, b64encode
from .rsa import is_valid_key

ROOT_TAG = "RSAParameters"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'

# Element order matches the field order of the interchange format
PUBLIC_ELEMENTS = (
    ("Exponent", "exponent"),
    ("Modulus", "modulus"),
)


def to_public_key_xml(key: RsaKeyMaterial) -> str:
    """
    Serialize the public part of key material.

    Args:
        key: Public or private key material

    Returns:
        XML document; fields that are None are omitted, so an empty record
        gives a bare ``<RSAParameters />`` root
    """
    root = ET.Element(ROOT_TAG)

    for tag, field in PUBLIC_ELEMENTS:
        value = getattr(key, field)
        if value is not None:
            ET.SubElement(root, tag).text = b64encode(value)

    return XML_DECLARATION + ET.tostring(root, encoding="unicode")


def from_public_key_xml(xml: str) -> RsaKeyMaterial:
    """
    Parse a public-key XML document.

    Only Modulus and Exponent are read; nothing else in the document ends
    up in the returned record.

    Args:
        xml: Document produced by ``to_public_key_xml``

    Returns:
        RsaKeyMaterial with at most modulus and exponent set

    Raises:
        NullOrEmptyInputError: If xml is None or blank
        xml.etree.ElementTree.ParseError: If xml is not well-formed
        ValueError: If the root element or base64 content is wrong
    """
    if xml is None or not xml.strip():
        raise NullOrEmptyInputError("xml must not be None or blank", "xml")

    root = ET.fromstring(xml.encode("utf-8"))
    if root.tag != ROOT_TAG:
        raise ValueError(f"Expected <{ROOT_TAG}> root element, got <{root.tag}>")

    fields = {}
    for tag, field in PUBLIC_ELEMENTS:
        element = root.find(tag)
        if element is not None:
            fields[field] = b64decode((element.text or "").strip())

    return RsaKeyMaterial(**fields)


def load_public_key_xml(xml: str) -> Result:
    """
    Parse a public-key XML document and require a usable public key.

    Returns:
        Result holding the key, or a failure of kind NULL_OR_EMPTY_INPUT
        (no text) or MALFORMED_KEY_MATERIAL (unparseable, or the parsed
        record is not a valid public key)
    """
    try:
        key = from_public_key_xml(xml)
    except NullOrEmptyInputError as e:
        return fail(ErrorKind.NULL_OR_EMPTY_INPUT, str(e), e.argument)
    except (ET.ParseError, binascii.Error, ValueError) as e:
        return fail(ErrorKind.MALFORMED_KEY_MATERIAL, f"Could not parse key XML: {e}", "xml", e)

    if not is_valid_key(key, expect_private=False):
        return fail(
            ErrorKind.MALFORMED_KEY_MATERIAL,
            "Parsed key material is not a valid RSA public key (missing modulus or exponent)",
            "xml",
        )

    return Result.Ok(key)
