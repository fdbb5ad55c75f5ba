"""RFC URN - Uniform Resource Name values

This package provides parsing, validation and serialization of URNs in the
RFC 2141 `urn:<nid>:<nss>` syntax, with RFC 3406 namespace identifier rules.
"""

from .urn import (
    Urn,
    UrnJSONEncoder,
    UrnError,
    UrnStructureError,
    InvalidFormatError,
    InvalidPrefixError,
    NidError,
    NidTooShortError,
    NidTooLongError,
    ExperimentalNidError,
    XyNidError,
    ReservedNidError,
    NidPatternError,
    NssError,
    EmptyNssError,
    NssPatternError,
    UrnCreationError,
    UrnParsePanic,
    validate_nid,
    validate_nss,
)

__version__ = "0.1.0"

__all__ = [
    "Urn",
    "UrnJSONEncoder",
    "UrnError",
    "UrnStructureError",
    "InvalidFormatError",
    "InvalidPrefixError",
    "NidError",
    "NidTooShortError",
    "NidTooLongError",
    "ExperimentalNidError",
    "XyNidError",
    "ReservedNidError",
    "NidPatternError",
    "NssError",
    "EmptyNssError",
    "NssPatternError",
    "UrnCreationError",
    "UrnParsePanic",
    "validate_nid",
    "validate_nss",
]
