"""RFC 2141 Uniform Resource Names

This module provides an immutable URN value of the form `urn:<nid>:<nss>`,
with namespace identifier rules from RFC 3406 applied on construction.
"""

import json
import logging
import re
from typing import Any, Union


LOG = logging.getLogger(__name__)

# https://tools.ietf.org/html/rfc3406#section-4.1
# https://tools.ietf.org/html/rfc3406#section-4.3
RESERVED_NID_PREFIX = "urn-"
EXPERIMENTAL_NID_PREFIX = "x-"
XY_NID_PREFIX = "xy-"

URN_PREFIX = "urn"
URN_DELIMITER = ":"

MIN_NID_LENGTH = 3
MAX_NID_LENGTH = 32
MIN_NSS_LENGTH = 1

# https://tools.ietf.org/html/rfc2141
NID_PATTERN = re.compile(r"^[a-zA-Z0-9]{1}[a-zA-Z0-9\-]{1,31}$")

# <reserved> chars not included
NSS_PATTERN = re.compile(r"^(?:%[0-9A-Fa-f]{2}|[a-zA-Z0-9\-+(),.:=@;$_!*'])+$")


# Error classes
class UrnError(ValueError):
    """Base exception for URN errors"""
    pass


class UrnStructureError(UrnError):
    """Raw input is not shaped like urn:<nid>:<nss>"""
    pass


class InvalidFormatError(UrnStructureError):
    """Fewer than three colon-delimited segments"""
    def __init__(self, message: str = "invalid URN format, should be urn:<nid>:<nss>"):
        super().__init__(message)


class InvalidPrefixError(UrnStructureError):
    """First segment is not the literal `urn`"""
    def __init__(self, raw: str, prefix: str = URN_PREFIX):
        self.raw = raw
        self.prefix = prefix
        super().__init__(f"URN '{raw}' must have prefix - {prefix}")


class NidError(UrnError):
    """Namespace identifier violates a rule"""
    def __init__(self, nid: str, message: str):
        self.nid = nid
        super().__init__(message)


class NidTooShortError(NidError):
    def __init__(self, nid: str, min_length: int = MIN_NID_LENGTH):
        self.min_length = min_length
        super().__init__(nid, f"length of NID must be more than {min_length - 1} letters long")


class NidTooLongError(NidError):
    def __init__(self, nid: str, max_length: int = MAX_NID_LENGTH):
        self.max_length = max_length
        super().__init__(nid, f"NID must not be greater than {max_length} letters long")


class ExperimentalNidError(NidError):
    """NID starts with `x-`"""
    def __init__(self, nid: str, prefix: str = EXPERIMENTAL_NID_PREFIX):
        self.prefix = prefix
        super().__init__(nid, f"NID {prefix} is experimental")


class XyNidError(NidError):
    """NID starts with `xy-`"""
    def __init__(self, nid: str, prefix: str = XY_NID_PREFIX):
        self.prefix = prefix
        super().__init__(nid, f"NID {nid} mustn't start with: {prefix}")


class ReservedNidError(NidError):
    """NID starts with `urn-`"""
    def __init__(self, nid: str, prefix: str = RESERVED_NID_PREFIX):
        self.prefix = prefix
        super().__init__(nid, f"NID {prefix} is reserved")


class NidPatternError(NidError):
    def __init__(self, nid: str, pattern: str = NID_PATTERN.pattern):
        self.pattern = pattern
        super().__init__(nid, f"NID {nid} doesn't satisfy pattern: {pattern}")


class NssError(UrnError):
    """Namespace-specific string violates a rule"""
    def __init__(self, nss: str, message: str):
        self.nss = nss
        super().__init__(message)


class EmptyNssError(NssError):
    def __init__(self, nss: str = ""):
        super().__init__(nss, "NSS must be at least one character long")


class NssPatternError(NssError):
    def __init__(self, nss: str, pattern: str = NSS_PATTERN.pattern):
        self.pattern = pattern
        super().__init__(nss, f"NSS {nss} doesn't satisfy the regexp rule: {pattern}")


class UrnCreationError(UrnError):
    """Construction from parts failed; `reason` holds the violated rule"""
    def __init__(self, reason: UrnError):
        self.reason = reason
        super().__init__(f"can't create URN, reason: {reason}")


class UrnParsePanic(RuntimeError):
    """Raised by `Urn.must_parse` for input the caller asserted was valid

    Sits outside the UrnError hierarchy, so `except UrnError` does not catch it.
    """
    def __init__(self, raw: str, reason: UrnError):
        self.raw = raw
        self.reason = reason
        super().__init__(f"cannot parse URN '{raw}': {reason}")


def validate_nid(nid: str) -> None:
    """Check a namespace identifier against the construction rules

    Rules are applied in order and the first violation is raised.
    """
    if len(nid) < MIN_NID_LENGTH:
        raise NidTooShortError(nid)

    if len(nid) > MAX_NID_LENGTH:
        raise NidTooLongError(nid)

    lowered = nid.lower()
    if lowered.startswith(EXPERIMENTAL_NID_PREFIX):
        raise ExperimentalNidError(nid)

    if lowered.startswith(XY_NID_PREFIX):
        raise XyNidError(nid)

    if lowered.startswith(RESERVED_NID_PREFIX):
        raise ReservedNidError(nid)

    if not NID_PATTERN.fullmatch(nid):
        raise NidPatternError(nid)


def validate_nss(nss: str) -> None:
    """Check a namespace-specific string"""
    if len(nss) < MIN_NSS_LENGTH:
        raise EmptyNssError(nss)

    if not NSS_PATTERN.fullmatch(nss):
        raise NssPatternError(nss)


class Urn:
    """An RFC 2141 URN: `urn:<nid>:<nss>`

    Examples:
    - `urn:newtonworld:user:test_-user`
    - `urn:isbn:0451450523`

    Values are immutable. Equality is raw string equality of both parts,
    no case folding and no percent-decoding.
    """

    __slots__ = ("_nid", "_nss")

    def __init__(self, nid: str, nss: str):
        """Create a URN from its namespace identifier and specific string

        Surrounding whitespace is stripped from both parts before validation.
        Raises UrnCreationError wrapping the first violated rule.
        """
        nid = nid.strip()
        nss = nss.strip()
        try:
            validate_nid(nid)
            validate_nss(nss)
        except UrnError as e:
            LOG.debug("Rejected URN parts nid=%r nss=%r: %s", nid, nss, e)
            raise UrnCreationError(e) from e

        object.__setattr__(self, "_nid", nid)
        object.__setattr__(self, "_nss", nss)

    @classmethod
    def _unchecked(cls, nid: str, nss: str) -> 'Urn':
        """Build a value without the construction rules (parser use only)"""
        urn = object.__new__(cls)
        object.__setattr__(urn, "_nid", nid)
        object.__setattr__(urn, "_nss", nss)
        return urn

    @classmethod
    def parse(cls, raw: str) -> 'Urn':
        """Parse a URN from its text form

        Only the first two colons are structural, so the NSS may contain
        further colons. The NID is checked against its character pattern
        only; the length and reserved prefix rules of the constructor are
        not applied here.
        """
        raw = raw.strip()
        tokens = raw.split(URN_DELIMITER, 2)

        try:
            if len(tokens) != 3:
                raise InvalidFormatError()

            prefix, nid, nss = tokens
            if prefix != URN_PREFIX:
                raise InvalidPrefixError(raw)

            if not NID_PATTERN.fullmatch(nid):
                raise NidPatternError(nid)

            if not NSS_PATTERN.fullmatch(nss):
                raise NssPatternError(nss)
        except UrnError as e:
            LOG.debug("Rejected URN %r: %s", raw, e)
            raise

        return cls._unchecked(nid, nss)

    @classmethod
    def must_parse(cls, raw: str) -> 'Urn':
        """Parse a URN that is known to be valid, e.g. a literal in code

        Raises UrnParsePanic instead of a UrnError on failure.
        """
        try:
            return cls.parse(raw)
        except UrnError as e:
            raise UrnParsePanic(raw, e) from e

    @classmethod
    def is_valid(cls, raw: str) -> bool:
        """Check whether `raw` parses as a URN"""
        try:
            cls.parse(raw)
        except UrnError:
            return False
        return True

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> 'Urn':
        """Decode a JSON string literal and parse it"""
        value = json.loads(data)
        if not isinstance(value, str):
            raise InvalidFormatError(f"expected a JSON string holding a URN, got {type(value).__name__}")
        return cls.parse(value)

    @property
    def nid(self) -> str:
        return self._nid

    @property
    def nss(self) -> str:
        return self._nss

    def to_string(self) -> str:
        """Render as `urn:<nid>:<nss>`"""
        return URN_DELIMITER.join((URN_PREFIX, self._nid, self._nss))

    def to_json(self) -> bytes:
        """Render as a JSON string literal

        Validated parts never contain quotes, backslashes or control
        characters, so no escaping is needed.
        """
        return f'"{self.to_string()}"'.encode("ascii")

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Urn('{self.to_string()}')"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Urn):
            return NotImplemented
        return self._nid == other._nid and self._nss == other._nss

    def __hash__(self) -> int:
        return hash((self._nid, self._nss))

    def __reduce__(self):
        return (Urn._unchecked, (self._nid, self._nss))


class UrnJSONEncoder(json.JSONEncoder):
    """JSON encoder that renders Urn values as their text form

    >>> json.dumps({"id": Urn("example", "abc")}, cls=UrnJSONEncoder)
    '{"id": "urn:example:abc"}'
    """

    def default(self, o: Any) -> Any:
        if isinstance(o, Urn):
            return o.to_string()
        return super().default(o)
