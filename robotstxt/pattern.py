"""
Path patterns for Allow/Disallow rules.

Supports:
- `*` wildcards matching any run of characters (including `/`)
- a trailing `$` anchoring the match to the end of the path
- percent normalisation shared with candidate URLs
"""

import re
from dataclasses import dataclass, field

# Printable ASCII minus the characters that are never valid in a URL path
_UNSAFE_RE = re.compile(r'[^\x21-\x7e]|["<>`]')
_ESCAPE_RE = re.compile(r"%([0-9A-Fa-f]{2})")
_STAR_RUN_RE = re.compile(r"\*+")

_UNRESERVED = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~"
)


def _encode_unsafe(match: re.Match) -> str:
    data = match.group().encode("utf-8", "surrogatepass")
    return "".join(f"%{byte:02X}" for byte in data)


def _decode_escape(match: re.Match) -> str:
    char = chr(int(match.group(1), 16))
    if char in _UNRESERVED:
        return char
    return "%" + match.group(1).upper()


def normalize_path(text: str) -> str:
    """
    Bring a path into the canonical form used for matching.

    Non-ASCII and unsafe characters are percent-encoded as UTF-8, existing
    escapes are upper-cased, and escapes of unreserved characters are
    decoded. Reserved characters (including `*`, `$`, `/` and `%`) keep
    their encoded form so decoding never changes what a pattern means.
    """
    text = _UNSAFE_RE.sub(_encode_unsafe, text)
    return _ESCAPE_RE.sub(_decode_escape, text)


@dataclass(frozen=True)
class Pattern:
    """A compiled Allow/Disallow rule."""
    raw: str
    allow: bool
    path: str = field(init=False)
    segments: tuple[str, ...] = field(init=False)
    anchored: bool = field(init=False)

    def __post_init__(self):
        path = self.raw
        anchored = path.endswith("$")
        if anchored:
            path = path[:-1]

        path = _STAR_RUN_RE.sub("*", normalize_path(path))
        if (path or anchored) and not path.startswith(("/", "*")):
            path = "/" + path

        object.__setattr__(self, "path", path)
        object.__setattr__(self, "segments", tuple(path.split("*")))
        object.__setattr__(self, "anchored", anchored)

    @property
    def length(self) -> int:
        """Specificity used for longest-match precedence."""
        return len(self.raw)

    def matches(self, path: str) -> bool:
        """
        Check whether a normalised candidate path matches this pattern.

        Literal segments are matched left-most in order, which is exact
        for `*`-only patterns and never backtracks.
        """
        first = self.segments[0]
        if not path.startswith(first):
            return False
        pos = len(first)

        if len(self.segments) == 1:
            return not self.anchored or pos == len(path)

        for segment in self.segments[1:-1]:
            found = path.find(segment, pos)
            if found < 0:
                return False
            pos = found + len(segment)

        last = self.segments[-1]
        if self.anchored:
            return path.endswith(last) and len(path) - len(last) >= pos
        return path.find(last, pos) >= 0

    def __str__(self) -> str:
        kind = "Allow" if self.allow else "Disallow"
        return f"{kind}: {self.raw}"
