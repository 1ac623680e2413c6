"""
Directive types produced by the line parser.
"""

from dataclasses import dataclass
from enum import Enum


class DirectiveKind(Enum):
    """Kind of a single robots.txt line."""
    USER_AGENT = "user-agent"
    ALLOW = "allow"
    DISALLOW = "disallow"
    CRAWL_DELAY = "crawl-delay"
    SITEMAP = "sitemap"
    UNKNOWN = "unknown"


class IssueKind(Enum):
    """Recoverable problems absorbed while parsing."""
    MALFORMED_ENCODING = "malformed-encoding"
    UNPARSEABLE_DIRECTIVE = "unparseable-directive"
    INVALID_CRAWL_DELAY = "invalid-crawl-delay"


@dataclass(frozen=True)
class Directive:
    """One parsed instruction line."""
    kind: DirectiveKind
    value: str
    field: str = ""
    line_number: int = 0
    # False when the value came from undecodable bytes
    usable: bool = True


@dataclass(frozen=True)
class ParseIssue:
    """A line that was skipped or decoded lossily."""
    kind: IssueKind
    line_number: int
    text: str

    def __str__(self) -> str:
        return f"line {self.line_number}: {self.kind.value}: {self.text!r}"
