"""
robots.txt directive parser.

Features:
- Tolerates BOMs, NUL bytes, mixed line endings and invalid UTF-8
- Accepts `field: value` and `field value` lines, with common typos
- Groups directives into user-agent blocks
- Collects sitemap URLs independently of user-agent blocks

The parser never raises on document content; problem lines are skipped
and recorded as issues.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Union

from .directives import Directive, DirectiveKind, IssueKind, ParseIssue
from .errors import InvalidRobotsError
from .pattern import Pattern

logger = logging.getLogger(__name__)

BOM = b"\xef\xbb\xbf"

FIELD_NAMES: dict[str, DirectiveKind] = {
    "user-agent": DirectiveKind.USER_AGENT,
    "user agent": DirectiveKind.USER_AGENT,
    "useragent": DirectiveKind.USER_AGENT,
    "allow": DirectiveKind.ALLOW,
    "disallow": DirectiveKind.DISALLOW,
    "dissallow": DirectiveKind.DISALLOW,
    "dissalow": DirectiveKind.DISALLOW,
    "disalow": DirectiveKind.DISALLOW,
    "diasllow": DirectiveKind.DISALLOW,
    "disallaw": DirectiveKind.DISALLOW,
    "sitemap": DirectiveKind.SITEMAP,
    "site-map": DirectiveKind.SITEMAP,
    "site map": DirectiveKind.SITEMAP,
    "crawl-delay": DirectiveKind.CRAWL_DELAY,
    "crawl delay": DirectiveKind.CRAWL_DELAY,
    "crawldelay": DirectiveKind.CRAWL_DELAY,
}

_LINE_BREAK_RE = re.compile(rb"\r+\n?|\n")

# Longest names first so "disallow" is never read as "dis" + "allow"
_KNOWN_FIELD_RE = re.compile(
    r"\s*(?P<field>"
    + "|".join(re.escape(name) for name in sorted(FIELD_NAMES, key=len, reverse=True))
    + r")\s*(?::|(?<=\s))(?P<value>.*)",
    re.IGNORECASE | re.DOTALL,
)
_UNKNOWN_FIELD_RE = re.compile(r"\s*(?P<field>[^:\s]+)\s*:(?P<value>.*)", re.DOTALL)
_DELAY_RE = re.compile(r"([0-9]*)(?:\.[0-9]*)?")

# Values that cannot be matched byte-for-byte once lossily decoded
_BYTE_SENSITIVE = (DirectiveKind.ALLOW, DirectiveKind.DISALLOW, DirectiveKind.SITEMAP)

Body = Union[bytes, bytearray, memoryview, str]


@dataclass(frozen=True)
class AgentGroup:
    """Directives scoped to one or more user-agent tokens."""
    agents: tuple[str, ...]
    rules: tuple[Pattern, ...] = ()
    crawl_delay: Optional[int] = None
    implicit: bool = False

    def __post_init__(self):
        if not self.agents:
            raise ValueError("an agent group needs at least one user-agent")

    @property
    def is_wildcard(self) -> bool:
        return "*" in self.agents

    def match_length(self, agent: str) -> int:
        """
        Length of the longest token that is a prefix of the agent.

        Args:
            agent: Lower-cased crawler name

        Returns:
            Token length, or -1 when no token matches
        """
        best = -1
        for token in self.agents:
            if token and token != "*" and agent.startswith(token):
                best = max(best, len(token))
        return best


@dataclass(frozen=True)
class ParsedDocument:
    """All groups and sitemaps found in one robots.txt document."""
    groups: tuple[AgentGroup, ...] = ()
    sitemaps: tuple[str, ...] = ()
    issues: tuple[ParseIssue, ...] = ()

    @property
    def default_delay(self) -> Optional[int]:
        """Crawl-delay given before any User-Agent line."""
        for group in self.groups:
            if group.implicit:
                return group.crawl_delay
        return None


@dataclass
class _GroupBuilder:
    agents: list[str] = field(default_factory=list)
    rules: list[Pattern] = field(default_factory=list)
    crawl_delay: Optional[int] = None
    implicit: bool = False

    def build(self) -> AgentGroup:
        return AgentGroup(
            agents=tuple(self.agents),
            rules=tuple(self.rules),
            crawl_delay=self.crawl_delay,
            implicit=self.implicit,
        )


def _to_bytes(body: Body) -> bytes:
    if isinstance(body, str):
        return body.encode("utf-8", "surrogatepass")
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)
    raise InvalidRobotsError(
        f"robots.txt body must be bytes or str, not {type(body).__name__}"
    )


def parse_crawl_delay(value: str) -> Optional[int]:
    """
    Parse a Crawl-Delay value as whole seconds.

    Fractions are truncated. Returns None for anything that is not a
    non-negative decimal number.
    """
    match = _DELAY_RE.fullmatch(value)
    if not match or value in ("", "."):
        return None
    digits = match.group(1) or "0"
    # Anything longer is not a delay anyone means to honour
    if len(digits) > 18:
        return None
    return int(digits)


def split_lines(data: bytes) -> list[bytes]:
    """Split raw bytes into lines, dropping a BOM and treating NUL as a break."""
    if data.startswith(BOM):
        data = data[len(BOM):]
    data = data.replace(b"\x00", b"\n")
    return _LINE_BREAK_RE.split(data)


def tokenize(body: Body) -> tuple[list[Directive], list[ParseIssue]]:
    """
    Turn a robots.txt body into directives.

    Args:
        body: Raw document bytes (str is accepted and encoded as UTF-8)

    Returns:
        Directives in file order and the issues absorbed along the way
    """
    directives: list[Directive] = []
    issues: list[ParseIssue] = []

    for number, raw in enumerate(split_lines(_to_bytes(body)), start=1):
        # "#" never occurs inside a multi-byte UTF-8 sequence
        raw = raw.split(b"#", 1)[0]
        if not raw.strip():
            continue

        malformed = False
        try:
            line = raw.decode("utf-8")
        except UnicodeDecodeError:
            line = raw.decode("utf-8", "replace")
            malformed = True

        match = _KNOWN_FIELD_RE.match(line)
        if match:
            name = match.group("field")
            kind = FIELD_NAMES[name.lower()]
        else:
            match = _UNKNOWN_FIELD_RE.match(line)
            if not match:
                issues.append(ParseIssue(IssueKind.UNPARSEABLE_DIRECTIVE, number, line.strip()))
                continue
            name = match.group("field")
            kind = DirectiveKind.UNKNOWN

        value = match.group("value").strip()

        if malformed:
            issues.append(ParseIssue(IssueKind.MALFORMED_ENCODING, number, line.strip()))

        if kind is DirectiveKind.CRAWL_DELAY and parse_crawl_delay(value) is None:
            issues.append(ParseIssue(IssueKind.INVALID_CRAWL_DELAY, number, value))
            continue

        directives.append(Directive(
            kind=kind,
            value=value,
            field=name,
            line_number=number,
            usable=not (malformed and kind in _BYTE_SENSITIVE),
        ))

    return directives, issues


def assemble_groups(directives: list[Directive]) -> tuple[list[AgentGroup], list[str]]:
    """
    Fold directives into user-agent groups.

    Consecutive User-Agent lines share one group. Rules that appear before
    any User-Agent line go to an implicit `*` group placed first.

    Returns:
        Groups in file order and sitemap URLs in file order
    """
    builders: list[_GroupBuilder] = []
    sitemaps: list[str] = []
    current: Optional[_GroupBuilder] = None
    collecting_agents = False

    for directive in directives:
        kind = directive.kind

        if kind is DirectiveKind.USER_AGENT:
            if current is None or not collecting_agents:
                current = _GroupBuilder()
                builders.append(current)
            current.agents.append(directive.value.lower())
            collecting_agents = True

        elif kind in (DirectiveKind.ALLOW, DirectiveKind.DISALLOW, DirectiveKind.CRAWL_DELAY):
            collecting_agents = False
            if not directive.usable:
                continue
            if current is None:
                current = _GroupBuilder(agents=["*"], implicit=True)
                builders.insert(0, current)

            if kind is DirectiveKind.CRAWL_DELAY:
                current.crawl_delay = parse_crawl_delay(directive.value)
            elif not directive.value:
                # An empty "Disallow:" or "Allow:" means no restriction
                current.rules.append(Pattern("", allow=True))
            else:
                current.rules.append(Pattern(directive.value, allow=kind is DirectiveKind.ALLOW))

        elif kind is DirectiveKind.SITEMAP:
            if directive.value and directive.usable:
                sitemaps.append(directive.value)

    return [builder.build() for builder in builders], sitemaps


def parse_document(body: Body) -> ParsedDocument:
    """
    Parse a robots.txt body into groups and sitemaps.

    Raises:
        InvalidRobotsError: If the body is not bytes or str, or the groups
            could not be assembled
    """
    directives, issues = tokenize(body)
    for issue in issues:
        logger.debug("Skipped robots.txt %s", issue)

    try:
        groups, sitemaps = assemble_groups(directives)
    except ValueError as exc:
        raise InvalidRobotsError("Failed to parse robots.txt") from exc

    logger.debug(
        "Parsed robots.txt: %d groups, %d sitemaps, %d issues",
        len(groups), len(sitemaps), len(issues),
    )
    return ParsedDocument(groups=tuple(groups), sitemaps=tuple(sitemaps), issues=tuple(issues))
