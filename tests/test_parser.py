"""
Tests for the robots.txt directive parser.
"""

import random

import pytest

from robotstxt import AgentGroup, DirectiveKind, IssueKind, Robot, parse_document
from robotstxt.parser import parse_crawl_delay, split_lines, tokenize


def kinds_and_values(body):
    directives, _ = tokenize(body)
    return [(d.kind, d.value) for d in directives]


class TestTokenize:
    """Tests for line tokenizing."""

    def test_basic_document(self):
        """Test each known directive and a trailing comment."""
        content = b"""User-Agent: SmerBot
Disallow: /path
Allow: /path/exception
Crawl-delay: 60 # Very slow delay

sitemap: https://example.com/sitemap.xml"""

        assert kinds_and_values(content) == [
            (DirectiveKind.USER_AGENT, "SmerBot"),
            (DirectiveKind.DISALLOW, "/path"),
            (DirectiveKind.ALLOW, "/path/exception"),
            (DirectiveKind.CRAWL_DELAY, "60"),
            (DirectiveKind.SITEMAP, "https://example.com/sitemap.xml"),
        ]

    def test_line_numbers_and_fields(self):
        """Test directives remember where they came from."""
        directives, _ = tokenize(b"\n# comment\nUSER-AGENT: bot\n")

        assert directives[0].line_number == 3
        assert directives[0].field == "USER-AGENT"

    def test_space_separator(self):
        """Test fields separated from values by whitespace only."""
        assert kinds_and_values(b"Disallow /path\nUser-agent *") == [
            (DirectiveKind.DISALLOW, "/path"),
            (DirectiveKind.USER_AGENT, "*"),
        ]

    @pytest.mark.parametrize("line,kind", [
        (b"Dissallow: /x", DirectiveKind.DISALLOW),
        (b"disalow: /x", DirectiveKind.DISALLOW),
        (b"User agent: x", DirectiveKind.USER_AGENT),
        (b"useragent: x", DirectiveKind.USER_AGENT),
        (b"Site-map: x", DirectiveKind.SITEMAP),
        (b"crawldelay: 3", DirectiveKind.CRAWL_DELAY),
        (b"Crawl delay: 3", DirectiveKind.CRAWL_DELAY),
    ])
    def test_field_variants(self, line, kind):
        """Test common misspellings of field names."""
        assert kinds_and_values(line)[0][0] is kind

    def test_unknown_field(self):
        """Test unknown fields are kept as UNKNOWN directives."""
        directives, issues = tokenize(b"Host: example.com\nAllowance: yes\n")

        assert [d.kind for d in directives] == [DirectiveKind.UNKNOWN, DirectiveKind.UNKNOWN]
        assert directives[0].field == "Host"
        assert directives[1].field == "Allowance"
        assert issues == []

    def test_unparseable_line(self):
        """Test lines without a separator are skipped and recorded."""
        directives, issues = tokenize(b"User-agent: *\n<html>garbage</html>\n")

        assert len(directives) == 1
        assert issues[0].kind is IssueKind.UNPARSEABLE_DIRECTIVE
        assert issues[0].line_number == 2

    def test_byte_order_mark(self):
        """Test a UTF-8 BOM is stripped."""
        assert kinds_and_values(b"\xef\xbb\xbfUser-agent: *\nDisallow: /") == [
            (DirectiveKind.USER_AGENT, "*"),
            (DirectiveKind.DISALLOW, "/"),
        ]

    def test_line_endings(self):
        """Test CR, CRLF and LF line endings."""
        assert split_lines(b"a\rb\r\nc\nd") == [b"a", b"b", b"c", b"d"]
        assert len(kinds_and_values(b"User-agent: *\rDisallow: /a\r\nDisallow: /b")) == 3

    def test_null_bytes(self):
        """Test NUL bytes act as line breaks."""
        assert kinds_and_values(b"User-agent: a\x00\x00\x00Disallow: /x") == [
            (DirectiveKind.USER_AGENT, "a"),
            (DirectiveKind.DISALLOW, "/x"),
        ]

    def test_invalid_utf8_path_is_unusable(self):
        """Test rules with undecodable bytes are kept but marked unusable."""
        directives, issues = tokenize(b"User-agent: *\nDisallow: /caf\xe9\nDisallow: /ok\n")

        assert [d.kind for d in directives] == [
            DirectiveKind.USER_AGENT, DirectiveKind.DISALLOW, DirectiveKind.DISALLOW,
        ]
        assert [d.usable for d in directives] == [True, False, True]
        assert issues[0].kind is IssueKind.MALFORMED_ENCODING
        assert issues[0].line_number == 2

    def test_invalid_utf8_in_comment(self):
        """Test undecodable bytes inside comments are harmless."""
        directives, issues = tokenize(b"Disallow: /x # caf\xe9\n")

        assert [d.value for d in directives] == ["/x"]
        assert issues == []

    def test_invalid_crawl_delay_recorded(self):
        """Test bad crawl-delay values are skipped and recorded."""
        directives, issues = tokenize(b"Crawl-delay: soon\n")

        assert directives == []
        assert issues[0].kind is IssueKind.INVALID_CRAWL_DELAY
        assert issues[0].text == "soon"


class TestCrawlDelay:
    """Tests for crawl-delay values."""

    @pytest.mark.parametrize("value,expected", [
        ("10", 10),
        ("0", 0),
        ("5.9", 5),
        ("5.", 5),
        (".5", 0),
        ("-1", None),
        ("word", None),
        ("", None),
        (".", None),
        ("1e3", None),
        ("inf", None),
        ("10 seconds", None),
        ("9" * 30, None),
    ])
    def test_parse_crawl_delay(self, value, expected):
        """Test whole-second parsing of crawl-delay values."""
        assert parse_crawl_delay(value) == expected


class TestGroups:
    """Tests for user-agent group assembly."""

    def test_consecutive_agents_share_group(self):
        """Test stacked User-agent lines form one group."""
        doc = parse_document(b"User-agent: a\nUser-agent: B\nDisallow: /\n")

        assert len(doc.groups) == 1
        assert doc.groups[0].agents == ("a", "b")
        assert doc.groups[0].rules[0].raw == "/"

    def test_ignored_lines_do_not_split_agents(self):
        """Test blank, comment, unknown and sitemap lines between agents."""
        content = b"""User-agent: a

# comment
Host: example.com
Sitemap: https://example.com/s.xml
User-agent: b
Disallow: /
"""
        doc = parse_document(content)

        assert len(doc.groups) == 1
        assert doc.groups[0].agents == ("a", "b")

    def test_agent_after_rules_opens_group(self):
        """Test a User-agent after a crawl-delay starts a new group."""
        doc = parse_document(b"User-agent: a\nCrawl-delay: 1\nUser-agent: b\nDisallow: /\n")

        assert [g.agents for g in doc.groups] == [("a",), ("b",)]
        assert doc.groups[0].crawl_delay == 1
        assert doc.groups[1].crawl_delay is None

    def test_crawl_delay_last_wins(self):
        """Test the last crawl-delay in a group is kept."""
        doc = parse_document(b"User-agent: a\nCrawl-delay: 1\nCrawl-delay: 7\n")
        assert doc.groups[0].crawl_delay == 7

    def test_trailing_agents_without_rules(self):
        """Test a group with no rules at the end of the file."""
        doc = parse_document(b"User-agent: a\nDisallow: /\nUser-agent: b\n")

        assert doc.groups[1].agents == ("b",)
        assert doc.groups[1].rules == ()

    def test_orphan_rules_form_implicit_group(self):
        """Test rules before any User-agent go to an implicit * group."""
        doc = parse_document(b"Disallow: /x\nCrawl-delay: 3\nUser-agent: a\nDisallow: /y\n")

        implicit = doc.groups[0]
        assert implicit.agents == ("*",)
        assert implicit.implicit is True
        assert implicit.rules[0].raw == "/x"
        assert doc.default_delay == 3
        assert doc.groups[1].implicit is False

    def test_empty_disallow_becomes_zero_length_allow(self):
        """Test "Disallow:" compiles to an allow with no specificity."""
        doc = parse_document(b"User-agent: *\nDisallow:\n")
        rule = doc.groups[0].rules[0]

        assert rule.allow is True
        assert rule.length == 0

    def test_empty_allow_becomes_zero_length_allow(self):
        """Test "Allow:" is handled like an empty disallow."""
        doc = parse_document(b"User-agent: *\nAllow:\nDisallow: /x\n")
        empty, disallow = doc.groups[0].rules

        assert empty.allow is True
        assert empty.length == 0
        assert disallow.raw == "/x"
        assert Robot("bot", b"User-agent: *\nAllow:\nDisallow: /x\n").allowed("/x") is False

    def test_undecodable_rule_closes_agent_run(self):
        """Test a rule with invalid UTF-8 still ends the User-agent run."""
        content = b"User-agent: a\nDisallow: /caf\xe9\nUser-agent: b\nDisallow: /x\n"
        doc = parse_document(content)

        assert [g.agents for g in doc.groups] == [("a",), ("b",)]
        assert doc.groups[0].rules == ()
        assert Robot("a", content).allowed("/x") is True
        assert Robot("b", content).allowed("/x") is False

    def test_undecodable_orphan_rule_adds_no_group(self):
        """Test an unusable rule before any User-agent is dropped."""
        doc = parse_document(b"Disallow: /caf\xe9\nUser-agent: a\nDisallow: /x\n")

        assert [g.agents for g in doc.groups] == [("a",)]

    def test_sitemaps(self):
        """Test sitemap collection keeps order and duplicates."""
        doc = parse_document(b"Sitemap: a\nSitemap:\nSitemap: b\nSitemap: a\n")
        assert doc.sitemaps == ("a", "b", "a")

    def test_undecodable_sitemap_is_skipped(self):
        """Test sitemap URLs with invalid UTF-8 are not collected."""
        doc = parse_document(b"Sitemap: https://example.com/caf\xe9.xml\nSitemap: https://example.com/s.xml\n")
        assert doc.sitemaps == ("https://example.com/s.xml",)

    def test_group_needs_agent(self):
        """Test groups cannot be created without agents."""
        with pytest.raises(ValueError):
            AgentGroup(agents=())

    def test_match_length(self):
        """Test product-token prefix matching."""
        group = AgentGroup(agents=("*", "ferris", "ferriscrawler", ""))

        assert group.match_length("ferriscrawler/2.0") == len("ferriscrawler")
        assert group.match_length("ferris") == len("ferris")
        assert group.match_length("other") == -1
        assert group.is_wildcard is True

    def test_issues_collected(self):
        """Test per-line problems end up on the document."""
        doc = parse_document(b"User-agent: *\nnonsense\nCrawl-delay: x\n")

        assert [issue.kind for issue in doc.issues] == [
            IssueKind.UNPARSEABLE_DIRECTIVE,
            IssueKind.INVALID_CRAWL_DELAY,
        ]

    def test_empty_document(self):
        """Test empty input is not an error."""
        doc = parse_document(b"")

        assert doc.groups == ()
        assert doc.sitemaps == ()
        assert doc.default_delay is None


KEYWORDS = [
    b"User-agent:", b"Allow:", b"Disallow:", b"Crawl-delay:", b"Sitemap:",
    b"*", b"$", b"/", b"#", b"%", b"%2", b"%C3%A9", b"\n", b"\r", b"\r\n",
    b"\x00", b"\xef\xbb\xbf", b"\xff", b"\xe9", b" ", b":", b"9.5", b"-1",
]


class TestRobustness:
    """Parsing must never fail on document content."""

    @pytest.mark.parametrize("seed", range(20))
    def test_random_bytes(self, seed):
        """Test arbitrary bytes parse without raising."""
        rng = random.Random(seed)
        for _ in range(25):
            body = bytes(rng.randrange(256) for _ in range(rng.randrange(512)))
            robot = Robot("*", body)
            assert isinstance(robot.allowed("/"), bool)

    @pytest.mark.parametrize("seed", range(20))
    def test_keyword_soup(self, seed):
        """Test structured garbage built from robots.txt keywords."""
        rng = random.Random(seed)
        for _ in range(25):
            body = b"".join(rng.choice(KEYWORDS) for _ in range(rng.randrange(64)))
            robot = Robot("bot", body)
            assert isinstance(robot.allowed("/a*b$"), bool)
            assert robot.delay is None or robot.delay >= 0

    def test_pathological_lines(self):
        """Test very long lines and patterns stay cheap."""
        body = b"User-agent: *\nDisallow: /" + b"a*" * 20000 + b"z$\n" + b" " * 100000
        robot = Robot("bot", body)

        assert robot.allowed("/" + "a" * 5000) is True
        assert robot.allowed("/" + "a" * 20000 + "z") is False

    def test_truncated_multibyte(self):
        """Test a document cut in the middle of a UTF-8 sequence."""
        robot = Robot("bot", "User-agent: *\nDisallow: /café".encode("utf-8")[:-1])
        assert robot.allowed("/caf") is True
