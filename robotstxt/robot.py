"""
Agent group selection and path matching.

A Robot is built once per (robots.txt, crawler name) pair and answers
allow/deny queries, crawl delay and sitemaps for that crawler.
"""

import logging
from typing import Optional

from .parser import AgentGroup, Body, ParsedDocument, parse_document
from .pattern import Pattern
from .urls import prepare_path

logger = logging.getLogger(__name__)

ROBOTS_PATH = "/robots.txt"


def select_groups(groups: tuple[AgentGroup, ...], agent: str) -> list[AgentGroup]:
    """
    Pick the groups that apply to a crawler.

    The group whose matching token is longest wins. Groups sharing that
    token are merged. Without a specific match every `*` group applies.

    Args:
        groups: Parsed groups in file order
        agent: Crawler name (case-insensitive)

    Returns:
        Applicable groups in file order (possibly empty)
    """
    agent = agent.strip().lower()
    best = -1
    chosen: list[AgentGroup] = []

    for group in groups:
        length = group.match_length(agent)
        if length > best:
            best = length
            chosen = [group]
        elif length == best and length >= 0:
            chosen.append(group)

    if chosen:
        return chosen
    return [group for group in groups if group.is_wildcard]


def precedence(rule: Pattern) -> tuple[int, bool]:
    """Sort key: longest pattern first, Allow before Disallow on ties."""
    return (-rule.length, not rule.allow)


class Robot:
    """
    robots.txt rules resolved for one crawler.

    Instances never change after construction and can be shared between
    threads.
    """

    def __init__(self, agent: str, body: Body = b""):
        """
        Parse robots.txt and extract the rules relevant to a crawler.

        Args:
            agent: Crawler name, matched case-insensitively
            body: Raw robots.txt content

        Raises:
            InvalidRobotsError: If the body cannot be parsed at all
        """
        self._agent = agent
        self._document = parse_document(body)

        groups = select_groups(self._document.groups, agent)
        rules = [rule for group in groups for rule in group.rules]
        self._rules = tuple(sorted(rules, key=precedence))

        delay = None
        for group in groups:
            if group.crawl_delay is not None:
                delay = group.crawl_delay
        if delay is None:
            delay = self._document.default_delay
        self._delay = delay

        logger.debug(
            "robots.txt for %r: %d of %d groups apply, %d rules, delay=%s",
            agent, len(groups), len(self._document.groups), len(self._rules), delay,
        )

    @classmethod
    def permissive(cls, agent: str) -> "Robot":
        """A Robot that allows everything, for missing or broken robots.txt."""
        return cls(agent, b"")

    @property
    def agent(self) -> str:
        return self._agent

    @property
    def document(self) -> ParsedDocument:
        return self._document

    @property
    def groups(self) -> tuple[AgentGroup, ...]:
        return self._document.groups

    @property
    def rules(self) -> tuple[Pattern, ...]:
        """Applicable rules in precedence order."""
        return self._rules

    @property
    def delay(self) -> Optional[int]:
        """Crawl-Delay in seconds, or None when not set."""
        return self._delay

    @property
    def sitemaps(self) -> tuple[str, ...]:
        """Sitemap URLs in file order, regardless of user-agent."""
        return self._document.sitemaps

    def allowed(self, url: str) -> bool:
        """
        Check if a URL may be crawled.

        Args:
            url: Absolute URL or path

        Returns:
            True if allowed, False otherwise
        """
        path = prepare_path(url)
        if path == ROBOTS_PATH:
            return True

        for rule in self._rules:
            if rule.matches(path):
                return rule.allow
        return True

    def __repr__(self) -> str:
        return (
            f"Robot(agent={self._agent!r}, rules={len(self._rules)}, "
            f"delay={self._delay!r}, sitemaps={list(self.sitemaps)!r})"
        )


def parse(agent: str, body: Body) -> Robot:
    """Parse robots.txt for a crawler."""
    return Robot(agent, body)
