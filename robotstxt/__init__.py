"""
robots.txt parsing and matching.

    >>> robot = parse("FerrisCrawler", b"User-Agent: *\\nDisallow: /rust")
    >>> robot.allowed("/rust/forest")
    False
"""

from .directives import Directive, DirectiveKind, IssueKind, ParseIssue
from .errors import InvalidRobotsError, RobotsError, RobotsUrlError
from .parser import AgentGroup, ParsedDocument, parse_document
from .pattern import Pattern
from .robot import Robot, parse
from .urls import get_robots_url

__version__ = "0.1.0"

__all__ = [
    "AgentGroup",
    "Directive",
    "DirectiveKind",
    "InvalidRobotsError",
    "IssueKind",
    "ParseIssue",
    "ParsedDocument",
    "Pattern",
    "Robot",
    "RobotsError",
    "RobotsUrlError",
    "get_robots_url",
    "parse",
    "parse_document",
]
