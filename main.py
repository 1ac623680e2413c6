#!/usr/bin/env python3
"""
robots.txt checker - run the CLI from a source checkout.

Usage:
    python main.py check <file> <url>... [--agent NAME]
    python main.py inspect <file> [--agent NAME]
    python main.py robots-url <url>
"""

from robotstxt.cli import app

if __name__ == "__main__":
    app()
