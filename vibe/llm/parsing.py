"""Interpretation of free-text model replies.

Contains:
- PRContent: Title and description of a pull request
- TitleMatch: Tagged result of a title rule
- TITLE_RULES: Ordered title extraction rules
- parse_commit_message: Clean up a commit message reply
- parse_pr_content: Split a reply into PR title and description
- parse_description: Clean up the description part of a reply

Nothing in here raises. Replies that do not follow the requested format
fall through to the next rule, ending with the first non-blank line.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)

QUOTE_CHARS = "\"'`"
TITLE_PREFIX = "title:"
DESCRIPTION_PREFIX = "description:"


class PRContent(BaseModel):
    """Generated pull request title and description."""

    title: str
    description: str = ""


@dataclass(frozen=True)
class TitleMatch:
    """A title found by one of the title rules.

    Attributes:
        rule: Name of the rule that matched.
        title: The extracted title, before the final cleanup pass.
        rest: Lines after the title line, input to the description parser.
    """

    rule: str
    title: str
    rest: list[str]


def parse_commit_message(text: str) -> str:
    """Clean up a commit message reply.

    Surrounding whitespace is removed, then any quote or backtick characters
    at either end (each end independently).
    """
    return text.strip().strip(QUOTE_CHARS)


def _clean_title(title: str) -> str:
    for prefix in ("Title:", "title:"):
        if title.startswith(prefix):
            title = title[len(prefix):]
    return title.strip()


def labelled_title(lines: list[str]) -> Optional[TitleMatch]:
    """Match the first line that starts with 'Title:' (any case).

    A label with nothing after it takes its title from the next line
    that has text.
    """
    for i, line in enumerate(lines):
        trimmed = line.strip()
        if trimmed.lower().startswith(TITLE_PREFIX):
            title = trimmed[len(TITLE_PREFIX):].strip().strip(QUOTE_CHARS)
            if title:
                return TitleMatch("labelled_title", title, lines[i + 1:])
            following = first_line_title(lines[i + 1:])
            if following is None:
                return None
            return TitleMatch("labelled_title", following.title, following.rest)
    return None


def first_line_title(lines: list[str]) -> Optional[TitleMatch]:
    """Use the first line with text, without markdown heading or quotes.

    Lines made only of markup, such as a code fence or a bare '#', are
    treated as blank.
    """
    for i, line in enumerate(lines):
        title = line.strip().lstrip("#" + QUOTE_CHARS).rstrip(QUOTE_CHARS)
        if _clean_title(title):
            return TitleMatch("first_line_title", title, lines[i + 1:])
    return None


TITLE_RULES: tuple[Callable[[list[str]], Optional[TitleMatch]], ...] = (
    labelled_title,
    first_line_title,
)


def parse_description(lines: list[str]) -> str:
    """Extract the description from the lines following the title.

    Leading blank lines are skipped and a leading 'Description:' header is
    dropped (text after it on the same line is kept). From the first line of
    content onward every line is kept as is.
    """
    result = []
    found_content = False

    for line in lines:
        trimmed = line.strip()

        if not found_content:
            if trimmed.lower().startswith(DESCRIPTION_PREFIX):
                remainder = trimmed[len(DESCRIPTION_PREFIX):].strip()
                if remainder:
                    result.append(remainder)
                    found_content = True
                continue
            if not trimmed:
                continue

        found_content = True
        result.append(line)

    return "\n".join(result).strip()


def _unwrap_fence(lines: list[str]) -> list[str]:
    """Drop a code fence that wraps the whole reply."""
    if len(lines) >= 2 and lines[0].strip().startswith("```") and lines[-1].strip() == "```":
        return lines[1:-1]
    return lines


def parse_pr_content(text: str) -> PRContent:
    """Split a model reply into a pull request title and description.

    A code fence around the whole reply is removed first. Title rules are
    tried in TITLE_RULES order and the first match wins.
    The remaining lines are handed to parse_description().

    Args:
        text: The raw model reply.

    Returns:
        The parsed PRContent. Both fields are empty for a blank reply.
    """
    lines = _unwrap_fence(text.strip().split("\n"))

    for rule in TITLE_RULES:
        match = rule(lines)
        if match is not None:
            logger.debug("PR title matched by %s", match.rule)
            return PRContent(
                title=_clean_title(match.title),
                description=parse_description(match.rest),
            )

    logger.debug("Blank model reply, no PR title found")
    return PRContent(title="", description="")
