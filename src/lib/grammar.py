"""
Directive-line grammar recognizer

Classifies each input line as either plain text or a directive line.

The loose pattern accepts an optional comment-open marker, an optional
section-open bracket, a name, an optional inline value, an optional
section-close bracket and an optional comment-close marker:

    [<!--]  ['[']  name  [value]  [']']  [-->]

Matching the loose pattern is not enough. A line only counts as a directive
if it carries at least one comment marker AND at least one section marker,
so ordinary text ("Hello"), bracketed text ("[note]") and ordinary comments
("<!-- note -->") all stay plain.

Example:
    >>> line_match("<!-- [title -->", 4).name
    'title'
    >>> line_match("<!-- title -->") is None
    True
"""

import re
from typing import Optional

from ..models.directives import DirectiveLine, keyword_is


DIRECTIVE_PATTERN = re.compile(
    r'^\s*'
    r'(?P<comment_open><!--\s*|)'
    r'(?P<section_open>\[|)'
    r'(?P<name>[_a-zA-Z][_a-zA-Z0-9]*)'
    r'(?:\s+(?P<value>[_a-zA-Z0-9.]*)|)'
    r'(?P<section_close>\]|)'
    r'(?P<comment_close>\s*-->|)'
    r'\s*$'
)


def line_parse(line: str, lineNumber: int = 0) -> Optional[DirectiveLine]:
    """
    Match a line against the loose pattern without classifying it.

    Returns:
        DirectiveLine with all marker flags set, or None if the line does
        not have the directive shape at all. The result may still be plain
        text (see DirectiveLine.is_directive).
    """
    match = DIRECTIVE_PATTERN.match(line)
    if not match:
        return None

    name = match.group('name')
    return DirectiveLine(
        has_comment_open=match.group('comment_open') != '',
        has_comment_close=match.group('comment_close') != '',
        has_section_open=match.group('section_open') != '',
        has_section_close=match.group('section_close') != '',
        is_data_slot=not keyword_is(name),
        name=name,
        value=match.group('value') or None,
        line=line,
        line_number=lineNumber,
    )


def line_match(line: str, lineNumber: int = 0) -> Optional[DirectiveLine]:
    """
    Classify one input line.

    Args:
        line: Line text with the trailing line terminator already removed
        lineNumber: One-based position of the line, for diagnostics

    Returns:
        A validated DirectiveLine, or None if the line is plain text

    Raises:
        GrammarError: If the line is a directive but fails validation
    """
    parsed = line_parse(line, lineNumber)
    if parsed is None or not parsed.is_directive:
        return None
    parsed.validate()
    return parsed
