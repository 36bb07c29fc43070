"""Parsing of the quick-options block the guide appends to every answer."""

import re
from dataclasses import dataclass

START_MARKER = "---QUICK_OPTIONS---"
END_MARKER = "---END_OPTIONS---"

_BLOCK = re.compile(re.escape(START_MARKER) + r"(.*?)" + re.escape(END_MARKER), re.DOTALL)


@dataclass(frozen=True)
class QuickOption:
    label: str
    description: str = ""


def _parse_option(line: str) -> QuickOption | None:
    line = line.strip()
    if not line:
        return None
    label, _, description = line.partition("|")
    label = label.strip().strip("[]").strip()
    if not label:
        return None
    return QuickOption(label=label, description=description.strip().strip("[]").strip())


def parse_quick_options(content: str) -> tuple[str, list[QuickOption]]:
    """
    Split an answer into display text and quick options.

    The first complete block is parsed and removed. A start marker with no
    end marker (answer still streaming) hides everything from the marker on
    and yields no options.

    Returns:
        (display_text, options)
    """
    content = content or ""

    match = _BLOCK.search(content)
    if match:
        options = [
            option
            for option in (_parse_option(line) for line in match.group(1).splitlines())
            if option
        ]
        display = (content[: match.start()] + content[match.end():]).strip()
        return display, options

    start = content.find(START_MARKER)
    if start != -1:
        return content[:start].strip(), []

    return content, []
