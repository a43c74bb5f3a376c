"""
Content Preprocessing

Blanks out server-side template tags before a file is handed to a
lint engine, keeping line and column layout intact.
"""

import re
import logging


logger = logging.getLogger(__name__)

ERB_SUFFIX = ".erb"
ERB_TAG_PATTERN = re.compile(r'<%.*?%>', re.DOTALL)


def _blank(match: re.Match) -> str:
    # newlines survive so line numbers keep pointing at the original file
    return re.sub(r'[^\n]', ' ', match.group(0))


def strip_erb(content: str) -> str:
    """
    Replace every ERB tag with whitespace of the same shape.

    A line whose tail is only blanked tags and whitespace is cut at its
    last non-blank character, so removing a tag never leaves trailing
    whitespace behind. Columns of the remaining text are unchanged.
    """
    blanked = ERB_TAG_PATTERN.sub(_blank, content)

    lines = []
    for original, line in zip(content.split('\n'), blanked.split('\n')):
        if len(line.rstrip()) < len(original.rstrip()):
            line = line.rstrip()
        lines.append(line)
    return '\n'.join(lines)


def preprocess(content: str, filename: str) -> str:
    """
    Prepare file content for linting.

    Args:
        content: Full file content
        filename: File name, used to detect templated variants

    Returns:
        Content the lint engine can parse, line-aligned with the original
    """
    if filename.endswith(ERB_SUFFIX):
        logger.debug(f"Stripping ERB tags from {filename}")
        return strip_erb(content)
    return content
