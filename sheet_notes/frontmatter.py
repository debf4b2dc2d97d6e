from __future__ import annotations

import logging
import re
from typing import Any, Dict

import yaml

from .errors import NoMetadataBlockError

logger = logging.getLogger(__name__)

FENCE = "---"

# First region opened by a line that is exactly "---" and closed by the next such line.
# Group 1 is the opening line break; the closing line break stays outside the match.
FRONTMATTER_RE = re.compile(r"^---(\r?\n)(.*?)^---(?=\r?$)", re.MULTILINE | re.DOTALL)


def _find_block(content: str) -> re.Match[str]:
    match = FRONTMATTER_RE.search(content)
    if not match:
        logger.error("No YAML frontmatter found in note content (%d chars)", len(content))
        raise NoMetadataBlockError("no yaml frontmatter found.")
    return match


def decode_frontmatter(content: str) -> Dict[str, Any]:
    """
    Parse the fenced YAML block of a note into a dict.

    An empty block decodes to ``{}``. YAML syntax errors propagate unchanged.
    """

    match = _find_block(content)
    parsed = yaml.safe_load(match.group(2))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        logger.error("Frontmatter is a %s, expected a mapping", type(parsed).__name__)
        raise NoMetadataBlockError(f"frontmatter must be a mapping, got {type(parsed).__name__}.")
    return parsed


def dump_frontmatter(metadata: Dict[str, Any], line_break: str = "\n") -> str:
    return yaml.safe_dump(
        metadata,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        line_break=line_break,
    )


def encode_frontmatter(content: str, metadata: Dict[str, Any]) -> str:
    """
    Replace the fenced block of ``content`` with ``metadata`` serialized as YAML.

    Everything before the opening fence and after the closing fence is kept
    exactly as it was. The new block uses the opening fence's line ending.
    """

    match = _find_block(content)
    newline = match.group(1)
    block = f"{FENCE}{newline}{dump_frontmatter(metadata, newline)}{FENCE}"
    return content[: match.start()] + block + content[match.end() :]


def append_body(content: str, body: str) -> str:
    newline = "\r\n" if "\r\n" in content else "\n"
    return content + newline + body
