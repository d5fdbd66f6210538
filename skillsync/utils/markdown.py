"""Markdown helpers — SKILL.md frontmatter and description extraction."""

from __future__ import annotations

import re
from typing import Any

import yaml

DESCRIPTION_MAX_CHARS = 200


def parse_skill_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML frontmatter from a skill file.

    Returns (metadata_dict, body_after_frontmatter).
    """
    match = re.match(r"^---\s*\n(.*?)\n---\s*\n?(.*)", content, re.DOTALL)
    if not match:
        return {}, content

    try:
        meta = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError:
        meta = {}
    if not isinstance(meta, dict):
        meta = {}

    return meta, match.group(2)


def extract_description(content: str) -> str | None:
    """First line that is neither blank nor a heading, capped at 200 characters."""
    for line in content.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        return stripped[:DESCRIPTION_MAX_CHARS]
    return None
