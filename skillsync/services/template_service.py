"""Template service — default content for new skill files, rendered with Jinja2."""

from __future__ import annotations

import jinja2

from skillsync.schemas.skill import Agent, AgentKind, SkillFormat

_CLAUDE_MD = """\
# {{ name }}

Brief description of what this skill does.

## Usage

When to use this skill and how it helps.

## Instructions

1. First instruction
2. Second instruction
3. Third instruction

## Examples

```
Example usage here
```

## Notes

- Additional notes
- Limitations or caveats
"""

_CLAUDE_PY = '''\
#!/usr/bin/env python3
"""
{{ name }}

Brief description of what this skill does.
"""

import sys


def main():
    """Main entry point for the skill."""
    print("Hello from {{ name }}!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
'''

_CURSOR_RULES = """\
# {{ name }}

You are an expert assistant following these guidelines:

## Code Style
- Write clean, readable code
- Follow best practices
- Add meaningful comments

## Behavior
- Be concise and helpful
- Explain your reasoning
- Suggest improvements

## Restrictions
- Don't make assumptions
- Ask for clarification when needed
"""

_CONTINUE_JSON = """\
{
  "name": {{ name | tojson }},
  "version": "1.0.0",
  "description": "Brief description",
  "systemMessage": "You are a helpful assistant.",
  "contextProviders": [],
  "slashCommands": []
}
"""

_AIDER_YAML = """\
# {{ name }} — Aider configuration

model: gpt-4
edit-format: diff
auto-commits: true

# Custom settings
map-tokens: 1024
"""

_AIDER_PROMPT = """\
You are an expert developer. Follow these guidelines:

1. Write clean, maintainable code
2. Add tests for new features
3. Document complex logic
4. Follow project conventions
"""

_GENERIC_MD = """\
# {{ name }}

## Description

What this skill does.

## Instructions

1. Step one
2. Step two
3. Step three
"""

_TEMPLATES: dict[tuple[AgentKind, SkillFormat], str] = {
    (AgentKind.CLAUDE, SkillFormat.MARKDOWN): _CLAUDE_MD,
    (AgentKind.CLAUDE, SkillFormat.PYTHON): _CLAUDE_PY,
    (AgentKind.CURSOR, SkillFormat.PLAIN_TEXT): _CURSOR_RULES,
    (AgentKind.CURSOR, SkillFormat.MARKDOWN): _CURSOR_RULES,
    (AgentKind.CONTINUE_DEV, SkillFormat.JSON): _CONTINUE_JSON,
    (AgentKind.AIDER, SkillFormat.YAML): _AIDER_YAML,
    (AgentKind.AIDER, SkillFormat.PLAIN_TEXT): _AIDER_PROMPT,
}

_env = jinja2.Environment(undefined=jinja2.StrictUndefined, keep_trailing_newline=True)


def get_template(agent: Agent, fmt: SkillFormat, name: str | None = None) -> str:
    """Default content for a new (agent, format) skill file."""
    # Custom agents share the generic template
    source = _GENERIC_MD if agent.is_custom else _TEMPLATES.get((agent.kind, fmt), _GENERIC_MD)
    return render_template(source, {"name": name or "Skill Name"})


def render_template(template_content: str, variables: dict) -> str:
    """Render a Jinja2 template string with the given variables."""
    return _env.from_string(template_content).render(**variables)
