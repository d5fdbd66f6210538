"""Default skill template tests."""

import json

from skillsync.schemas.skill import Agent, AgentKind, SkillFormat
from skillsync.services.template_service import get_template, render_template


def test_claude_markdown_template():
    content = get_template(Agent(kind=AgentKind.CLAUDE), SkillFormat.MARKDOWN, name="SQL Review")
    assert content.startswith("# SQL Review\n")
    assert "## Instructions" in content


def test_continue_template_is_valid_json():
    content = get_template(Agent(kind=AgentKind.CONTINUE_DEV), SkillFormat.JSON, name='Say "hi"')
    assert json.loads(content)["name"] == 'Say "hi"'


def test_missing_combination_falls_back_to_generic():
    content = get_template(Agent(kind=AgentKind.WINDSURF), SkillFormat.YAML)
    assert content.startswith("# Skill Name\n")
    assert "## Description" in content


def test_custom_agent_gets_generic_template():
    content = get_template(Agent.custom("zed"), SkillFormat.PYTHON, name="Helper")
    assert content.startswith("# Helper\n")


def test_render_template():
    assert render_template("Hello {{ who }}!", {"who": "world"}) == "Hello world!"
