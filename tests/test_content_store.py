"""Content store tests — create, edit, copy and delete skills on disk."""

from pathlib import Path
from unittest.mock import patch

import pytest

from skillsync.config import settings
from skillsync.errors import AlreadyExistsError, InvalidPathError, NotFoundError, StorageIOError
from skillsync.schemas.skill import Agent, AgentKind, SkillFormat
from skillsync.services import backup_service, crud_service

CLAUDE = Agent(kind=AgentKind.CLAUDE)


def test_sanitize_names():
    assert crud_service.sanitize_filename("My Skill!") == "my-skill-"
    assert crud_service.sanitize_filename("data_v2") == "data_v2"
    assert crud_service.sanitize_file_name("Read Me.MD") == "read-me.md"
    assert crud_service.sanitize_file_name("notes") == "notes"


def test_create_skill(sandbox: Path):
    skill = crud_service.create_skill("My Skill", CLAUDE, SkillFormat.MARKDOWN, tags=["demo"])

    folder = sandbox / ".claude" / "skills" / "my-skill"
    entry = folder / "skill.md"
    assert skill.folder_path == str(folder)
    assert skill.entry_file == str(entry)
    assert skill.file_count == 1
    assert skill.version == "1.0.0"
    assert skill.tags == ["demo"]
    assert entry.read_text().startswith("# My Skill")


def test_create_skill_for_aider_uses_prompts_dir(sandbox: Path):
    skill = crud_service.create_skill("Refactor", Agent(kind=AgentKind.AIDER), SkillFormat.PLAIN_TEXT)

    assert skill.entry_file == str(sandbox / ".aider" / "prompts" / "refactor" / "skill.txt")


def test_create_skill_rejects_short_and_existing_names():
    with pytest.raises(InvalidPathError):
        crud_service.create_skill(" a ", CLAUDE, SkillFormat.MARKDOWN)

    crud_service.create_skill("Twice", CLAUDE, SkillFormat.MARKDOWN)
    with pytest.raises(InvalidPathError):
        crud_service.create_skill("Twice", CLAUDE, SkillFormat.MARKDOWN)


def test_create_skill_rejects_binary_content(sandbox: Path):
    with pytest.raises(InvalidPathError):
        crud_service.create_skill("Binary", CLAUDE, SkillFormat.MARKDOWN, content="a\x00b")

    assert not (sandbox / ".claude" / "skills" / "binary").exists()


def test_failed_create_leaves_no_folder(sandbox: Path):
    folder = sandbox / ".claude" / "skills" / "flaky"
    with patch("skillsync.services.crud_service.atomic_write", side_effect=StorageIOError("disk full")):
        with pytest.raises(StorageIOError):
            crud_service.create_skill("Flaky", CLAUDE, SkillFormat.MARKDOWN)

    assert not folder.exists()
    skill = crud_service.create_skill("Flaky", CLAUDE, SkillFormat.MARKDOWN)
    assert Path(skill.entry_file).exists()


def test_create_skill_for_unnamed_custom_agent():
    with pytest.raises(InvalidPathError):
        crud_service.create_skill("Whatever", Agent.custom(""), SkillFormat.MARKDOWN)


def test_update_content_backs_up_previous_version():
    skill = crud_service.create_skill("Editable", CLAUDE, SkillFormat.MARKDOWN, content="v1\n")

    crud_service.update_content(skill.entry_file, "v2\n")

    assert Path(skill.entry_file).read_text() == "v2\n"
    backups = backup_service.list_backups("skill.md")
    assert len(backups) == 1
    assert Path(backups[0].path).read_text() == "v1\n"


def test_update_content_without_backup():
    skill = crud_service.create_skill("Quiet", CLAUDE, SkillFormat.MARKDOWN, content="v1\n")

    crud_service.update_content(skill.entry_file, "v2\n", create_backup=False)

    assert backup_service.list_backups("skill.md") == []


def test_update_content_rejects_nul_and_leaves_file_alone():
    skill = crud_service.create_skill("Guarded", CLAUDE, SkillFormat.MARKDOWN, content="original\n")

    with pytest.raises(InvalidPathError):
        crud_service.update_content(skill.entry_file, "bad\x00content")

    assert Path(skill.entry_file).read_text() == "original\n"
    assert backup_service.list_backups("skill.md") == []


def test_update_content_rejects_oversize(monkeypatch: pytest.MonkeyPatch):
    skill = crud_service.create_skill("Sized", CLAUDE, SkillFormat.MARKDOWN, content="ok\n")
    monkeypatch.setattr(settings, "max_content_bytes", 10)

    with pytest.raises(InvalidPathError):
        crud_service.update_content(skill.entry_file, "x" * 11)

    assert Path(skill.entry_file).read_text() == "ok\n"


def test_create_file():
    skill = crud_service.create_skill("Files", CLAUDE, SkillFormat.MARKDOWN)

    notes = crud_service.create_file(skill.folder_path, "Notes", SkillFormat.MARKDOWN, "hello")
    assert notes.name == "notes.md"
    assert notes.is_entry is False
    assert Path(notes.file_path).read_text() == "hello"

    data = crud_service.create_file(skill.folder_path, "data.json", SkillFormat.MARKDOWN)
    assert data.name == "data.json"

    with pytest.raises(AlreadyExistsError):
        crud_service.create_file(skill.folder_path, "notes", SkillFormat.MARKDOWN)

    with pytest.raises(NotFoundError):
        crud_service.create_file(skill.folder_path + "-missing", "x", SkillFormat.MARKDOWN)


def test_read_content(sandbox: Path):
    text = sandbox / "skill.md"
    text.write_text("hello\n")
    assert crud_service.read_content(str(text)) == "hello\n"

    binary = sandbox / "blob.bin"
    binary.write_bytes(b"\xff\xfe\xfa")
    with pytest.raises(InvalidPathError):
        crud_service.read_content(str(binary))

    with pytest.raises(NotFoundError):
        crud_service.read_content(str(sandbox / "missing.md"))


def test_delete_skill_is_restorable(claude_skills: Path):
    folder = claude_skills / "trio"
    folder.mkdir()
    (folder / "skill.md").write_text("# Trio\n\nEntry.\n")
    (folder / "helper.py").write_text("x = 1\n")
    (folder / "notes.txt").write_text("n\n")

    crud_service.delete_skill(str(folder))

    assert not folder.exists()
    backups = backup_service.list_backups("trio")
    assert len(backups) == 1

    backup_service.restore_file(backups[0].path, str(folder))
    assert (folder / "skill.md").read_text() == "# Trio\n\nEntry.\n"
    assert sorted(p.name for p in folder.iterdir()) == ["helper.py", "notes.txt", "skill.md"]


def test_delete_missing_skill(claude_skills: Path):
    with pytest.raises(NotFoundError):
        crud_service.delete_skill(str(claude_skills / "ghost"))


def test_delete_file_backs_up():
    skill = crud_service.create_skill("Lossy", CLAUDE, SkillFormat.MARKDOWN)
    extra = crud_service.create_file(skill.folder_path, "extra.md", SkillFormat.MARKDOWN, "keep me")

    crud_service.delete_file(extra.file_path)

    assert not Path(extra.file_path).exists()
    assert Path(backup_service.list_backups("extra.md")[0].path).read_text() == "keep me"


def test_duplicate_skill():
    skill = crud_service.create_skill("Original", CLAUDE, SkillFormat.MARKDOWN, content="same\n")

    copy_path = crud_service.duplicate_skill(skill.folder_path, "Copy Of")

    copy = Path(copy_path)
    assert copy.name == "copy-of"
    assert (copy / "skill.md").read_text() == "same\n"
    assert Path(skill.folder_path).exists()

    with pytest.raises(AlreadyExistsError):
        crud_service.duplicate_skill(skill.folder_path, "copy-of")


def test_rename_skill_file_keeps_extension(sandbox: Path):
    path = sandbox / ".claude" / "CLAUDE.md"
    path.parent.mkdir(parents=True)
    path.write_text("rules\n")

    new_path = crud_service.rename_skill(str(path), "Team Rules")

    assert new_path == str(path.parent / "team-rules.md")
    assert not path.exists()


def test_rename_missing_skill(sandbox: Path):
    with pytest.raises(NotFoundError):
        crud_service.rename_skill(str(sandbox / "nope"), "other")


def test_export_skill():
    skill = crud_service.create_skill("Shareable", CLAUDE, SkillFormat.MARKDOWN, content="share\n")

    exported = crud_service.export_skill(skill.entry_file)

    assert exported.filename == "skill.md"
    assert exported.content == "share\n"
