"""Tests for hook configuration loading and parsing."""

import json

import pytest

from acmoj_presubmit.config import (
    ActionStep,
    CommandStep,
    ConfigLoadError,
    ConfigValidationError,
    OutputMode,
    ScriptStep,
    display_name,
    generate_config_template,
    generate_config_template_string,
    get_pre_submit_path,
    load_hook_list,
    parse_hook_list,
    parse_hook_step,
)


# =============================================================================
# Step parsing
# =============================================================================


class TestParseHookStep:
    """Tests for parse_hook_step."""

    def test_action_step(self):
        step = parse_hook_step({"type": "action", "name": "editor.action.formatDocument"})
        assert step == ActionStep(name="editor.action.formatDocument")

    def test_command_step_defaults_to_ignore(self):
        step = parse_hook_step({"type": "command", "content": "make"})
        assert isinstance(step, CommandStep)
        assert step.output is OutputMode.IGNORE
        assert step.description is None

    def test_script_step_with_output_and_description(self):
        step = parse_hook_step({
            "type": "script",
            "path": "tools/bundle.sh",
            "output": "submit",
            "description": "Bundle",
        })
        assert step == ScriptStep(path="tools/bundle.sh", output=OutputMode.SUBMIT, description="Bundle")

    def test_invalid_type_rejected(self):
        with pytest.raises(ConfigValidationError, match="invalid type 'shell'"):
            parse_hook_step({"type": "shell", "content": "ls"})

    def test_missing_type_rejected(self):
        with pytest.raises(ConfigValidationError, match="invalid type"):
            parse_hook_step({"content": "ls"})

    def test_non_object_rejected(self):
        with pytest.raises(ConfigValidationError, match="must be a JSON object"):
            parse_hook_step("make")

    def test_missing_required_field(self):
        with pytest.raises(ConfigValidationError, match="'content' is required"):
            parse_hook_step({"type": "command"})

    def test_non_string_field(self):
        with pytest.raises(ConfigValidationError, match="'path' is required"):
            parse_hook_step({"type": "script", "path": 42})

    def test_invalid_output_mode(self):
        with pytest.raises(ConfigValidationError, match="invalid output 'stdout'"):
            parse_hook_step({"type": "command", "content": "ls", "output": "stdout"})

    def test_error_names_hook_position(self):
        with pytest.raises(ConfigValidationError, match="hook #3: "):
            parse_hook_step({"type": "command"}, index=2)

    def test_unknown_fields_ignored_by_default(self):
        step = parse_hook_step({"type": "command", "content": "ls", "timeout": 5})
        assert step.content == "ls"

    def test_unknown_fields_rejected_in_strict_mode(self):
        with pytest.raises(ConfigValidationError, match="unknown fields: timeout"):
            parse_hook_step({"type": "command", "content": "ls", "timeout": 5}, strict=True)

    def test_comment_fields_allowed_in_strict_mode(self):
        step = parse_hook_step(
            {"type": "action", "name": "x", "_comment": "note"}, strict=True
        )
        assert step.name == "x"


class TestParseHookList:
    """Tests for parse_hook_list."""

    def test_preserves_order(self):
        hooks = parse_hook_list([
            {"type": "command", "content": "first"},
            {"type": "action", "name": "second"},
            {"type": "script", "path": "third.sh"},
        ])
        assert [type(h) for h in hooks] == [CommandStep, ActionStep, ScriptStep]
        assert hooks[0].content == "first"

    def test_empty_list(self):
        assert parse_hook_list([]) == []

    def test_non_array_rejected(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            parse_hook_list({"type": "command", "content": "ls"})
        assert str(exc_info.value) == ".acmoj/pre-submit.json should be an array."


class TestStepSerialization:
    """Tests for to_dict on step types."""

    def test_command_to_dict(self):
        step = CommandStep(content="ls", output=OutputMode.PIPE)
        assert step.to_dict() == {
            "type": "command",
            "content": "ls",
            "output": "pipe",
            "description": None,
        }

    def test_to_dict_exclude_none(self):
        step = ActionStep(name="save")
        assert step.to_dict(exclude_none=True) == {"type": "action", "name": "save"}

    def test_to_dict_parses_back(self):
        step = ScriptStep(path="a.sh", output=OutputMode.SHOW, description="A")
        assert parse_hook_step(step.to_dict(exclude_none=True)) == step


# =============================================================================
# Display names
# =============================================================================


class TestDisplayName:
    """Tests for display_name."""

    def test_description_wins(self):
        step = CommandStep(content="g++ main.cpp", description="Compile")
        assert display_name(step, 0) == "Compile"

    def test_action_uses_name(self):
        assert display_name(ActionStep(name="editor.action.save"), 0) == "editor.action.save"

    def test_command_uses_first_word(self):
        assert display_name(CommandStep(content="g++ -O2 main.cpp"), 0) == "g++"

    def test_script_uses_basename(self):
        assert display_name(ScriptStep(path="tools/lint.sh"), 0) == "lint.sh"

    def test_falls_back_to_position(self):
        assert display_name(CommandStep(content=""), 4) == "hook #5"
        assert display_name(ScriptStep(path="tools/"), 0) == "hook #1"

    def test_empty_description_ignored(self):
        assert display_name(CommandStep(content="make", description=""), 0) == "make"


# =============================================================================
# Loading from disk
# =============================================================================


class TestLoadHookList:
    """Tests for load_hook_list."""

    def test_missing_file_means_no_hooks(self, tmp_path):
        assert load_hook_list(tmp_path) == []

    def test_loads_hooks(self, project, write_hooks):
        write_hooks([
            {"type": "command", "content": "echo hi", "output": "show"},
        ])
        hooks = load_hook_list(project)
        assert hooks == [CommandStep(content="echo hi", output=OutputMode.SHOW)]

    def test_invalid_json(self, project, write_hooks):
        write_hooks("[{not json")
        with pytest.raises(ConfigLoadError, match="Invalid JSON"):
            load_hook_list(project)

    def test_not_an_array(self, project, write_hooks):
        write_hooks({"hooks": []})
        with pytest.raises(ConfigValidationError, match="should be an array"):
            load_hook_list(project)

    def test_invalid_element(self, project, write_hooks):
        write_hooks([{"type": "command", "content": "ls"}, {"type": "bogus"}])
        with pytest.raises(ConfigValidationError, match="hook #2: invalid type 'bogus'"):
            load_hook_list(project)

    def test_unreadable_path(self, project):
        # A directory where the file should be.
        get_pre_submit_path(project).mkdir()
        with pytest.raises(ConfigLoadError):
            load_hook_list(project)

    def test_strict_passed_through(self, project, write_hooks):
        write_hooks([{"type": "action", "name": "x", "extra": 1}])
        assert len(load_hook_list(project)) == 1
        with pytest.raises(ConfigValidationError, match="unknown fields: extra"):
            load_hook_list(project, strict=True)

    def test_get_pre_submit_path(self, tmp_path):
        assert get_pre_submit_path(tmp_path) == tmp_path / ".acmoj" / "pre-submit.json"


class TestConfigTemplate:
    """Tests for the example hook file."""

    def test_template_is_a_valid_hook_list(self):
        hooks = parse_hook_list(generate_config_template(), strict=True)
        assert [h.type for h in hooks] == ["action", "command", "script"]

    def test_template_string_is_json(self):
        data = json.loads(generate_config_template_string())
        assert data == generate_config_template()
