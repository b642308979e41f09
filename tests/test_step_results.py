"""Tests for step and run result schemas."""

import json

from acmoj_presubmit.step_results import (
    ActionStepResult,
    PreSubmitResult,
    ProcessStepResult,
)


class TestStepResults:
    """Tests for step result dataclasses."""

    def test_process_result_to_dict(self):
        result = ProcessStepResult(
            success=True,
            step_type="command",
            display_name="g++",
            command="g++ a.cpp",
            output_mode="show",
            stdout="ok",
        )
        data = result.to_dict()
        assert data["command"] == "g++ a.cpp"
        assert data["output_mode"] == "show"
        assert data["stderr"] == ""
        assert data["error"] is None
        assert "timestamp" in data

    def test_action_result_to_json(self):
        result = ActionStepResult(success=True, step_type="action", action="fmt", content_refreshed=True)
        data = json.loads(result.to_json())
        assert data["action"] == "fmt"
        assert data["content_refreshed"] is True


class TestPreSubmitResult:
    """Tests for PreSubmitResult."""

    def test_defaults(self):
        result = PreSubmitResult(content="x")
        assert not result.output_used
        assert result.error is None
        assert result.steps == ()

    def test_to_json_includes_steps(self):
        step = ProcessStepResult(success=True, step_type="command", command="a", stdout="out")
        result = PreSubmitResult(content="out", output_used=True, steps=(step,))
        data = json.loads(result.to_json())
        assert data["content"] == "out"
        assert data["output_used"] is True
        assert data["error"] is None
        assert data["steps"][0]["command"] == "a"

    def test_error_result(self):
        result = PreSubmitResult(content="x", error="Error in .acmoj/pre-submit.json: bad")
        assert json.loads(result.to_json())["error"] == "Error in .acmoj/pre-submit.json: bad"
