"""End-to-end tests for the Lambda handler and command line entry points."""

from __future__ import annotations
import json
import pytest
from unittest.mock import patch

from stack_purge.handler import lambda_handler, main, parse_args
from stack_purge.workflows import PurgeResult


@pytest.mark.e2e
@pytest.mark.aws
class TestLambdaHandler:
    @patch("stack_purge.handler.run_purge")
    @patch("stack_purge.handler.IamRolesetManager")
    @patch("stack_purge.handler.StackManager")
    def test_returns_summary(self, mock_stack_manager, mock_roleset, mock_run_purge):
        """
        GIVEN a purge that plans 3 stacks and 9 steps
        WHEN lambda_handler is invoked with namespace and dry_run overrides
        THEN it returns 200 with the counts and builds the manager from the event
        """
        mock_run_purge.return_value = PurgeResult(stack_count=3, step_count=9)

        result = lambda_handler({"namespace": "acme", "dry_run": False}, None)

        assert result["statusCode"] == 200
        body = json.loads(result["body"])
        assert body == {
            "dry_run": False,
            "namespace": "acme",
            "total_stacks": 3,
            "total_steps": 9,
        }
        kwargs = mock_stack_manager.call_args.kwargs
        assert kwargs["namespace"] == "acme"
        assert kwargs["dry_run"] is False
        mock_roleset.assert_called_once_with(mock_stack_manager.return_value)

    @pytest.mark.parametrize(
        "value, expected",
        [("false", False), ("False", False), ("true", True), ("TRUE", True), (True, True)],
    )
    @patch("stack_purge.handler.run_purge")
    @patch("stack_purge.handler.IamRolesetManager")
    @patch("stack_purge.handler.StackManager")
    def test_dry_run_event_value_is_parsed_as_text(
        self, mock_stack_manager, mock_roleset, mock_run_purge, value, expected
    ):
        """
        GIVEN an event whose dry_run arrives as a string from a scheduler payload
        WHEN lambda_handler is invoked
        THEN "false" disables dry run instead of being treated as truthy
        """
        mock_run_purge.return_value = PurgeResult(stack_count=0, step_count=0)

        result = lambda_handler({"dry_run": value}, None)

        assert mock_stack_manager.call_args.kwargs["dry_run"] is expected
        assert json.loads(result["body"])["dry_run"] is expected

    @patch("stack_purge.handler.run_purge")
    @patch("stack_purge.handler.StackManager")
    def test_unexpected_failure_propagates(self, mock_stack_manager, mock_run_purge):
        mock_stack_manager.side_effect = RuntimeError("no credentials")

        with pytest.raises(RuntimeError):
            lambda_handler({}, None)

        mock_run_purge.assert_not_called()


@pytest.mark.e2e
class TestCommandLine:
    def test_confirm_disables_dry_run(self):
        args = parse_args(["--confirm", "-n", "acme", "-r", "eu-west-1"])

        assert args.dry_run is False
        assert args.namespace == "acme"
        assert args.region == "eu-west-1"

    def test_dry_run_flag(self):
        assert parse_args(["--dry-run"]).dry_run is True

    @patch("stack_purge.handler.run_purge")
    @patch("stack_purge.handler.IamRolesetManager")
    @patch("stack_purge.handler.StackManager")
    def test_main_exits_zero(self, mock_stack_manager, mock_roleset, mock_run_purge):
        mock_run_purge.return_value = PurgeResult(stack_count=1, step_count=2)

        assert main(["--confirm"]) == 0
        assert mock_stack_manager.call_args.kwargs["dry_run"] is False
