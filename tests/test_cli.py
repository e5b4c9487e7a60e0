"""Tests for the snowflow CLI commands."""

import json

import pytest
import respx
from httpx import Response

from snowflow.cli.context import add_context_command, list_contexts_command, use_context_command
from snowflow.cli.describe import describe_component_command
from snowflow.cli.incidents import get_incidents_command
from snowflow.cli.main import build_parser, main
from snowflow.config.contexts import ConfigContext, ContextStore
from snowflow.core.errors import ExitCode

INSTANCE_URL = "https://dev12345.service-now.com"
INCIDENTS_URL = f"{INSTANCE_URL}/api/now/table/incident"


@pytest.fixture
def config_path(tmp_path):
    return str(tmp_path / "config.yaml")


@pytest.fixture
def with_context(config_path):
    ContextStore(config_path).upsert(ConfigContext(url=INSTANCE_URL, name="dev", api_token="tok"))
    return config_path


class TestBuildParser:
    """Tests for argument parsing."""

    def test_incidents_filters(self):
        args = build_parser().parse_args(
            ["incidents", "--assignment-group", "grp1", "--state", "1,2", "--limit", "5", "--output", "json"]
        )

        assert args.command == "incidents"
        assert args.assignmentGroup == "grp1"
        assert args.state == "1,2"
        assert args.caller is None
        assert args.limit == 5
        assert args.output == "json"

    def test_context_add(self):
        args = build_parser().parse_args(["context", "add", "--url", INSTANCE_URL, "--token", "tok"])

        assert args.context_command == "add"
        assert args.name == ""


class TestContextCommands:
    """Tests for context add / use / list."""

    def test_add_then_list(self, config_path, capsys):
        assert add_context_command(INSTANCE_URL, "tok", name="dev", config_path=config_path) == 0
        assert list_contexts_command(config_path=config_path) == 0

        captured = capsys.readouterr()
        assert "saved and selected" in captured.out
        assert "dev" in captured.out

    def test_add_without_token_fails(self, config_path):
        assert add_context_command(INSTANCE_URL, " ", config_path=config_path) == ExitCode.CONFIG_ERROR

    def test_use_unknown_context_fails(self, with_context):
        assert use_context_command(f"{INSTANCE_URL}/prod", config_path=with_context) == ExitCode.CONFIG_ERROR

    def test_use_known_context(self, with_context, capsys):
        assert use_context_command(f"{INSTANCE_URL}/dev", config_path=with_context) == 0
        assert "Switched to context" in capsys.readouterr().out

    def test_list_without_contexts(self, config_path, capsys):
        assert list_contexts_command(config_path=config_path) == 0
        assert "No contexts configured" in capsys.readouterr().out


class TestDescribeCommand:
    """Tests for describe_component_command."""

    def test_lists_components(self, capsys):
        assert describe_component_command() == 0
        assert "servicenow.getIncidents" in capsys.readouterr().out

    def test_describes_component(self, capsys):
        assert describe_component_command("servicenow.getIncidents") == 0

        out = capsys.readouterr().out
        assert "Get Incidents" in out
        assert "assignmentGroup" in out

    def test_unknown_component(self):
        assert describe_component_command("servicenow.missing") == ExitCode.UNKNOWN_ERROR


class TestIncidentsCommand:
    """Tests for get_incidents_command."""

    def test_requires_current_context(self, config_path):
        assert get_incidents_command({}, config_path=config_path) == ExitCode.CONFIG_ERROR

    def test_json_output(self, with_context, capsys):
        with respx.mock:
            route = respx.get(url__startswith=INCIDENTS_URL).mock(
                return_value=Response(
                    200,
                    json={"result": [{"sys_id": "abc", "number": "INC0010001", "urgency": "1"}]},
                )
            )

            code = get_incidents_command(
                {"state": "1,2", "caller": None, "category": ""},
                output_format="json",
                config_path=with_context,
            )

            request = route.calls.last.request

        assert code == 0
        assert request.headers["Authorization"] == "Bearer tok"
        assert request.url.params["sysparm_query"] == "stateIN1,2"

        output = json.loads(capsys.readouterr().out)
        assert output["channel"] == "high"
        assert output["total"] == 1
        assert output["incidents"][0]["number"] == "INC0010001"

    def test_text_output_reports_channel(self, with_context, capsys):
        with respx.mock:
            respx.get(url__startswith=INCIDENTS_URL).mock(return_value=Response(200, json={"result": []}))

            assert get_incidents_command({}, config_path=with_context) == 0

        out = capsys.readouterr().out
        assert "No incidents matched the filters" in out
        assert "routed to 'clear'" in out

    def test_api_failure_maps_to_provider_error(self, with_context):
        with respx.mock:
            respx.get(url__startswith=INCIDENTS_URL).mock(return_value=Response(401))

            assert get_incidents_command({}, config_path=with_context) == ExitCode.PROVIDER_ERROR


def test_main_without_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])

    assert exc.value.code == 1
    assert "usage" in capsys.readouterr().out.lower()


def test_main_dispatches_context_list(config_path):
    with pytest.raises(SystemExit) as exc:
        main(["--config", config_path, "context", "list"])

    assert exc.value.code == 0
