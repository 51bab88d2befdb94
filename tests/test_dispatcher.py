# -*- coding: utf-8 -*-
import asyncio
import json

import httpx
import pytest

from camunda_mcp.core.client.camunda_client import CamundaClient
from camunda_mcp.core.tools.catalog import TOOL_CATALOG, get_descriptor, list_tools
from camunda_mcp.core.tools.dispatcher import ToolDispatcher
from camunda_mcp.core.tools.handlers import ToolHandler, build_handlers

from tests.conftest import BASE_URL, FakeEngine

INLINE_BPMN = '<?xml version="1.0"?><bpmn:definitions id="abcde">'


def call(config, engine, name, arguments):
    async def _run():
        async with ToolDispatcher(config, client=CamundaClient(config, transport=engine.transport)) as dispatcher:
            return await dispatcher.call(name, arguments)
    return asyncio.run(_run())


def assert_single_block(response):
    assert len(response.content) == 1
    assert response.content[0].type == "text"
    assert isinstance(response.is_error, bool)


class TestCatalog:

    def test_catalog_lists_every_tool_once(self):
        names = [descriptor.name for descriptor in TOOL_CATALOG]
        assert len(names) == 21
        assert len(set(names)) == 21
        assert [tool["name"] for tool in list_tools()] == names

    def test_handlers_follow_catalog_order(self):
        assert [handler.name for handler in build_handlers()] == [d.name for d in TOOL_CATALOG]

    @pytest.mark.parametrize("name, required", [
        ("getProcessDefinitions", []),
        ("startProcessInstance", ["processDefinitionId"]),
        ("completeTask", ["taskId"]),
        ("deployBpmn", ["deploymentName", "bpmnContent"]),
        ("deployForm", ["deploymentName", "formContent"]),
        ("submitTaskForm", ["taskId", "variables"]),
        ("getStartForm", []),
        ("setProcessVariables", ["processInstanceId", "variables"]),
        ("deleteProcessInstance", ["processInstanceId"]),
    ])
    def test_required_fields(self, name, required):
        assert get_descriptor(name).required == required

    def test_mcp_shape(self):
        tool = get_descriptor("getTasks").to_mcp()
        assert set(tool) == {"name", "description", "inputSchema"}
        assert tool["inputSchema"]["type"] == "object"
        assert "assignee" in tool["inputSchema"]["properties"]


class TestRequestShapes:

    def test_query_tool_forwards_arguments(self, config, engine):
        response = call(config, engine, "getProcessDefinitions", {"latestVersionOnly": True, "maxResults": 10})

        request = engine.last
        assert request.method == "GET"
        assert request.url.path == "/engine-rest/process-definition"
        assert request.url.params["latestVersionOnly"] == "true"
        assert request.url.params["maxResults"] == "10"
        assert request.headers["authorization"].startswith("Basic ")
        assert_single_block(response)
        assert response.is_error is False
        assert json.loads(response.text) == []

    def test_unset_query_fields_are_dropped(self, config, engine):
        call(config, engine, "getTasks", {"assignee": "demo", "processInstanceId": None})
        assert dict(engine.last.url.params) == {"assignee": "demo"}

    def test_start_process_instance(self, config, engine):
        call(config, engine, "startProcessInstance", {"processDefinitionId": "invoice:1:abc", "businessKey": "B-1"})

        assert engine.last.method == "POST"
        assert engine.last.url.raw_path.decode().split("?")[0] == "/engine-rest/process-definition/invoice%3A1%3Aabc/start"
        assert engine.last_json() == {"variables": {}, "businessKey": "B-1"}

    def test_complete_task(self, config, engine):
        variables = {"approved": {"value": True, "type": "Boolean"}}
        call(config, engine, "completeTask", {"taskId": "t-1", "variables": variables})

        assert engine.last.url.path == "/engine-rest/task/t-1/complete"
        assert engine.last_json() == {"variables": variables}

    def test_delete_deployment_query(self, config, engine):
        call(config, engine, "deleteDeployment", {"deploymentId": "d-1", "cascade": True})

        assert engine.last.method == "DELETE"
        assert engine.last.url.path == "/engine-rest/deployment/d-1"
        assert dict(engine.last.url.params) == {"cascade": "true"}

    def test_set_variables_body(self, config, engine):
        call(config, engine, "setProcessVariables", {"processInstanceId": "p-1", "variables": {"a": {"value": 1}}})

        assert engine.last.url.path == "/engine-rest/process-instance/p-1/variables"
        assert engine.last_json() == {"modifications": {"a": {"value": 1}}}

    @pytest.mark.parametrize("name, suspended", [
        ("suspendProcessInstance", True),
        ("activateProcessInstance", False),
    ])
    def test_suspension_state(self, config, engine, name, suspended):
        call(config, engine, name, {"processInstanceId": "p-1"})

        assert engine.last.method == "PUT"
        assert engine.last.url.path == "/engine-rest/process-instance/p-1/suspended"
        assert engine.last_json() == {"suspended": suspended}

    def test_start_form_by_id(self, config, engine):
        call(config, engine, "getStartForm", {"processDefinitionId": "invoice:1"})
        assert engine.last.url.raw_path.decode().split("?")[0] == "/engine-rest/process-definition/invoice%3A1/startForm"

    def test_start_form_falls_back_to_key(self, config, engine):
        call(config, engine, "submitStartForm", {"processDefinitionKey": "invoice", "businessKey": "B-2"})

        assert engine.last.url.path == "/engine-rest/process-definition/key/invoice/submit-form"
        assert engine.last_json() == {"businessKey": "B-2"}

    def test_empty_body_renders_null(self, config):
        engine = FakeEngine(lambda request: httpx.Response(204))
        response = call(config, engine, "completeTask", {"taskId": "t-1"})

        assert response.is_error is False
        assert response.text == "null"


class TestDeploy:

    def test_inline_bpmn_is_sent_verbatim(self, config, engine):
        assert len(INLINE_BPMN) == 50
        assert "/" not in INLINE_BPMN and "\\" not in INLINE_BPMN

        response = call(config, engine, "deployBpmn", {
            "deploymentName": "orders",
            "bpmnContent": INLINE_BPMN,
            "fileName": "order-flow.bpmn",
            "enableDuplicateFiltering": True,
        })

        assert response.is_error is False
        assert len(engine.requests) == 1
        request = engine.last
        assert request.method == "POST"
        assert request.url.path == "/engine-rest/deployment/create"
        assert request.headers["content-type"].startswith("multipart/form-data")

        body = request.content.decode("utf-8")
        assert 'name="deployment-name"\r\n\r\norders\r\n' in body
        assert 'name="enable-duplicate-filtering"\r\n\r\ntrue\r\n' in body
        assert 'name="deploy-changed-only"\r\n\r\nfalse\r\n' in body
        assert 'filename="order-flow.bpmn"' in body
        assert "Content-Type: application/xml" in body
        assert f"\r\n\r\n{INLINE_BPMN}\r\n" in body

    def test_form_from_file(self, config, engine, tmp_path):
        path = tmp_path / "approval.form"
        path.write_text('{"components": []}', encoding="utf-8")

        response = call(config, engine, "deployForm", {"deploymentName": "forms", "formContent": str(path)})

        assert response.is_error is False
        body = engine.last.content.decode("utf-8")
        assert 'filename="approval.form"' in body
        assert "Content-Type: application/json" in body
        assert '{"components": []}' in body

    @pytest.mark.parametrize("arguments, message", [
        ({"deploymentName": "x", "bpmnContent": INLINE_BPMN},
         "Error: fileName is required when BPMN content is provided inline"),
        ({"deploymentName": "x", "bpmnContent": "/nowhere/missing.bpmn"},
         "Error: Cannot read BPMN file '/nowhere/missing.bpmn': "),
    ])
    def test_resolver_failure_never_reaches_engine(self, config, engine, arguments, message):
        response = call(config, engine, "deployBpmn", arguments)

        assert engine.requests == []
        assert_single_block(response)
        assert response.is_error is True
        assert response.text.startswith(message)

    def test_invalid_file_never_reaches_engine(self, config, engine, tmp_path):
        path = tmp_path / "broken.bpmn"
        path.write_text("just text", encoding="utf-8")

        response = call(config, engine, "deployBpmn", {"deploymentName": "x", "bpmnContent": str(path)})

        assert engine.requests == []
        assert response.text.endswith("File does not appear to be a valid BPMN file")


class TestErrors:

    def test_backend_rejection(self, config):
        engine = FakeEngine(lambda request: httpx.Response(
            404, json={"type": "InvalidRequestException", "message": "No task t-9"},
        ))
        response = call(config, engine, "completeTask", {"taskId": "t-9"})

        assert_single_block(response)
        assert response.is_error is True
        head, body = response.text.split("\n", 1)
        assert head == "HTTP Error: 404 - Not Found"
        assert json.loads(body) == {"type": "InvalidRequestException", "message": "No task t-9"}

    def test_backend_rejection_without_body(self, config):
        engine = FakeEngine(lambda request: httpx.Response(500))
        response = call(config, engine, "getTasks", {})

        assert response.text == 'HTTP Error: 500 - Internal Server Error\n"No additional information"'

    def test_transport_failure(self, config):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        response = call(config, FakeEngine(refuse), "getTasks", {})

        assert_single_block(response)
        assert response.is_error is True
        assert response.text == f"Error: Request to {BASE_URL}/task failed: connection refused"

    def test_unknown_tool(self, config, engine):
        response = call(config, engine, "dropDatabase", {})

        assert engine.requests == []
        assert response.is_error is True
        assert response.text == "Error: Unknown tool: dropDatabase"

    def test_missing_arguments(self, config, engine):
        response = call(config, engine, "getTasks", None)

        assert engine.requests == []
        assert response.text == "Error: Arguments are required"

    def test_strict_mode_rejects_missing_fields(self, config, engine):
        response = call(config, engine, "setProcessVariables", {"variables": None})

        assert engine.requests == []
        assert response.is_error is True
        assert response.text == (
            "Error: Missing required argument(s) for setProcessVariables: processInstanceId, variables"
        )

    def test_lenient_mode_forwards_to_engine(self, config, engine):
        lenient = config.model_copy(update={"strict_arguments": False})
        response = call(lenient, engine, "completeTask", {})

        assert response.is_error is False
        assert engine.last.url.path == "/engine-rest/task/None/complete"

    def test_unexpected_handler_error(self, config, engine):
        class Broken(ToolHandler):
            async def handle(self, client, arguments):
                raise RuntimeError("boom")

        async def _run():
            dispatcher = ToolDispatcher(
                config,
                client=CamundaClient(config, transport=engine.transport),
                handlers=[Broken(get_descriptor("getTasks"))],
            )
            async with dispatcher:
                return await dispatcher.call("getTasks", {})

        response = asyncio.run(_run())
        assert_single_block(response)
        assert response.text == "Error: boom"

    def test_duplicate_registration(self, config):
        handlers = build_handlers()
        with pytest.raises(ValueError):
            ToolDispatcher(config, handlers=handlers + handlers[:1])
