# -*- coding: utf-8 -*-
"""Advertised tool catalog. Names and required fields are a public contract."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

FIRST_RESULT_DESC = "Pagination of results. Specifies the index of the first result to return."
MAX_RESULTS_DESC = "Pagination of results. Specifies the maximum number of results to return."
SKIP_LISTENERS_DESC = "If true, custom listeners will not be invoked."
SKIP_IO_DESC = "If true, input/output mappings will not be invoked."


class ToolDescriptor(BaseModel):
    name: str = Field(..., description="Unique tool name")
    description: str = Field("", description="Human readable summary")
    input_schema: Dict[str, Any] = Field(default_factory=dict, description="JSON schema of the argument bag")

    model_config = ConfigDict(frozen=True)

    @property
    def required(self) -> List[str]:
        return list(self.input_schema.get("required", []))

    def missing_fields(self, arguments: Dict[str, Any]) -> List[str]:
        return [field for field in self.required if arguments.get(field) is None]

    def to_mcp(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema}


def _prop(kind: str, description: str) -> Dict[str, str]:
    return {"type": kind, "description": description}


def _string(description: str) -> Dict[str, str]:
    return _prop("string", description)


def _number(description: str) -> Dict[str, str]:
    return _prop("number", description)


def _boolean(description: str) -> Dict[str, str]:
    return _prop("boolean", description)


def _object(description: str) -> Dict[str, str]:
    return _prop("object", description)


def _tool(name: str, description: str, properties: Dict[str, Any],
          required: Optional[Sequence[str]] = None) -> ToolDescriptor:
    schema: Dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = list(required)
    return ToolDescriptor(name=name, description=description, input_schema=schema)


TOOL_CATALOG: Tuple[ToolDescriptor, ...] = (
    _tool("getProcessDefinitions", "Get a list of process definitions", {
        "latestVersionOnly": _boolean("Only include those process definitions that are latest versions"),
        "firstResult": _number(FIRST_RESULT_DESC),
        "maxResults": _number(MAX_RESULTS_DESC),
    }),
    _tool("getProcessInstances", "Get a list of process instances", {
        "processDefinitionId": _string("Filter by the process definition the instances run on."),
        "processDefinitionKey": _string("Filter by the key of the process definition the instances run on."),
        "businessKey": _string("Filter by process instance business key."),
        "firstResult": _number(FIRST_RESULT_DESC),
        "maxResults": _number(MAX_RESULTS_DESC),
    }),
    _tool("startProcessInstance", "Start a new process instance", {
        "processDefinitionId": _string("The id of the process definition to start a new process instance for."),
        "processDefinitionKey": _string("The key of the process definition to start a new process instance for."),
        "variables": _object("A JSON object containing variable key-value pairs."),
        "businessKey": _string("The business key the process instance is to be initialized with."),
    }, required=["processDefinitionId"]),
    _tool("getTasks", "Get a list of tasks", {
        "processInstanceId": _string("Filter by process instance id."),
        "taskDefinitionKey": _string("Filter by key of the task."),
        "assignee": _string("Filter by assignee."),
        "firstResult": _number(FIRST_RESULT_DESC),
        "maxResults": _number(MAX_RESULTS_DESC),
    }),
    _tool("completeTask", "Complete a task", {
        "taskId": _string("The id of the task to complete."),
        "variables": _object("A JSON object containing variable key-value pairs."),
    }, required=["taskId"]),
    _tool("deployBpmn", "Deploy a BPMN process definition from content or file", {
        "deploymentName": _string("The name of the deployment."),
        "bpmnContent": _string(
            "The BPMN XML content as a string, OR path to a BPMN file (e.g., '/workspace/process.bpmn')."
        ),
        "fileName": _string(
            "The name of the BPMN file (e.g., 'process.bpmn'). Auto-detected from file path if not provided."
        ),
        "enableDuplicateFiltering": _boolean("Enable duplicate filtering to avoid redeploying unchanged resources."),
        "deployChangedOnly": _boolean("Deploy only changed resources."),
    }, required=["deploymentName", "bpmnContent"]),
    _tool("getDeployments", "Get a list of deployments", {
        "id": _string("Filter by deployment id."),
        "name": _string("Filter by deployment name."),
        "nameLike": _string("Filter by deployment name that the parameter is a substring of."),
        "source": _string("Filter by deployment source."),
        "firstResult": _number(FIRST_RESULT_DESC),
        "maxResults": _number(MAX_RESULTS_DESC),
    }),
    _tool("deleteDeployment", "Delete a deployment by id", {
        "deploymentId": _string("The id of the deployment to delete."),
        "cascade": _boolean("If true, cascade deletion to process instances, history process instances and jobs."),
        "skipCustomListeners": _boolean(SKIP_LISTENERS_DESC),
        "skipIoMappings": _boolean(SKIP_IO_DESC),
    }, required=["deploymentId"]),
    _tool("getDeploymentResources", "Get resources of a deployment", {
        "deploymentId": _string("The id of the deployment."),
    }, required=["deploymentId"]),
    _tool("deployForm", "Deploy a Camunda Form from content or file", {
        "deploymentName": _string("The name of the deployment."),
        "formContent": _string(
            "The Camunda Form JSON content as a string, OR path to a form file (e.g., '/workspace/form.form')."
        ),
        "fileName": _string(
            "The name of the form file (e.g., 'form.form'). Auto-detected from file path if not provided."
        ),
    }, required=["deploymentName", "formContent"]),
    _tool("getTaskForm", "Get the form for a task", {
        "taskId": _string("The id of the task."),
    }, required=["taskId"]),
    _tool("submitTaskForm", "Submit a task form", {
        "taskId": _string("The id of the task."),
        "variables": _object("The form variables to submit."),
    }, required=["taskId", "variables"]),
    _tool("getStartForm", "Get the start form for a process definition", {
        "processDefinitionId": _string("The id of the process definition."),
        "processDefinitionKey": _string("The key of the process definition."),
    }),
    _tool("submitStartForm", "Submit a start form and start process instance", {
        "processDefinitionId": _string("The id of the process definition."),
        "processDefinitionKey": _string("The key of the process definition."),
        "variables": _object("The form variables to submit."),
        "businessKey": _string("The business key for the process instance."),
    }),
    _tool("getProcessVariables", "Get variables of a process instance", {
        "processInstanceId": _string("The id of the process instance."),
    }, required=["processInstanceId"]),
    _tool("setProcessVariables", "Set/update variables of a process instance", {
        "processInstanceId": _string("The id of the process instance."),
        "variables": _object("The variables to set/update."),
    }, required=["processInstanceId", "variables"]),
    _tool("getActivityInstances", "Get activity instances for a process instance", {
        "processInstanceId": _string("The id of the process instance."),
    }, required=["processInstanceId"]),
    _tool("getIncidents", "Get incidents (errors) in processes", {
        "processInstanceId": _string("Filter by process instance id."),
        "incidentType": _string("Filter by incident type."),
        "maxResults": _number("Maximum number of results."),
    }),
    _tool("deleteProcessInstance", "Delete a process instance", {
        "processInstanceId": _string("The id of the process instance to delete."),
        "reason": _string("A reason for deletion."),
        "skipCustomListeners": _boolean(SKIP_LISTENERS_DESC),
        "skipIoMappings": _boolean(SKIP_IO_DESC),
        "skipSubprocesses": _boolean("If true, subprocesses will not be deleted."),
    }, required=["processInstanceId"]),
    _tool("suspendProcessInstance", "Suspend a process instance", {
        "processInstanceId": _string("The id of the process instance to suspend."),
    }, required=["processInstanceId"]),
    _tool("activateProcessInstance", "Activate a suspended process instance", {
        "processInstanceId": _string("The id of the process instance to activate."),
    }, required=["processInstanceId"]),
)


def get_descriptor(name: str) -> Optional[ToolDescriptor]:
    for descriptor in TOOL_CATALOG:
        if descriptor.name == name:
            return descriptor
    return None


def list_tools() -> List[Dict[str, Any]]:
    """Catalog in MCP ``tools/list`` shape."""
    return [descriptor.to_mcp() for descriptor in TOOL_CATALOG]
