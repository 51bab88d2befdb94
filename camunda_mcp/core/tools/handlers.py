# -*- coding: utf-8 -*-
"""
Tool handlers - one object per catalog entry.

Each handler knows how to shape a single engine-rest request from the
argument bag: query string, JSON body, path identifiers or a multipart
deployment. Handlers return the decoded response body and let errors
propagate to the dispatcher.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence
from urllib.parse import quote

from camunda_mcp.api.scheme.errors import InvalidArgumentsError
from camunda_mcp.core.artifacts import ArtifactKind, resolve_artifact
from camunda_mcp.core.client.camunda_client import CamundaClient, decode_body, drop_unset
from camunda_mcp.core.tools.catalog import ToolDescriptor, get_descriptor
from camunda_mcp.providers.logger import get_logger

logger = get_logger()

Arguments = Mapping[str, Any]
BodyBuilder = Callable[[Arguments], Dict[str, Any]]


def _segment(value: Any) -> str:
    return quote(str(value), safe="")


def _flag(value: Any) -> str:
    """Multipart booleans travel as the literal strings ``true`` / ``false``."""
    if isinstance(value, str):
        return "true" if value.strip().lower() == "true" else "false"
    return "true" if value is True else "false"


class ToolHandler(ABC):
    """Uniform ``(arguments) -> body`` capability behind one tool name."""

    def __init__(self, descriptor: ToolDescriptor):
        self.descriptor = descriptor

    @property
    def name(self) -> str:
        return self.descriptor.name

    @abstractmethod
    async def handle(self, client: CamundaClient, arguments: Arguments) -> Any:
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"


class QueryHandler(ToolHandler):
    """GET with the whole argument bag as query parameters."""

    def __init__(self, descriptor: ToolDescriptor, path: str):
        super().__init__(descriptor)
        self.path = path

    async def handle(self, client: CamundaClient, arguments: Arguments) -> Any:
        response = await client.request("GET", self.path, params=arguments)
        return decode_body(response)


class ResourceHandler(ToolHandler):
    """
    Request against a resource addressed by identifiers in the URL path.

    ``path`` is a template such as ``/task/{taskId}/complete``; the
    placeholders are filled from the argument bag as given. ``query`` lists
    the argument fields forwarded as query parameters and ``body`` builds the
    JSON payload.
    """

    def __init__(
        self,
        descriptor: ToolDescriptor,
        method: str,
        path: str,
        *,
        query: Sequence[str] = (),
        body: Optional[BodyBuilder] = None,
    ):
        super().__init__(descriptor)
        self.method = method
        self.path = path
        self.query = tuple(query)
        self.body = body

    def build_path(self, arguments: Arguments) -> str:
        return self.path.format_map(_PathArguments(arguments))

    async def handle(self, client: CamundaClient, arguments: Arguments) -> Any:
        params = {field: arguments.get(field) for field in self.query}
        payload = drop_unset(self.body(arguments)) if self.body else None
        response = await client.request(self.method, self.build_path(arguments), params=params, json=payload)
        return decode_body(response)


class _PathArguments(dict):
    """format_map source that quotes values and renders absent ones literally."""

    def __init__(self, arguments: Arguments):
        super().__init__()
        self._arguments = arguments

    def __missing__(self, key: str) -> str:
        return _segment(self._arguments.get(key))


class DefinitionFormHandler(ResourceHandler):
    """Start form routes address the definition by id, or by key when no id is given."""

    def __init__(self, descriptor: ToolDescriptor, method: str, suffix: str,
                 body: Optional[BodyBuilder] = None):
        super().__init__(descriptor, method, f"/process-definition/{{processDefinitionId}}/{suffix}", body=body)
        self.suffix = suffix

    def build_path(self, arguments: Arguments) -> str:
        if arguments.get("processDefinitionId"):
            return f"/process-definition/{_segment(arguments['processDefinitionId'])}/{self.suffix}"
        return f"/process-definition/key/{_segment(arguments.get('processDefinitionKey'))}/{self.suffix}"


class DeployHandler(ToolHandler):
    """
    Multipart ``/deployment/create``.

    The artifact is resolved before anything goes over the wire; a resolver
    failure means no request at all.
    """

    def __init__(self, descriptor: ToolDescriptor, kind: ArtifactKind, content_field: str,
                 flags: Optional[Mapping[str, str]] = None):
        super().__init__(descriptor)
        self.kind = kind
        self.content_field = content_field
        self.flags = dict(flags or {})

    def build_form(self, arguments: Arguments) -> Dict[str, str]:
        form = {"deployment-name": str(arguments.get("deploymentName") or "")}
        for part, field in self.flags.items():
            form[part] = _flag(arguments.get(field))
        return form

    async def handle(self, client: CamundaClient, arguments: Arguments) -> Any:
        value = arguments.get(self.content_field)
        if not isinstance(value, str):
            raise InvalidArgumentsError(self.name, [self.content_field])

        artifact = await resolve_artifact(value, self.kind, arguments.get("fileName"))
        files = {
            artifact.file_name: (artifact.file_name, artifact.content.encode("utf-8"), self.kind.content_type),
        }
        response = await client.request("POST", "/deployment/create", data=self.build_form(arguments), files=files)
        logger.info(f"✅ Deployed {self.kind.label} {artifact.file_name} ({artifact.size_kb}KB)")
        return decode_body(response)


# === Registry ===

def _variables(arguments: Arguments) -> Dict[str, Any]:
    return {"variables": arguments.get("variables") or {}}


def _variables_with_key(arguments: Arguments) -> Dict[str, Any]:
    return {"variables": arguments.get("variables") or {}, "businessKey": arguments.get("businessKey")}


def _form_variables(arguments: Arguments) -> Dict[str, Any]:
    return {"variables": arguments.get("variables")}


def _form_variables_with_key(arguments: Arguments) -> Dict[str, Any]:
    return {"variables": arguments.get("variables"), "businessKey": arguments.get("businessKey")}


def _modifications(arguments: Arguments) -> Dict[str, Any]:
    return {"modifications": arguments.get("variables")}


def _suspended(flag: bool) -> BodyBuilder:
    return lambda arguments: {"suspended": flag}


def build_handlers() -> List[ToolHandler]:
    """Handlers for every catalog entry, in catalog order."""
    d = get_descriptor
    instance = "/process-instance/{processInstanceId}"
    return [
        QueryHandler(d("getProcessDefinitions"), "/process-definition"),
        QueryHandler(d("getProcessInstances"), "/process-instance"),
        ResourceHandler(d("startProcessInstance"), "POST", "/process-definition/{processDefinitionId}/start",
                        body=_variables_with_key),
        QueryHandler(d("getTasks"), "/task"),
        ResourceHandler(d("completeTask"), "POST", "/task/{taskId}/complete", body=_variables),
        DeployHandler(d("deployBpmn"), ArtifactKind.BPMN, "bpmnContent", flags={
            "enable-duplicate-filtering": "enableDuplicateFiltering",
            "deploy-changed-only": "deployChangedOnly",
        }),
        QueryHandler(d("getDeployments"), "/deployment"),
        ResourceHandler(d("deleteDeployment"), "DELETE", "/deployment/{deploymentId}",
                        query=("cascade", "skipCustomListeners", "skipIoMappings")),
        ResourceHandler(d("getDeploymentResources"), "GET", "/deployment/{deploymentId}/resources"),
        DeployHandler(d("deployForm"), ArtifactKind.FORM, "formContent"),
        ResourceHandler(d("getTaskForm"), "GET", "/task/{taskId}/form"),
        ResourceHandler(d("submitTaskForm"), "POST", "/task/{taskId}/submit-form", body=_form_variables),
        DefinitionFormHandler(d("getStartForm"), "GET", "startForm"),
        DefinitionFormHandler(d("submitStartForm"), "POST", "submit-form", body=_form_variables_with_key),
        ResourceHandler(d("getProcessVariables"), "GET", f"{instance}/variables"),
        ResourceHandler(d("setProcessVariables"), "POST", f"{instance}/variables", body=_modifications),
        ResourceHandler(d("getActivityInstances"), "GET", f"{instance}/activity-instances"),
        QueryHandler(d("getIncidents"), "/incident"),
        ResourceHandler(d("deleteProcessInstance"), "DELETE", instance,
                        query=("reason", "skipCustomListeners", "skipIoMappings", "skipSubprocesses")),
        ResourceHandler(d("suspendProcessInstance"), "PUT", f"{instance}/suspended", body=_suspended(True)),
        ResourceHandler(d("activateProcessInstance"), "PUT", f"{instance}/suspended", body=_suspended(False)),
    ]
