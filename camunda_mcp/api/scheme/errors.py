# -*- coding: utf-8 -*-

from typing import Any, Iterable

from camunda_mcp.api.scheme import error_codes


class Error(Exception):

    def __init__(self, err=None, **kwargs):
        if err is not None:
            self.errcode = err[0]
            self.errmsg = err[1]
            if kwargs:
                self.errmsg = self.errmsg.format(**kwargs)
            self.err = err
        else:
            self.err = error_codes.SERVER_ERROR
            self.errcode = error_codes.SERVER_ERROR[0]
            self.errmsg = error_codes.SERVER_ERROR[1]
        super(Error, self).__init__(self.errmsg)

    def __str__(self):
        return self.errmsg


# === Tool invocation ===

class MissingArgumentsError(Error):
    """The call carried no argument bag at all."""

    def __init__(self):
        super().__init__(err=error_codes.MISSING_ARGUMENTS)


class InvalidArgumentsError(Error):
    """Required fields of the tool descriptor are absent."""

    def __init__(self, tool: str, missing: Iterable[str]):
        self.tool = tool
        self.missing = list(missing)
        super().__init__(err=error_codes.INVALID_ARGUMENTS, tool=tool, fields=", ".join(self.missing))


class UnknownToolError(Error):

    def __init__(self, name: str):
        self.name = name
        super().__init__(err=error_codes.UNKNOWN_TOOL, name=name)


# === Artifacts ===

class ArtifactError(Error):
    """Base for deployable content that could not be resolved."""


class ArtifactReadError(ArtifactError):

    def __init__(self, label: str, path: str, reason: Any):
        self.path = path
        super().__init__(err=error_codes.ARTIFACT_READ_ERROR, label=label, path=path, reason=reason)


class ArtifactFormatError(ArtifactError):

    def __init__(self, label: str, path: str, expected: str):
        self.path = path
        super().__init__(err=error_codes.ARTIFACT_FORMAT_ERROR, label=label, path=path, expected=expected)


class ArtifactNameError(ArtifactError):

    def __init__(self, label: str):
        super().__init__(err=error_codes.ARTIFACT_NAME_ERROR, label=label)


# === Engine REST API ===

class BackendRejection(Error):
    """Non-2xx answer from the engine; keeps status, reason and decoded body."""

    def __init__(self, status_code: int, reason: str, body: Any = None):
        self.status_code = status_code
        self.reason = reason or "Unknown Error"
        self.body = body
        super().__init__(err=error_codes.BACKEND_REJECTION, status=status_code, reason=self.reason)


class TransportError(Error):
    """No response at all: connection failure, timeout, protocol error."""

    def __init__(self, url: str, reason: Any):
        self.url = url
        super().__init__(err=error_codes.TRANSPORT_ERROR, url=url, reason=reason)
