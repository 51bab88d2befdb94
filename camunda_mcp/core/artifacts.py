# -*- coding: utf-8 -*-
"""
Deployable artifacts - inline content or a path to a file holding it.

Classification is a heuristic on the shape of the string. A value is a path
only if it is shorter than 500 characters, contains a path separator and ends
with an extension of its kind. Anything else, including long inline XML that
happens to match, is treated as content. The rule is part of the public
behaviour of the deploy tools.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath, PureWindowsPath
from typing import Optional

import aiofiles

from camunda_mcp.api.scheme.errors import (
    ArtifactFormatError,
    ArtifactNameError,
    ArtifactReadError,
)
from camunda_mcp.providers.logger import get_logger

logger = get_logger()

MAX_PATH_LENGTH = 500


class ArtifactKind(str, Enum):
    BPMN = "bpmn"
    FORM = "form"

    @property
    def label(self) -> str:
        return "BPMN" if self is ArtifactKind.BPMN else "form"

    @property
    def content_type(self) -> str:
        return "application/xml" if self is ArtifactKind.BPMN else "application/json"


_EXTENSIONS = {
    ArtifactKind.BPMN: re.compile(r"\.(bpmn|bpmn20\.xml)$", re.IGNORECASE),
    ArtifactKind.FORM: re.compile(r"\.(form|json)$", re.IGNORECASE),
}


@dataclass(frozen=True)
class ResolvedArtifact:
    content: str
    file_name: str
    source: Optional[str] = None  # path the content was read from

    @property
    def size_kb(self) -> int:
        return round(len(self.content) / 1024)


def is_artifact_path(value: str, kind: ArtifactKind) -> bool:
    """True when ``value`` should be read from disk rather than deployed as is."""
    return (
        len(value) < MAX_PATH_LENGTH
        and ("/" in value or "\\" in value)
        and _EXTENSIONS[kind].search(value) is not None
    )


def _base_name(path: str) -> str:
    # handles both separators regardless of the host OS
    return PureWindowsPath(path).name if "\\" in path else PurePath(path).name


def _check_format(kind: ArtifactKind, content: str) -> bool:
    if kind is ArtifactKind.BPMN:
        return "<?xml" in content and "bpmn" in content
    try:
        json.loads(content)
    except ValueError:
        return False
    return True


async def read_artifact_file(path: str, kind: ArtifactKind) -> ResolvedArtifact:
    """
    Read and sanity-check an artifact file.

    Raises:
        ArtifactReadError: the file cannot be opened or read
        ArtifactFormatError: the content fails the structural check
    """
    try:
        async with aiofiles.open(path, "r", encoding="utf-8") as fp:
            content = await fp.read()
    except (OSError, UnicodeDecodeError) as e:
        reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
        raise ArtifactReadError(kind.label, path, reason) from e

    if not _check_format(kind, content):
        expected = "BPMN file" if kind is ArtifactKind.BPMN else "JSON form file"
        raise ArtifactFormatError(kind.label, path, expected)

    return ResolvedArtifact(content=content, file_name=_base_name(path), source=path)


async def resolve_artifact(
    value: str,
    kind: ArtifactKind,
    file_name: Optional[str] = None,
) -> ResolvedArtifact:
    """
    Turn a tool argument into deployable content and a file name.

    ``file_name`` overrides the name taken from a path; for inline content it
    is mandatory.
    """
    if is_artifact_path(value, kind):
        artifact = await read_artifact_file(value, kind)
        logger.info(f"📁 Read {kind.label} file: {value} ({artifact.size_kb}KB)")
        if file_name:
            artifact = ResolvedArtifact(content=artifact.content, file_name=file_name, source=artifact.source)
        return artifact

    if not file_name:
        raise ArtifactNameError(kind.label)
    return ResolvedArtifact(content=value, file_name=file_name)
