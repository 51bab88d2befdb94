# -*- coding: utf-8 -*-

SERVER_ERROR = (-1, 'Internal server error')

# Tool invocation
MISSING_ARGUMENTS = (40001, 'Arguments are required')
INVALID_ARGUMENTS = (40002, 'Missing required argument(s) for {tool}: {fields}')
UNKNOWN_TOOL = (40401, 'Unknown tool: {name}')

# Artifacts
ARTIFACT_READ_ERROR = (42201, "Cannot read {label} file '{path}': {reason}")
ARTIFACT_FORMAT_ERROR = (42202, "Cannot read {label} file '{path}': File does not appear to be a valid {expected}")
ARTIFACT_NAME_ERROR = (42203, 'fileName is required when {label} content is provided inline')

# Engine REST API
BACKEND_REJECTION = (50201, 'Camunda responded with {status} {reason}')
TRANSPORT_ERROR = (50401, 'Request to {url} failed: {reason}')
