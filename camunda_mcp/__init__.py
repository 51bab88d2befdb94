# -*- coding: utf-8 -*-
"""Camunda Platform REST API exposed as MCP tools."""

__version__ = "1.0.0"
