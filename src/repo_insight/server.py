"""MCP Server initialization and tool registration."""

from __future__ import annotations

import json
from typing import Any

from loguru import logger
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from repo_insight.config import get_settings
from repo_insight.tools import (
    analyze_repository,
    compare_tasks_with_code,
    detect_project_type,
)

_PHASES_SCHEMA: dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "id": {"type": ["string", "integer"]},
            "title": {"type": "string"},
            "sub_tasks": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "id": {"type": ["string", "integer"]},
                        "title": {"type": "string"},
                        "is_complete": {"type": "boolean"},
                    },
                    "required": ["title"],
                },
            },
        },
        "required": ["id", "title"],
    },
}

# Tool definitions with JSON schemas
TOOLS: dict[str, dict[str, Any]] = {
    "analyze_repository": {
        "description": "Analyze a GitHub repository's tech stack, structure, code quality, design patterns and architecture from its file tree and dependency manifests.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "repo": {
                    "type": "string",
                    "description": "Repository in owner/name form (e.g., octocat/hello-world)",
                },
                "token": {
                    "type": "string",
                    "description": "GitHub token for private repositories (default: GITHUB_TOKEN)",
                },
            },
            "required": ["repo"],
        },
        "handler": analyze_repository,
    },
    "detect_project_type": {
        "description": "Classify a repository as mobile-app, fullstack, api, spa or custom.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "repo": {
                    "type": "string",
                    "description": "Repository in owner/name form (required if analysis_json not provided)",
                },
                "analysis_json": {
                    "type": "string",
                    "description": "Pre-computed analyze_repository result as JSON string",
                },
                "token": {
                    "type": "string",
                    "description": "GitHub token for private repositories",
                },
            },
            "required": [],
        },
        "handler": detect_project_type,
    },
    "compare_tasks_with_code": {
        "description": "Estimate which project tasks are likely done, in progress or not started by matching task titles against repository files.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "repo": {
                    "type": "string",
                    "description": "Repository in owner/name form",
                },
                "phases": _PHASES_SCHEMA,
                "token": {
                    "type": "string",
                    "description": "GitHub token for private repositories",
                },
            },
            "required": ["repo", "phases"],
        },
        "handler": compare_tasks_with_code,
    },
}


def create_server() -> Server:
    """Create and configure the MCP server."""
    server = Server("repo-insight")

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List all available tools."""
        return [
            Tool(
                name=name,
                description=config["description"],
                inputSchema=config["inputSchema"],
            )
            for name, config in TOOLS.items()
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[TextContent]:
        """Handle tool invocations."""
        return [TextContent(type="text", text=await run_tool(name, arguments))]

    return server


async def run_tool(name: str, arguments: dict) -> str:
    """Execute a tool and serialize its result or error as JSON text."""
    if name not in TOOLS:
        return f"Unknown tool: {name}"

    handler = TOOLS[name]["handler"]

    try:
        logger.info(f"Executing tool: {name}")
        result = await handler(**arguments)
        return json.dumps(result, indent=2, default=str)

    except Exception as e:
        logger.error(f"Tool execution failed: {e}")
        return json.dumps({
            "error": True,
            "type": type(e).__name__,
            "message": str(e),
            "tool": name,
        })


async def run_server() -> None:
    """Run the MCP server via stdio."""
    server = create_server()

    logger.info("Starting repo-insight server...")

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main() -> None:
    """CLI entry point."""
    import asyncio
    import sys

    # Configure logging
    logger.remove()
    logger.add(
        sys.stderr,
        level=get_settings().log_level,
        format="<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
    )

    asyncio.run(run_server())


if __name__ == "__main__":
    main()
