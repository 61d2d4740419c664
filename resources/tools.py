"""
Tool Documentation Resources

Serves google://tools/{name} resources built from @mcp.tool docstrings,
so the tool docs and the resource docs never drift apart.

Reads FastMCP's tool manager synchronously at import time, after the
@mcp.tool() decorators have run. Tested against mcp 1.x (FastMCP).
"""

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

URI_PREFIX = "google://tools/"


def docstring_to_markdown(tool_name: str, docstring: str) -> str:
    """Title plus the dedented docstring."""
    if not docstring:
        return f"# {tool_name}()\n\nNo documentation available."

    lines = docstring.strip().split('\n')
    if len(lines) > 1:
        # First line has no indent after strip(); dedent the rest
        indents = [len(line) - len(line.lstrip())
                   for line in lines[1:] if line.strip()]
        min_indent = min(indents) if indents else 0
        lines = [lines[0]] + [line[min_indent:] for line in lines[1:]]

    return f"# {tool_name}()\n\n" + '\n'.join(lines)


class ToolResourceRegistry:
    """Tool name → function, with rendered resources cached by URI."""

    def __init__(self) -> None:
        self._tools: dict[str, Callable[..., Any]] = {}
        self._cache: dict[str, dict[str, str]] = {}

    def register_tool(self, name: str, func: Callable[..., Any]) -> None:
        self._tools[name] = func
        self._cache.pop(f"{URI_PREFIX}{name}", None)

    def register_from_mcp(self, mcp_server: Any) -> int:
        """
        Register every tool a FastMCP server knows about.

        Returns:
            Number of tools registered (0 logs a warning; resources will
            answer "Tool not found." for everything)
        """
        tool_manager = getattr(mcp_server, "_tool_manager", None)
        tools = tool_manager.list_tools() if tool_manager is not None else []

        for tool in tools:
            self.register_tool(tool.name, tool.fn)

        if not tools:
            logger.warning(
                "Tool resource registry is empty after registration. "
                f"{URI_PREFIX}* resources will not be available."
            )
        else:
            logger.debug(f"Tool resource registry: {len(tools)} tools registered")
        return len(tools)

    def get_tool_names(self) -> set[str]:
        return set(self._tools)

    def get_resource(self, uri: str) -> dict[str, str]:
        """
        Get resource by URI (e.g., "google://tools/gmail_search").

        Returns:
            Resource dict with uri, mimeType, text

        Raises:
            KeyError: If the URI isn't a tool resource or the tool is unknown
        """
        if uri in self._cache:
            return self._cache[uri]

        if not uri.startswith(URI_PREFIX):
            raise KeyError(f"Not a tool resource: {uri}")

        tool_name = uri[len(URI_PREFIX):]
        if tool_name not in self._tools:
            raise KeyError(f"Tool not found: {tool_name}")

        resource = {
            "uri": uri,
            "mimeType": "text/markdown",
            "text": docstring_to_markdown(tool_name, self._tools[tool_name].__doc__ or ""),
        }
        self._cache[uri] = resource
        return resource

    def list_resources(self) -> list[dict[str, str]]:
        """One entry per tool: uri, name, first docstring line."""
        resources: list[dict[str, str]] = []
        for name in sorted(self._tools):
            docstring = (self._tools[name].__doc__ or "").strip()
            first_line = docstring.split('\n')[0] if docstring else "No description"
            resources.append({
                "uri": f"{URI_PREFIX}{name}",
                "name": name,
                "description": first_line[:100],
            })
        return resources


# Global registry instance
_registry = ToolResourceRegistry()


def get_tool_registry() -> ToolResourceRegistry:
    """Get the global tool resource registry."""
    return _registry
