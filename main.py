"""MCP server exposing the projectdoc text engine as tools."""

from __future__ import annotations

from typing import Any, Dict

from mcp.server.fastmcp import FastMCP

from projectdoc import (
    Project,
    canonicalize,
    diff_projects,
    is_round_trip_stable,
    parse,
    serialize,
)
from projectdoc.doc_logging import log_error_with_context, log_operation, setup_logging

mcp = FastMCP("projectdoc")


GRAMMAR = """\
# Project: <title>

## People
- <name>: <resp1>, <resp2>, ...

## Timeline
- <label>: (<YYYY-MM-DD> to <YYYY-MM-DD>) [<0-100>%] {actual: <YYYY-MM-DD> to <YYYY-MM-DD>} <free text>

## Sprint Configuration
- Duration: <int> weeks
- Start Date: <YYYY-MM-DD>
- Active Sprint: <label>
- Current Sprint: <label>

## Tasks
- <title> (<assignee>) {<sprint label>} <<remarks>> [<todo|in-progress|done>]
"""


def _project_from_payload(project: Dict[str, Any]) -> Project:
    if not isinstance(project, dict):
        raise ValueError("Expected 'project' to be an object in the projectdoc JSON format.")
    try:
        return Project.from_dict(project)
    except (AttributeError, TypeError, ValueError) as e:
        log_error_with_context(e, {"operation": "serialize_project"})
        raise ValueError(f"Invalid project payload: {e}") from e


@mcp.tool()
def parse_project(text: str) -> Dict[str, Any]:
    """Parse canonical project text into its structured JSON form."""

    with log_operation("parse_project", chars=len(text or "")):
        project = parse(text)
    return {
        "project": project.to_dict(),
        "counts": {
            "people": len(project.people),
            "timeline": len(project.timeline),
            "tasks": len(project.tasks),
        },
    }


@mcp.tool()
def serialize_project(project: Dict[str, Any]) -> Dict[str, Any]:
    """Render a structured project (JSON form) as canonical text."""

    model = _project_from_payload(project)
    with log_operation("serialize_project", title=model.title):
        text = serialize(model)
    return {"text": text}


@mcp.tool()
def canonicalize_project(text: str) -> Dict[str, Any]:
    """Rewrite project text in canonical form and report whether anything changed."""

    canonical = canonicalize(text)
    return {
        "text": canonical,
        "changed": canonical != (text or ""),
    }


@mcp.tool()
def check_round_trip(text: str) -> Dict[str, Any]:
    """Check that rendering and re-reading the text yields the same project."""

    stable = is_round_trip_stable(text)
    canonical = canonicalize(text)
    return {
        "stable": stable,
        "idempotent": canonicalize(canonical) == canonical,
        "canonical_text": canonical,
    }


@mcp.tool()
def diff_project_texts(old_text: str, new_text: str) -> Dict[str, Any]:
    """Summarize the changes between two versions of a project document."""

    summary = diff_projects(parse(old_text), parse(new_text))
    return summary.to_dict()


@mcp.resource("projectdoc://grammar")
def resource_grammar() -> str:
    """Reference for the canonical project text dialect."""

    return GRAMMAR


if __name__ == "__main__":
    setup_logging()
    mcp.run(transport="stdio")
