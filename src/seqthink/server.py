#!/usr/bin/env python3
"""
Sequential Thinking MCP Server
Reasoning-trace tracking with heuristic annotations

Callers submit successive thoughts; the server keeps the history in
memory, annotates each thought (keywords, contradictions, phase,
quality, prompt alignment) and answers with progress and guidance.
"""

import json
import logging
from typing import Any

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, TextContent

from seqthink.engine import process_thought, summarize_session, lookup_thought
from seqthink.errors import ProcessingError
from seqthink.session import ThinkingSession
from seqthink.settings import load_config


# Load environment variables
load_dotenv()

SEQTHINK_CONFIG = load_config()

# Configure logging (stderr; stdout carries the MCP protocol)
logging.basicConfig(level=getattr(logging, str(SEQTHINK_CONFIG["logging"]["level"]).upper(), logging.INFO))
logger = logging.getLogger("seqthink-server")


# =============================================================================
# Session State
# =============================================================================

# One history per server process
_session = ThinkingSession()


def get_session() -> ThinkingSession:
    """Return the process-wide thinking session."""
    return _session


def reset_session() -> ThinkingSession:
    """Discard all history and start a fresh session."""
    global _session
    _session = ThinkingSession()
    logger.info(f"Started thinking session {_session.session_id}")
    return _session


# =============================================================================
# MCP Server Setup
# =============================================================================

mcp = FastMCP(
    name="sequential-thinking-server",
)


SEQUENTIAL_THINKING_DESCRIPTION = """A tool for dynamic and reflective problem-solving through structured thoughts.
Each thought can build on, question, or revise previous insights as understanding deepens.

When to use this tool:
- Breaking down complex problems into steps
- Planning and design with room for revision
- Analysis that might need course correction
- Multi-step solutions requiring maintenance of context

Parameters:
- thought: Your current thinking step
- nextThoughtNeeded: True if more thinking is required
- thoughtNumber: Current number in sequence (>= 1)
- totalThoughts: Current estimate of thoughts needed (>= 1, adjusted upward automatically)
- isRevision / revisesThought: Mark this thought as revising an earlier one
- branchFromThought / branchId: Start or continue a named branch
- needsMoreThoughts: Reached the end but more thoughts are needed
- phase: Planning, Analysis, Execution or Verification
- dependencies: Thought numbers this thought depends on
- toolsUsed: Names of tools used in this thought
- complexity: simple, medium or complex
- status: complete, in-progress or needs-revision

The first thought (thoughtNumber=1) is treated as the original prompt: its goals
and constraints are used to score how well later thoughts stay on track.

Recommended approach:
1. Start with a planning phase to assess the task and break it down
2. Use about 8-12 thoughts for complex problems, 5-8 for medium, 3-5 for simple
3. Explicitly connect thoughts through dependencies
4. Revise thoughts when necessary; branch only for truly different approaches
5. End with verification; set nextThoughtNeeded to false only when truly complete"""


# =============================================================================
# Tools
# =============================================================================

def as_tool_result(result: dict[str, Any]) -> CallToolResult:
    """
    Wrap an engine response for the MCP boundary.

    The dict is sent both as JSON text and as structured content;
    failure dicts (status "failed") set the protocol error flag.
    """
    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(result, indent=2))],
        structuredContent=result,
        isError=result.get("status") == "failed",
    )


# Arguments are typed Any so that every type check happens in the thinking
# engine and comes back as a structured failure naming the field.
@mcp.tool(name="sequentialthinking", description=SEQUENTIAL_THINKING_DESCRIPTION)
async def sequentialthinking(
    thought: Any = None,
    nextThoughtNeeded: Any = None,
    thoughtNumber: Any = None,
    totalThoughts: Any = None,
    isRevision: Any = None,
    revisesThought: Any = None,
    branchFromThought: Any = None,
    branchId: Any = None,
    needsMoreThoughts: Any = None,
    phase: Any = None,
    dependencies: Any = None,
    toolsUsed: Any = None,
    complexity: Any = None,
    status: Any = None,
) -> CallToolResult:
    """
    Submit one thought of a sequential reasoning process.

    Argument names follow the tool's wire contract (camelCase).

    Returns:
        Progress summary, or {"error": ..., "status": "failed"} with isError set
    """
    payload = {
        key: value for key, value in {
            "thought": thought,
            "nextThoughtNeeded": nextThoughtNeeded,
            "thoughtNumber": thoughtNumber,
            "totalThoughts": totalThoughts,
            "isRevision": isRevision,
            "revisesThought": revisesThought,
            "branchFromThought": branchFromThought,
            "branchId": branchId,
            "needsMoreThoughts": needsMoreThoughts,
            "phase": phase,
            "dependencies": dependencies,
            "toolsUsed": toolsUsed,
            "complexity": complexity,
            "status": status,
        }.items()
        if value is not None
    }
    return as_tool_result(process_thought(get_session(), payload, SEQTHINK_CONFIG))


@mcp.tool()
async def get_thinking_summary() -> CallToolResult:
    """
    Summarize the current thinking session.

    Returns overall progress, estimated remaining thoughts, alignment
    trend, goal coverage, branches, tool usage and the dependency graph.
    """
    try:
        return as_tool_result(summarize_session(get_session()))
    except Exception as e:
        logger.error(f"get_thinking_summary failed: {e}")
        return as_tool_result(ProcessingError(str(e)).to_dict())


@mcp.tool()
async def get_thought(thoughtNumber: Any = None) -> CallToolResult:
    """
    Look up a stored thought by its sequence number.

    Args:
        thoughtNumber: Sequence number of the thought

    Returns:
        The latest record stored under that number and the numbers of
        thoughts that revise it
    """
    return as_tool_result(lookup_thought(get_session(), thoughtNumber))


# =============================================================================
# Entry Point
# =============================================================================

def main():
    """Run the MCP server."""
    logger.info("Starting Sequential Thinking MCP Server...")
    logger.info(f"Thinking session {get_session().session_id} ready")
    mcp.run()


if __name__ == "__main__":
    main()
