# client.py
"""
Interactive Gemini client for the wordcount-mcp server.

Spawns the server over stdio, offers its counting tools to Gemini as
function declarations, and relays any tool call the model asks for.

    python client.py [path/to/server.py]
"""
import asyncio
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# MCP Imports
from mcp import ClientSession, StdioServerParameters, types as mcp_types
from mcp.client.stdio import stdio_client

# Gemini Imports
import google.generativeai as genai
from google.generativeai.types import FunctionDeclaration, Tool as GeminiTool

# Environment Variable Loading
from dotenv import load_dotenv

DEFAULT_SERVER_SCRIPT = str(Path(__file__).resolve().parent / "server.py")
DEFAULT_MODEL = "gemini-1.5-flash"

_GEMINI_TYPES = {
    "string": "STRING",
    "number": "NUMBER",
    "integer": "INTEGER",
    "boolean": "BOOLEAN",
    "array": "ARRAY",
    "object": "OBJECT",
}


def gemini_type(schema_type: Optional[str]) -> str:
    """Maps a JSON-schema type name to Gemini's; unknown types become STRING."""
    return _GEMINI_TYPES.get(schema_type or "", "STRING")


# --- Helper Function to Convert MCP Tool Schema to Gemini FunctionDeclaration ---
def tool_parameters(mcp_tool: mcp_types.Tool) -> Dict[str, Any]:
    """Builds the Gemini parameter schema for an MCP tool."""
    properties = {}
    required = []
    schema = mcp_tool.inputSchema or {}
    for name, prop in schema.get("properties", {}).items():
        properties[name] = {
            "type": gemini_type(prop.get("type")),
            "description": prop.get("description", ""),
        }
    if properties:
        required = list(schema.get("required", []))
    return {
        "type": "OBJECT",
        "properties": properties,
        "required": required,
    }


def mcp_tool_to_gemini_function(mcp_tool: mcp_types.Tool) -> FunctionDeclaration:
    """Converts an MCP Tool schema to a Gemini FunctionDeclaration."""
    return FunctionDeclaration(
        name=mcp_tool.name,
        description=mcp_tool.description or "",
        parameters=tool_parameters(mcp_tool),
    )
# ---------------------------------------------------------------------------


def extract_tool_text(result: mcp_types.CallToolResult) -> str:
    """Returns the first text content of a tool result, pretty-printing JSON."""
    for content in result.content or []:
        if isinstance(content, mcp_types.TextContent) and content.text is not None:
            try:
                return json.dumps(json.loads(content.text), indent=2)
            except json.JSONDecodeError:
                return content.text
    if result.isError:
        return "Tool execution failed on server."
    return "Error: Tool executed but no parsable content returned."


async def list_server_tools(session: ClientSession) -> List[mcp_types.Tool]:
    print("[Client] Discovering tools from server...")
    try:
        list_tools_result = await session.list_tools()
    except Exception as e:
        print(f"[Client] Error listing tools: {e}")
        return []

    tools = list_tools_result.tools
    if tools:
        print("-" * 20)
        print("Available Tools from this Server:")
        for tool in tools:
            print(f"  - Name: {tool.name}")
            print(f"    Description: {tool.description or 'No description'}")
        print("-" * 20)
    else:
        print("[Client] No tools discovered from this server.")
    return tools


async def call_tool(session: ClientSession, tool_name: str, tool_args: Dict[str, Any]) -> str:
    print(f"[Client] Calling MCP tool '{tool_name}'...")
    result = await session.call_tool(tool_name, tool_args)
    text = extract_tool_text(result)
    print(f"[Client] MCP Tool Result (isError={result.isError}): {text}")
    return text


async def chat_loop(session: ClientSession, model, gemini_tools: List[GeminiTool]) -> None:
    chat = model.start_chat()
    tools = gemini_tools or None
    print("\n--- wordcount-mcp Client Ready (Using Gemini Chat) ---")
    print("Enter your query, or type 'quit' to exit.")

    while True:
        user_query = input("> ")
        if user_query.lower() == "quit":
            break
        if not user_query:
            continue

        try:
            print("[Client] Sending query to Gemini Chat...")
            response = await chat.send_message_async(user_query, tools=tools)
            response_part = response.parts[0] if response.parts else None

            if response_part and response_part.function_call:
                function_call = response_part.function_call
                tool_name = function_call.name
                tool_args = dict(function_call.args)
                print(f"[Client] Gemini requested tool call: {tool_name}({tool_args})")

                try:
                    result_text = await call_tool(session, tool_name, tool_args)
                except Exception as tool_err:
                    print(f"[Client] Error calling MCP tool '{tool_name}': {tool_err}")
                    print("LLM Response: Sorry, I encountered an error trying to use the tool.")
                    continue

                # Send the tool result back to Gemini as a function response
                print("[Client] Sending tool result back to Gemini Chat...")
                response = await chat.send_message_async(
                    {"function_response": {"name": tool_name, "response": {"content": result_text}}},
                    tools=tools,
                )
                if response.parts and response.parts[0].text:
                    print(f"\nLLM Response:\n{response.parts[0].text}\n")
                else:
                    print("[Client] Gemini Chat did not provide a final text response after tool call.")

            elif response_part and response_part.text:
                print(f"\nLLM Response:\n{response_part.text}\n")
            else:
                print("[Client] Received unexpected or empty response part from Gemini Chat.")

        except Exception as e:
            print(f"[Client] Error during Gemini chat interaction: {type(e).__name__}: {e}")
            print("LLM Response: Sorry, an error occurred while processing your request with the language model.")


async def run(server_script_path: str, model) -> None:
    print(f"[Client] Attempting to connect to server: {server_script_path}")
    server_params = StdioServerParameters(command=sys.executable, args=[server_script_path], env=None)

    async with stdio_client(server_params) as (read_stream, write_stream):
        print("[Client] Stdio transport established.")
        async with ClientSession(read_stream, write_stream) as session:
            print("[Client] Initializing MCP session...")
            await session.initialize()
            print("[Client] MCP Session Initialized.")

            mcp_tools = await list_server_tools(session)
            gemini_functions = [mcp_tool_to_gemini_function(tool) for tool in mcp_tools]
            gemini_tools = [GeminiTool(function_declarations=gemini_functions)] if gemini_functions else []
            if gemini_tools:
                print("[Client] Converted MCP tools for Gemini.")

            await chat_loop(session, model, gemini_tools)


def main() -> int:
    load_dotenv()
    api_key = os.getenv("GEMINI_API_KEY")
    if not api_key:
        print("Error: GEMINI_API_KEY not found in environment or .env file.")
        return 1

    server_script_path = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_SERVER_SCRIPT
    genai.configure(api_key=api_key)
    model = genai.GenerativeModel(model_name=os.getenv("GEMINI_MODEL", DEFAULT_MODEL))

    try:
        asyncio.run(run(server_script_path, model))
    except FileNotFoundError:
        print(f"[Client] Error: Server script not found at '{server_script_path}'. Please check the path.")
        return 1
    except (KeyboardInterrupt, EOFError):
        pass
    except Exception as e:
        print(f"[Client] An unexpected error occurred: {e}")
        return 1
    finally:
        print("[Client] Exiting.")
    return 0


if __name__ == "__main__":
    if sys.platform == "win32":
        asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())
    sys.exit(main())
