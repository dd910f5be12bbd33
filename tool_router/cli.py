import asyncio
import json
import logging
from typing import Any, Awaitable, Dict, Optional

import typer
from rich.console import Console
from rich.table import Table
from typing_extensions import Annotated

from tool_router.client.tool_router import ToolRouter
from tool_router.domains.errors import ToolRouterError
from tool_router.services.parameters import extract_parameters

# --- Basic Logging Configuration ---
logging.basicConfig(level=logging.WARNING, format="%(levelname)s:%(name)s:%(message)s")
# --- End Logging Configuration ---

app = typer.Typer(help="Discover, resolve and execute plugin tools.")
console = Console()

ConfigOption = Annotated[
    str, typer.Option(help="Path to the configuration file (JSON or Python).")
]


def create_router(config: str) -> ToolRouter:
    """Build a router, exiting with a readable message on configuration errors."""
    try:
        with console.status("[bold green]Loading plugins...", spinner="dots"):
            return ToolRouter(config_path=config)
    except FileNotFoundError:
        console.print(
            f"[bold red]Error:[/bold red] Configuration file not found at '{config}'"
        )
        raise typer.Exit(code=1)
    except ValueError as e:
        console.print(f"[bold red]Error loading configuration:[/bold red] {e}")
        raise typer.Exit(code=1)


def run_catalog_command(coroutine: Awaitable[Any]) -> Any:
    """Run a catalog-backed coroutine, exiting with a readable message on failure."""
    try:
        return asyncio.run(coroutine)
    except ToolRouterError as e:
        console.print(f"[bold red]Catalog error:[/bold red] {e}")
        raise typer.Exit(code=1)


def print_json(data: Any) -> None:
    console.print_json(json.dumps(data, default=str))


@app.command()
def tools(config: ConfigOption = "config.json"):
    """List registered tools and their invocation paths."""
    router = create_router(config)
    table = Table(title="Registered tools")
    table.add_column("Tool", style="cyan")
    table.add_column("Plugin", style="magenta")
    table.add_column("Path")
    table.add_column("Parameters", style="dim")
    for tool in router.list_tools():
        table.add_row(
            tool["name"],
            tool["plugin"],
            tool["path"],
            ", ".join(tool["parameters"]) or "-",
        )
    console.print(table)


@app.command()
def reindex(config: ConfigOption = "config.json"):
    """Rebuild the tool catalog."""
    router = create_router(config)
    result = asyncio.run(router.reindex())
    if not result["success"]:
        console.print(f"[bold red]Re-index failed:[/bold red] {result['error']}")
        raise typer.Exit(code=1)
    console.print(
        f"[green]Indexed {result['indexed']} tools[/green] "
        f"(replaced {result['replaced']} previous entries)"
    )


@app.command()
def search(
    query: Annotated[str, typer.Argument(help="Full-text query, '*' for everything.")],
    config: ConfigOption = "config.json",
):
    """Search the tool catalog."""
    router = create_router(config)
    response = run_catalog_command(router.search(query))
    table = Table(title=f"{response['count']} results for '{query}'")
    table.add_column("Tool", style="cyan")
    table.add_column("Plugin", style="magenta")
    table.add_column("Description")
    for document in response["value"]:
        table.add_row(document["name"], document["pluginId"], document["description"])
    console.print(table)


@app.command()
def resolve(
    query: Annotated[str, typer.Argument(help="Free-text description of the task.")],
    config: ConfigOption = "config.json",
):
    """Show which tool a query resolves to."""
    router = create_router(config)
    document = run_catalog_command(router.resolve(query))
    if document is None:
        console.print(f"[yellow]No suitable tool found for query:[/yellow] {query}")
        raise typer.Exit(code=1)
    console.print(
        f"[green]{document['name']}[/green] ({document['pluginId']}) "
        f"{document['httpMethod']} {document['invocationPath']}"
    )


@app.command()
def call(
    tool: Annotated[str, typer.Argument(help="Tool name or multi_tool_use.")],
    args: Annotated[
        Optional[str], typer.Option("--args", help="Arguments as a JSON object.")
    ] = None,
    user_input: Annotated[
        Optional[str],
        typer.Option("--input", help="Original user input for parameter extraction."),
    ] = None,
    timeout: Annotated[
        Optional[float], typer.Option(help="Seconds before the call is cancelled.")
    ] = None,
    config: ConfigOption = "config.json",
):
    """Execute a tool and print the JSON result."""
    arguments: Optional[Dict[str, Any]] = None
    if args:
        try:
            arguments = json.loads(args)
        except json.JSONDecodeError as e:
            console.print(f"[bold red]Invalid --args JSON:[/bold red] {e}")
            raise typer.Exit(code=2)
        if not isinstance(arguments, dict):
            console.print("[bold red]--args must be a JSON object[/bold red]")
            raise typer.Exit(code=2)

    router = create_router(config)
    result = asyncio.run(
        router.call(tool, arguments, original_user_input=user_input, timeout=timeout)
    )
    print_json(result)
    if result.get("success") is False:
        raise typer.Exit(code=1)


@app.command()
def extract(
    text: Annotated[str, typer.Argument(help="Free text to extract parameters from.")],
):
    """Show the parameters extracted from free text."""
    print_json(extract_parameters(text))


if __name__ == "__main__":
    app()
