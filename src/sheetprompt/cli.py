"""Command-line interface for SheetPrompt."""

import argparse
import asyncio
import json
import logging
import sys

import uvicorn

from .config import settings


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="SheetPrompt - apply AI prompts to Google Sheets columns"
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Server command
    server_parser = subparsers.add_parser("serve", help="Start the web server")
    server_parser.add_argument(
        "--host", default=settings.host, help="Host to bind to (default: %(default)s)"
    )
    server_parser.add_argument(
        "--port", type=int, default=settings.port, help="Port to bind to (default: %(default)s)"
    )
    server_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    # Run command
    run_parser = subparsers.add_parser("run", help="Run a prompt over a column once")
    run_parser.add_argument("--config", "-c", help="JSON file with the prompt configuration")
    run_parser.add_argument("--spreadsheet", "-s", help="Spreadsheet ID (default: SPREADSHEET_ID)")
    run_parser.add_argument("--input-sheet")
    run_parser.add_argument("--input-column")
    run_parser.add_argument("--output-sheet")
    run_parser.add_argument("--output-column")
    run_parser.add_argument("--start-row", type=start_row_arg, help="Row number or 'auto'")
    run_parser.add_argument("--row-mode", choices=["fixed", "all", "three"])
    run_parser.add_argument("--row-count", type=int)
    run_parser.add_argument("--prompt", "-p")
    run_parser.add_argument("--system-instructions")
    run_parser.add_argument("--model")
    run_parser.add_argument("--model-type", choices=["generation", "search", "image"])

    # Auth command
    subparsers.add_parser("auth", help="Authenticate with Google Sheets API")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        run_server(args.host, args.port, args.reload)
    elif args.command == "run":
        config = build_run_config(args)
        result = asyncio.run(run_prompt(config, args.spreadsheet))
        print(json.dumps(result, indent=2))
        sys.exit(0 if result["success"] else 1)
    elif args.command == "auth":
        run_auth()
    else:
        parser.print_help()
        sys.exit(1)


def start_row_arg(value: str):
    """argparse type for --start-row: a positive integer or 'auto'."""
    if value == "auto":
        return value
    try:
        row = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a row number or 'auto', got {value!r}")
    if row < 1:
        raise argparse.ArgumentTypeError(f"row must be 1 or greater, got {row}")
    return row


def run_server(host: str, port: int, reload: bool):
    """Run the web server."""
    uvicorn.run(
        "sheetprompt.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


def build_run_config(args: argparse.Namespace) -> dict:
    """Merge a JSON config file with command-line overrides."""
    config: dict = {}
    if args.config:
        with open(args.config) as f:
            config = json.load(f)

    overrides = {
        "inputSheet": args.input_sheet,
        "inputColumn": args.input_column,
        "outputSheet": args.output_sheet,
        "outputColumn": args.output_column,
        "rowMode": args.row_mode,
        "rowCount": args.row_count,
        "prompt": args.prompt,
        "systemInstructions": args.system_instructions,
        "model": args.model,
        "modelType": args.model_type,
    }
    if args.start_row is not None:
        overrides["startRow"] = args.start_row

    config.update({key: value for key, value in overrides.items() if value is not None})
    return config


async def run_prompt(config: dict, spreadsheet_id: str = None) -> dict:
    """Process one prompt request against Google Sheets."""
    from .api.services import build_services
    from .properties import SQLitePropertyStore
    from .sheets import GoogleSheetsBackend

    store = SQLitePropertyStore()
    await store.initialize()
    try:
        services = build_services(backend=GoogleSheetsBackend(spreadsheet_id), store=store)
        result = await services.processor.process(config)
    finally:
        await store.close()
    return result.model_dump()


def run_auth():
    """Run the Google authentication flow."""
    from .sheets import GoogleSheetsBackend

    print("Authenticating with Google Sheets API...")
    try:
        backend = GoogleSheetsBackend()
        # Accessing the service property triggers auth
        _ = backend.service
        print("Authentication successful!")
        print("Token saved. You can now use SheetPrompt with Google Sheets.")
    except Exception as e:
        print(f"Authentication failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
