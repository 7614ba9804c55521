"""CLI entry point and argument parsing"""

import argparse
import asyncio
import json
import logging
import sys
import uuid
from pathlib import Path
from typing import Any, Dict

from rich.console import Console

import settings
from providers import get_provider
from streaming import ProxyError
from stream_debug import open_stream_tracer
from cli.console_sink import ConsoleSink


console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="AI Stream Relay CLI")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--stream-trace",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Enable raw stream tracing log capture (implied by --debug unless explicitly disabled)"
    )
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the relay server (default)")
    serve.add_argument("--bind", "-b", default=None, help="Override bind address (default: from config)")
    serve.add_argument("--port", "-p", type=int, default=None, help="Override port (default: from config)")

    stream = subparsers.add_parser("stream", help="Relay a single request and print the response")
    stream.add_argument("provider", help="Provider name: anthropic or openai")
    stream.add_argument("payload", help="Path to a JSON request body, or '-' for stdin")

    return parser


def load_payload(source: str) -> Dict[str, Any]:
    """Read a JSON object request body from a file path or stdin"""
    text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    body = json.loads(text)
    if not isinstance(body, dict):
        raise ValueError("payload must be a JSON object")
    return body


def run_stream(provider_name: str, source: str) -> int:
    """Stream one request to the terminal; returns the process exit code"""
    try:
        body = load_payload(source)
    except (OSError, ValueError) as e:
        console.print(f"[red]ERROR:[/red] Failed to load payload: {e}")
        return 2

    try:
        provider = get_provider(provider_name)
    except ProxyError as e:
        console.print(f"[red]ERROR:[/red] {e}")
        return 2

    request_id = str(uuid.uuid4())[:8]
    tracer = open_stream_tracer(request_id, f"cli-{provider.provider.value}")
    sink = ConsoleSink(console)
    try:
        asyncio.run(provider.stream(body, sink, request_id=request_id, tracer=tracer))
    except ProxyError as e:
        console.print(f"[red]Stream failed:[/red] {e}")
        return 1
    finally:
        if tracer:
            tracer.close()
            console.print(f"[dim]Stream trace written to {tracer.path}[/dim]")
    return 0


def main():
    """Entry point for the CLI"""
    parser = build_parser()
    args = parser.parse_args()

    # Determine stream tracing preference (config default -> CLI overrides)
    stream_trace_setting = settings.STREAM_TRACE_ENABLED
    if args.stream_trace is None:
        if args.debug:
            stream_trace_setting = True
    else:
        stream_trace_setting = args.stream_trace
    settings.STREAM_TRACE_ENABLED = stream_trace_setting

    # ProxyServer installs its own handlers in debug mode
    if args.command == "stream" or not args.debug:
        logging.basicConfig(
            level=logging.DEBUG if args.debug else str(settings.LOG_LEVEL).upper(),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    try:
        if args.command == "stream":
            sys.exit(run_stream(args.provider, args.payload))

        from proxy import ProxyServer

        server = ProxyServer(
            debug=args.debug,
            bind_address=getattr(args, "bind", None),
            port=getattr(args, "port", None),
        )
        if args.debug:
            console.print(f"[yellow]Debug mode enabled - verbose logging will be written to {server.log_file}[/yellow]")
        if stream_trace_setting:
            console.print("[yellow]Stream tracing enabled - raw SSE chunks will be logged to disk[/yellow]")
        server.run()

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        console.print("Goodbye!")
    except Exception as e:
        console.print(f"\n[red]Fatal error:[/red] {e}")
        if args.debug:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
