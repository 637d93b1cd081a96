"""Main entry point for the Lexicon Stream CLI."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

from backend.config import Settings
from backend.services.state_provider import SnapshotFetchError, StateProvider
from backend.services.stream_builder import StreamBuilder
from backend.services.stream_store import StreamStore
from lexicon.kernel.types import SnapshotParseError

__version__ = "0.1.0"

logger = logging.getLogger("lexicon_stream")


def print_help():
    """Print help message."""
    print(f"""
Lexicon Stream v{__version__}

Usage:
  lexicon-stream [options] [command]

Commands:
  build             Fetch the lexicon state and rebuild the stream (default)
  serve             Serve the stream and static assets over HTTP
  history           List archived snapshot generations

Options:
  --url URL         Override the lexicon state URL (default: LEXICON_URL)
  --port N          Override the HTTP port for serve (default: PORT)
  --snapshot PATH   Build from a snapshot file instead of fetching
  --gen N           Build from the archived snapshot of generation N
  -h, --help        Show this help
  -v, --version     Show version

Environment:
  LEXICON_URL, FETCH_TIMEOUT_SECONDS, HOST, PORT,
  STREAM_FILE, SNAPSHOT_DIR, STATIC_DIR, LOG_LEVEL

Examples:
  lexicon-stream                                # Rebuild from the live simulation
  lexicon-stream build --url http://pi:7890     # Rebuild from another host
  lexicon-stream build --gen 1200               # Rebuild from the archive
  lexicon-stream serve --port 8080              # Serve on another port
""")


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        command: str (build, serve, history)
        url: str | None
        port: int | None
        snapshot: str | None
        gen: int | None
        show_help: bool
        show_version: bool
    """
    result = {
        "command": "build",
        "url": None,
        "port": None,
        "snapshot": None,
        "gen": None,
        "show_help": False,
        "show_version": False,
    }

    def value_for(i: int, flag: str, what: str) -> str:
        if i + 1 < len(args):
            return args[i + 1]
        print(f"Error: {flag} requires {what}")
        sys.exit(1)

    def int_value_for(i: int, flag: str) -> int:
        raw = value_for(i, flag, "a number")
        try:
            return int(raw)
        except ValueError:
            print(f"Error: {flag} requires a number, got {raw!r}")
            sys.exit(1)

    i = 0
    while i < len(args):
        arg = args[i]

        if arg in ("build", "serve", "history"):
            result["command"] = arg
        elif arg == "--url":
            result["url"] = value_for(i, arg, "a URL")
            i += 1
        elif arg == "--port":
            result["port"] = int_value_for(i, arg)
            i += 1
        elif arg == "--snapshot":
            result["snapshot"] = value_for(i, arg, "a path")
            i += 1
        elif arg == "--gen":
            result["gen"] = int_value_for(i, arg)
            i += 1
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        elif arg.startswith("-"):
            print(f"Unknown option: {arg}")
            print("Run 'lexicon-stream --help' for usage.")
            sys.exit(1)
        else:
            print(f"Unknown command: {arg}")
            print("Run 'lexicon-stream --help' for usage.")
            sys.exit(1)

        i += 1

    if result["snapshot"] is not None and result["gen"] is not None:
        print("Error: --snapshot and --gen cannot be used together")
        sys.exit(1)

    return result


def run_build(config: Settings, snapshot: str | None = None, gen: int | None = None) -> bool:
    """Run one build. Returns True on success."""
    store = StreamStore(config.STREAM_FILE, config.SNAPSHOT_DIR)
    provider = StateProvider(config.LEXICON_URL, timeout=config.FETCH_TIMEOUT_SECONDS)
    builder = StreamBuilder(provider, store)

    snapshot_file = None
    if snapshot is not None:
        snapshot_file = Path(snapshot)
    elif gen is not None:
        snapshot_file = store.archive_path(gen)

    try:
        asyncio.run(builder.build(snapshot_file=snapshot_file))
    except (SnapshotFetchError, SnapshotParseError, OSError) as e:
        logger.error("Error: %s", e)
        return False
    return True


def run_history(config: Settings) -> None:
    """Print archived generations, one per line."""
    store = StreamStore(config.STREAM_FILE, config.SNAPSHOT_DIR)
    generations = store.archived_generations()
    if not generations:
        print(f"No archived snapshots in {config.SNAPSHOT_DIR}")
        return
    for gen in generations:
        print(f"gen {gen:>8}  {store.archive_path(gen)}")


def run_serve(config: Settings) -> None:
    """Serve the stream API and static assets until interrupted."""
    import uvicorn

    from backend.main import create_app

    logger.info("Lexicon Stream running on port %d", config.PORT)
    uvicorn.run(create_app(config), host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())


def main():
    """Main entry point."""
    args = parse_args(sys.argv[1:])

    # Handle help and version first
    if args["show_help"]:
        print_help()
        return

    if args["show_version"]:
        print(f"lexicon-stream {__version__}")
        return

    config = Settings()
    if args["url"]:
        config.LEXICON_URL = args["url"].rstrip("/")
    if args["port"] is not None:
        config.PORT = args["port"]

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args["command"] == "serve":
        run_serve(config)
    elif args["command"] == "history":
        run_history(config)
    else:
        success = run_build(config, snapshot=args["snapshot"], gen=args["gen"])
        sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
