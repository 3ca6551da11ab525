#!/usr/bin/env python3
"""Hetzner command relay - Main entry point.

    main.py          interactive console (commands typed locally)
    main.py serve    WhatsApp webhook server on $PORT
"""

from dotenv import load_dotenv
import logging
import sys
from typing import List, Optional

from commands import CommandInterpreter
from console import init_readline, read_command
from errors import ConfigurationError
from hetzner import HetznerClient
from messaging import TwilioMessenger
from settings import Settings, load_settings


logger = logging.getLogger(__name__)

EXIT_WORDS = {"exit", "quit", "q"}


def setup_logging(level: str = "INFO") -> None:
    """Send log records to stdout with timestamps."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


def _handle_line(interpreter: CommandInterpreter, line: str) -> bool:
    """Handle one console line.

    Returns:
        False to exit the loop, True to continue.
    """
    if not line.strip():
        return True
    if line.strip().lower() in EXIT_WORDS:
        return False
    print(interpreter.interpret(line))
    return True


def run_console(settings: Settings) -> None:
    """Read commands from the terminal until EOF or `exit`."""
    with HetznerClient(settings) as client:
        interpreter = CommandInterpreter(client)
        init_readline()

        print("Ready! Type a command, or 'exit' to quit.")
        print(interpreter.get_help())

        while True:
            try:
                line = read_command()
            except (EOFError, KeyboardInterrupt):
                print("\nExiting...")
                break
            if not _handle_line(interpreter, line):
                break


def run_server(settings: Settings) -> None:
    """Serve the Twilio webhook until interrupted."""
    from webhook import create_app

    # Construct once up front so missing credentials stop startup.
    HetznerClient(settings).close()
    messenger = TwilioMessenger(settings)

    app = create_app(settings, messenger, lambda: HetznerClient(settings))
    logger.info(f"Listening on port {settings.port}")
    app.run(host="0.0.0.0", port=settings.port)


def main(argv: Optional[List[str]] = None) -> None:
    """Main application entry point."""
    args = sys.argv[1:] if argv is None else argv
    load_dotenv()

    try:
        settings = load_settings()
        setup_logging(settings.log_level)
        if args and args[0] == "serve":
            run_server(settings)
        elif args:
            print(f"Unknown mode: {args[0]} (expected: serve)", file=sys.stderr)
            sys.exit(2)
        else:
            run_console(settings)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
