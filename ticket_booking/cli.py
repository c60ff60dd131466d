"""
Command line entry point: run the API server or the terminal booking widget.
"""

import argparse
import asyncio
import sys
from typing import Callable, List, Optional

from .config import get_settings
from .gateway import BookingGateway
from .view import ConsoleNotifier, SeatBookingView

HELP = """Commands:
  book N     book N seats
  reset      reset all bookings
  refresh    reload seat statuses
  help       show this help
  quit       exit"""


async def run_widget(
    view: SeatBookingView,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print
) -> None:
    """Read commands until ``quit`` or end of input."""
    await view.load()
    write(view.render())
    write(HELP)

    while True:
        try:
            line = await asyncio.to_thread(read_line, "> ")
        except EOFError:
            break

        command, _, argument = line.strip().partition(" ")
        command = command.lower()

        if command in ("quit", "exit", "q"):
            break
        elif command == "book":
            await view.book(argument)
        elif command == "reset":
            await view.reset()
        elif command == "refresh":
            await view.load()
        elif command in ("help", "?"):
            write(HELP)
            continue
        elif not command:
            continue
        else:
            write(f"Unknown command: {command}")
            continue

        write(view.render())


async def _widget_main(base_url: str, timeout: float) -> None:
    async with BookingGateway(base_url=base_url, timeout=timeout) as gateway:
        view = SeatBookingView(gateway, ConsoleNotifier())
        await run_widget(view)


def serve(host: str, port: int, reload: bool = False) -> None:
    """Start the API server."""
    import uvicorn
    uvicorn.run("ticket_booking.main:app", host=host, port=port, reload=reload)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="ticket-booking", description=__doc__.strip())
    subcommands = parser.add_subparsers(dest="command", required=True)

    serve_parser = subcommands.add_parser("serve", help="run the booking API")
    serve_parser.add_argument("--host", default=settings.host)
    serve_parser.add_argument("--port", type=int, default=settings.port)
    serve_parser.add_argument("--reload", action="store_true")

    widget_parser = subcommands.add_parser("widget", help="run the terminal booking widget")
    widget_parser.add_argument("--base-url", default=settings.gateway_base_url)
    widget_parser.add_argument("--timeout", type=float, default=settings.gateway_timeout_seconds)
    widget_parser.add_argument("--log-level", default="WARNING")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        serve(args.host, args.port, reload=args.reload)
        return 0

    from .utils.logging_config import setup_logging
    setup_logging(log_level=args.log_level.upper(), stream=sys.stderr)
    try:
        asyncio.run(_widget_main(args.base_url, args.timeout))
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
