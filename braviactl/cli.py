"""
Command-line entry point.

Usage:
  braviactl /dev/ttyUSB0 on
  braviactl /dev/ttyUSB0 volume:20
  braviactl /dev/ttyUSB0 status -v

Prints OK and exits 0 on success. Unknown commands exit 2 before the port
is opened; transaction failures print the error and exit 1.
"""

from __future__ import annotations

import argparse
import logging
import sys

from braviactl.client import DeviceClient
from braviactl.exceptions import BraviaError, InvalidCommandError
from braviactl.models.commands import LogicalCommand
from braviactl.protocol.constants import ProtocolConstants
from braviactl.transport.serial_port import SerialTransport

logger = logging.getLogger(__name__)

COMMAND_HELP = "[on|off|power|volume-up|volume-down|volume:level|mute|status]"


def _command(token: str) -> LogicalCommand:
    try:
        return LogicalCommand.from_token(token)
    except InvalidCommandError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="braviactl",
        description="Control a display over its RS-232 serial port",
    )
    parser.add_argument("device", help="Path to serial port device, e.g. /dev/ttyUSB0")
    parser.add_argument("command", type=_command, help=COMMAND_HELP)
    parser.add_argument(
        "--baudrate",
        type=int,
        default=ProtocolConstants.DEFAULT_BAUD_RATE,
        help=f"Baud rate (default {ProtocolConstants.DEFAULT_BAUD_RATE})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=ProtocolConstants.DEFAULT_RECEIVE_TIMEOUT,
        help=f"Read timeout in seconds (default {ProtocolConstants.DEFAULT_RECEIVE_TIMEOUT})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log protocol traffic")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Program entrypoint."""
    args = parse_args(sys.argv[1:] if argv is None else argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    transport = SerialTransport(args.device, baudrate=args.baudrate, default_timeout=args.timeout)
    try:
        with DeviceClient(transport, status_callback=print) as client:
            client.run(args.command)
    except BraviaError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        sys.stderr.write(f"{e}\n")
        return 1

    print("OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
