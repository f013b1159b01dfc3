"""
Command line tool for RockBlockPy.

Initializes the modem, then shows info, sends a message or checks the mailbox.
"""

import sys
import logging
from typing import Optional

from .modem import RockBlockModem
from .version import __version__
from .exceptions import SBDError, ParseError


class RockBlockCLI:
    """One-shot modem conversation driven by command line options."""

    def __init__(self, port: str, baudrate: int = 19200, timeout: Optional[float] = None):
        """
        Initialize CLI.

        Args:
            port: Serial port path
            baudrate: Baud rate
            timeout: Serial read timeout in seconds (None blocks)
        """
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout
        self.modem: Optional[RockBlockModem] = None

    def run(self, message: Optional[str] = None, check: bool = False, info: bool = False) -> int:
        """Run the requested actions and return a process exit code."""
        print(f"RockBlockPy CLI v{__version__}")
        print(f"Connecting to {self.port} at {self.baudrate} baud...")

        try:
            self.modem = RockBlockModem(
                port=self.port,
                baudrate=self.baudrate,
                timeout=self.timeout
            )
            self.modem.device.initialize()

            if info:
                self._show_modem_info()

            if message is not None:
                outcome = self.modem.send_message(message)
                print(f"Message sent ({len(message.encode('utf-8'))} bytes)")
                self._print_messages(outcome)
            elif check:
                outcome = self.modem.check_mailbox()
                self._print_messages(outcome)

        except SBDError as e:
            print(f"\nError: {e}")
            return 1
        except Exception as e:
            print(f"\nUnexpected error: {e}")
            logging.exception("CLI error")
            return 1
        finally:
            if self.modem:
                self.modem.close()

        return 0

    def _print_messages(self, outcome):
        print(f"Sessions: {outcome.sessions}, messages received: {len(outcome.messages)}")
        for message in outcome.messages:
            print(f"  [MTMSN {message.mt_msn}] {message.text}")

    def _show_modem_info(self):
        """Show modem information."""
        print(f"\nSerial identifier: {self.modem.device.get_serial_identifier()}")
        print(f"Signal: {self.modem.network.get_signal_strength()}/5")

        try:
            network_time = self.modem.network.get_network_datetime()
            print(f"Network time: {network_time.isoformat()}")
        except ParseError as e:
            print(f"Network time: unavailable ({e})")


def main():
    """Main entry point for CLI."""
    import argparse

    parser = argparse.ArgumentParser(
        description="RockBlockPy CLI - Iridium SBD modem tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  rockblock-cli /dev/ttyUSB0 --info
  rockblock-cli /dev/ttyUSB0 --send "Hello, World"
  rockblock-cli /dev/ttyUSB0 --check -v
        """
    )

    parser.add_argument(
        "port",
        help="Serial port (e.g., /dev/ttyUSB0, COM3)"
    )
    parser.add_argument(
        "-b", "--baudrate",
        type=int,
        default=19200,
        help="Baud rate (default: 19200)"
    )
    parser.add_argument(
        "-t", "--timeout",
        type=float,
        default=None,
        help="Serial read timeout in seconds (default: block)"
    )
    parser.add_argument(
        "-s", "--send",
        metavar="TEXT",
        help="Queue TEXT and run a session"
    )
    parser.add_argument(
        "-c", "--check",
        action="store_true",
        help="Run a session to collect MT messages"
    )
    parser.add_argument(
        "-i", "--info",
        action="store_true",
        help="Show serial identifier, signal and network time"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging (includes wire traffic)"
    )

    args = parser.parse_args()

    # Setup logging
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
    else:
        logging.basicConfig(
            level=logging.WARNING,
            format='%(levelname)s: %(message)s'
        )

    cli = RockBlockCLI(
        port=args.port,
        baudrate=args.baudrate,
        timeout=args.timeout
    )

    return cli.run(message=args.send, check=args.check, info=args.info)


if __name__ == "__main__":
    sys.exit(main())
