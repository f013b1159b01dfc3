"""
Trace callback example.

Demonstrates watching the raw AT traffic while checking the mailbox.
"""

from rockblockpy import RockBlockModem, SBDConfig, TraceEvent

# Replace with your serial port
PORT = "/dev/ttyUSB0"


def print_traffic(event: TraceEvent):
    """Print every line sent to or received from the modem."""
    print(event)


def main():
    """Main function."""
    print("RockBlockPy - Trace Callback Example\n")

    # Poll signal more often than the default
    config = SBDConfig(signal_delay=5.0)

    with RockBlockModem(port=PORT, config=config) as modem:
        modem.register_trace_callback("print", print_traffic)
        modem.device.initialize()

        outcome = modem.check_mailbox()
        print(f"\n{len(outcome.messages)} message(s) received")
        for message in outcome.messages:
            print(f"  {message.text}")


if __name__ == "__main__":
    main()
