"""
Basic connection example.

Demonstrates connecting to a modem, setting it up and sending a message.
"""

from rockblockpy import RockBlockModem, ParseError

# Replace with your serial port
PORT = "/dev/ttyUSB0"


def main():
    """Main function."""
    print("RockBlockPy - Basic Connection Example\n")

    # Connect to modem using context manager
    # This automatically closes the modem
    with RockBlockModem(port=PORT) as modem:
        modem.device.initialize()
        print("Connected to modem!\n")

        print("=== Device Information ===")
        print(f"Serial identifier: {modem.device.get_serial_identifier()}")
        print(f"Signal: {modem.network.get_signal_strength()}/5")

        try:
            print(f"Network time: {modem.network.get_network_time()}")
        except ParseError as e:
            print(f"Network time unavailable: {e}")

        print("\n=== Sending ===")
        outcome = modem.send_message(b"Hello, World")
        print(f"Sent in {outcome.sessions} session(s)")

        for message in outcome.messages:
            print(f"Received [MTMSN {message.mt_msn}]: {message.text}")

    print("\nConnection closed.")


if __name__ == "__main__":
    main()
