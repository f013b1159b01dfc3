"""
Signal strength monitoring example.

Demonstrates checking signal strength and network time.
"""

import time
from rockblockpy import RockBlockModem, ParseError

# Replace with your serial port
PORT = "/dev/ttyUSB0"


def main():
    """Main function."""
    print("RockBlockPy - Signal Monitor\n")

    with RockBlockModem(port=PORT) as modem:
        modem.device.initialize()
        print("Monitoring signal strength (Ctrl+C to stop)...\n")

        try:
            while True:
                bars = modem.network.get_signal_strength()
                print(f"Signal: {'#' * bars}{'.' * (5 - bars)} ({bars}/5)")

                try:
                    network_time = modem.network.get_network_datetime()
                    print(f"Network time: {network_time.isoformat()}")
                except ParseError:
                    print("No network time yet")

                print("-" * 40)
                time.sleep(5)

        except KeyboardInterrupt:
            print("\nStopping monitor...")


if __name__ == "__main__":
    main()
