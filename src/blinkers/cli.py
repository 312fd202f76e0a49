#!/usr/bin/env python3
"""
blinkers - Command Line Interface

Entry point for the blinkers package.
"""

import argparse
import logging
import sys

from blinkers.__version__ import __version__


def _setup_logging(verbose=0):
    """Configure root logging from the -v count."""
    if verbose >= 2:
        logging.basicConfig(level=logging.DEBUG, format='[%(levelname)s] %(name)s: %(message)s')
        logging.getLogger('usb').setLevel(logging.INFO)
    elif verbose == 1:
        logging.basicConfig(level=logging.INFO, format='[%(levelname)s] %(message)s')
    else:
        logging.basicConfig(level=logging.WARNING)


def _add_target_args(p):
    p.add_argument("--fade", "-f", type=int, default=None,
                   help="Fade time in ms (default: from config, 0 = immediate)")
    p.add_argument("--led", "-l", type=int, default=None,
                   help="LED index (0 = all, 1 = top, 2 = bottom)")


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="blinkers",
        description="Control blink(1) USB RGB LEDs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    blinkers count                 Number of attached devices
    blinkers list                  List attached devices
    blinkers color red             Set every device to red
    blinkers color blue --fade 500 Fade to blue over 0.5 s
    blinkers rgb 255 128 0 --led 2 Set bottom LED to orange
    blinkers off                   Turn every device off
    blinkers config --timeout 500  Persist a 500 ms transfer timeout
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v, -vv)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("count", help="Print number of attached devices")
    subparsers.add_parser("list", help="List attached devices")
    subparsers.add_parser("off", help="Turn all devices off")

    color_parser = subparsers.add_parser("color", help="Set a named color")
    color_parser.add_argument("name", help="Color name (red, green, blue, white, ...)")
    _add_target_args(color_parser)

    rgb_parser = subparsers.add_parser("rgb", help="Set an explicit RGB color")
    rgb_parser.add_argument("r", type=int)
    rgb_parser.add_argument("g", type=int)
    rgb_parser.add_argument("b", type=int)
    _add_target_args(rgb_parser)

    subparsers.add_parser("version", help="Send a firmware version request")

    config_parser = subparsers.add_parser("config", help="Show or change settings")
    config_parser.add_argument("--timeout", type=int, help="Transfer timeout in ms")
    config_parser.add_argument("--fade", type=int, help="Default fade time in ms")

    try:
        args = parser.parse_args()
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0

    if args.command is None:
        parser.print_help()
        return 0

    _setup_logging(args.verbose)

    if args.command == "count":
        return count()
    elif args.command == "list":
        return list_devices()
    elif args.command == "off":
        return send_off()
    elif args.command == "color":
        return send_color(args.name, fade=args.fade, led=args.led)
    elif args.command == "rgb":
        return send_rgb(args.r, args.g, args.b, fade=args.fade, led=args.led)
    elif args.command == "version":
        return request_version()
    elif args.command == "config":
        return configure(timeout=args.timeout, fade=args.fade)

    return 0


def count():
    """Print the number of attached blink(1) devices."""
    try:
        from blinkers.driver import Blinkers

        print(Blinkers().device_count())
        return 0
    except Exception as e:
        print(f"Error: {e}")
        return 1


def list_devices():
    """List attached blink(1) devices."""
    try:
        from blinkers.device_usb import describe
        from blinkers.driver import Blinkers

        devices = Blinkers().devices()
        if not devices:
            print("No blink(1) device detected.")
            return 1
        for i, dev in enumerate(devices, 1):
            print(f"[{i}] {describe(dev)}")
        return 0
    except Exception as e:
        print(f"Error: {e}")
        return 1


def _broadcast(message):
    """Send to every device. Returns a CLI exit status."""
    from blinkers.driver import Blinkers

    blinkers = Blinkers()
    if blinkers.device_count() == 0:
        print("No blink(1) device detected.")
        return 1
    written = blinkers.send(message)
    logging.getLogger(__name__).info("Wrote %d bytes", written)
    return 0


def _color_message(color, fade=None, led=None):
    from blinkers.conf import settings
    from blinkers.message import Fade, Immediate

    fade_ms = settings.fade_ms if fade is None else fade
    if fade_ms > 0:
        return Fade(color, fade_ms, led)
    return Immediate(color, led)


def send_off():
    """Turn every device off."""
    try:
        from blinkers.message import Off

        return _broadcast(Off())
    except Exception as e:
        print(f"Error: {e}")
        return 1


def send_color(name, fade=None, led=None):
    """Set every device to a named color."""
    try:
        from blinkers.color import NAMED_COLORS, Color

        if name.strip().lower() not in NAMED_COLORS:
            print(f"Error: Unknown color '{name}'. "
                  f"Known colors: {', '.join(sorted(NAMED_COLORS))}")
            return 1
        return _broadcast(_color_message(Color.from_name(name), fade, led))
    except Exception as e:
        print(f"Error: {e}")
        return 1


def send_rgb(r, g, b, fade=None, led=None):
    """Set every device to an explicit color."""
    try:
        from blinkers.color import Color

        return _broadcast(_color_message(Color(r, g, b), fade, led))
    except Exception as e:
        print(f"Error: {e}")
        return 1


def request_version():
    """Send a get-version report to every device."""
    try:
        from blinkers.message import GetVersion

        return _broadcast(GetVersion())
    except Exception as e:
        print(f"Error: {e}")
        return 1


def configure(timeout=None, fade=None):
    """Show settings, or persist the ones given."""
    try:
        from blinkers.conf import CONFIG_PATH, settings

        if timeout is not None:
            settings.set_timeout(timeout)
        if fade is not None:
            settings.set_fade(fade)

        print(f"Config:  {CONFIG_PATH}")
        print(f"Timeout: {settings.timeout_ms} ms")
        print(f"Fade:    {settings.fade_ms} ms")
        return 0
    except Exception as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
