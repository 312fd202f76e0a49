"""blinkers version information."""

__version__ = "0.3.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Version history:
# 0.1.0 - Initial release: named colors, immediate/fade commands, broadcast send
# 0.2.0 - Full mk2 command table (patterns, play loop, EEPROM, server tickle)
# 0.3.0 - Always release the interface and reattach the kernel driver after a
#         transfer, 1 s transfer timeout (was 100 ns), fade low byte is now
#         modulo 256, single-device Blinker, config file and CLI
