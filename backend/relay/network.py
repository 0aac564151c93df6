"""Local network address discovery.

Finds the address other devices on the LAN can use to reach this host, so
record URLs and the startup banner point somewhere a phone can open.
"""
import logging
import socket

logger = logging.getLogger(__name__)

LOOPBACK_ADDRESS = "127.0.0.1"

# Any routable address works; connect() on a UDP socket sends nothing.
_PROBE_TARGET = ("10.254.254.254", 1)


def get_lan_address() -> str:
    """Return the host's LAN-facing IPv4 address.

    Falls back to hostname resolution, then to the loopback address.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.connect(_PROBE_TARGET)
        address = sock.getsockname()[0]
        if address and not address.startswith("0."):
            return address
    except OSError as e:
        logger.debug("UDP probe for LAN address failed: %s", e)
    finally:
        sock.close()

    try:
        return socket.gethostbyname(socket.gethostname())
    except OSError as e:
        logger.warning("Could not resolve host address, using loopback: %s", e)
        return LOOPBACK_ADDRESS


def build_base_url(host: str, port: int) -> str:
    """Build the ``http://host:port`` origin for a server address."""
    return f"http://{host}:{port}"
