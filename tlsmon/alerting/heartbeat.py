"""StatsD liveness heartbeat."""

import logging

from statsd import StatsClient

from ..config import Config

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8125
RUN_COUNTER = "runs"


def parse_address(address: str) -> tuple[str, int]:
    """Split a ``host[:port]`` address.

    IPv6 hosts are written in brackets when a port follows (``[::1]:8125``);
    an unbracketed address with several colons is taken as a bare IPv6 host.

    Raises:
        ValueError: If the host is empty or the port is not a valid number.
    """
    address = address.strip()
    port = str(DEFAULT_PORT)
    if address.startswith("["):
        host, sep, rest = address[1:].partition("]")
        if not sep or (rest and not rest.startswith(":")):
            raise ValueError(f"Malformed IPv6 StatsD address {address!r}")
        if rest:
            port = rest[1:]
    elif address.count(":") == 1:
        host, port = address.split(":")
    else:
        host = address
    if not host:
        raise ValueError(f"Missing host in StatsD address {address!r}")
    port_number = int(port)
    if not 0 < port_number < 65536:
        raise ValueError(f"Port out of range in StatsD address {address!r}")
    return host, port_number


def send_heartbeat(config: Config) -> bool:
    """Increment the run counter on the configured StatsD sink.

    Delivery is fire-and-forget; failures only disable the heartbeat.

    Args:
        config: Configuration holding the StatsD address and prefix.

    Returns:
        True if the increment was handed to the socket, False otherwise.
    """
    if not config.statsd_address:
        logger.warning("STATSD_ADDRESS not set, skipping heartbeat metric")
        return False

    try:
        host, port = parse_address(config.statsd_address)
        client = StatsClient(host=host, port=port, prefix=config.statsd_prefix, ipv6=":" in host)
        client.incr(RUN_COUNTER)
    except (OSError, ValueError) as e:
        logger.warning("Could not send heartbeat to %s: %s", config.statsd_address, e)
        return False

    logger.debug("Heartbeat sent to %s:%d", host, port)
    return True
