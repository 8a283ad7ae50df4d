"""
Mini-HIDS — Kernel Connection Table Decoder

Parses the text tables exposed at /proc/net/tcp and /proc/net/udp:

      sl  local_address rem_address   st tx_queue rx_queue tr tm->when retrnsmt   uid  timeout inode
       0: 0100007F:0277 00000000:0000 0A 00000000:00000000 00:00000000 00000000     0        0 20921 ...

Addresses are 32-bit values printed in host byte order, so on the
little-endian hosts this format is read on the four bytes are reversed
to obtain the dotted quad. Ports and states are plain hex.
"""

import string

from agent.logging_config import logger
from agent.models import ConnectionRecord, ConnectionState, Protocol

MIN_FIELDS = 10
INVALID_ADDR = "0.0.0.0"
MAX_PORT = 0xFFFF

TCP_STATES = {
    1: ConnectionState.ESTABLISHED,
    2: ConnectionState.SYN_SENT,
    3: ConnectionState.SYN_RECV,
    4: ConnectionState.FIN_WAIT1,
    5: ConnectionState.FIN_WAIT2,
    6: ConnectionState.TIME_WAIT,
    7: ConnectionState.CLOSE,
    8: ConnectionState.CLOSE_WAIT,
    9: ConnectionState.LAST_ACK,
    10: ConnectionState.LISTEN,
    11: ConnectionState.CLOSING,
}


def hex_to_ipv4(hex_addr: str) -> str:
    """
    "0100007F" -> "127.0.0.1".

    Anything that is not exactly 8 characters decodes to 0.0.0.0.
    Raises ValueError on non-hex characters.
    """
    if len(hex_addr) != 8:
        return INVALID_ADDR
    if not all(c in string.hexdigits for c in hex_addr):
        raise ValueError(f"invalid hex address: {hex_addr!r}")
    octets = [int(hex_addr[i:i + 2], 16) for i in range(0, 8, 2)]
    return ".".join(str(b) for b in reversed(octets))


def parse_port(hex_port: str) -> int:
    try:
        port = int(hex_port, 16)
    except ValueError:
        return 0
    return min(max(port, 0), MAX_PORT)


def parse_endpoint(token: str) -> tuple[str, int]:
    """Split "HEXADDR:HEXPORT" into (dotted quad, port)."""
    parts = token.split(":")
    if len(parts) != 2:
        return INVALID_ADDR, 0
    return hex_to_ipv4(parts[0]), parse_port(parts[1])


def decode_state(hex_state: str) -> ConnectionState:
    try:
        code = int(hex_state, 16)
    except ValueError:
        return ConnectionState.UNKNOWN
    return TCP_STATES.get(code, ConnectionState.UNKNOWN)


class ConnectionTableDecoder:
    """Stateless decoder for the shared TCP/UDP table format."""

    def decode(self, table_text: str, protocol: Protocol) -> list[ConnectionRecord]:
        records: list[ConnectionRecord] = []
        lines = table_text.splitlines()

        # First line is the column header.
        for line in lines[1:]:
            fields = line.split()
            if len(fields) < MIN_FIELDS:
                continue

            try:
                local_addr, local_port = parse_endpoint(fields[1])
                remote_addr, remote_port = parse_endpoint(fields[2])
            except ValueError:
                logger.debug("Skipping malformed %s row: %r", protocol.value, line)
                continue

            records.append(
                ConnectionRecord(
                    protocol=protocol,
                    local_addr=local_addr,
                    local_port=local_port,
                    remote_addr=remote_addr,
                    remote_port=remote_port,
                    state=decode_state(fields[3]),
                )
            )

        return records

    def read_table(self, path: str, protocol: Protocol) -> list[ConnectionRecord]:
        """Decode one table file. An unreadable file yields no records."""
        try:
            with open(path) as f:
                text = f.read()
        except OSError as e:
            logger.debug("Cannot read connection table %s: %s", path, e)
            return []
        return self.decode(text, protocol)

    def read_connections(self, tcp_path: str, udp_path: str) -> list[ConnectionRecord]:
        """TCP rows followed by UDP rows, in file order."""
        return (
            self.read_table(tcp_path, Protocol.TCP)
            + self.read_table(udp_path, Protocol.UDP)
        )
