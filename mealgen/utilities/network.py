"""Startup helper: the address other devices on the LAN can use to open the planner."""
import socket


def lan_address(probe_host: str = "8.8.8.8", probe_port: int = 80) -> str:
    """Best guess at this machine's LAN IP, '127.0.0.1' when there is none.

    Connecting a UDP socket only selects the outgoing interface; nothing is sent.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.connect((probe_host, probe_port))
        return str(sock.getsockname()[0])
    except OSError:
        return "127.0.0.1"
    finally:
        sock.close()
