"""fc-vps - CLI for the Firecracker VPS management service."""

__version__ = "0.1.0"
