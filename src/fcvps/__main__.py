"""Allow `python -m fcvps`."""

from .cli.main import app

app(prog_name="fc-vps")
