"""Allow ``python -m tuneproxy`` to start the server."""

from tuneproxy.main import run

run()
