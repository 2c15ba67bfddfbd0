"""Walk two requests through ``process`` under three logging setups.

Development console output, then no logger at all (nothing is printed for
the requests), then production JSON lines.
"""

from typing import TextIO

from .booking import process
from .context import Context, bind
from .telemetry import development_logger, production_logger

REQUESTS = (
    ("00001885154", "valid"),
    ("00009872658", "invalid"),
)


def run_requests(ctx: Context) -> None:
    for request_id, token in REQUESTS:
        process(ctx, request_id, token)


def main(stream: TextIO | None = None) -> None:
    """Run the demonstration, writing every record to *stream* (stderr if None)."""
    dev = development_logger(stream)
    dev.info("logging enabled:")
    run_requests(bind(Context.background(), dev))

    dev.info("<logging disabled>")
    run_requests(Context.background())
    dev.info("</logging disabled>")

    prod = production_logger(stream)
    prod.info("production")
    run_requests(bind(Context.background(), prod))
