"""Domain composition root for the Fable Apparels storefront.

A single Protean domain holds the catalogue, identity, ordering and feedback
areas so that checkout can read products, addresses and the cart and write
the order inside one unit of work.
"""

from protean.domain import Domain

from fable.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

fable = Domain(name="fable")
