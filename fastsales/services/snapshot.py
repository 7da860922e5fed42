# fastsales/services/snapshot.py

import logging
from typing import NamedTuple, Optional

from fastsales.repositories.catalog import ProductCatalog

logger = logging.getLogger(__name__)


class LineSnapshot(NamedTuple):
    product_name: Optional[str]
    price_per_item: Optional[int]


class LineItemSnapshotResolver:
    """Captures the catalog name and price written onto a sale line.

    Every write re-reads the live catalog, including updates to an existing
    line. An unknown product yields an empty snapshot and the write goes
    ahead with the dangling reference.
    """

    def __init__(self, catalog: ProductCatalog):
        self.catalog = catalog

    def resolve(self, product_id) -> LineSnapshot:
        product = self.catalog.current_name_and_price(str(product_id))

        if product is None:
            logger.warning(f"Product {product_id} not in catalog, line stored without snapshot")
            return LineSnapshot(product_name=None, price_per_item=None)

        return LineSnapshot(product_name=product.name, price_per_item=product.price_cents)
