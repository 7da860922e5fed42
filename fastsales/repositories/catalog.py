# fastsales/repositories/catalog.py

from sqlalchemy import select
from sqlalchemy.orm import Session

from fastsales.models.products import Product


class ProductCatalog:
    """Product lookup against the live catalog table."""

    def __init__(self, db: Session):
        self.db = db

    def current_name_and_price(self, product_id: str):
        # Column select, so the values come from the database and not
        # from an instance already loaded into the session
        return self.db.execute(
            select(Product.name, Product.price_cents).where(Product.id == product_id)
        ).first()
