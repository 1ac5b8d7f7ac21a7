"""
Data access layer.

Each repository groups the SQL statements for one table.  Repository
methods take an open ``sqlite3.Cursor`` so the calling service decides
where a transaction starts and ends; they never commit or close the
connection themselves.  All statements are parameterized.
"""

from .dealership_repository import DealershipRepository
from .car_model_repository import CarModelRepository
from .car_price_repository import CarPriceRepository

__all__ = ["DealershipRepository", "CarModelRepository", "CarPriceRepository"]
