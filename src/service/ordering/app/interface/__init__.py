"""Application layer interfaces (Ports)"""

from src.service.ordering.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.ordering.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.ordering.app.interface.i_product_stock_ledger import IProductStockLedger

__all__ = [
    'IOrderCommandRepo',
    'IOrderQueryRepo',
    'IProductStockLedger',
]
