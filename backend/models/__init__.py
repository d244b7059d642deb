from models.users import User, UserRole
from models.items import Item, ItemStatus
from models.categories import Category
from models.requests import Request, RequestStatus, RequestPriority
from models.request_items import RequestItem
from models.stock_history import StockHistory, ChangeType
from models.notifications import Notification

__all__ = ['Category', 'ChangeType', 'Item', 'ItemStatus', 'Notification', 'Request', 'RequestItem', 'RequestPriority', 'RequestStatus', 'StockHistory', 'User', 'UserRole',]
