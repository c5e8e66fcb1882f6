from models.users import User, UserRole
from models.property import Property
from models.tenant import Tenant
from models.rent_transaction import RentTransaction, TransactionStatus, PaymentMode
from models.activity_log import ActivityLog

__all__ = ['ActivityLog', 'PaymentMode', 'Property', 'RentTransaction', 'Tenant', 'TransactionStatus', 'User', 'UserRole',]
