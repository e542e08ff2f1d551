# Value Objects - Immutable domain primitives
from .money import Money, DEFAULT_CURRENCY
from .email import Email
from .phone import Phone
from .contact_info import ContactInfo
from .priority import MaintenancePriority

__all__ = ['Money', 'DEFAULT_CURRENCY', 'Email', 'Phone', 'ContactInfo', 'MaintenancePriority']
