# Application Services - use cases over the domain and its repositories
from .dto import CreateRentalRequest, ScheduleMaintenanceRequest
from .rental_service import RentalService, RentalResult
from .maintenance_service import MaintenanceService, MaintenanceResult

__all__ = [
    'CreateRentalRequest',
    'ScheduleMaintenanceRequest',
    'RentalService',
    'RentalResult',
    'MaintenanceService',
    'MaintenanceResult',
]
