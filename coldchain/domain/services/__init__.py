# Domain Services - rules spanning several entities
from .equipment_domain_service import EquipmentDomainService, RentabilityCheck

__all__ = ['EquipmentDomainService', 'RentabilityCheck']
