import pytest

from coldchain.application import MaintenanceService, RentalService
from coldchain.domain.services import EquipmentDomainService
from tests.factories.entity_factories import (
    CompanyFactory,
    EquipmentFactory,
    MaintenanceFactory,
    RentalFactory,
)
from tests.fakes.memory_repositories import (
    InMemoryCompanyRepository,
    InMemoryEquipmentRepository,
    InMemoryMaintenanceRepository,
    InMemoryRentalRepository,
)


@pytest.fixture
def company_factory():
    return CompanyFactory


@pytest.fixture
def equipment_factory():
    return EquipmentFactory


@pytest.fixture
def rental_factory():
    return RentalFactory


@pytest.fixture
def maintenance_factory():
    return MaintenanceFactory


@pytest.fixture
def rental_repository():
    return InMemoryRentalRepository()


@pytest.fixture
def equipment_repository():
    return InMemoryEquipmentRepository()


@pytest.fixture
def maintenance_repository():
    return InMemoryMaintenanceRepository()


@pytest.fixture
def company_repository():
    return InMemoryCompanyRepository()


@pytest.fixture
def domain_service(equipment_repository, rental_repository):
    return EquipmentDomainService(equipment_repository, rental_repository)


@pytest.fixture
def rental_service(rental_repository, equipment_repository, domain_service):
    return RentalService(rental_repository, equipment_repository, domain_service)


@pytest.fixture
def maintenance_service(maintenance_repository, equipment_repository, domain_service):
    return MaintenanceService(maintenance_repository, equipment_repository, domain_service)
