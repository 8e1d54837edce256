from datetime import date

import pytest

from timeclock.core.enums import EmployeeStatus
from timeclock.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    IdentityProviderError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from timeclock.employees.service import AuthService

TODAY = date(2024, 3, 5)


def create(service, **overrides):
    data = dict(
        current_is_admin=True,
        name="Carla Dias",
        email="Carla@Example.com",
        password="secret1",
        confirm_password="secret1",
        birth_date="15/06/1990",
        cpf="529.982.247-25",
        address={"street": "Rua A", "number": "10", "city": "Recife", "state": "PE", "zipCode": "50000-000"},
        role="Developer",
        sector="IT",
        today=TODAY,
    )
    data.update(overrides)
    return service.create_employee(**data)


def test_create_employee_provisions_account_and_roster(employee_service, employees_repo, identity):
    employee = create(employee_service)

    assert employee.email == "carla@example.com"
    assert employee.birth_date == date(1990, 6, 15)
    assert employee.cpf == "529.982.247-25"
    assert employee.address.zip_code == "50000-000"
    assert employees_repo.get_by_id(employee.employee_id) == employee
    assert identity.accounts[employee.employee_id].display_name == "Carla Dias"


def test_create_employee_requires_admin(employee_service):
    with pytest.raises(AuthorizationError):
        create(employee_service, current_is_admin=False)


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "  "},
        {"email": "not-an-email"},
        {"password": "123", "confirm_password": "123"},
        {"confirm_password": "other1"},
        {"birth_date": "01/01/2015"},
        {"birth_date": "31/02/1990"},
        {"cpf": "1234"},
        {"email": "ana@example.com"},
    ],
)
def test_create_employee_validation(employee_service, identity, overrides):
    with pytest.raises(ValidationError):
        create(employee_service, **overrides)
    assert identity.accounts == {}


def test_roster_failure_disables_new_account(employee_service, employees_repo, identity, monkeypatch):
    def boom(employee):
        raise StoreError()

    monkeypatch.setattr(employees_repo, "create", boom)

    with pytest.raises(StoreError):
        create(employee_service)
    (account,) = identity.accounts.values()
    assert account.disabled


def test_toggle_status_updates_roster_and_account(employee_service, employees_repo, identity):
    employee = create(employee_service)

    updated = employee_service.set_status(current_is_admin=True, employee_id=employee.employee_id, disabled=True)

    assert updated.status == EmployeeStatus.INACTIVE
    assert employees_repo.get_by_id(employee.employee_id).status == EmployeeStatus.INACTIVE
    assert identity.accounts[employee.employee_id].disabled


def test_update_renames_account_when_name_changes(employee_service, identity):
    employee = create(employee_service)

    updated = employee_service.update_employee(
        current_is_admin=True,
        employee_id=employee.employee_id,
        changes={"name": "Carla D. Souza", "sector": "Ops", "isAdmin": True},
    )

    assert updated.name == "Carla D. Souza"
    assert updated.sector == "Ops"
    assert updated.is_admin
    assert identity.accounts[employee.employee_id].display_name == "Carla D. Souza"


def test_update_unknown_employee(employee_service):
    with pytest.raises(NotFoundError):
        employee_service.update_employee(current_is_admin=True, employee_id="nobody", changes={"role": "x"})


def test_list_split_and_admin_lookup(employee_service):
    create(employee_service, is_admin=True)

    admins, collaborators = employee_service.list_split()

    assert [e.name for e in admins] == ["Carla Dias"]
    assert {e.employee_id for e in collaborators} == {"e1", "e2"}
    assert employee_service.is_admin_email("carla@example.com") is True
    assert employee_service.is_admin_email("ANA@example.com") is False
    with pytest.raises(NotFoundError):
        employee_service.is_admin_email("ghost@example.com")


def test_authenticate(employee_service, employees_repo, identity):
    employee = create(employee_service)
    auth = AuthService(identity, employees_repo)

    user = auth.authenticate("carla@example.com", "secret1")
    assert user.employee_id == employee.employee_id
    assert not user.is_admin

    with pytest.raises(AuthenticationError):
        auth.authenticate("carla@example.com", "wrong")

    employee_service.set_status(current_is_admin=True, employee_id=employee.employee_id, disabled=True)
    with pytest.raises(AuthenticationError):
        auth.authenticate("carla@example.com", "secret1")


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": 5},
        {"email": ["carla@example.com"]},
        {"password": 123456, "confirm_password": 123456},
        {"cpf": 52998224725},
        {"role": 1},
        {"address": ["Rua A"]},
    ],
)
def test_create_employee_rejects_non_text_input(employee_service, identity, overrides):
    with pytest.raises(ValidationError):
        create(employee_service, **overrides)
    assert identity.accounts == {}


def test_email_change_moves_the_login_account(employee_service, employees_repo, identity):
    employee = create(employee_service)
    auth = AuthService(identity, employees_repo)

    employee_service.update_employee(
        current_is_admin=True, employee_id=employee.employee_id, changes={"email": "Carla.New@example.com"}
    )

    assert identity.accounts[employee.employee_id].email == "carla.new@example.com"
    assert auth.authenticate("carla.new@example.com", "secret1").employee_id == employee.employee_id
    with pytest.raises(AuthenticationError):
        auth.authenticate("carla@example.com", "secret1")


def test_refused_account_email_change_leaves_roster_alone(employee_service, employees_repo, identity):
    employee = create(employee_service)
    # An account without a roster row still owns this email.
    identity.create_account(email="taken@example.com", password="secret1", display_name="Orphan")

    with pytest.raises(IdentityProviderError):
        employee_service.update_employee(
            current_is_admin=True, employee_id=employee.employee_id, changes={"email": "taken@example.com"}
        )
    assert employees_repo.get_by_id(employee.employee_id).email == "carla@example.com"


@pytest.mark.parametrize("changes", [{"isAdmin": "false"}, {"role": 3}, {"address": "Rua A"}, ["name"]])
def test_update_rejects_badly_typed_changes(employee_service, changes):
    with pytest.raises(ValidationError):
        employee_service.update_employee(current_is_admin=True, employee_id="e1", changes=changes)


def test_list_split_filters_and_sorts(employee_service):
    create(employee_service)

    _, by_query = employee_service.list_split(query="  it ")
    assert [e.name for e in by_query] == ["Carla Dias"]

    _, by_sector = employee_service.list_split(sort_by="sector")
    assert [e.sector for e in by_sector] == [None, "Finance", "IT"]

    with pytest.raises(ValidationError):
        employee_service.list_split(sort_by="salary")
