from datetime import date

import pytest
from sqlmodel import Session, SQLModel

from clinic_admin.database import engine
from clinic_admin.exceptions import DuplicateError, UserCodeTakenError
from clinic_admin.infrastructure.persistence.sqlalchemy.repositories.appointment_repository_sql import (
    SqlAppointmentsRepository,
)
from clinic_admin.infrastructure.persistence.sqlalchemy.repositories.medication_repository_sql import (
    SqlMedicationsRepository,
)
from clinic_admin.infrastructure.persistence.sqlalchemy.repositories.patient_repository_sql import (
    SqlPatientsRepository,
)
from clinic_admin.models import Medication, utcnow


@pytest.fixture
def session():
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    with Session(engine) as s:
        yield s


def create_patient(repo, user_code="U001", email="john@example.com", name="John Smith"):
    return repo.create(user_code=user_code, name=name, age=42, gender="male", blood_group="O+",
                       email=email, number="5550100", password_hash="hash")


def test_utcnow_is_timezone_aware():
    assert utcnow().tzinfo is not None
    assert Medication(name="Aspirin", price=1.0, quantity=1).created_at.tzinfo is not None


def test_rows_get_timestamps_on_insert(session):
    repo = SqlPatientsRepository(session)
    p = create_patient(repo)
    assert p.created_at is not None
    assert p.updated_at is not None
    assert repo.list_all() == [p]


def test_update_refreshes_updated_at(session):
    repo = SqlMedicationsRepository(session)
    med = repo.create("Aspirin", 1.5, 10, None)
    updated = repo.update(med.id, {"quantity": 9})
    assert updated.quantity == 9
    assert updated.updated_at >= med.updated_at
    assert updated.created_at == med.created_at


def test_appointment_insert_and_update(session):
    repo = SqlAppointmentsRepository(session)
    appt = repo.create("p1", "John Smith", date(2024, 5, 1), "09:30", "physical")
    updated = repo.update(appt.id, {"appointment_time": "10:00"})
    assert updated.appointment_time == "10:00"
    assert updated.appointment_date == date(2024, 5, 1)


def test_duplicate_email_is_reported_as_email_conflict(session):
    repo = SqlPatientsRepository(session)
    create_patient(repo)
    with pytest.raises(DuplicateError) as exc:
        create_patient(repo, user_code="U002")
    assert not isinstance(exc.value, UserCodeTakenError)
    assert exc.value.detail == "Email already registered"
    # the session is usable again after the rollback
    assert [p.user_code for p in repo.list_all()] == ["U001"]


def test_duplicate_user_code_is_reported_as_code_conflict(session):
    repo = SqlPatientsRepository(session)
    create_patient(repo)
    with pytest.raises(UserCodeTakenError):
        create_patient(repo, email="other@example.com", name="Other")
    assert len(repo.list_all()) == 1


def test_max_user_number_ignores_gaps(session):
    repo = SqlPatientsRepository(session)
    create_patient(repo, user_code="U001", email=None)
    create_patient(repo, user_code="U007", email=None)
    assert repo.max_user_number() == 7
