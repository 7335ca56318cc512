import importlib.util
from datetime import datetime
from pathlib import Path

import pytest
from sqlalchemy import create_engine, select

from app import app  # noqa: F401
from database import db
from models.reference import PaymentType, ShipmentMethod

MIGRATION_PATH = (
    Path(__file__).resolve().parent.parent
    / "migrations"
    / "versions"
    / "202610180002_seed_reference_data.py"
)


def _load_migration():
    spec = importlib.util.spec_from_file_location("seed_reference_data", MIGRATION_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def engine():
    engine = create_engine("sqlite://")
    db.metadata.create_all(engine, tables=[PaymentType.__table__, ShipmentMethod.__table__])
    yield engine
    engine.dispose()


def test_seed_inserts_reference_rows(engine):
    migration = _load_migration()

    with engine.begin() as conn:
        seeded = migration.seed_reference_rows(conn)

    assert seeded == ["payment_type", "shipment_method"]
    with engine.connect() as conn:
        payment = conn.execute(select(PaymentType.__table__)).one()
        shipment = conn.execute(select(ShipmentMethod.__table__)).one()
    assert (payment.id, payment.name) == (1, "Paypal")
    assert payment.created_at == datetime(2018, 8, 26, 16, 1, 41)
    assert payment.deleted_at is None
    assert (shipment.id, shipment.name) == (1, "FedEx")
    assert shipment.updated_at == datetime(2018, 8, 26, 16, 3, 11)


def test_seed_is_idempotent_by_id(engine):
    migration = _load_migration()
    with engine.begin() as conn:
        conn.execute(PaymentType.__table__.insert().values(id=1, name="Renamed", created_at=datetime(2020, 1, 1), updated_at=datetime(2020, 1, 1)))

    with engine.begin() as conn:
        first = migration.seed_reference_rows(conn)
    with engine.begin() as conn:
        second = migration.seed_reference_rows(conn)

    assert first == ["shipment_method"]
    assert second == []
    with engine.connect() as conn:
        payments = conn.execute(select(PaymentType.__table__)).all()
        shipments = conn.execute(select(ShipmentMethod.__table__)).all()
    assert [row.name for row in payments] == ["Renamed"]
    assert len(shipments) == 1


def test_downgrade_is_a_no_op():
    migration = _load_migration()

    assert migration.downgrade() is None
