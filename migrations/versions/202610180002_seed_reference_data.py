"""Seed the default payment type and shipment method.

Rows are inserted only when their id is absent, so the revision can be
applied to databases that were seeded by hand. Downgrade leaves the rows in
place.
"""
from __future__ import annotations

from datetime import datetime

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "202610180002_seed_reference_data"
down_revision = "202610180001_initial_schema"
branch_labels = None
depends_on = None


SEED_ROWS = {
    "payment_type": {
        "id": 1,
        "name": "Paypal",
        "created_at": datetime(2018, 8, 26, 16, 1, 41),
        "updated_at": datetime(2018, 8, 26, 16, 1, 49),
    },
    "shipment_method": {
        "id": 1,
        "name": "FedEx",
        "created_at": datetime(2018, 8, 26, 16, 3, 9),
        "updated_at": datetime(2018, 8, 26, 16, 3, 11),
    },
}


def _reference_table(name: str) -> sa.Table:
    return sa.table(
        name,
        sa.column("id", sa.Integer),
        sa.column("name", sa.String),
        sa.column("created_at", sa.DateTime),
        sa.column("updated_at", sa.DateTime),
        sa.column("created_by", sa.String),
        sa.column("updated_by", sa.String),
        sa.column("deleted_at", sa.DateTime),
    )


def seed_reference_rows(conn) -> list[str]:
    """Insert missing seed rows through ``conn``. Returns the tables written to."""

    seeded = []
    for table_name, row in SEED_ROWS.items():
        table = _reference_table(table_name)
        exists = conn.execute(sa.select(table.c.id).where(table.c.id == row["id"])).first()
        if exists is not None:
            print(f"[INFO] Skipping {table_name} id {row['id']} (already present).")
            continue
        conn.execute(
            table.insert().values(
                created_by=None,
                updated_by=None,
                deleted_at=None,
                **row,
            )
        )
        seeded.append(table_name)
        print(f"[INFO] Seeded {table_name} id {row['id']}.")
        if conn.dialect.name == "postgresql":
            # Explicit ids do not advance the serial sequence.
            conn.execute(
                sa.text(
                    f"SELECT setval(pg_get_serial_sequence('{table_name}', 'id'), "
                    f"(SELECT MAX(id) FROM {table_name}))"
                )
            )
    return seeded


def upgrade():
    seed_reference_rows(op.get_bind())


def downgrade():
    pass
