"""Create the project, client, task and reference data tables."""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "202610180001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    ]


def _blame():
    return [
        sa.Column("created_by", sa.String(length=80), nullable=True),
        sa.Column("updated_by", sa.String(length=80), nullable=True),
    ]


def _is_active():
    return sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true())


def upgrade():
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(length=80), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=True),
        sa.Column("role", sa.String(length=80), nullable=False, server_default="user"),
        sa.Column("name", sa.String(length=80), nullable=False),
        sa.Column("permissions", sa.JSON(), nullable=False),
        _is_active(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )
    op.create_table(
        "client",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        _is_active(),
        *_timestamps(),
        *_blame(),
        sa.PrimaryKeyConstraint("id"),
    )
    for table_name in ("project_status", "project_type"):
        op.create_table(
            table_name,
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("name", sa.String(length=80), nullable=False),
            _is_active(),
            *_timestamps(),
            sa.PrimaryKeyConstraint("id"),
        )
    op.create_table(
        "project",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("client_id", sa.Integer(), nullable=False),
        sa.Column("status_id", sa.Integer(), nullable=False),
        sa.Column("type_id", sa.Integer(), nullable=False),
        _is_active(),
        *_timestamps(),
        *_blame(),
        sa.ForeignKeyConstraint(["client_id"], ["client.id"], name="fk_project_client_id"),
        sa.ForeignKeyConstraint(["status_id"], ["project_status.id"], name="fk_project_status_id"),
        sa.ForeignKeyConstraint(["type_id"], ["project_type.id"], name="fk_project_type_id"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_project_client_id", "project", ["client_id"])
    op.create_index("ix_project_status_id", "project", ["status_id"])
    op.create_index("ix_project_type_id", "project", ["type_id"])

    op.create_table(
        "task",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("completed_date", sa.DateTime(), nullable=True),
        sa.Column("project_id", sa.Integer(), nullable=False),
        *_timestamps(),
        *_blame(),
        sa.ForeignKeyConstraint(["project_id"], ["project.id"], name="fk_task_project_id"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_task_project_id", "task", ["project_id"])

    op.create_table(
        "document",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("file_name", sa.String(length=255), nullable=True),
        *_timestamps(),
        *_blame(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "project_documents",
        sa.Column("document_id", sa.Integer(), nullable=False),
        sa.Column("project_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["document_id"], ["document.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["project_id"], ["project.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("document_id", "project_id"),
    )

    for table_name in ("payment_type", "shipment_method"):
        op.create_table(
            table_name,
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("name", sa.String(length=255), nullable=False),
            *_timestamps(),
            *_blame(),
            sa.Column("deleted_at", sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
        )


def downgrade():
    op.drop_table("shipment_method")
    op.drop_table("payment_type")
    op.drop_table("project_documents")
    op.drop_table("document")
    op.drop_index("ix_task_project_id", table_name="task")
    op.drop_table("task")
    op.drop_index("ix_project_type_id", table_name="project")
    op.drop_index("ix_project_status_id", table_name="project")
    op.drop_index("ix_project_client_id", table_name="project")
    op.drop_table("project")
    op.drop_table("project_type")
    op.drop_table("project_status")
    op.drop_table("client")
    op.drop_table("user")
