"""Initial schema for the business admin tables.

Tables:
- categ (job categories)
- project
- contractor
- job
- purchase_order

Foreign-key style columns (job.job_category_id, purchase_order.job_id/by_id/project_id)
are indexed but carry no constraints; referential integrity is not enforced.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c1d9a7e5b20"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

KEY_TYPE = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def _code_column() -> sa.Column:
    return sa.Column("code", KEY_TYPE, primary_key=True, autoincrement=True)


def upgrade() -> None:
    op.create_table(
        "categ",
        _code_column(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("code", name="pk_categ"),
    )

    op.create_table(
        "project",
        _code_column(),
        sa.Column("project_name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("manager", sa.Text(), nullable=True),
        sa.Column("status", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("code", name="pk_project"),
    )

    op.create_table(
        "contractor",
        _code_column(),
        sa.Column("company_name", sa.Text(), nullable=False),
        sa.Column("contact_person", sa.Text(), nullable=True),
        sa.Column("phone_number", sa.Text(), nullable=True),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("bsb", sa.Text(), nullable=True),
        sa.Column("account_no", sa.Text(), nullable=True),
        sa.Column("account_name", sa.Text(), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("code", name="pk_contractor"),
    )

    op.create_table(
        "job",
        _code_column(),
        sa.Column("job_category_id", sa.Integer(), nullable=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("code", name="pk_job"),
    )
    op.create_index("ix_job_job_category_id", "job", ["job_category_id"])

    op.create_table(
        "purchase_order",
        _code_column(),
        sa.Column("job_id", sa.Integer(), nullable=True),
        sa.Column("by_id", sa.Integer(), nullable=True),
        sa.Column("project_id", sa.Integer(), nullable=True),
        sa.Column("cost", sa.Numeric(18, 2), nullable=True),
        sa.Column("ref", sa.Text(), nullable=True),
        sa.Column("contact", sa.Text(), nullable=True),
        sa.Column("create_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("due_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("code", name="pk_purchase_order"),
    )
    op.create_index("ix_purchase_order_job_id", "purchase_order", ["job_id"])
    op.create_index("ix_purchase_order_by_id", "purchase_order", ["by_id"])
    op.create_index("ix_purchase_order_project_id", "purchase_order", ["project_id"])


def downgrade() -> None:
    op.drop_index("ix_purchase_order_project_id", table_name="purchase_order")
    op.drop_index("ix_purchase_order_by_id", table_name="purchase_order")
    op.drop_index("ix_purchase_order_job_id", table_name="purchase_order")
    op.drop_table("purchase_order")
    op.drop_index("ix_job_job_category_id", table_name="job")
    op.drop_table("job")
    op.drop_table("contractor")
    op.drop_table("project")
    op.drop_table("categ")
