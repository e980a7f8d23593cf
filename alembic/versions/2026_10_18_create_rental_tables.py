from alembic import op
import sqlalchemy as sa

revision = "3c5f1d7a9b20"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "landlords",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sqlite_autoincrement=True,
    )
    op.create_table(
        "tenants",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sqlite_autoincrement=True,
    )
    op.create_table(
        "properties",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("landlord_id", sa.Integer, sa.ForeignKey("landlords.id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("rent_fee", sa.Integer, nullable=False),
        sa.Column("availability", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("image", sa.Text),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_properties_landlord_id", "properties", ["landlord_id"])
    for table, constraint in (
        ("property_requests", "uq_property_requests_pair"),
        ("tenant_properties", "uq_tenant_properties_pair"),
    ):
        op.create_table(
            table,
            sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
            sa.Column("tenant_id", sa.Integer, sa.ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False),
            sa.Column("property_id", sa.Integer, sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False),
            sa.UniqueConstraint("tenant_id", "property_id", name=constraint),
            sqlite_autoincrement=True,
        )
        op.create_index(f"ix_{table}_tenant_id", table, ["tenant_id"])
        op.create_index(f"ix_{table}_property_id", table, ["property_id"])

def downgrade():
    op.drop_table("tenant_properties")
    op.drop_table("property_requests")
    op.drop_table("properties")
    op.drop_table("tenants")
    op.drop_table("landlords")
