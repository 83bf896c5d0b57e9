"""initial schema: vendors, vendor_documents, users, audit_trail

Revision ID: 0001
Revises:
Create Date: 2026-10-17
"""

from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "vendors",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("client_id", sa.String(100), nullable=False),
        sa.Column("vendor_code", sa.String(50), nullable=True, unique=True),
        sa.Column("company_name", sa.String(255), nullable=False),
        sa.Column("contact_name", sa.String(255), nullable=True),
        sa.Column("contact_email", sa.String(255), nullable=True),
        sa.Column("contact_phone", sa.String(50), nullable=True),
        sa.Column("status", sa.String(50), nullable=False),
        sa.Column("review_notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_vendors_client_id", "vendors", ["client_id"])
    op.create_index("ix_vendors_company_name", "vendors", ["company_name"])
    op.create_index("ix_vendors_contact_email", "vendors", ["contact_email"])
    op.create_index("ix_vendors_status", "vendors", ["status"])
    op.create_index("ix_vendors_created_at", "vendors", ["created_at"])

    op.create_table(
        "vendor_documents",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("client_id", sa.String(100), nullable=False),
        sa.Column(
            "vendor_id", sa.String(36),
            sa.ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("doc_type", sa.String(50), nullable=False),
        sa.Column("expiry_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("file_name", sa.String(255), nullable=True),
        sa.Column("file_url", sa.String(500), nullable=True),
        sa.Column("file_size_bytes", sa.Integer(), nullable=True),
        sa.Column("mime_type", sa.String(100), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_vendor_documents_client_id", "vendor_documents", ["client_id"])
    op.create_index("ix_vendor_documents_vendor_id", "vendor_documents", ["vendor_id"])
    op.create_index("ix_vendor_documents_doc_type", "vendor_documents", ["doc_type"])
    op.create_index("ix_vendor_documents_expiry_date", "vendor_documents", ["expiry_date"])
    op.create_index("ix_vendor_documents_created_at", "vendor_documents", ["created_at"])

    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("client_id", sa.String(100), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("role", sa.String(50), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_users_client_id", "users", ["client_id"])
    op.create_index("ix_users_email", "users", ["email"])
    op.create_index("ix_users_role", "users", ["role"])
    op.create_index("ix_users_created_at", "users", ["created_at"])

    op.create_table(
        "audit_trail",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("client_id", sa.String(100), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=True),
        sa.Column("action", sa.String(100), nullable=False),
        sa.Column("entity_type", sa.String(100), nullable=False),
        sa.Column("entity_id", sa.String(36), nullable=True),
        sa.Column("payload", sa.JSON(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_audit_trail_client_id", "audit_trail", ["client_id"])
    op.create_index("ix_audit_trail_user_id", "audit_trail", ["user_id"])
    op.create_index("ix_audit_trail_action", "audit_trail", ["action"])
    op.create_index("ix_audit_trail_entity_type", "audit_trail", ["entity_type"])
    op.create_index("ix_audit_trail_entity_id", "audit_trail", ["entity_id"])
    op.create_index("ix_audit_trail_created_at", "audit_trail", ["created_at"])


def downgrade() -> None:
    op.drop_table("audit_trail")
    op.drop_table("users")
    op.drop_table("vendor_documents")
    op.drop_table("vendors")
