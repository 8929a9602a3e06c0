"""create identity, account and transfer tables

Revision ID: 3f9c2a7d1b64
Revises: 
Create Date: 2026-10-18 09:30:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f9c2a7d1b64"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "identities",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_identities_username", "identities", ["username"], unique=True)

    op.create_table(
        "accounts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("identity_id", sa.String(length=36), sa.ForeignKey("identities.id"), nullable=False),
        sa.Column("balance_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("currency", sa.String(length=10), nullable=False, server_default="USD"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.CheckConstraint("balance_cents >= 0", name="ck_accounts_balance_non_negative"),
    )
    op.create_index("ix_accounts_identity_id", "accounts", ["identity_id"], unique=True)

    op.create_table(
        "transfers",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("reference", sa.String(length=64), nullable=False),
        sa.Column("sender_id", sa.String(length=36), sa.ForeignKey("identities.id"), nullable=False),
        sa.Column("receiver_id", sa.String(length=36), sa.ForeignKey("identities.id"), nullable=False),
        sa.Column("sender_username", sa.String(length=50), nullable=False),
        sa.Column("receiver_username", sa.String(length=50), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("balance_before_cents", sa.Integer(), nullable=False),
        sa.Column("balance_after_cents", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("amount_cents > 0", name="ck_transfers_amount_positive"),
    )
    op.create_index("ix_transfers_reference", "transfers", ["reference"], unique=True)
    op.create_index("ix_transfers_sender_id", "transfers", ["sender_id"])
    op.create_index("ix_transfers_receiver_id", "transfers", ["receiver_id"])
    op.create_index("ix_transfers_created_at", "transfers", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_transfers_created_at", table_name="transfers")
    op.drop_index("ix_transfers_receiver_id", table_name="transfers")
    op.drop_index("ix_transfers_sender_id", table_name="transfers")
    op.drop_index("ix_transfers_reference", table_name="transfers")
    op.drop_table("transfers")

    op.drop_index("ix_accounts_identity_id", table_name="accounts")
    op.drop_table("accounts")

    op.drop_index("ix_identities_username", table_name="identities")
    op.drop_table("identities")
