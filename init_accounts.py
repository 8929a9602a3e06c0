"""
Seed demo account holders.

Creates ``alice`` and ``bob`` with funded accounts so transfers can be tried
against a fresh development database:

    python init_accounts.py
    python init_accounts.py --transfer 2000
"""
import argparse
import asyncio

from funds_ledger.core.container import get_container
from funds_ledger.domain.identities import IdentityAlreadyExistsError
from funds_ledger.domain.transfers import TransferInput
from funds_ledger.infrastructure.database.session import init_db

DEFAULT_HOLDERS = {
    "alice": 50_000,
    "bob": 5_000,
}


async def create_default_holders() -> dict[str, str]:
    """Create the demo identities, skipping ones that already exist."""
    container = get_container()
    await init_db(container.engine)

    ids: dict[str, str] = {}
    async with container.session_factory() as db, db.begin():
        for username, balance_cents in DEFAULT_HOLDERS.items():
            try:
                identity = await container.identities.create_identity(
                    username,
                    db,
                    opening_balance_cents=balance_cents,
                )
                print(f"Created {username} with balance {balance_cents}")
            except IdentityAlreadyExistsError:
                identity = await container.identities.resolve_by_handle(username, db)
                print(f"{username} already exists")
            ids[username] = identity.id
    return ids


async def main(transfer_cents: int | None) -> None:
    ids = await create_default_holders()
    container = get_container()
    if transfer_cents:
        transfer = await container.transfers.transfer_with_retry(
            TransferInput(sender_id=ids["alice"], receiver_handle="bob", amount_cents=transfer_cents)
        )
        print(
            f"Transfer {transfer.reference}: {transfer.amount_cents} from alice to bob, "
            f"balance {transfer.balance_before_cents} -> {transfer.balance_after_cents}"
        )
    await container.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--transfer", type=int, default=None, help="amount in cents to move from alice to bob")
    args = parser.parse_args()
    asyncio.run(main(args.transfer))
