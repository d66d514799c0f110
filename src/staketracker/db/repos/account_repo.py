from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from staketracker.db.models.account import Account


class AccountRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, account_id: str) -> Optional[Account]:
        result = await self._session.execute(select(Account).where(Account.id == account_id))
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Account]:
        result = await self._session.execute(
            select(Account).order_by(Account.created_at.desc(), Account.id)
        )
        return list(result.scalars().all())

    async def upsert(self, account_id: str, name: Optional[str] = None) -> Account:
        """Insert the account if unseen; refresh its display name when one is given."""
        account = await self.get_by_id(account_id)
        if account is None:
            try:
                async with self._session.begin_nested():
                    account = Account(id=account_id, name=name)
                    self._session.add(account)
                return account
            except IntegrityError:
                # Concurrent insert won; fall through and update it
                account = await self.get_by_id(account_id)
                if account is None:
                    raise

        if name is not None:
            account.name = name
        await self._session.flush()
        return account

    async def get_display_names(self, account_ids: list[str]) -> dict[str, str]:
        """Map account id -> name, falling back to the id itself when no name is stored."""
        if not account_ids:
            return {}
        result = await self._session.execute(select(Account).where(Account.id.in_(account_ids)))
        names = {a.id: a.display_name for a in result.scalars().all()}
        return {account_id: names.get(account_id, account_id) for account_id in account_ids}
