from staketracker.db.repos.account_repo import AccountRepo
from staketracker.db.repos.cashout_repo import CashoutRepo

__all__ = ["AccountRepo", "CashoutRepo"]
