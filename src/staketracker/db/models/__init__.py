from staketracker.db.models.account import Account
from staketracker.db.models.cashout import Cashout

__all__ = [
    "Account",
    "Cashout",
]
