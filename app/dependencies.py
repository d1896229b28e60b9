from fastapi import Header, HTTPException

from app.config import settings
from app.services.account_store import AccountStore

account_store = AccountStore()


async def verify_api_key(x_api_key: str = Header(default="")) -> None:
    if not settings.api_key:
        return
    if x_api_key != settings.api_key:
        raise HTTPException(status_code=403, detail="Invalid or missing API key")


def get_account_store() -> AccountStore:
    return account_store
