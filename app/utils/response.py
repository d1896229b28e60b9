from typing import Any

from app.schemas.account import StoreResult


def success_response(data: Any = None, message: str | None = None) -> dict:
    body: dict = {"success": True}
    if data is not None:
        body["data"] = data
    else:
        body["message"] = message
    return body


def error_response(message: str) -> dict:
    return {"success": False, "message": message}


def result_response(result: StoreResult) -> dict:
    if not result.success:
        return error_response(result.message or "")
    data = result.data.model_dump(by_alias=True) if result.data is not None else None
    return success_response(data=data, message=result.message)
