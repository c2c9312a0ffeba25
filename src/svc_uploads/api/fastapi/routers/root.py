from fastapi import APIRouter

router = APIRouter()
ROUTER_TAG = "Status"

STATUS_MESSAGE = "API is running!"


@router.get("/")
async def status() -> dict[str, str]:
    return {"message": STATUS_MESSAGE}
