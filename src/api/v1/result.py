from fastapi import APIRouter, Depends

from src.core.auth_middleware import get_current_user
from src.models.enums import UserRoleEnum
from src.schemas.req.result import ResultSubmitDTO
from src.services.result import ResultService

result_router = APIRouter()


@result_router.post("/")
async def submit_result(
    payload: ResultSubmitDTO,
    result_service: ResultService = Depends(ResultService),
    token: dict = Depends(get_current_user),
):
    """Сдать квиз: оценка на сервере и сохранение результата"""
    result = await result_service.submit(token.get("sub"), payload)
    return {"success": True, "result": result, "message": "Quiz result saved successfully"}


@result_router.get("/")
async def get_my_results(
    result_service: ResultService = Depends(ResultService),
    token: dict = Depends(get_current_user),
):
    return {"results": await result_service.get_user_results(token.get("sub"))}


@result_router.get("/recent")
async def get_recent_results(
    result_service: ResultService = Depends(ResultService),
    token: dict = Depends(get_current_user),
):
    return {"attempts": await result_service.get_recent_results(token.get("sub"))}


@result_router.get("/{result_id}")
async def get_result(
    result_id: str,
    result_service: ResultService = Depends(ResultService),
    token: dict = Depends(get_current_user),
):
    is_admin = token.get("role") == UserRoleEnum.ADMIN.value
    return {"result": await result_service.get_result(result_id, token.get("sub"), is_admin)}
