"""
User endpoints.

Thin HTTP layer over ``UserService``: the routes read the request,
call the service and shape the response (status code, ``Location`` and
``X-Pagination`` headers, negotiated body).  Errors raised by the
service are rendered by the handlers in ``core.errors``.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, Request, status
from fastapi.responses import Response

from users_api.app.core.formatters import render, select_media_type
from users_api.app.schemas.user import UserDto
from users_api.app.services.pagination import PAGINATION_HEADER, build_pagination_metadata, pagination_header
from users_api.app.services.user_service import UserService


router = APIRouter()

USER_ROOT = "UserDto"
ID_ROOT = "guid"


def get_user_service(request: Request) -> UserService:
    """Return the service bound to the application's repository."""
    return request.app.state.user_service


def _user_location(request: Request, user_id: UUID) -> str:
    return str(request.url_for("get_user_by_id", user_id=str(user_id)))


@router.api_route(
    "/{user_id}",
    methods=["GET", "HEAD"],
    name="get_user_by_id",
    response_model=UserDto,
)
async def get_user_by_id(
    user_id: UUID,
    request: Request,
    service: UserService = Depends(get_user_service),
) -> Response:
    """Получить пользователя по идентификатору.

    ``HEAD`` only checks that the user exists and answers with an empty
    body.
    """
    user = await service.get_user(user_id)
    if request.method == "HEAD":
        return Response(status_code=status.HTTP_200_OK)
    return render(request, user, root_name=USER_ROOT)


@router.get("", name="get_users", response_model=List[UserDto])
async def get_users(
    request: Request,
    page_number: int = Query(1, alias="pageNumber"),
    page_size: Optional[int] = Query(None, alias="pageSize"),
    service: UserService = Depends(get_user_service),
) -> Response:
    """Получить страницу пользователей.

    - **pageNumber** — номер страницы, не меньше 1.
    - **pageSize** — размер страницы, приводится к диапазону 1..20.

    Метаданные пагинации передаются в заголовке ``X-Pagination``.
    """
    if page_size is None:
        page_size = request.app.state.settings.default_page_size
    page = await service.list_users(page_number, page_size)

    def link_for(number: int) -> str:
        url = request.url_for("get_users").include_query_params(
            pageNumber=number, pageSize=page.page_size
        )
        return str(url)

    metadata = build_pagination_metadata(page, link_for)
    return render(
        request,
        page.items,
        root_name=USER_ROOT,
        headers={PAGINATION_HEADER: pagination_header(metadata)},
    )


@router.post("", name="create_user", status_code=status.HTTP_201_CREATED)
async def create_user(
    request: Request,
    body: Optional[Dict[str, Any]] = Body(None),
    service: UserService = Depends(get_user_service),
) -> Response:
    """Создать пользователя.

    Логин обязателен и может состоять только из букв и цифр.  В ответе
    возвращается идентификатор и ссылка на созданный ресурс.
    """
    # Negotiate first so a 406 never follows a stored user.
    media_type = select_media_type(request.headers.get("accept"))
    user_id = await service.create_user(body)
    return render(
        request,
        user_id,
        root_name=ID_ROOT,
        status_code=status.HTTP_201_CREATED,
        headers={"Location": _user_location(request, user_id)},
        media_type=media_type,
    )


@router.put("/{user_id}", name="update_user")
async def update_user(
    user_id: UUID,
    request: Request,
    body: Optional[Dict[str, Any]] = Body(None),
    service: UserService = Depends(get_user_service),
) -> Response:
    """Replace a user, creating it under ``user_id`` if it does not exist.

    Answers 201 with a ``Location`` header when a user was created and
    204 when an existing one was overwritten.  The ``Accept`` header is
    checked before anything is stored, for both outcomes.
    """
    media_type = select_media_type(request.headers.get("accept"))
    stored_id, was_inserted = await service.update_or_insert_user(user_id, body)
    if not was_inserted:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return render(
        request,
        stored_id,
        root_name=ID_ROOT,
        status_code=status.HTTP_201_CREATED,
        headers={"Location": _user_location(request, stored_id)},
        media_type=media_type,
    )


@router.patch("/{user_id}", name="partially_update_user", status_code=status.HTTP_204_NO_CONTENT)
async def partially_update_user(
    user_id: UUID,
    document: Optional[List[Any]] = Body(None),
    service: UserService = Depends(get_user_service),
) -> Response:
    """Apply a JSON Patch document to ``login``, ``firstName`` and ``lastName``."""
    await service.patch_user(user_id, document)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{user_id}", name="delete_user", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID,
    service: UserService = Depends(get_user_service),
) -> Response:
    """Удалить пользователя по идентификатору."""
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
