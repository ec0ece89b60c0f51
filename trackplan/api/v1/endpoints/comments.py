"""Event comments API."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from trackplan.api.v1.dependencies import (
    CanComment,
    CanView,
    IsAdmin,
    get_comment_query_service,
    get_comment_service,
)
from trackplan.application.use_cases.comments import CommentService
from trackplan.core.limiter import limit_writes
from trackplan.schemas.comment import CommentCreateRequest, CommentResponse

router = APIRouter()


@router.get("/{event_id}/comments", response_model=list[CommentResponse])
async def list_comments(
    event_id: str,
    _: CanView,
    comment_service: Annotated[CommentService, Depends(get_comment_query_service)],
):
    comments = await comment_service.list_comments(event_id)
    return [CommentResponse.model_validate(c) for c in comments]


@router.post("/{event_id}/comments", response_model=CommentResponse, status_code=201)
@limit_writes
async def add_comment(
    request: Request,
    event_id: str,
    body: CommentCreateRequest,
    current_user: CanComment,
    comment_service: Annotated[CommentService, Depends(get_comment_service)],
):
    comment = await comment_service.add_comment(event_id, body.content, current_user)
    return CommentResponse.model_validate(comment)


@router.delete("/{event_id}/comments/{comment_id}", status_code=204)
@limit_writes
async def delete_comment(
    request: Request,
    event_id: str,
    comment_id: str,
    _: IsAdmin,
    comment_service: Annotated[CommentService, Depends(get_comment_service)],
):
    await comment_service.delete_comment(event_id, comment_id)
    return Response(status_code=204)
