from fastapi import APIRouter, Depends

from readlog.deps import get_current_user, get_reading_activity_service
from readlog.models import User
from readlog.schemas.common import Envelope, MessageResponse
from readlog.schemas.reading_activity import (
    ReadingActivityCreate,
    ReadingActivityResponse,
    ReadingActivityUpdate,
)
from readlog.services.reading_activity_service import ReadingActivityService

router = APIRouter(tags=["reading-activities"])


@router.get("/userbooks/{user_book_id}/activities", response_model=Envelope[list[ReadingActivityResponse]])
async def list_activities_for_user_book(
    user_book_id: int,
    activities: ReadingActivityService = Depends(get_reading_activity_service),
    actor: User = Depends(get_current_user),
):
    result = await activities.list_for_user_book(user_book_id)
    return Envelope(message="success", data=[ReadingActivityResponse.model_validate(a) for a in result])


@router.post("/reading-activities", response_model=Envelope[ReadingActivityResponse], status_code=201)
async def create_activity(
    data: ReadingActivityCreate,
    activities: ReadingActivityService = Depends(get_reading_activity_service),
    actor: User = Depends(get_current_user),
):
    activity = await activities.log_activity(data, actor)
    return Envelope(message="Reading activity logged successfully", data=ReadingActivityResponse.model_validate(activity))


@router.get("/reading-activities/{activity_id}", response_model=Envelope[ReadingActivityResponse])
async def get_activity(
    activity_id: int,
    activities: ReadingActivityService = Depends(get_reading_activity_service),
    actor: User = Depends(get_current_user),
):
    activity = await activities.get_activity(activity_id)
    return Envelope(message="success", data=ReadingActivityResponse.model_validate(activity))


@router.put("/reading-activities/{activity_id}", response_model=Envelope[ReadingActivityResponse])
async def update_activity(
    activity_id: int,
    data: ReadingActivityUpdate,
    activities: ReadingActivityService = Depends(get_reading_activity_service),
    actor: User = Depends(get_current_user),
):
    activity = await activities.update_activity(activity_id, data, actor)
    return Envelope(message="Reading activity updated successfully", data=ReadingActivityResponse.model_validate(activity))


@router.delete("/reading-activities/{activity_id}", response_model=MessageResponse)
async def delete_activity(
    activity_id: int,
    activities: ReadingActivityService = Depends(get_reading_activity_service),
    actor: User = Depends(get_current_user),
):
    await activities.delete_activity(activity_id, actor)
    return MessageResponse(message="Reading activity deleted successfully")
