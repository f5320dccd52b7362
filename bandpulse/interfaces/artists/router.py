"""
FastAPI router for the artists bounded context.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas and query constraints.
Error mapping is handled by the centralized error middleware.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from bandpulse.application.artists.dtos import (
    DEFAULT_SEARCH_LIMIT,
    FollowArtistCommand,
    GetArtistQuery,
    ListFollowedArtistsQuery,
    SearchArtistsQuery,
    UnfollowArtistCommand,
    UpdateNotificationPreferenceCommand,
)
from bandpulse.application.artists.follow_artist import FollowArtistUseCase
from bandpulse.application.artists.get_artist import GetArtistUseCase
from bandpulse.application.artists.list_followed_artists import ListFollowedArtistsUseCase
from bandpulse.application.artists.search_artists import SearchArtistsUseCase
from bandpulse.application.artists.unfollow_artist import UnfollowArtistUseCase
from bandpulse.application.artists.update_notification_preference import (
    UpdateNotificationPreferenceUseCase,
)
from bandpulse.interfaces.artists.dependencies import (
    get_artist_use_case,
    get_follow_artist_use_case,
    get_list_followed_artists_use_case,
    get_search_artists_use_case,
    get_unfollow_artist_use_case,
    get_update_notification_preference_use_case,
)
from bandpulse.interfaces.artists.mappers import (
    to_artist_detail_response,
    to_artist_response,
    to_follow_response,
)
from bandpulse.interfaces.artists.schemas import (
    ARTIST_ID_MAX_LEN,
    SEARCH_LIMIT_MAX,
    SEARCH_QUERY_MAX_LEN,
    SEARCH_QUERY_MIN_LEN,
    ArtistDetailResponse,
    ArtistResponse,
    ErrorResponse,
    FollowResultResponse,
    SuccessResponse,
    UpdateNotificationPreferenceRequest,
)
from bandpulse.interfaces.auth import AuthUser, get_current_user

router = APIRouter(
    prefix="/artists",
    tags=["artists"],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
    },
)

ArtistId = Annotated[
    str, Path(min_length=1, max_length=ARTIST_ID_MAX_LEN, description="Artist store id")
]


@router.get(
    "/search",
    response_model=list[ArtistResponse],
    response_model_exclude_none=True,
    summary="Search artists",
    description="Search artists by name. Each result carries the caller's follow status.",
)
def search_artists(
    q: str = Query(
        ..., min_length=SEARCH_QUERY_MIN_LEN, max_length=SEARCH_QUERY_MAX_LEN
    ),
    limit: int = Query(DEFAULT_SEARCH_LIMIT, ge=1, le=SEARCH_LIMIT_MAX),
    user: AuthUser = Depends(get_current_user),
    use_case: SearchArtistsUseCase = Depends(get_search_artists_use_case),
) -> list[ArtistResponse]:
    """Search artists and decorate them with follow status."""
    results = use_case.execute(
        SearchArtistsQuery(user_id=user.user_id, query=q, limit=limit)
    )
    return [to_artist_response(r.artist, r.is_following) for r in results]


@router.get(
    "",
    response_model=list[ArtistResponse],
    response_model_exclude_none=True,
    summary="List followed artists",
    description="Artists the caller follows, most recently followed first.",
)
def list_followed_artists(
    user: AuthUser = Depends(get_current_user),
    use_case: ListFollowedArtistsUseCase = Depends(get_list_followed_artists_use_case),
) -> list[ArtistResponse]:
    artists = use_case.execute(ListFollowedArtistsQuery(user_id=user.user_id))
    return [to_artist_response(artist, True) for artist in artists]


@router.get(
    "/{artist_id}",
    response_model=ArtistDetailResponse,
    response_model_exclude_none=True,
    responses={404: {"model": ErrorResponse}},
    summary="Get an artist",
    description="One artist with the caller's follow status and its follower count.",
)
def get_artist(
    artist_id: ArtistId,
    user: AuthUser = Depends(get_current_user),
    use_case: GetArtistUseCase = Depends(get_artist_use_case),
) -> ArtistDetailResponse:
    detail = use_case.execute(GetArtistQuery(user_id=user.user_id, artist_id=artist_id))
    return to_artist_detail_response(
        detail.artist, detail.is_following, detail.follower_count
    )


@router.post(
    "/{artist_id}/follow",
    response_model=FollowResultResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 400: {"model": ErrorResponse}},
    summary="Follow an artist",
)
def follow_artist(
    artist_id: ArtistId,
    user: AuthUser = Depends(get_current_user),
    use_case: FollowArtistUseCase = Depends(get_follow_artist_use_case),
) -> FollowResultResponse:
    """Follow an artist with notifications enabled."""
    follow = use_case.execute(
        FollowArtistCommand(user_id=user.user_id, artist_id=artist_id)
    )
    return FollowResultResponse(follow=to_follow_response(follow))


@router.patch(
    "/{artist_id}/follow",
    response_model=FollowResultResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Update notification preference",
    description="Turn event notifications for a followed artist on or off.",
)
def update_notification_preference(
    artist_id: ArtistId,
    request: UpdateNotificationPreferenceRequest,
    user: AuthUser = Depends(get_current_user),
    use_case: UpdateNotificationPreferenceUseCase = Depends(
        get_update_notification_preference_use_case
    ),
) -> FollowResultResponse:
    follow = use_case.execute(
        UpdateNotificationPreferenceCommand(
            user_id=user.user_id,
            artist_id=artist_id,
            enabled=request.notifications_enabled,
        )
    )
    return FollowResultResponse(follow=to_follow_response(follow))


@router.delete(
    "/{artist_id}/follow",
    response_model=SuccessResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Unfollow an artist",
)
def unfollow_artist(
    artist_id: ArtistId,
    user: AuthUser = Depends(get_current_user),
    use_case: UnfollowArtistUseCase = Depends(get_unfollow_artist_use_case),
) -> SuccessResponse:
    use_case.execute(UnfollowArtistCommand(user_id=user.user_id, artist_id=artist_id))
    return SuccessResponse()
