"""
Green space endpoints for API v1.

These routes expose CRUD and substring search over green spaces.
Handlers are thin: they pull the shared ``GreenSpaceService`` from the
application state, call it, and translate ``NotFoundError`` into HTTP
404.  A rejected creation is answered with 422 and the ``Rejected``
body so clients can read the reason.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from fastapi.responses import JSONResponse

from green_space_api.app.core.dependencies import get_green_space_service
from green_space_api.app.core.errors import NotFoundError
from green_space_api.app.schemas.green_space import (
    MAX_ID,
    Created,
    GreenSpace,
    GreenSpaceCount,
    GreenSpaceCreate,
    GreenSpaceLocationUpdate,
    GreenSpaceUpdate,
    Rejected,
)
from green_space_api.app.services.green_space_service import GreenSpaceService

router = APIRouter()

# status.HTTP_422_UNPROCESSABLE_ENTITY is deprecated in current Starlette
HTTP_422 = 422

SpaceId = Annotated[int, Path(ge=0, le=MAX_ID, description="Green space identifier")]


@router.post(
    "/",
    response_model=Created,
    status_code=status.HTTP_201_CREATED,
    responses={HTTP_422: {"model": Rejected}},
)
async def add_green_space(
    payload: GreenSpaceCreate,
    service: GreenSpaceService = Depends(get_green_space_service),
):
    """Create a green space.

    The id is assigned by the server.  All three fields must be
    non-empty; otherwise nothing is stored and the response carries
    ``{"status": "rejected", "reason": ...}``.
    """
    result = service.add_green_space(payload)
    if isinstance(result, Rejected):
        return JSONResponse(
            status_code=HTTP_422,
            content=result.model_dump(),
        )
    return result


@router.get("/", response_model=List[GreenSpace])
async def list_green_spaces(
    service: GreenSpaceService = Depends(get_green_space_service),
) -> List[GreenSpace]:
    """Return every green space in ascending id order."""
    return service.list_green_spaces()


@router.get("/count", response_model=GreenSpaceCount)
async def count_green_spaces(
    service: GreenSpaceService = Depends(get_green_space_service),
) -> GreenSpaceCount:
    return GreenSpaceCount(count=service.count_green_spaces())


@router.get("/search/name", response_model=List[GreenSpace])
async def search_by_name(
    q: str = Query("", description="Substring to look for (case-sensitive)"),
    service: GreenSpaceService = Depends(get_green_space_service),
) -> List[GreenSpace]:
    return service.search_by_name(q)


@router.get("/search/location", response_model=List[GreenSpace])
async def search_by_location(
    q: str = Query("", description="Substring to look for (case-sensitive)"),
    service: GreenSpaceService = Depends(get_green_space_service),
) -> List[GreenSpace]:
    return service.search_by_location(q)


@router.get("/search/description", response_model=List[GreenSpace])
async def search_by_description(
    q: str = Query("", description="Substring to look for (case-sensitive)"),
    service: GreenSpaceService = Depends(get_green_space_service),
) -> List[GreenSpace]:
    return service.search_by_description(q)


@router.get("/{space_id}", response_model=GreenSpace)
async def get_green_space(
    space_id: SpaceId,
    service: GreenSpaceService = Depends(get_green_space_service),
) -> GreenSpace:
    try:
        return service.get_green_space(space_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.msg) from e


@router.put("/{space_id}", response_model=GreenSpace)
async def update_green_space(
    payload: GreenSpaceUpdate,
    space_id: SpaceId,
    service: GreenSpaceService = Depends(get_green_space_service),
) -> GreenSpace:
    """Replace name, location and description of a green space."""
    try:
        return service.update_green_space(space_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.msg) from e


@router.patch("/{space_id}/location", response_model=GreenSpace)
async def update_green_space_location(
    payload: GreenSpaceLocationUpdate,
    space_id: SpaceId,
    service: GreenSpaceService = Depends(get_green_space_service),
) -> GreenSpace:
    """Change only the location; name and description are kept."""
    try:
        return service.update_green_space_location(space_id, payload.location)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.msg) from e


@router.delete("/{space_id}", response_model=GreenSpace)
async def delete_green_space(
    space_id: SpaceId,
    service: GreenSpaceService = Depends(get_green_space_service),
) -> GreenSpace:
    """Delete a green space permanently and return the removed record."""
    try:
        return service.delete_green_space(space_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.msg) from e
