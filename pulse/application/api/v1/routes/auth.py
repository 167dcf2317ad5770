"""Auth routes for the calling identity."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from pulse.domain.auth.query.user import PrincipalDetail, WhoAmI, WhoAmIHandler

router = APIRouter(prefix="/auth", tags=["Auth"], route_class=DishkaRoute)


@router.get("/me", response_model=PrincipalDetail)
async def who_am_i(handler: FromDishka[WhoAmIHandler]) -> PrincipalDetail:
    """Return the authenticated user and their grants."""
    return await handler.run(WhoAmI())
