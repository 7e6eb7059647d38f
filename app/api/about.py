# About profile API routes: public read, admin partial update

from fastapi import APIRouter, Depends, HTTPException, status

from app.db_handlers import AboutDBHandler
from app.db_handlers.about import IncompleteProfileError
from app.dependencies.auth import get_current_user
from app.schemas import AboutResponse, AboutUpdate
from app.services.media_service import warn_if_untrusted_image
from app.utils.logger import setup_logger

logger = setup_logger("api.about")

router = APIRouter(prefix="/about", tags=["About"])


@router.get("", response_model=AboutResponse)
async def get_about(about_db_handler: AboutDBHandler = Depends()):
    """Return the site profile, creating a placeholder on first access."""
    try:
        profile = await about_db_handler.get_or_create_profile()
    except Exception as e:
        logger.error(f"Error in GET /about: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch about data",
        ) from e
    return AboutResponse.model_validate(profile)


@router.put(
    "",
    response_model=AboutResponse,
    dependencies=[Depends(get_current_user)],
)
async def update_about(
    update: AboutUpdate,
    about_db_handler: AboutDBHandler = Depends(),
):
    update_data = update.to_update_dict()
    warn_if_untrusted_image("profileImage", update_data.get("profile_image"))
    warn_if_untrusted_image("heroImage", update_data.get("hero_image"))

    try:
        profile = await about_db_handler.upsert_profile(update_data)
    except IncompleteProfileError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e
    except Exception as e:
        logger.error(f"Error in PUT /about: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update about data",
        ) from e
    return AboutResponse.model_validate(profile)
