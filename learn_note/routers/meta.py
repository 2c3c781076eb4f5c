from fastapi import APIRouter, Depends, Query

from learn_note.config import Settings, get_settings
from learn_note.schemas.user import CurrentUser, MetaOut
from learn_note.services.meta_service import get_page_meta
from learn_note.utils.errors import ValidationFailure
from learn_note.utils.security import get_current_user
from learn_note.utils.validation import check_uri

router = APIRouter(prefix="/api/meta", tags=["Meta"])


@router.get("", response_model=MetaOut)
async def page_meta(
    uri: str = Query(None),
    user: CurrentUser = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    """Look up the page title of a link before it is saved as a resource."""
    if not uri:
        raise ValidationFailure("Uri is required")
    try:
        check_uri(uri)
    except ValueError as e:
        raise ValidationFailure(str(e))
    return await get_page_meta(uri, settings.META_FETCH_TIMEOUT)
