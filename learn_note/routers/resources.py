from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional

from learn_note.database import get_db
from learn_note.schemas.resource import ResourceCreate, ResourceUpdate, ResourceOut
from learn_note.schemas.user import CurrentUser
from learn_note.services.classifier import resolve_resource_type
from learn_note.services.normalizer import normalize_resource
from learn_note.services.ownership import resources
from learn_note.utils.security import get_current_user

router = APIRouter(prefix="/api/resources", tags=["Resources"])


@router.get("", response_model=List[ResourceOut])
def list_resources(
    parent: Optional[int] = Query(None),
    order_by: Optional[str] = Query(None, alias="orderBy"),
    order_direction: Optional[str] = Query(None, alias="orderDirection"),
    limit: Optional[int] = Query(None),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    rows = resources.list(
        db, user.id,
        order_by=order_by, direction=order_direction, limit=limit,
        parent_id=parent, with_parent=True,
    )
    return [normalize_resource(resource, topic_title) for resource, topic_title in rows]


@router.get("/{resource_id}", response_model=ResourceOut)
def get_resource(resource_id: int, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    resource, topic_title = resources.get(db, user.id, resource_id, with_parent=True)
    return normalize_resource(resource, topic_title)


@router.post("", response_model=ResourceOut, status_code=status.HTTP_201_CREATED)
def create_resource(body: ResourceCreate, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    """
    Add a link to a topic.

    The type is inferred from the uri when not given; YouTube watch URLs
    are stored as the bare video id.
    """
    values = body.model_dump(exclude_unset=True)
    classification = resolve_resource_type(values["uri"], values.pop("type", None))
    values["uri"] = classification.uri
    values["type"] = classification.type

    resource = resources.create(db, user.id, values)
    return normalize_resource(resource, resources.parent_title(db, resource))


@router.put("/{resource_id}", response_model=ResourceOut, status_code=status.HTTP_201_CREATED)
def update_resource(
    resource_id: int,
    body: ResourceUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    values = body.model_dump(exclude_unset=True)

    if "uri" in values or "type" in values:
        uri = values.get("uri")
        if uri is None:
            stored = resources.get(db, user.id, resource_id)
            # stored youtube uris are bare ids and cannot be classified again
            if stored.type == values["type"]:
                values.pop("type")
            uri = stored.uri
        if "uri" in values or "type" in values:
            classification = resolve_resource_type(uri, values.get("type"))
            values["uri"] = classification.uri
            values["type"] = classification.type

    resource = resources.update(db, user.id, resource_id, values)
    return normalize_resource(resource, resources.parent_title(db, resource))


@router.delete("/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_resource(resource_id: int, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    resources.delete(db, user.id, resource_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
