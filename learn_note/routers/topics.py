from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional

from learn_note.database import get_db
from learn_note.schemas.topic import TopicCreate, TopicUpdate, TopicOut
from learn_note.schemas.user import CurrentUser
from learn_note.services.normalizer import normalize_topic, parse_flag
from learn_note.services.ownership import topics, resources
from learn_note.utils.security import get_current_user

router = APIRouter(prefix="/api/topics", tags=["Topics"])


@router.get("", response_model=List[TopicOut], response_model_exclude_unset=True)
def list_topics(
    notebooks: Optional[str] = Query(None),
    notebook: Optional[str] = Query(None),
    resource_order: Optional[str] = Query(None, alias="resourceOrder"),
    parent: Optional[int] = Query(None),
    order_by: Optional[str] = Query(None, alias="orderBy"),
    order_direction: Optional[str] = Query(None, alias="orderDirection"),
    limit: Optional[int] = Query(None),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    List the caller's topics.

    Notebooks and resource orders can be large, so they are left out unless
    asked for with `notebooks` (or `notebook`) and `resourceOrder`.
    """
    include_notebook = parse_flag(notebooks) or parse_flag(notebook)
    include_order = parse_flag(resource_order)

    rows = topics.list(
        db, user.id,
        order_by=order_by, direction=order_direction, limit=limit,
        parent_id=parent, with_parent=True,
    )
    return [
        normalize_topic(topic, folder_title, include_notebook, include_order)
        for topic, folder_title in rows
    ]


@router.get("/{topic_id}", response_model=TopicOut, response_model_exclude_unset=True)
def get_topic(
    topic_id: int,
    notebook: Optional[str] = Query(None),
    resource_order: Optional[str] = Query(None, alias="resourceOrder"),
    include_resources: Optional[str] = Query(None, alias="resources"),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Fetch one topic with its notebook, resource order and resources, most
    recently opened first. Each can be switched off with `=false`.
    """
    topic, folder_title = topics.get(db, user.id, topic_id, with_parent=True)

    children = None
    if parse_flag(include_resources, default=True):
        children = resources.list(db, user.id, order_by="lastOpened", direction="desc", parent_id=topic.id)

    return normalize_topic(
        topic,
        folder_title,
        include_notebook=parse_flag(notebook, default=True),
        include_resource_order=parse_flag(resource_order, default=True),
        resources=children,
    )


@router.post("", response_model=TopicOut, status_code=status.HTTP_201_CREATED, response_model_exclude_unset=True)
def create_topic(body: TopicCreate, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    topic = topics.create(db, user.id, body.model_dump(exclude_unset=True))
    return normalize_topic(topic, topics.parent_title(db, topic))


@router.put("/{topic_id}", response_model=TopicOut, status_code=status.HTTP_201_CREATED, response_model_exclude_unset=True)
def update_topic(
    topic_id: int,
    body: TopicUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Apply any subset of title, parent, notebook and resourceOrder. `parent: null` detaches the topic."""
    topic = topics.update(db, user.id, topic_id, body.model_dump(exclude_unset=True))
    return normalize_topic(topic, topics.parent_title(db, topic))


@router.delete("/{topic_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_topic(topic_id: int, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    """Delete a topic together with all of its resources."""
    topics.delete(db, user.id, topic_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
