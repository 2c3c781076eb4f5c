"""
Shapes stored rows into the public API contract.

Flat foreign keys become nested `{id, title}` parent objects, large topic
fields are only included on request, and owner ids and password hashes
never leave the server.
"""
from typing import Any, Dict, Iterable, Optional

TRUTHY = {"true", "1", "yes", "on"}
FALSY = {"false", "0", "no", "off"}


def parse_flag(value: Optional[str], default: bool = False) -> bool:
    """Interpret a query-string flag; anything unrecognised keeps the default."""
    if value is None:
        return default
    value = value.strip().lower()
    if value == "" or value in TRUTHY:
        return True
    if value in FALSY:
        return False
    return default


def parent_ref(parent_id: Optional[int], parent_title: Optional[str]) -> Optional[Dict[str, Any]]:
    # a dangling id keeps its id with a null title rather than failing the response
    if parent_id is None:
        return None
    return {"id": parent_id, "title": parent_title}


def normalize_folder(folder) -> Dict[str, Any]:
    return {
        "id": folder.id,
        "title": folder.title,
        "created_at": folder.created_at,
        "updated_at": folder.updated_at,
    }


def normalize_topic_resource(resource) -> Dict[str, Any]:
    return {
        "id": resource.id,
        "title": resource.title,
        "type": resource.type,
        "uri": resource.uri,
        "completed": resource.completed,
        "last_opened": resource.last_opened,
    }


def normalize_topic(
    topic,
    parent_title: Optional[str] = None,
    include_notebook: bool = True,
    include_resource_order: bool = True,
    resources: Optional[Iterable] = None,
) -> Dict[str, Any]:
    shaped = {
        "id": topic.id,
        "title": topic.title,
        "parent": parent_ref(topic.parent, parent_title),
        "created_at": topic.created_at,
        "updated_at": topic.updated_at,
    }
    if include_notebook:
        shaped["notebook"] = topic.notebook
    if include_resource_order:
        shaped["resource_order"] = topic.resource_order or []
    if resources is not None:
        shaped["resources"] = [normalize_topic_resource(r) for r in resources]
    return shaped


def normalize_resource(resource, parent_title: Optional[str] = None) -> Dict[str, Any]:
    return {
        "id": resource.id,
        "title": resource.title,
        "parent": parent_ref(resource.parent, parent_title),
        "uri": resource.uri,
        "type": resource.type,
        "completed": resource.completed,
        "last_opened": resource.last_opened,
    }


def normalize_user(user, include_topic_order: bool = False) -> Dict[str, Any]:
    shaped = {"id": user.id, "name": user.name, "email": user.email}
    if include_topic_order:
        shaped["topic_order"] = user.topic_order or []
    return shaped
