from learn_note.models.user import User
from learn_note.models.folder import Folder
from learn_note.models.topic import Topic
from learn_note.models.resource import Resource, RESOURCE_TYPES

__all__ = ["User", "Folder", "Topic", "Resource", "RESOURCE_TYPES"]
