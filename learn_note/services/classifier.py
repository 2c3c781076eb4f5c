"""
Resource type inference from a URI.

YouTube watch URLs are stored as the bare video id; everything else is
stored as given. The stored form is not re-classifiable: classifying a bare
id yields `other`.
"""
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse, parse_qs

from learn_note.utils.errors import ValidationFailure

YOUTUBE_HOST = "www.youtube.com"


@dataclass(frozen=True)
class Classification:
    type: str
    uri: str


def classify(uri: str) -> Classification:
    parsed = urlparse(uri)
    if parsed.hostname == YOUTUBE_HOST:
        video_ids = parse_qs(parsed.query).get("v")
        if video_ids and video_ids[0]:
            return Classification(type="youtube", uri=video_ids[0])
    return Classification(type="other", uri=uri)


def resolve_resource_type(uri: str, requested_type: Optional[str] = None) -> Classification:
    """Apply a client supplied type on top of classification.

    No type: infer it. `other`: store the uri untouched. `youtube`: the uri
    must actually be a YouTube watch URL.
    """
    if requested_type is None:
        return classify(uri)
    if requested_type == "other":
        return Classification(type="other", uri=uri)
    result = classify(uri)
    if result.type != "youtube":
        raise ValidationFailure("Youtube url is invalid")
    return result
