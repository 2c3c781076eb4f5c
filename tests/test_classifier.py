from __future__ import annotations

import pytest

from learn_note.services.classifier import Classification, classify, resolve_resource_type
from learn_note.utils.errors import ValidationFailure


def test_youtube_watch_url_becomes_video_id() -> None:
    assert classify("https://www.youtube.com/watch?v=vEROU2XtPR8") == Classification("youtube", "vEROU2XtPR8")


def test_extra_query_parameters_are_ignored() -> None:
    result = classify("https://www.youtube.com/watch?list=PL1&v=vEROU2XtPR8&t=42s")

    assert result == Classification("youtube", "vEROU2XtPR8")


def test_stored_video_id_is_not_reclassified() -> None:
    assert classify("vEROU2XtPR8") == Classification("other", "vEROU2XtPR8")


@pytest.mark.parametrize(
    "uri",
    [
        "https://youtube.com/watch?v=vEROU2XtPR8",
        "https://youtu.be/vEROU2XtPR8",
        "https://www.youtube.com/watch",
        "https://www.youtube.com/watch?v=",
        "https://example.org/watch?v=vEROU2XtPR8",
    ],
)
def test_everything_else_is_other(uri: str) -> None:
    assert classify(uri) == Classification("other", uri)


def test_resolve_without_type_classifies() -> None:
    assert resolve_resource_type("https://www.youtube.com/watch?v=abc").type == "youtube"


def test_resolve_with_other_type_keeps_uri() -> None:
    uri = "https://www.youtube.com/watch?v=abc"

    assert resolve_resource_type(uri, "other") == Classification("other", uri)


def test_resolve_youtube_type_requires_watch_url() -> None:
    with pytest.raises(ValidationFailure):
        resolve_resource_type("https://example.org", "youtube")
