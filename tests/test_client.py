from __future__ import annotations

import pytest
import requests

from comment_store.app.schemas.comment import Anchor, Comment
from comment_store.client import CommentStoreClient, diff_snapshots, new_comment_id


@pytest.fixture
def api(store_session) -> CommentStoreClient:
    return CommentStoreClient(base_url="http://localhost:3100/", session=store_session)


def test_new_comment_id_is_time_based() -> None:
    assert new_comment_id(1718000000.123) == "c-1718000000123"
    assert new_comment_id().startswith("c-")


def test_add_list_and_resolve(api: CommentStoreClient, store_session, sample_comment: dict) -> None:
    stored, error = api.add_comment(sample_comment)
    assert error is None
    assert stored == sample_comment

    comments, error = api.list_comments()
    assert (comments, error) == ([sample_comment], None)

    assert api.resolve_comment("c-1") == (True, None)
    assert api.list_comments() == ([], None)
    assert store_session.calls[0] == ("POST", "http://localhost:3100/comments")


def test_add_comment_model_uses_wire_format(api: CommentStoreClient) -> None:
    comment = Comment(
        id="c-9",
        file="/b.py",
        type="orange highlight",
        title="Typo",
        content="spelling",
        suggestion="receive",
        anchor=Anchor(start_line_number=2, start_column=3, end_line_number=2, end_column=10, text="recieve"),
    )

    stored, error = api.add_comment(comment)

    assert error is None
    assert stored["anchor"] == {
        "startLineNumber": 2,
        "startColumn": 3,
        "endLineNumber": 2,
        "endColumn": 10,
        "text": "recieve",
    }
    assert "is_suggesting" not in stored
    assert Comment.model_validate(stored) == comment


def test_comments_for_file_filters_client_side(api: CommentStoreClient, sample_comment: dict) -> None:
    other = dict(sample_comment, id="c-2", file="/b.ts")
    api.add_comment(sample_comment)
    api.add_comment(other)

    assert api.comments_for_file("/b.ts") == ([other], None)
    assert api.comments_for_file("/c.ts") == ([], None)


def test_errors_are_returned_not_raised(api: CommentStoreClient, sample_comment: dict) -> None:
    resolved, error = api.resolve_comment("nope")
    assert resolved is False
    assert error == {"status_code": 404, "message": "Comment not found."}

    stored, error = api.add_comment(dict(sample_comment, content=""))
    assert stored is None
    assert error == {"status_code": 400, "message": "Invalid comment data provided."}


def test_network_failure_is_reported() -> None:
    class BrokenSession:
        def request(self, **kwargs):
            raise requests.ConnectionError("connection refused")

    api = CommentStoreClient(session=BrokenSession())

    comments, error = api.list_comments()

    assert comments == []
    assert error == {"status_code": None, "message": "connection refused"}


def test_refresh_reports_changes_since_last_snapshot(api: CommentStoreClient, sample_comment: dict) -> None:
    api.add_comment(sample_comment)
    diff, error = api.refresh("/a.ts")
    assert error is None
    assert diff.added == [sample_comment]
    assert diff.removed == []

    unchanged, _ = api.refresh("/a.ts", diff.current)
    assert not unchanged.changed

    second = dict(sample_comment, id="c-2")
    api.add_comment(second)
    api.resolve_comment("c-1")
    later, _ = api.refresh("/a.ts", unchanged.current)
    assert later.added == [second]
    assert later.removed == ["c-1"]
    assert list(later.current) == ["c-2"]


def test_diff_treats_changed_record_as_replace() -> None:
    old = {"id": "c-1", "content": "a"}
    new = {"id": "c-1", "content": "b"}

    diff = diff_snapshots({"c-1": old}, [new])

    assert diff.added == [new]
    assert diff.removed == ["c-1"]
    assert diff.current == {"c-1": new}


def test_resolve_id_with_slash(api: CommentStoreClient, sample_comment: dict) -> None:
    api.add_comment(dict(sample_comment, id="review/c-7"))

    assert api.resolve_comment("review/c-7") == (True, None)
    assert api.list_comments() == ([], None)


def test_non_object_error_body_is_reported() -> None:
    class ListErrorSession:
        def request(self, method, url, **kwargs):
            response = requests.Response()
            response.status_code = 500
            response._content = b'["boom"]'
            response.url = url
            return response

    api = CommentStoreClient(session=ListErrorSession())

    comments, error = api.list_comments()

    assert comments == []
    assert error == {"status_code": 500, "message": "['boom']"}
