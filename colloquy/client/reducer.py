"""Client sync reducer.

Pure functions that fold confirmed server results into a locally cached
comment forest. The forest is immutable; every function returns a new forest
that shares untouched branches with the old one, or the very same object
when nothing matched.
"""

from datetime import datetime
from typing import Any, Callable, Union

from pydantic import BaseModel, ConfigDict


class CachedComment(BaseModel):
    """Comment node as cached by a client, with its loaded replies."""

    model_config = ConfigDict(frozen=True)

    comment_id: str
    content_id: str
    author_id: str
    author_handle: str
    content: str
    parent_id: str | None = None
    rating_score: int = 0
    hidden: bool = False
    created_at: datetime
    user_vote: int = 0
    replies: tuple["CachedComment", ...] = ()

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "CachedComment":
        """Build a cached node (and its loaded subtree) from an API payload."""
        return cls.model_validate(
            {
                **data,
                "replies": tuple(cls.from_api(r) for r in data.get("replies", [])),
            }
        )


Forest = tuple[CachedComment, ...]


def _update(
    nodes: Forest, comment_id: str, change: Callable[[CachedComment], CachedComment]
) -> Forest:
    """Apply ``change`` to the node with ``comment_id`` at any depth."""
    for index, node in enumerate(nodes):
        if node.comment_id == comment_id:
            replaced = change(node)
        else:
            replies = _update(node.replies, comment_id, change)
            if replies is node.replies:
                continue
            replaced = node.model_copy(update={"replies": replies})
        return nodes[:index] + (replaced,) + nodes[index + 1 :]
    return nodes


def insert_reply(forest: Forest, node: CachedComment) -> Forest:
    """Insert a newly created comment.

    A top-level comment is prepended (newest first). A reply is appended to
    its parent's loaded replies; if the parent is not in the forest the
    forest is returned unchanged.
    """
    if node.parent_id is None:
        return (node,) + forest
    return _update(
        forest,
        node.parent_id,
        lambda parent: parent.model_copy(update={"replies": parent.replies + (node,)}),
    )


def patch_vote(
    forest: Forest, comment_id: str, rating_score: int, user_vote: int
) -> Forest:
    """Set a node's confirmed rating score and the caller's vote (0 = none)."""
    return _update(
        forest,
        comment_id,
        lambda node: node.model_copy(
            update={"rating_score": rating_score, "user_vote": user_vote}
        ),
    )


def patch_hidden(forest: Forest, comment_id: str) -> Forest:
    """Mark a node hidden."""
    return _update(
        forest, comment_id, lambda node: node.model_copy(update={"hidden": True})
    )


def visible(forest: Forest) -> Forest:
    """Drop hidden nodes, and with them their subtrees, for rendering."""
    return tuple(
        node.model_copy(update={"replies": visible(node.replies)})
        for node in forest
        if not node.hidden
    )


class ReplyCreated(BaseModel):
    """Server confirmed a new comment."""

    model_config = ConfigDict(frozen=True)

    node: CachedComment


class VoteApplied(BaseModel):
    """Server confirmed a vote change."""

    model_config = ConfigDict(frozen=True)

    comment_id: str
    rating_score: int
    user_vote: int


class CommentHidden(BaseModel):
    """Server confirmed a comment was hidden."""

    model_config = ConfigDict(frozen=True)

    comment_id: str


Event = Union[ReplyCreated, VoteApplied, CommentHidden]


def apply(forest: Forest, event: Event) -> Forest:
    """Fold one confirmed event into the forest."""
    if isinstance(event, ReplyCreated):
        return insert_reply(forest, event.node)
    if isinstance(event, VoteApplied):
        return patch_vote(forest, event.comment_id, event.rating_score, event.user_vote)
    return patch_hidden(forest, event.comment_id)


class ThreadState(BaseModel):
    """Cached forest plus the operations still awaiting a server answer.

    Pending operations never change the forest.
    """

    model_config = ConfigDict(frozen=True)

    forest: Forest = ()
    pending: frozenset[str] = frozenset()


def begin(state: ThreadState, op_id: str) -> ThreadState:
    """Record an operation as sent."""
    return state.model_copy(update={"pending": state.pending | {op_id}})


def confirm(state: ThreadState, op_id: str, event: Event) -> ThreadState:
    """Apply a confirmed result and clear its pending operation."""
    return ThreadState(
        forest=apply(state.forest, event), pending=state.pending - {op_id}
    )


def fail(state: ThreadState, op_id: str) -> ThreadState:
    """Clear a failed or unknown-outcome operation; the forest is unchanged."""
    return state.model_copy(update={"pending": state.pending - {op_id}})
