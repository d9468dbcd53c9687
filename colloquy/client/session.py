"""Client-side thread session.

Keeps the cached forest of one content item in step with the server: every
write is recorded as pending, sent, and folded into the forest only once the
server confirms it.
"""

from uuid import uuid4

import logfire
from pydantic import ValidationError

from .api import ClientError, CommentsClient, VoteResult
from .reducer import (
    CachedComment,
    CommentHidden,
    Event,
    Forest,
    ReplyCreated,
    ThreadState,
    VoteApplied,
    begin,
    confirm,
    fail,
    visible,
)


class ThreadSession:
    """Cached view of one content item's comment thread."""

    def __init__(
        self, client: CommentsClient, content_id: str, order: str = "recency"
    ) -> None:
        self.client = client
        self.content_id = content_id
        self.order = order
        self.state = ThreadState()
        self.error: str | None = None

    @property
    def forest(self) -> Forest:
        """Cached forest including hidden nodes."""
        return self.state.forest

    @property
    def visible_forest(self) -> Forest:
        """Cached forest with hidden nodes removed."""
        return visible(self.state.forest)

    async def load(self, page: int = 1, page_size: int | None = None) -> Forest:
        """Replace the cached forest with a fresh page from the server."""
        result = await self.client.list_comments(
            self.content_id, order=self.order, page=page, page_size=page_size
        )
        self.error = result.error
        self.state = self.state.model_copy(update={"forest": result.nodes})
        return self.state.forest

    async def reply(self, content: str, parent_id: str | None = None) -> CachedComment:
        """Post a comment and insert it once confirmed."""
        return await self._run(
            lambda: self.client.create_comment(self.content_id, content, parent_id),
            lambda created: ReplyCreated(node=created),
        )

    async def vote(self, comment_id: str, value: int) -> VoteResult:
        """Cast or change a vote and patch the node once confirmed."""
        return await self._run(
            lambda: self.client.cast_vote(comment_id, value), self._vote_event
        )

    async def unvote(self, comment_id: str) -> VoteResult:
        """Remove a vote and patch the node once confirmed."""
        return await self._run(
            lambda: self.client.remove_vote(comment_id), self._vote_event
        )

    async def hide(self, comment_id: str) -> CachedComment:
        """Hide a comment (moderators) and mark it once confirmed."""
        return await self._run(
            lambda: self.client.hide(comment_id),
            lambda hidden: CommentHidden(comment_id=hidden.comment_id),
        )

    @staticmethod
    def _vote_event(result: VoteResult) -> Event:
        return VoteApplied(
            comment_id=result.comment.comment_id,
            rating_score=result.comment.rating_score,
            user_vote=result.user_vote,
        )

    async def _run(self, call, to_event):
        op_id = uuid4().hex
        self.state = begin(self.state, op_id)
        try:
            result = await call()
            self.state = confirm(self.state, op_id, to_event(result))
            return result
        except ClientError as e:
            logfire.warn("Thread operation not applied", error=str(e))
            raise
        except (ValidationError, KeyError) as e:
            logfire.error("Malformed server response", error=str(e))
            raise
        finally:
            # Failed or unknown outcome: keep the forest as last confirmed
            if op_id in self.state.pending:
                self.state = fail(self.state, op_id)
