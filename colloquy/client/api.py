"""HTTP client for the comments API."""

from typing import Any

import httpx
import logfire
from pydantic import BaseModel

from colloquy.config import ClientSettings

from .reducer import CachedComment, Forest


class ClientError(Exception):
    """Base comments client error."""

    pass


class CommentsAPIError(ClientError):
    """The API answered with an error status."""

    def __init__(self, status_code: int, detail: Any):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"Comments API error {status_code}: {detail}")


class OutcomeUnknownError(ClientError):
    """A write timed out; it may or may not have been committed."""

    pass


class TransportError(ClientError):
    """The API could not be reached."""

    pass


class ForestPage(BaseModel):
    """One page of the comment forest as returned by the API."""

    content_id: str
    nodes: Forest
    total: int
    page: int
    page_size: int
    total_pages: int
    error: str | None = None


class VoteResult(BaseModel):
    """Confirmed vote change."""

    comment: CachedComment
    user_vote: int
    delta: int


class CommentsClient:
    """Async client for the comments API.

    Credentials are explicit: pass a token to act as a user, or none to
    read anonymously.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize comments client.

        Args:
            base_url: API base URL
            token: Bearer token (optional)
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests)
        """
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = httpx.AsyncClient(
            base_url=base_url, headers=headers, timeout=timeout, transport=transport
        )

    @classmethod
    def from_settings(
        cls, settings: ClientSettings, token: str | None = None
    ) -> "CommentsClient":
        """Build a client from client settings."""
        return cls(settings.base_url, token=token, timeout=settings.timeout_seconds)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "CommentsClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(
        self, method: str, path: str, *, mutating: bool, **kwargs: Any
    ) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logfire.warn("Comments API timeout", method=method, path=path)
            if mutating:
                raise OutcomeUnknownError(f"{method} {path} timed out") from e
            raise TransportError(f"{method} {path} timed out") from e
        except httpx.HTTPError as e:
            logfire.error(
                "Comments API HTTP error", method=method, path=path, error=str(e)
            )
            raise TransportError(str(e)) from e

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = None
            detail = body.get("detail") if isinstance(body, dict) else response.text
            logfire.warn(
                "Comments API request rejected",
                method=method,
                path=path,
                status_code=response.status_code,
            )
            raise CommentsAPIError(response.status_code, detail)

        return response.json()

    async def list_comments(
        self,
        content_id: str,
        order: str = "recency",
        page: int = 1,
        page_size: int | None = None,
    ) -> ForestPage:
        """Fetch one page of the comment forest."""
        params: dict[str, Any] = {"order": order, "page": page}
        if page_size is not None:
            params["page_size"] = page_size
        data = await self._request(
            "GET", f"/contents/{content_id}/comments", mutating=False, params=params
        )
        return ForestPage(
            content_id=data["content_id"],
            nodes=tuple(CachedComment.from_api(c) for c in data["comments"]),
            total=data["total"],
            page=data["page"],
            page_size=data["page_size"],
            total_pages=data["total_pages"],
            error=data.get("error"),
        )

    async def list_replies(
        self, comment_id: str, order: str = "recency"
    ) -> Forest:
        """Fetch the direct replies of a comment."""
        data = await self._request(
            "GET",
            f"/comments/{comment_id}/replies",
            mutating=False,
            params={"order": order},
        )
        return tuple(CachedComment.from_api(r) for r in data["replies"])

    async def create_comment(
        self, content_id: str, content: str, parent_id: str | None = None
    ) -> CachedComment:
        """Create a comment or reply."""
        data = await self._request(
            "POST",
            f"/contents/{content_id}/comments",
            mutating=True,
            json={"content": content, "parent_id": parent_id},
        )
        return CachedComment.from_api(data["comment"])

    async def cast_vote(self, comment_id: str, value: int) -> VoteResult:
        """Cast or change the caller's vote."""
        data = await self._request(
            "PUT", f"/comments/{comment_id}/vote", mutating=True, json={"value": value}
        )
        return VoteResult.model_validate(data)

    async def remove_vote(self, comment_id: str) -> VoteResult:
        """Remove the caller's vote."""
        data = await self._request(
            "DELETE", f"/comments/{comment_id}/vote", mutating=True
        )
        return VoteResult.model_validate(data)

    async def report(self, comment_id: str, reason: str) -> dict[str, Any]:
        """Report a comment; returns the confirmation payload."""
        return await self._request(
            "POST",
            f"/comments/{comment_id}/reports",
            mutating=True,
            json={"reason": reason},
        )

    async def hide(self, comment_id: str) -> CachedComment:
        """Hide a comment (moderators only)."""
        data = await self._request(
            "PUT", f"/moderation/comments/{comment_id}/hide", mutating=True
        )
        return CachedComment.from_api(data["comment"])
