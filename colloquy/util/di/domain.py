"""Domain layer DI providers."""

from dishka import Scope, provide

from colloquy.config import (
    AuthSettings,
    CommentSettings,
    ModerationSettings,
    ReputationSettings,
)
from colloquy.domain.repository import (
    CommentRepository,
    ContentRepository,
    ReportRepository,
    TransactionManager,
    VoteRepository,
)
from colloquy.domain.service import (
    CommentService,
    JWTService,
    ModerationService,
    ReputationService,
    ThreadService,
)
from colloquy.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        content_repository: ContentRepository,
        transactions: TransactionManager,
        settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            content_repository=content_repository,
            transactions=transactions,
            settings=settings,
        )

    @provide
    def get_reputation_service(
        self,
        comment_repository: CommentRepository,
        vote_repository: VoteRepository,
        transactions: TransactionManager,
        settings: ReputationSettings,
    ) -> ReputationService:
        """Provide reputation domain service."""
        return ReputationService(
            comment_repository=comment_repository,
            vote_repository=vote_repository,
            transactions=transactions,
            settings=settings,
        )

    @provide
    def get_thread_service(
        self,
        comment_service: CommentService,
        reputation_service: ReputationService,
    ) -> ThreadService:
        """Provide thread (tree assembly) domain service."""
        return ThreadService(
            comment_service=comment_service,
            reputation_service=reputation_service,
        )

    @provide
    def get_moderation_service(
        self,
        comment_repository: CommentRepository,
        report_repository: ReportRepository,
        transactions: TransactionManager,
        settings: ModerationSettings,
    ) -> ModerationService:
        """Provide moderation domain service."""
        return ModerationService(
            comment_repository=comment_repository,
            report_repository=report_repository,
            transactions=transactions,
            settings=settings,
        )
