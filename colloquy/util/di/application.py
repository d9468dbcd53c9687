"""Application layer DI providers."""

from dishka import Scope, provide

from colloquy.application.usecase.comment import (
    CreateCommentUseCase,
    GetCommentsUseCase,
    GetRepliesUseCase,
)
from colloquy.application.usecase.moderation import (
    HideCommentUseCase,
    ListReportedUseCase,
    ReportCommentUseCase,
)
from colloquy.application.usecase.vote import CastVoteUseCase, RemoveVoteUseCase
from colloquy.domain.service import (
    CommentService,
    ModerationService,
    ReputationService,
    ThreadService,
)
from colloquy.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self, thread_service: ThreadService
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(thread_service=thread_service)

    @provide(scope=Scope.REQUEST)
    def get_get_replies_use_case(
        self,
        comment_service: CommentService,
        reputation_service: ReputationService,
    ) -> GetRepliesUseCase:
        """Provide get replies use case."""
        return GetRepliesUseCase(
            comment_service=comment_service,
            reputation_service=reputation_service,
        )

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(
        self, reputation_service: ReputationService
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(reputation_service=reputation_service)

    @provide(scope=Scope.REQUEST)
    def get_remove_vote_use_case(
        self, reputation_service: ReputationService
    ) -> RemoveVoteUseCase:
        """Provide remove vote use case."""
        return RemoveVoteUseCase(reputation_service=reputation_service)

    # Moderation use cases
    @provide(scope=Scope.REQUEST)
    def get_report_comment_use_case(
        self, moderation_service: ModerationService
    ) -> ReportCommentUseCase:
        """Provide report comment use case."""
        return ReportCommentUseCase(moderation_service=moderation_service)

    @provide(scope=Scope.REQUEST)
    def get_list_reported_use_case(
        self, moderation_service: ModerationService
    ) -> ListReportedUseCase:
        """Provide list reported comments use case."""
        return ListReportedUseCase(moderation_service=moderation_service)

    @provide(scope=Scope.REQUEST)
    def get_hide_comment_use_case(
        self, moderation_service: ModerationService
    ) -> HideCommentUseCase:
        """Provide hide comment use case."""
        return HideCommentUseCase(moderation_service=moderation_service)
