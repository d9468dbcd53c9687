"""Moderation use cases."""

from .hide_comment import HideCommentRequest, HideCommentResponse, HideCommentUseCase
from .list_reported import (
    ListReportedRequest,
    ListReportedResponse,
    ListReportedUseCase,
    ReportedCommentItem,
)
from .report_comment import (
    ReportCommentRequest,
    ReportCommentResponse,
    ReportCommentUseCase,
)

__all__ = [
    "HideCommentRequest",
    "HideCommentResponse",
    "HideCommentUseCase",
    "ListReportedRequest",
    "ListReportedResponse",
    "ListReportedUseCase",
    "ReportCommentRequest",
    "ReportCommentResponse",
    "ReportCommentUseCase",
    "ReportedCommentItem",
]
