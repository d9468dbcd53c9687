"""Report repository interface."""

from abc import ABC, abstractmethod
from typing import List

from colloquy.domain.model.report import Report, ReportedComment
from colloquy.domain.value import CommentId


class ReportRepository(ABC):
    """Repository for the append-only report log."""

    @abstractmethod
    async def save(self, report: Report) -> Report:
        """Append a report.

        Args:
            report: The report to save

        Returns:
            The saved report
        """
        pass

    @abstractmethod
    async def count_by_comment(
        self, comment_id: CommentId, distinct_reporters: bool = False
    ) -> int:
        """Count reports filed against a comment.

        Args:
            comment_id: The comment's ID
            distinct_reporters: Count reporters instead of report rows

        Returns:
            Report count
        """
        pass

    @abstractmethod
    async def find_reported(
        self,
        limit: int = 10,
        offset: int = 0,
        distinct_reporters: bool = False,
    ) -> List[ReportedComment]:
        """Find reported comments with their report counts.

        Hidden comments are included. Ordered by report count descending,
        then comment creation time descending.

        Args:
            limit: Maximum number of comments to return
            offset: Number of comments to skip
            distinct_reporters: Count reporters instead of report rows

        Returns:
            Page of reported comments
        """
        pass

    @abstractmethod
    async def count_reported(self) -> int:
        """Count comments that have at least one report.

        Returns:
            Number of reported comments
        """
        pass
