"""In-memory report repository for testing."""

from colloquy.domain.model.report import Report, ReportedComment
from colloquy.domain.repository.report import ReportRepository
from colloquy.domain.value import CommentId

from .database import InMemoryDatabase


class InMemoryReportRepository(ReportRepository):
    """In-memory implementation of ReportRepository for testing."""

    def __init__(self, database: InMemoryDatabase | None = None) -> None:
        self.database = database or InMemoryDatabase()

    def _counts(self, distinct_reporters: bool) -> dict[CommentId, int]:
        if distinct_reporters:
            reporters: dict[CommentId, set] = {}
            for report in self.database.reports:
                reporters.setdefault(report.comment_id, set()).add(report.reporter_id)
            return {cid: len(ids) for cid, ids in reporters.items()}

        counts: dict[CommentId, int] = {}
        for report in self.database.reports:
            counts[report.comment_id] = counts.get(report.comment_id, 0) + 1
        return counts

    async def save(self, report: Report) -> Report:
        """Append a report."""
        self.database.reports.append(report)
        return report

    async def count_by_comment(
        self, comment_id: CommentId, distinct_reporters: bool = False
    ) -> int:
        """Count reports filed against a comment."""
        return self._counts(distinct_reporters).get(comment_id, 0)

    async def find_reported(
        self,
        limit: int = 10,
        offset: int = 0,
        distinct_reporters: bool = False,
    ) -> list[ReportedComment]:
        """Find reported comments with their report counts (hidden included)."""
        reported = [
            ReportedComment(comment=self.database.comments[cid], report_count=count)
            for cid, count in self._counts(distinct_reporters).items()
            if cid in self.database.comments
        ]
        reported.sort(key=lambda r: r.comment.created_at, reverse=True)
        reported.sort(key=lambda r: r.report_count, reverse=True)
        return reported[offset : offset + limit]

    async def count_reported(self) -> int:
        """Count comments that have at least one report."""
        return len({r.comment_id for r in self.database.reports})
