"""PostgreSQL implementation of Report repository."""

from typing import List

from sqlalchemy import desc, distinct, func, insert, select

from colloquy.domain.model import Report, ReportedComment
from colloquy.domain.repository import ReportRepository
from colloquy.domain.value import CommentId
from colloquy.persistence.mappers import report_to_dict, row_to_comment
from colloquy.persistence.repository.base import PostgresRepository
from colloquy.persistence.tables import comments_table, reports_table


def _count_expr(distinct_reporters: bool):
    if distinct_reporters:
        return func.count(distinct(reports_table.c.reporter_id))
    return func.count(reports_table.c.id)


class PostgresReportRepository(PostgresRepository, ReportRepository):
    """PostgreSQL implementation of ReportRepository."""

    async def save(self, report: Report) -> Report:
        """Append a report."""
        stmt = insert(reports_table).values(**report_to_dict(report))
        await self._execute(stmt)
        await self.session.flush()
        return report

    async def count_by_comment(
        self, comment_id: CommentId, distinct_reporters: bool = False
    ) -> int:
        """Count reports filed against a comment."""
        stmt = select(_count_expr(distinct_reporters)).where(
            reports_table.c.comment_id == comment_id
        )
        result = await self._execute(stmt)
        return result.scalar() or 0

    async def find_reported(
        self,
        limit: int = 10,
        offset: int = 0,
        distinct_reporters: bool = False,
    ) -> List[ReportedComment]:
        """Find reported comments with their report counts (hidden included)."""
        counts = (
            select(
                reports_table.c.comment_id.label("comment_id"),
                _count_expr(distinct_reporters).label("report_count"),
            )
            .group_by(reports_table.c.comment_id)
            .subquery()
        )

        stmt = (
            select(comments_table, counts.c.report_count)
            .join(counts, counts.c.comment_id == comments_table.c.id)
            .order_by(desc(counts.c.report_count), desc(comments_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )

        result = await self._execute(stmt)
        reported = []
        for row in result.fetchall():
            data = row._asdict()
            reported.append(
                ReportedComment(
                    comment=row_to_comment(data),
                    report_count=data["report_count"],
                )
            )
        return reported

    async def count_reported(self) -> int:
        """Count comments that have at least one report."""
        stmt = select(func.count(distinct(reports_table.c.comment_id)))
        result = await self._execute(stmt)
        return result.scalar() or 0
