from __future__ import annotations

import sqlite3

from blockstyles.model.style import StyleRecord, StyleStatus
from blockstyles.store.db import Database


class StyleRepository:
    """Repository for StyleRecord persistence."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def create(self, record: StyleRecord) -> None:
        """Insert a new style record."""
        with self._db.transaction() as conn:
            conn.execute(
                """INSERT INTO block_styles
                   (id, title, slug, status, author, block_name, style_name,
                    style_slug, custom_css, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    record.id,
                    record.title,
                    record.slug,
                    record.status.value,
                    record.author,
                    record.block_name,
                    record.style_name,
                    record.style_slug,
                    record.custom_css,
                    record.created_at,
                    record.updated_at,
                ),
            )

    def get(self, style_id: str) -> StyleRecord | None:
        """Retrieve a style by ID, or None if not found."""
        row = self._db.fetch_one("SELECT * FROM block_styles WHERE id = ?", (style_id,))
        if row is None:
            return None
        return _row_to_style(row)

    def update(self, record: StyleRecord) -> None:
        """Persist every editable field of an existing record in one statement.

        ``author`` and ``created_at`` are fixed at creation and left alone.
        """
        with self._db.transaction() as conn:
            conn.execute(
                """UPDATE block_styles
                   SET title = ?, slug = ?, status = ?, block_name = ?,
                       style_name = ?, style_slug = ?, custom_css = ?, updated_at = ?
                   WHERE id = ?""",
                (
                    record.title,
                    record.slug,
                    record.status.value,
                    record.block_name,
                    record.style_name,
                    record.style_slug,
                    record.custom_css,
                    record.updated_at,
                    record.id,
                ),
            )

    def update_block(self, style_id: str, block_name: str) -> None:
        """Point a style at a different block type."""
        with self._db.transaction() as conn:
            conn.execute(
                "UPDATE block_styles SET block_name = ? WHERE id = ?",
                (block_name, style_id),
            )

    def set_status(self, style_id: str, status: StyleStatus, updated_at: str = "") -> None:
        """Move a style between draft, publish and trash."""
        with self._db.transaction() as conn:
            conn.execute(
                "UPDATE block_styles SET status = ?, updated_at = ? WHERE id = ?",
                (status.value, updated_at, style_id),
            )

    def delete(self, style_id: str) -> None:
        """Permanently delete a style."""
        with self._db.transaction() as conn:
            conn.execute("DELETE FROM block_styles WHERE id = ?", (style_id,))

    def list_all(
        self,
        status: StyleStatus | None = None,
        block_name: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[StyleRecord, ...]:
        """List styles, newest first.

        Without a status filter, trashed styles are left out.
        """
        where, params = _list_filter(status, block_name)
        rows = self._db.fetch_all(
            f"""SELECT * FROM block_styles WHERE {where}
                ORDER BY created_at DESC, id LIMIT ? OFFSET ?""",
            (*params, limit, offset),
        )
        return tuple(_row_to_style(r) for r in rows)

    def count(self, status: StyleStatus | None = None, block_name: str | None = None) -> int:
        """Number of styles :meth:`list_all` would page through."""
        where, params = _list_filter(status, block_name)
        row = self._db.fetch_one(
            f"SELECT COUNT(*) AS cnt FROM block_styles WHERE {where}", params
        )
        return row["cnt"]

    def list_published(self) -> tuple[StyleRecord, ...]:
        """All published styles, unpaginated."""
        rows = self._db.fetch_all(
            "SELECT * FROM block_styles WHERE status = ? ORDER BY created_at, id",
            (StyleStatus.PUBLISH.value,),
        )
        return tuple(_row_to_style(r) for r in rows)

    def used_block_names(self) -> tuple[str, ...]:
        """Distinct non-empty block names referenced by published styles."""
        rows = self._db.fetch_all(
            """SELECT DISTINCT block_name FROM block_styles
               WHERE status = ? AND block_name != ''
               ORDER BY block_name""",
            (StyleStatus.PUBLISH.value,),
        )
        return tuple(r["block_name"] for r in rows)

    def count_by_status(self) -> dict[str, int]:
        """Return counts of styles grouped by status."""
        rows = self._db.fetch_all(
            "SELECT status, COUNT(*) as cnt FROM block_styles GROUP BY status"
        )
        return {row["status"]: row["cnt"] for row in rows}


def _list_filter(
    status: StyleStatus | None, block_name: str | None
) -> tuple[str, tuple[object, ...]]:
    if status is None:
        clauses, params = ["status != ?"], [StyleStatus.TRASH.value]
    else:
        clauses, params = ["status = ?"], [status.value]
    if block_name:
        clauses.append("block_name = ?")
        params.append(block_name)
    return " AND ".join(clauses), tuple(params)


def _row_to_style(row: sqlite3.Row) -> StyleRecord:
    return StyleRecord(
        id=row["id"],
        title=row["title"],
        slug=row["slug"],
        status=StyleStatus(row["status"]),
        author=row["author"],
        block_name=row["block_name"],
        style_name=row["style_name"],
        style_slug=row["style_slug"],
        custom_css=row["custom_css"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
