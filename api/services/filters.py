"""Filter building utilities for question search queries."""

from typing import Iterable, Optional, Union
from dataclasses import dataclass, field

from config.constants import LIST_SEPARATOR, parse_resolved


@dataclass(frozen=True)
class QuestionFilters:
    """Container for question search filter parameters.

    Every field is optional; an empty container matches all questions.
    """
    keyword: str = ""
    tag_names: frozenset[str] = field(default_factory=frozenset)
    is_resolved: Optional[bool] = None  # None = resolved and unresolved

    @classmethod
    def from_params(
        cls,
        tag: Optional[Union[str, Iterable[str]]] = None,
        is_resolved: Optional[str] = None,
        keyword: Optional[str] = None,
    ) -> "QuestionFilters":
        """Build filters from raw query parameter values."""
        return cls(
            keyword=(keyword or "").strip(),
            tag_names=parse_tag_names(tag),
            is_resolved=parse_resolved(is_resolved),
        )

    @property
    def is_empty(self) -> bool:
        """Check if no predicate is active."""
        return not self.keyword and not self.tag_names and self.is_resolved is None


def parse_tag_names(values: Optional[Union[str, Iterable[str]]]) -> frozenset[str]:
    """Parse tag parameter values into a set of tag names.

    Accepts a single comma-separated string or several of them (repeated
    parameters). Surrounding whitespace is stripped and blank names dropped.
    """
    if not values:
        return frozenset()
    if isinstance(values, str):
        values = [values]

    names = set()
    for value in values:
        for name in value.split(LIST_SEPARATOR):
            name = name.strip()
            if name:
                names.add(name)
    return frozenset(names)


def build_filter_clause(
    filters: QuestionFilters,
    table_alias: str = "q",
) -> tuple[str, list]:
    """Build WHERE clause and parameters for question filtering.

    Active predicates are combined with AND:
    - tags: question has at least one tag in the selected set
    - resolved: is_resolved equals the selected state
    - keyword: case-insensitive substring of title OR content

    Args:
        filters: Search filters.
        table_alias: SQL alias of the questions table.

    Returns:
        Tuple of (WHERE clause string, list of parameters).
    """
    conditions = []
    params = []

    if filters.tag_names:
        tag_names = sorted(filters.tag_names)
        placeholders = ", ".join(["?" for _ in tag_names])
        conditions.append(f"""
            EXISTS (
                SELECT 1 FROM question_tags qt
                JOIN tags t ON t.id = qt.tag_id
                WHERE qt.question_id = {table_alias}.id
                AND t.name IN ({placeholders})
            )
        """)
        params.extend(tag_names)

    if filters.is_resolved is not None:
        conditions.append(f"{table_alias}.is_resolved = ?")
        params.append(filters.is_resolved)

    if filters.keyword:
        # contains() matches literally, so % and _ in the keyword need no escaping.
        # Both sides are lowercased by DuckDB so they share one case mapping.
        conditions.append(
            f"(contains(lower({table_alias}.title), lower(?))"
            f" OR contains(lower({table_alias}.content), lower(?)))"
        )
        params.extend([filters.keyword, filters.keyword])

    where_clause = " AND ".join(conditions) if conditions else "1=1"
    return where_clause, params


def build_search_query(
    where_clause: str = "1=1",
    table_alias: str = "q",
    limit: Optional[int] = None,
) -> str:
    """Build the question SELECT, newest first.

    Args:
        where_clause: WHERE conditions.
        table_alias: Table alias.
        limit: Optional row limit.

    Returns:
        SQL query string.
    """
    limit_clause = f"LIMIT {int(limit)}" if limit is not None else ""
    return f"""
        SELECT {table_alias}.id, {table_alias}.title, {table_alias}.content,
               {table_alias}.created_at, {table_alias}.is_resolved
        FROM questions {table_alias}
        WHERE {where_clause}
        ORDER BY {table_alias}.created_at DESC, {table_alias}.id DESC
        {limit_clause}
    """


def build_tags_query(question_count: int) -> str:
    """Build the query fetching tags for a batch of question ids.

    Args:
        question_count: Number of id placeholders to generate.

    Returns:
        SQL query string selecting (question_id, tag_id, tag_name).
    """
    placeholders = ", ".join(["?" for _ in range(question_count)])
    return f"""
        SELECT qt.question_id, t.id, t.name
        FROM question_tags qt
        JOIN tags t ON t.id = qt.tag_id
        WHERE qt.question_id IN ({placeholders})
        ORDER BY t.name
    """
