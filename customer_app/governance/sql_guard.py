"""SQL statement guard using sqlglot AST parsing.

The store runs every read through the read_only profile so a write statement
can never slip into a listing or lookup query. Statements sqlglot cannot
parse (for example ones containing psycopg %s placeholders) are classified
with a regex fallback.
"""
import re
import logging
from enum import Enum
from typing import Optional
from dataclasses import dataclass

import sqlglot
from sqlglot import exp

logger = logging.getLogger(__name__)


class SQLStatementType(str, Enum):
    """Statement types the app issues or must recognize to refuse."""

    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    CREATE = "create"
    DROP = "drop"
    ALTER = "alter"
    TRUNCATE = "truncate"


_EXPRESSION_MAP: dict[type, SQLStatementType] = {
    exp.Select: SQLStatementType.SELECT,
    exp.Union: SQLStatementType.SELECT,
    exp.Insert: SQLStatementType.INSERT,
    exp.Update: SQLStatementType.UPDATE,
    exp.Delete: SQLStatementType.DELETE,
    exp.Create: SQLStatementType.CREATE,
    exp.Drop: SQLStatementType.DROP,
    exp.Alter: SQLStatementType.ALTER,
    exp.TruncateTable: SQLStatementType.TRUNCATE,
}

PROFILES: dict[str, set[SQLStatementType]] = {
    "read_only": {SQLStatementType.SELECT},
    "read_write": {
        SQLStatementType.SELECT,
        SQLStatementType.INSERT,
        SQLStatementType.UPDATE,
        SQLStatementType.DELETE,
        SQLStatementType.CREATE,
    },
}

_REGEX_PATTERNS = [
    (r"^SELECT\b", SQLStatementType.SELECT),
    (r"^INSERT\b", SQLStatementType.INSERT),
    (r"^UPDATE\b", SQLStatementType.UPDATE),
    (r"^DELETE\b", SQLStatementType.DELETE),
    (r"^CREATE\b", SQLStatementType.CREATE),
    (r"^DROP\b", SQLStatementType.DROP),
    (r"^ALTER\b", SQLStatementType.ALTER),
    (r"^TRUNCATE\b", SQLStatementType.TRUNCATE),
    (r"^WITH\b.*\bINSERT\b", SQLStatementType.INSERT),
    (r"^WITH\b.*\bUPDATE\b", SQLStatementType.UPDATE),
    (r"^WITH\b.*\bDELETE\b", SQLStatementType.DELETE),
    (r"^WITH\b.*\bSELECT\b", SQLStatementType.SELECT),
]


@dataclass
class SQLCheckResult:
    """Result of checking a SQL statement against a profile."""

    allowed: bool
    statement_type: Optional[SQLStatementType] = None
    error_message: Optional[str] = None


class SQLGovernor:
    """Parses SQL and enforces statement-type permissions."""

    def __init__(self, allowed_types: set[SQLStatementType]):
        self._allowed = allowed_types

    def classify(self, sql: str) -> list[SQLStatementType]:
        """Classify a SQL string into statement types, one per statement."""
        types: list[SQLStatementType] = []
        try:
            statements = sqlglot.parse(sql, dialect="postgres")
            for stmt in statements:
                if stmt is None:
                    continue
                stmt_type = self._classify_expression(stmt)
                if stmt_type is None:
                    stmt_type = self._regex_fallback(stmt.sql(dialect="postgres"))
                if stmt_type:
                    types.append(stmt_type)
        except sqlglot.errors.SqlglotError:
            stmt_type = self._regex_fallback(sql)
            if stmt_type:
                types.append(stmt_type)
            else:
                logger.warning(f"Could not parse SQL, will deny: {sql[:100]}")
        return types

    def check(self, sql: str) -> SQLCheckResult:
        """Check if SQL is allowed by the current profile."""
        types = self.classify(sql)

        if not types:
            return SQLCheckResult(
                allowed=False,
                error_message="Could not determine SQL statement type.",
            )

        for stmt_type in types:
            if stmt_type not in self._allowed:
                allowed_list = sorted(t.value for t in self._allowed)
                return SQLCheckResult(
                    allowed=False,
                    statement_type=stmt_type,
                    error_message=(
                        f"Statement type '{stmt_type.value}' is not allowed. "
                        f"Permitted types: {', '.join(allowed_list)}"
                    ),
                )

        return SQLCheckResult(
            allowed=True,
            statement_type=types[0],
        )

    def _classify_expression(
        self, node: exp.Expression
    ) -> Optional[SQLStatementType]:
        for expr_type, stmt_type in _EXPRESSION_MAP.items():
            if isinstance(node, expr_type):
                return stmt_type
        logger.debug(f"Unrecognized expression type: {type(node).__name__}")
        return None

    def _regex_fallback(self, sql: str) -> Optional[SQLStatementType]:
        stripped = sql.strip().upper()
        for pattern, stmt_type in _REGEX_PATTERNS:
            if re.match(pattern, stripped, re.DOTALL):
                return stmt_type
        return None


read_guard = SQLGovernor(PROFILES["read_only"])
write_guard = SQLGovernor(PROFILES["read_write"])
