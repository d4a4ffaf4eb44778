r"""----------------------------------------------------------------------
	Query execution helper — print, classify, execute, summarise

	`execute_sql()` is the single funnel every demo statement goes
	through:

		1. print the label, the SQL text and (if any) the parameters
		2. DDL (CREATE / DROP / USE / ALTER / SHOW) → executed as-is,
		   parameters are never bound
		   DML (everything else)                     → positional binding
		3. summarise the outcome
		     rows came back       → "N row(s) affected/returned"
		                            + first 5 rows as a grid for SELECT
		     affected-row count   → "N row(s) affected" (+ Insert ID)
		     nothing useful       → "Command executed successfully"
		4. on failure print "SQL Error" to stderr and re-raise

	Parameter-Binding Style
	  • driver style (exec_driver_sql) : VALUES (%s, %s) + tuple (x, y)
	    (PyMySQL uses %s, sqlite3 uses ?)
----------------------------------------------------------------------"""

import re
import sys
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

# 🧪 Used only for tabulated result visualization
import pandas as pd
from tabulate import tabulate

PREVIEW_LIMIT = 5

_DDL_PATTERN = re.compile(r"^\s*(CREATE|DROP|USE|ALTER|SHOW)\s+", re.IGNORECASE)

Rows = List[Dict[str, Any]]


def is_ddl(query: str) -> bool:
    """True for schema statements, which must not be parameter-bound."""
    return _DDL_PATTERN.match(query.strip()) is not None


def preview_rows(rows: Sequence[Any], limit: int = PREVIEW_LIMIT) -> Tuple[Sequence[Any], int]:
    """Split *rows* into the displayed slice and the hidden remainder count."""
    return rows[:limit], max(len(rows) - limit, 0)


def _print_table(rows: Sequence[Any], keys: List[str]) -> None:
    df = pd.DataFrame(rows, columns=keys)
    print(tabulate(df, headers="keys", tablefmt="grid"))


def error_message(err: BaseException) -> Any:
    """The driver's own error when SQLAlchemy wraps it, else *err* itself."""
    return getattr(err, "orig", None) or err


def execute_sql(
        conn, query: str,
        params: Sequence[Any] = (),
        description: str = ""
    ) -> Union[Rows, int, None]:
    """Run *query* on *conn*, echoing it and its outcome to the console.

    Returns the rows (list of dicts) for row-returning statements, the
    affected-row count for the rest, or None when the driver reports
    neither.
    """
    if description:
        print(f"\n=== {description} ===")

    print("\nSQL Query:")
    print(query)

    if len(params) > 0:
        print("\nParameters:", list(params))

    try:
        # no_parameters → cursor.execute(query) with no args, so a literal
        # '%' is never run through the driver's %-formatting
        if is_ddl(query) or len(params) == 0:
            result = conn.exec_driver_sql(query, execution_options={"no_parameters": True})
        else:
            result = conn.exec_driver_sql(query, tuple(params))

        if result.returns_rows:
            keys = list(result.keys())
            fetched = result.fetchall()
            if not fetched:
                print("\nResult: Command executed successfully")
                return []

            print(f"\nResult: {len(fetched)} row(s) affected/returned")

            # SELECT output is capped to keep the log readable
            if query.strip().upper().startswith("SELECT"):
                shown, remaining = preview_rows(fetched)
                print("\nData returned:")
                _print_table(list(shown), keys)
                if remaining:
                    print(f"... and {remaining} more rows")
            return [dict(row._mapping) for row in fetched]

        affected: Optional[int] = result.rowcount
        if affected is not None and affected >= 0:
            print(f"\nResult: {affected} row(s) affected")
            if result.lastrowid:
                print(f"Insert ID: {result.lastrowid}")
            return affected

        print("\nResult: Command executed successfully")
        return None

    except Exception as err:
        print("\nSQL Error:", error_message(err), file=sys.stderr)
        raise
