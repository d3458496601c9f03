"""
sqlweave - fluent construction of parameterized SQL.

Fragments render to (sql, args). Statements compose their fragments and
rewrite the universal `?` marker into the chosen placeholder style:

    from sqlweave import select, Eq, Or, Gt

    sql, args = (
      select("id", "name")
        .from_("users")
        .where(Or(Eq(role="admin"), Gt(karma=100)))
        .placeholder_format("dollar")
        .to_sql()
    )
    # "SELECT id, name FROM users WHERE (role = $1 OR karma > $2)", ["admin", 100]

Nothing here talks to a database; pass (sql, args) to your driver.
"""

from .builders.case import CaseBuilder, case
from .builders.delete import DeleteBuilder
from .builders.insert import InsertBuilder
from .builders.select import SelectBuilder
from .builders.statement import (
  StatementBuilder,
  delete,
  insert,
  replace,
  select,
  statement_builder,
  update,
)
from .builders.update import UpdateBuilder
from .errors import (
  CompositionError,
  DebugMismatchError,
  InvalidPredicateError,
  RenderAbort,
  SqlweaveError,
  StructuralError,
)
from .rendering.debug import debug_sql
from .rendering.expr import Alias, Concat, Expr, alias, compose, concat, expr, expr_strict
from .rendering.fragment import SQL_FALSE, SQL_TRUE, Rendered, Sqlizer
from .rendering.placeholders import (
  PlaceholderStyle,
  get_placeholder_style,
  placeholders,
  replace_placeholders,
)
from .rendering.predicates import (
  And,
  Eq,
  Gt,
  GtOrEq,
  ILike,
  Like,
  Lt,
  LtOrEq,
  NotEq,
  NotILike,
  NotLike,
  Or,
)
from .rendering.values import Valuer

__all__ = [
  # Fragments
  'Sqlizer',
  'Rendered',
  'Expr',
  'Concat',
  'Alias',
  'expr',
  'expr_strict',
  'concat',
  'alias',
  'compose',
  'SQL_TRUE',
  'SQL_FALSE',
  'Valuer',
  # Predicates
  'Eq',
  'NotEq',
  'Like',
  'NotLike',
  'ILike',
  'NotILike',
  'Lt',
  'LtOrEq',
  'Gt',
  'GtOrEq',
  'And',
  'Or',
  # Placeholders
  'PlaceholderStyle',
  'get_placeholder_style',
  'placeholders',
  'replace_placeholders',
  'debug_sql',
  # Builders
  'StatementBuilder',
  'statement_builder',
  'SelectBuilder',
  'InsertBuilder',
  'UpdateBuilder',
  'DeleteBuilder',
  'CaseBuilder',
  'select',
  'insert',
  'replace',
  'update',
  'delete',
  'case',
  # Errors
  'SqlweaveError',
  'CompositionError',
  'InvalidPredicateError',
  'StructuralError',
  'DebugMismatchError',
  'RenderAbort',
]
