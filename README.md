# gola

`gola` provides the runtime pieces that a table-oriented database access
layer needs, together with the file-handling side of generating such a
layer. It has no dependencies beyond the standard library.

- **`gola.types`** – the `Ops` enumeration of where-clause operators and the
  `RowStruct` mixin for dataclass rows.
- **`gola.tx`** – transactions over DB-API connections: the `Tx` wrapper,
  `TxProvider`, which runs a function inside a transaction and commits or
  rolls back for you, and transactions held under a named lock.
- **`gola.codegen`** – resolving the output directory, writing generated
  files per table and for the package, and showing readable context when
  generated source fails to compile.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Row types and operators

`Ops` is an `IntEnum` with the members `INIT`, `EQUAL`, `IN`, `GREATER`,
`SMALLER` and `RANGE`; its `symbol` property gives the SQL spelling
(`""`, `"="`, `"in"`, `">"`, `"<"`, `"< ? <"`).

`RowStruct` is a mixin for dataclasses. `column_names()` returns the field
names, backtick-quoted and comma-separated (for example `` `id`,`name` ``),
and `values()` returns the field values as a tuple in the same order.
Calling either on something that is not a dataclass raises `TypeError`.

## Transactions

`TxProvider` takes a callable that returns a new DB-API connection. `tx`
opens a connection, runs your function with a `Tx`, commits if the function
returns normally and rolls back if it raises, letting the exception
propagate; the connection is closed afterwards. The function's return value
is returned from `tx`.

```python
import sqlite3
from dataclasses import dataclass

from gola.tx import TxProvider


@dataclass
class User:
    id: int = 0
    name: str = ""


DB_PATH = "example.db"

with sqlite3.connect(DB_PATH) as setup:
    setup.execute("CREATE TABLE IF NOT EXISTS users (id INTEGER PRIMARY KEY, name TEXT)")

provider = TxProvider(lambda: sqlite3.connect(DB_PATH))


def add_users(tx):
    tx.exec("INSERT INTO users (id, name) VALUES (?, ?)", 1, "Ann")
    tx.exec("INSERT INTO users (id, name) VALUES (?, ?)", 2, "Bob")
    return tx.find(User, "users", "WHERE id > ?", 0)


users = provider.tx(add_users)
```

Inside a transaction, `Tx` offers:

- `exec(query, *args)` – run a statement and return the cursor;
- `query(result_type, query, *args)` – fetch rows, building one
  `result_type` per row with the result's column names as keyword arguments;
- `query_int(query, *args)` – fetch a single integer, such as a count;
  raises `LookupError` when there is no row;
- `find_one(result_type, table_name, where_sql, *args)` – fetch one row from
  the table, or `None` when no row matches;
- `find(result_type, table_name, where_sql, *args)` – fetch every matching
  row;
- `commit()` and `rollback()`.

`find_one` and `find` select the columns given by
`column_names(result_type)`, which takes a dataclass type or instance.

`tx_with_opts(fn, conn, opts)` is `tx` with explicit `TxOptions` and,
optionally, a connection of your own (pass `None` to open one from the
provider; a connection you pass in is not closed). `TxOptions(isolation=...,
read_only=...)` issues `SET TRANSACTION ISOLATION LEVEL ...` and
`SET TRANSACTION READ ONLY` before the function runs; the defaults issue
nothing. If rolling back fails after an error, a `RuntimeError` naming both
failures is raised.

### Named locks

On servers that support `get_lock` / `release_lock`,
`tx_with_lock(lock, duration_in_sec, fn)` opens a connection, takes the named
lock, runs `fn` in a transaction on that connection and releases the lock
afterwards, whether or not `fn` raised. Failing to take the lock raises
`LockError`; failing to release it raises `ReleaseLockError`, chained to any
error from `fn`. Both exceptions carry `lock` and `duration_in_sec`.

## Writing generated code

```python
from gola.codegen import resolve_output_dir, write_generated

output = resolve_output_dir("temp")

write_generated(
    "temp",
    [{"users/users.go": b"package users\n"}],
    {"testdata_goladb.go": b"package testdata\n"},
)
```

`resolve_output_dir(output, cwd=None)` uses `temp` when no output is given,
resolves a relative path against `cwd` (the working directory by default)
and returns it ending in a path separator.

`write_generated(output, table_files, package_files)` takes, for each table,
a mapping of relative path to file contents; it creates the table's folder
from the first path and writes the files into it, then writes the
package-level files to the output directory. It prints
`code generated in <folder>` and returns the paths written. If the output
directory does not exist, it raises `GenerationError`.

When generated source does not compile, `format_error_context(source,
line_num)` returns the lines within five of the failing one, each prefixed
with its number, and the failing line marked by `>>>>`.

`gola.codegen.VERSION` holds the generator version string, `"0.1.1"`.

## What this package does not do

`gola` does not read table definitions from a database or from SQL, does not
render code from templates and has no command-line program. It places files
that you have already generated and runs transactions over connections you
supply.