"""Transactions over DB-API connections, with optional named locks."""

from __future__ import annotations

from dataclasses import dataclass, fields, is_dataclass
from typing import Any, Callable, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class TxOptions:
    """Transaction options; ``None`` isolation keeps the server default."""

    isolation: str | None = None
    read_only: bool = False


DEFAULT_TX_OPTS = TxOptions()


class LockError(Exception):
    """A named lock could not be acquired."""

    def __init__(self, lock: str, duration_in_sec: int) -> None:
        super().__init__(f"fail to acquire lock: {lock}, durationInSec: {duration_in_sec}")
        self.lock = lock
        self.duration_in_sec = duration_in_sec


class ReleaseLockError(Exception):
    """A named lock could not be released."""

    def __init__(self, lock: str, duration_in_sec: int) -> None:
        super().__init__(f"fail to release lock: {lock}, durationInSec: {duration_in_sec}")
        self.lock = lock
        self.duration_in_sec = duration_in_sec


def column_names(result_type: Any) -> str:
    """Backtick-quoted column list for a dataclass type or instance."""
    if not is_dataclass(result_type):
        raise TypeError(f"{result_type!r} is not a dataclass")
    return ",".join(f"`{f.name}`" for f in fields(result_type))


def _build(result_type: Callable[..., T], description: Any, row: Any) -> T:
    names = [col[0] for col in description]
    return result_type(**dict(zip(names, row)))


class Tx:
    """A transaction bound to one connection."""

    def __init__(self, connection: Any) -> None:
        self.connection = connection

    def exec(self, query: str, *args: Any) -> Any:
        """Execute a statement that returns no rows; returns the cursor."""
        cursor = self.connection.cursor()
        cursor.execute(query, args)
        return cursor

    def query(self, result_type: Callable[..., T], query: str, *args: Any) -> list[T]:
        """Run a SELECT and build one ``result_type`` per row from column names."""
        cursor = self.connection.cursor()
        try:
            cursor.execute(query, args)
            return [_build(result_type, cursor.description, row) for row in cursor.fetchall()]
        finally:
            cursor.close()

    def query_int(self, query: str, *args: Any) -> int:
        """Run a SELECT returning a single integer, such as COUNT(*)."""
        cursor = self.connection.cursor()
        try:
            cursor.execute(query, args)
            row = cursor.fetchone()
        finally:
            cursor.close()
        if row is None:
            raise LookupError("no rows in result set")
        return int(row[0])

    def find_one(self, result_type: Callable[..., T], table_name: str, where_sql: str, *args: Any) -> T | None:
        """Fetch one row from a table, or ``None`` when nothing matches."""
        sql = f"SELECT {column_names(result_type)} FROM `{table_name}` {where_sql}"
        cursor = self.connection.cursor()
        try:
            cursor.execute(sql, args)
            row = cursor.fetchone()
            if row is None:
                return None
            return _build(result_type, cursor.description, row)
        finally:
            cursor.close()

    def find(self, result_type: Callable[..., T], table_name: str, where_sql: str, *args: Any) -> list[T]:
        """Fetch all matching rows from a table."""
        sql = f"SELECT {column_names(result_type)} FROM `{table_name}` {where_sql}"
        return self.query(result_type, sql, *args)

    def commit(self) -> None:
        self.connection.commit()

    def rollback(self) -> None:
        self.connection.rollback()


class TxProvider:
    """Runs callables inside transactions on connections from ``connect``."""

    def __init__(self, connect: Callable[[], Any]) -> None:
        self._connect = connect

    def tx_with_opts(self, fn: Callable[[Tx], T], conn: Any, opts: TxOptions | None) -> T:
        """Run ``fn`` in a transaction; commit on success, roll back on error."""
        owned = conn is None
        connection = self._connect() if owned else conn
        try:
            trx = Tx(connection)
            self._apply_options(trx, opts)
            try:
                result = fn(trx)
            except Exception as exc:
                try:
                    trx.rollback()
                except Exception as rollback_exc:
                    raise RuntimeError(
                        f"{exc} encountered. but rollback failed: {rollback_exc}"
                    ) from rollback_exc
                raise
            trx.commit()
            return result
        finally:
            if owned:
                connection.close()

    @staticmethod
    def _apply_options(trx: Tx, opts: TxOptions | None) -> None:
        if opts is None:
            return
        if opts.isolation:
            trx.exec(f"SET TRANSACTION ISOLATION LEVEL {opts.isolation}")
        if opts.read_only:
            trx.exec("SET TRANSACTION READ ONLY")

    def tx(self, fn: Callable[[Tx], T]) -> T:
        """Run ``fn`` in a transaction with the default options."""
        return self.tx_with_opts(fn, None, DEFAULT_TX_OPTS)

    def tx_with_lock(self, lock: str, duration_in_sec: int, fn: Callable[[Tx], T]) -> T:
        """Run ``fn`` in a transaction while holding a named database lock."""
        connection = self._connect()
        try:
            try:
                acquired = self._scalar(connection, "select get_lock(?,?)", lock, duration_in_sec)
            except Exception as exc:
                raise LockError(lock, duration_in_sec) from exc
            if acquired != 1:
                raise LockError(lock, duration_in_sec)

            body_error: BaseException | None = None
            try:
                result = self.tx_with_opts(fn, connection, DEFAULT_TX_OPTS)
            except BaseException as exc:
                body_error = exc

            try:
                released = self._scalar(connection, "select release_lock(?)", lock)
            except Exception as exc:
                release_error: Exception | None = ReleaseLockError(lock, duration_in_sec)
                release_error.__cause__ = exc
            else:
                release_error = None if released == 1 else ReleaseLockError(lock, duration_in_sec)

            if release_error is not None:
                if body_error is not None:
                    raise release_error from body_error
                raise release_error
            if body_error is not None:
                raise body_error
            return result
        finally:
            connection.close()

    @staticmethod
    def _scalar(connection: Any, query: str, *args: Any) -> Any:
        cursor = connection.cursor()
        try:
            cursor.execute(query, args)
            row = cursor.fetchone()
        finally:
            cursor.close()
        return None if row is None else row[0]