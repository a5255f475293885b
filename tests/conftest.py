"""
Shared fixtures: an in-memory stand-in for PostgreSQL behind the psycopg2
pool/connection/cursor surface.

The fake understands exactly the statements the order path issues (matched
by identity against the repository SQL constants). Writes are applied
immediately and undone on rollback; stock decrements take a per-row lock
held until commit/rollback, like PostgreSQL's row-level write locks.
"""

import itertools
import threading
import time
from datetime import datetime, timedelta
from decimal import Decimal

import psycopg2
import pytest
from psycopg2 import pool as pg_pool

from db.connection import ConnectionPool
from repositories.inventory_repo import DECREMENT_STOCK_SQL, SELECT_STOCK_SQL
from repositories.order_repo import (
    INSERT_ORDER_ITEM_SQL,
    INSERT_ORDER_SQL,
    SELECT_ITEMS_FOR_ORDERS_SQL,
    SELECT_ORDER_BY_ID_SQL,
    SELECT_ORDERS_SQL,
)
from services.health_service import HEALTH_SQL

COMMIT = "COMMIT"


class FakeDatabase:
    """Tables plus failure injection and a log of executed statements."""

    def __init__(self):
        self.lock = threading.RLock()
        self.products: dict[int, dict] = {}
        self.users: dict[int, dict] = {}
        self.orders: dict[int, dict] = {}
        self.order_items: dict[int, dict] = {}
        self.executed: list[str] = []
        self.decrement_delay = 0.0
        self._order_ids = itertools.count(1)
        self._item_ids = itertools.count(1)
        self._row_locks: dict[int, threading.Lock] = {}
        self._failures: list[dict] = []
        self._clock = datetime(2026, 1, 1, 12, 0, 0)

    # ── Seeding ───────────────────────────────────────────

    def add_product(self, product_id: int, stock: int, price: str = "10.00") -> None:
        self.products[product_id] = {"stock": stock, "price": Decimal(price)}

    def add_user(self, user_id: int, email: str, name: str) -> None:
        self.users[user_id] = {"email": email, "name": name}

    def stock(self, product_id: int) -> int:
        return self.products[product_id]["stock"]

    # ── Failure injection ─────────────────────────────────

    def fail_on(self, sql: str, error: Exception, call: int = 1, drop_connection: bool = False):
        """Raise `error` on the `call`-th execution of `sql` (or COMMIT)."""
        self._failures.append(
            {"sql": sql, "error": error, "call": call, "drop": drop_connection, "seen": 0}
        )

    def maybe_fail(self, conn, sql: str) -> None:
        with self.lock:
            for failure in self._failures:
                if failure["sql"] is not sql:
                    continue
                failure["seen"] += 1
                if failure["seen"] == failure["call"]:
                    break
            else:
                return
        if failure["drop"]:
            conn.drop()
        raise failure["error"]

    # ── Row locks ─────────────────────────────────────────

    def row_lock(self, product_id: int) -> threading.Lock:
        with self.lock:
            return self._row_locks.setdefault(product_id, threading.Lock())

    def now(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock


class FakeCursor:

    def __init__(self, conn: "FakeConnection"):
        self.conn = conn
        self.db = conn.db
        self.rowcount = -1
        self._rows: list[tuple] = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, params=None):
        if self.conn.closed:
            raise psycopg2.InterfaceError("connection already closed")
        with self.db.lock:
            self.db.executed.append(sql)
        self.db.maybe_fail(self.conn, sql)

        handlers = {
            INSERT_ORDER_SQL: self._insert_order,
            INSERT_ORDER_ITEM_SQL: self._insert_item,
            DECREMENT_STOCK_SQL: self._decrement,
            SELECT_STOCK_SQL: self._select_stock,
            SELECT_ORDERS_SQL: self._select_orders,
            SELECT_ORDER_BY_ID_SQL: self._select_order,
            SELECT_ITEMS_FOR_ORDERS_SQL: self._select_items,
            HEALTH_SQL: lambda params: [(2,)],
        }
        for known_sql, handler in handlers.items():
            if sql is known_sql:
                self._rows = handler(params)
                self.rowcount = len(self._rows)
                return
        raise AssertionError(f"Fake database does not understand: {sql!r}")

    def fetchone(self):
        return self._rows.pop(0) if self._rows else None

    def fetchall(self):
        rows, self._rows = self._rows, []
        return rows

    # ── Statement handlers ────────────────────────────────

    def _insert_order(self, params):
        user_id, total, address, status = params
        db = self.db
        with db.lock:
            if user_id is not None and user_id not in db.users:
                raise psycopg2.IntegrityError(
                    'insert or update on table "orders" violates foreign key constraint'
                )
            order_id = next(db._order_ids)
            db.orders[order_id] = {
                "user_id": user_id,
                "total": total,
                "shipping_address": address.adapted,
                "status": status,
                "created_at": db.now(),
            }
            self.conn.on_rollback(lambda: db.orders.pop(order_id))
        return [(order_id,)]

    def _insert_item(self, params):
        order_id, product_id, quantity, price = params
        db = self.db
        with db.lock:
            if order_id not in db.orders or product_id not in db.products:
                raise psycopg2.IntegrityError(
                    'insert or update on table "order_items" violates foreign key constraint'
                )
            item_id = next(db._item_ids)
            db.order_items[item_id] = {
                "order_id": order_id,
                "product_id": product_id,
                "quantity": quantity,
                "price_at_purchase": price,
            }
            self.conn.on_rollback(lambda: db.order_items.pop(item_id))
        return [(item_id,)]

    def _decrement(self, params):
        quantity, product_id, minimum = params
        db = self.db
        if product_id in db.products:
            self.conn.lock_row(product_id)
            if db.decrement_delay:
                time.sleep(db.decrement_delay)
        with db.lock:
            product = db.products.get(product_id)
            if product is None or product["stock"] < minimum:
                return []
            product["stock"] -= quantity

            def undo():
                product["stock"] += quantity

            self.conn.on_rollback(undo)
            return [(product["stock"],)]

    def _select_stock(self, params):
        product = self.db.products.get(params[0])
        return [(product["stock"],)] if product else []

    def _order_row(self, order_id):
        order = self.db.orders[order_id]
        user = self.db.users.get(order["user_id"], {})
        return (
            order_id, order["user_id"], order["total"], order["shipping_address"],
            order["status"], order["created_at"], user.get("email"), user.get("name"),
        )

    def _select_orders(self, params):
        with self.db.lock:
            return [self._order_row(oid) for oid in sorted(self.db.orders, reverse=True)]

    def _select_order(self, params):
        with self.db.lock:
            return [self._order_row(params[0])] if params[0] in self.db.orders else []

    def _select_items(self, params):
        wanted = set(params[0])
        with self.db.lock:
            return [
                (iid, i["order_id"], i["product_id"], i["quantity"], i["price_at_purchase"])
                for iid, i in sorted(self.db.order_items.items())
                if i["order_id"] in wanted
            ]


class FakeConnection:

    def __init__(self, db: FakeDatabase):
        self.db = db
        self.closed = 0
        self.commits = 0
        self.rollbacks = 0
        self._undo: list = []
        self._held: dict[int, threading.Lock] = {}

    def cursor(self):
        return FakeCursor(self)

    def on_rollback(self, fn) -> None:
        self._undo.append(fn)

    def lock_row(self, product_id: int) -> None:
        if product_id not in self._held:
            lock = self.db.row_lock(product_id)
            lock.acquire()
            self._held[product_id] = lock

    @property
    def in_transaction(self) -> bool:
        return bool(self._undo or self._held)

    def _end(self, undo: bool) -> None:
        if undo:
            with self.db.lock:
                for fn in reversed(self._undo):
                    fn()
        self._undo.clear()
        for lock in self._held.values():
            lock.release()
        self._held.clear()

    def commit(self):
        if self.closed:
            raise psycopg2.InterfaceError("connection already closed")
        self.db.maybe_fail(self, COMMIT)
        self._end(undo=False)
        self.commits += 1

    def rollback(self):
        if self.closed:
            raise psycopg2.InterfaceError("connection already closed")
        self._end(undo=True)
        self.rollbacks += 1

    def drop(self):
        """Simulate the server going away: it aborts the open transaction."""
        self._end(undo=True)
        self.closed = 2

    def close(self):
        if not self.closed:
            self._end(undo=True)
            self.closed = 1


class FakeRawPool:
    """Mimics psycopg2.pool.ThreadedConnectionPool's getconn/putconn contract."""

    def __init__(self, db: FakeDatabase, maxconn: int):
        self.db = db
        self.maxconn = maxconn
        self.discarded = 0
        self.connect_error = None
        self._lock = threading.Lock()
        self._idle: list[FakeConnection] = []
        self._used: set[int] = set()

    def getconn(self):
        with self._lock:
            if self.connect_error is not None:
                raise self.connect_error
            if len(self._used) >= self.maxconn:
                raise pg_pool.PoolError("connection pool exhausted")
            conn = self._idle.pop() if self._idle else FakeConnection(self.db)
            self._used.add(id(conn))
            return conn

    def putconn(self, conn, close=False):
        with self._lock:
            if id(conn) not in self._used:
                raise pg_pool.PoolError("trying to put unkeyed connection")
            self._used.discard(id(conn))
            if close or conn.closed:
                conn.close()
                self.discarded += 1
                return
            # psycopg2 rolls back connections returned mid-transaction
            if conn.in_transaction:
                conn.rollback()
            self._idle.append(conn)

    def closeall(self):
        with self._lock:
            for conn in self._idle:
                conn.close()
            self._idle.clear()


@pytest.fixture
def fake_db() -> FakeDatabase:
    db = FakeDatabase()
    db.add_product(7, stock=10, price="15.00")
    db.add_product(8, stock=5, price="4.50")
    db.add_product(9, stock=1, price="99.99")
    db.add_user(1, "ana@example.com", "Ana")
    return db


@pytest.fixture
def raw_pool(fake_db) -> FakeRawPool:
    return FakeRawPool(fake_db, maxconn=4)


@pytest.fixture
def pool(raw_pool) -> ConnectionPool:
    return ConnectionPool(raw_pool, max_conn=4, acquire_timeout=0.5)
