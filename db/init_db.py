"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import ConnectionPool
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Users table: storefront customers and admins
CREATE TABLE IF NOT EXISTS users (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(100) NOT NULL,
    email           VARCHAR(255) UNIQUE NOT NULL,
    password_hash   VARCHAR(255) NOT NULL,
    role            VARCHAR(20) NOT NULL DEFAULT 'user',
    points          INT NOT NULL DEFAULT 0,
    created_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Brands table: brand cards shown on the storefront
CREATE TABLE IF NOT EXISTS brands (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(100) NOT NULL,
    color           VARCHAR(20),
    image           TEXT,
    created_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Products table: catalogue entries; `stock` is the inventory ledger
CREATE TABLE IF NOT EXISTS products (
    id              SERIAL PRIMARY KEY,
    name_es         VARCHAR(255),
    name_en         VARCHAR(255),
    price           NUMERIC(12,2) NOT NULL DEFAULT 0,
    stock           INT NOT NULL DEFAULT 0 CHECK (stock >= 0),
    image           TEXT,
    category        VARCHAR(100),
    description_es  TEXT,
    description_en  TEXT,
    created_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Orders table: one header per checkout
CREATE TABLE IF NOT EXISTS orders (
    id                  SERIAL PRIMARY KEY,
    user_id             INT REFERENCES users(id) ON DELETE SET NULL,
    total               NUMERIC(12,2) NOT NULL CHECK (total >= 0),
    shipping_address    JSONB NOT NULL,
    status              VARCHAR(20) NOT NULL DEFAULT 'pending',
    created_at          TIMESTAMPTZ DEFAULT NOW()
);

-- Order items table: one row per line, price frozen at purchase time
CREATE TABLE IF NOT EXISTS order_items (
    id                  SERIAL PRIMARY KEY,
    order_id            INT NOT NULL REFERENCES orders(id) ON DELETE CASCADE,
    product_id          INT NOT NULL REFERENCES products(id),
    quantity            INT NOT NULL CHECK (quantity > 0),
    price_at_purchase   NUMERIC(12,2) NOT NULL CHECK (price_at_purchase >= 0)
);

-- Indexes for faster queries
CREATE INDEX IF NOT EXISTS idx_orders_created ON orders(created_at DESC);
CREATE INDEX IF NOT EXISTS idx_order_items_order ON order_items(order_id);
CREATE INDEX IF NOT EXISTS idx_products_created ON products(created_at DESC);
"""


def create_tables(pool: ConnectionPool) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    with pool.connection() as conn:
        try:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
            conn.commit()
            logger.info("Database schema initialized successfully.")
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to initialize schema: {e}")
            raise


if __name__ == "__main__":
    db_pool = ConnectionPool.from_config()
    try:
        create_tables(db_pool)
    finally:
        db_pool.close()
    print("Database schema created successfully.")
