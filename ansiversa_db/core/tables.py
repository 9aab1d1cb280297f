"""Core tenant schema: users and their subscriptions."""

from ansiversa_db.db.schema import (
    TableDefinition,
    TableOperations,
    index_statements,
    normalize,
    operation_map,
    table_statements,
)

USER_COLUMNS = ("id", "email", "name", "created_at", "updated_at")
SUBSCRIPTION_COLUMNS = (
    "id", "user_id", "plan", "status", "period_start", "period_end", "created_at", "updated_at",
)

CORE_TABLES = (
    TableDefinition(
        name="users",
        description="Global users shared by every app.",
        create_statement=normalize("""
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                email TEXT NOT NULL UNIQUE,
                name TEXT,
                created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
                updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
            );
        """),
        indexes=(
            "CREATE INDEX IF NOT EXISTS idx_users_email ON users(email);",
        ),
        operations=TableOperations(
            insert=normalize("""
                INSERT INTO users (id, email, name)
                VALUES (?, ?, ?)
                RETURNING id, email, name, created_at, updated_at;
            """),
            update=normalize("""
                UPDATE users
                SET email = COALESCE(?, email),
                    name = COALESCE(?, name),
                    updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                RETURNING id, email, name, created_at, updated_at;
            """),
            delete="DELETE FROM users WHERE id = ?;",
        ),
    ),
    TableDefinition(
        name="subscriptions",
        description="User subscriptions and plan status.",
        create_statement=normalize("""
            CREATE TABLE IF NOT EXISTS subscriptions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL,
                plan TEXT NOT NULL,
                status TEXT NOT NULL CHECK (status IN ('active','cancelled','expired')),
                period_start TEXT,
                period_end TEXT,
                created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
                updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE ON UPDATE CASCADE
            );
        """),
        indexes=(
            "CREATE INDEX IF NOT EXISTS idx_subscriptions_user_id ON subscriptions(user_id);",
            "CREATE INDEX IF NOT EXISTS idx_subscriptions_status ON subscriptions(status);",
        ),
        operations=TableOperations(
            insert=normalize("""
                INSERT INTO subscriptions (user_id, plan, status, period_start, period_end)
                VALUES (?, ?, COALESCE(?, 'active'), ?, ?)
                RETURNING id, user_id, plan, status, period_start, period_end, created_at, updated_at;
            """),
            update=normalize("""
                UPDATE subscriptions
                SET plan = COALESCE(?, plan),
                    status = COALESCE(?, status),
                    period_start = COALESCE(?, period_start),
                    period_end = COALESCE(?, period_end),
                    updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                RETURNING id, user_id, plan, status, period_start, period_end, created_at, updated_at;
            """),
            delete="DELETE FROM subscriptions WHERE id = ?;",
        ),
    ),
)

CORE_TABLE_STATEMENTS = table_statements(CORE_TABLES)
CORE_INDEX_STATEMENTS = index_statements(CORE_TABLES)
CORE_OPERATIONS = operation_map(CORE_TABLES)
