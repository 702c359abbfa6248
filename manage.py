#!/usr/bin/env python3
"""
Stockroom management CLI.

Usage:
    python manage.py serve       Migrate the database and start the API server
    python manage.py migrate     Apply pending schema migrations
    python manage.py status      Show schema version and pending migrations
    python manage.py check       Verify schema integrity and reconcile stock
"""

import argparse
import asyncio
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent


def _db_path(args: argparse.Namespace) -> Path | None:
    return Path(args.db) if getattr(args, "db", None) else None


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the API under uvicorn. Migrations run in the app lifespan."""
    import uvicorn

    from stockroom.config import get_settings

    settings = get_settings()
    host = args.host or settings.api.host
    port = args.port or settings.api.port

    print(f"Starting server on {host}:{port}...")
    uvicorn.run(
        "stockroom.api.main:app",
        host=host,
        port=port,
        reload=args.reload,
        workers=None if args.reload else args.workers,
    )


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply pending migrations, backing up the database first."""
    from stockroom.infrastructure.storage.sqlite.migrations import initialize_database

    results = asyncio.run(
        initialize_database(_db_path(args), create_backup_before=not args.no_backup)
    )
    if not results:
        print("Database is up to date.")
        return

    for result in results:
        state = "ok" if result.success else f"FAILED: {result.error}"
        print(f"  v{result.version} {result.name} ({result.execution_time_ms} ms) {state}")

    if any(not r.success for r in results):
        sys.exit(1)
    print(f"Applied {len(results)} migration(s).")


def cmd_status(args: argparse.Namespace) -> None:
    """Print the current schema version."""
    from stockroom.infrastructure.storage.sqlite.migrations import get_migration_status

    status = asyncio.run(get_migration_status(_db_path(args)))
    if not status["exists"]:
        print("Database does not exist yet. Run 'migrate' or 'serve'.")
    else:
        print(f"Current version: {status['current_version'] or 'none'}")
        print(f"Applied:         {', '.join(status['applied_migrations']) or '-'}")
    print(f"Pending:         {', '.join(status['pending_migrations']) or '-'}")


async def _run_checks(db_path: Path | None) -> bool:
    from stockroom.application.use_cases.reconcile_stock import ReconcileStockUseCase
    from stockroom.infrastructure.storage.sqlite import (
        SQLiteInventoryStore,
        close_pool,
    )
    from stockroom.infrastructure.storage.sqlite.connection import ConnectionPool
    from stockroom.infrastructure.storage.sqlite.migrations import verify_schema_integrity

    healthy = True
    for check in await verify_schema_integrity(db_path):
        print(f"  [{check['status']}] {check['check']}")
        healthy = healthy and check["status"] == "PASS"

    pool = ConnectionPool(db_path) if db_path else None
    try:
        store = SQLiteInventoryStore(pool) if pool else None
        result = await ReconcileStockUseCase(store).execute()
    finally:
        if pool:
            await pool.close()
        else:
            await close_pool()

    if result.balanced:
        print("  [PASS] stock_reconciliation")
    else:
        healthy = False
        print(f"  [FAIL] stock_reconciliation ({len(result.discrepancies)} product(s))")
        for d in result.discrepancies:
            print(
                f"    {d.sku}: recorded {d.recorded_stock}, "
                f"ledger {d.ledger_stock} (diff {d.difference:+d})"
            )
    return healthy


def cmd_check(args: argparse.Namespace) -> None:
    """Verify schema integrity and that every balance matches its ledger."""
    print("Running checks...")
    if not asyncio.run(_run_checks(_db_path(args))):
        sys.exit(1)
    print("All checks passed.")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Stockroom management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", default=None, help="Bind host (default: from settings)")
    p_serve.add_argument("--port", type=int, default=None, help="Bind port (default: from settings)")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.add_argument("--workers", type=int, default=1, help="Number of uvicorn workers")
    p_serve.set_defaults(func=cmd_serve)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.add_argument("--db", default=None, help="Database path (default: from settings)")
    p_migrate.add_argument("--no-backup", action="store_true", help="Skip the pre-migration backup")
    p_migrate.set_defaults(func=cmd_migrate)

    # status
    p_status = sub.add_parser("status", help="Show migration status")
    p_status.add_argument("--db", default=None, help="Database path (default: from settings)")
    p_status.set_defaults(func=cmd_status)

    # check
    p_check = sub.add_parser("check", help="Verify schema and reconcile stock")
    p_check.add_argument("--db", default=None, help="Database path (default: from settings)")
    p_check.set_defaults(func=cmd_check)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
