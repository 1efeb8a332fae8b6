"""RBAC Admin CLI tool (rbac-admin)."""

import typer

app = typer.Typer(name="rbac-admin", help="RBAC Admin CLI")
db_app = typer.Typer(help="Database management commands")
app.add_typer(db_app, name="db")


@db_app.command("init")
def db_init():
    """Create all tables that don't exist yet."""
    from rbac_admin.db.session import init_db

    init_db()
    typer.echo("Tables created (or already exist)")


@db_app.command("seed")
def db_seed():
    """Seed default roles and the admin user."""
    from rbac_admin.db.session import SessionLocal, init_db
    from rbac_admin.db.seeds import seed_defaults

    init_db()
    db = SessionLocal()
    try:
        seed_defaults(db)
    finally:
        db.close()
    typer.echo("Seeds applied")


@db_app.command("reset")
def db_reset():
    """Drop and recreate all tables (DANGER)."""
    confirm = typer.confirm("This will DROP every table. Continue?")
    if not confirm:
        raise typer.Abort()
    from rbac_admin.db.base import Base
    from rbac_admin.db.session import engine, init_db

    import rbac_admin.models  # noqa: F401
    Base.metadata.drop_all(bind=engine)
    init_db()
    typer.echo("Database reset")


@app.command("list-roles")
def list_roles():
    """Print active roles and their permissions."""
    from rbac_admin.db.session import SessionLocal
    from rbac_admin.services.role_service import role_service

    db = SessionLocal()
    try:
        for role in role_service.list_roles(db):
            typer.echo(f"  [{role.id}] {role.name}: {', '.join(role.permissions) or '-'}")
    finally:
        db.close()


@app.command("serve")
def serve(
    host: str = typer.Option("0.0.0.0", help="Host"),
    port: int = typer.Option(8000, help="Port"),
    reload: bool = typer.Option(False, help="Auto-reload"),
):
    """Start the FastAPI development server."""
    import uvicorn
    uvicorn.run("rbac_admin.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
