"""
Calculadora CLI

Command-line interface for database administration.

Commands:
- init-db: Create all tables (development; production runs alembic)
- seed: Create or refresh the default admin and user accounts
- list-users: List registered users
- set-role: Change a user's role
"""

import os
from typing import Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.table import Table

from calculadora.core.database import get_engine, get_sessionmaker, init_db
from calculadora.core.security import get_password_hasher
from calculadora.models import Role

app = typer.Typer(
    name="calculadora-cli",
    help="Calculadora API administration CLI",
)

console = Console()


def get_db():
    """Get database session."""
    return get_sessionmaker()()


@app.command("init-db")
def init_database():
    """Create all tables in DATABASE_URL."""
    init_db(get_engine())
    rprint("[green]Tables created[/green]")


@app.command()
def seed(
    admin_email: str = typer.Option("ti@uprealiza.com.br", help="Admin account email"),
    admin_password: Optional[str] = typer.Option(
        None, help="Admin password (default: SEED_ADMIN_PASSWORD)"
    ),
    user_email: str = typer.Option("gabriel@uprealiza.com", help="Regular account email"),
    user_password: Optional[str] = typer.Option(
        None, help="User password (default: SEED_USER_PASSWORD)"
    ),
):
    """
    Upsert the default accounts.

    Existing accounts (matched by email) get their name, password and role
    refreshed; missing ones are created.
    """
    admin_password = admin_password or os.getenv("SEED_ADMIN_PASSWORD")
    user_password = user_password or os.getenv("SEED_USER_PASSWORD")
    if not admin_password or not user_password:
        rprint("[red]Passwords required: use --admin-password/--user-password or SEED_* env vars[/red]")
        raise typer.Exit(1)

    accounts = [
        ("TI Uprealiza", admin_email, admin_password, Role.ADMIN.value),
        ("Gabriel UPimoveis", user_email, user_password, Role.USER.value),
    ]

    from calculadora.persistence import UsuarioRepository

    hasher = get_password_hasher()
    db = get_db()

    try:
        repo = UsuarioRepository(db)
        for nome, email, senha, role in accounts:
            password_hash = hasher.hash(senha)
            existing = repo.get_by_email(email)
            if existing:
                repo.update(existing, nome=nome, password_hash=password_hash, role=role)
            else:
                repo.create(nome=nome, email=email, password_hash=password_hash, role=role)
            rprint(f"[green]Upserted user {email}[/green] ({role})")

        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@app.command()
def list_users():
    """List all users, newest first."""
    from calculadora.persistence import UsuarioRepository

    db = get_db()

    try:
        usuarios = UsuarioRepository(db).list_all()

        if not usuarios:
            rprint("[yellow]No users found[/yellow]")
            return

        table = Table(title="Users")
        table.add_column("ID", style="cyan")
        table.add_column("Name")
        table.add_column("Email")
        table.add_column("Role", style="magenta")
        table.add_column("Created")

        for usuario in usuarios:
            table.add_row(
                str(usuario.id),
                usuario.nome,
                usuario.email,
                usuario.role,
                usuario.created_at.strftime("%Y-%m-%d %H:%M") if usuario.created_at else "-",
            )

        console.print(table)

    finally:
        db.close()


@app.command()
def set_role(
    email: str = typer.Argument(..., help="User email"),
    role: Role = typer.Argument(..., help="New role"),
):
    """Change a user's role. Takes effect on the user's next request."""
    from calculadora.persistence import UsuarioRepository

    db = get_db()

    try:
        repo = UsuarioRepository(db)
        usuario = repo.get_by_email(email)

        if not usuario:
            rprint(f"[red]No user found for email: {email}[/red]")
            raise typer.Exit(1)

        repo.update(usuario, role=role.value)
        db.commit()

        rprint(f"[green]{email} is now {role.value}[/green]")

    finally:
        db.close()


if __name__ == "__main__":
    app()
