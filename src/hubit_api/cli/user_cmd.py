"""User management CLI commands."""

import asyncio

import typer

from hubit_api.core.roles import UserRole

user_app = typer.Typer()


@user_app.command("create")
def create_user(
    email: str = typer.Option(..., prompt=True, help="Email address"),
    full_name: str = typer.Option(..., prompt=True, help="Full name"),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True, help="Password"),
    role: UserRole = typer.Option(UserRole.ADMINISTRATOR, prompt=True, help="User role"),
    if_not_exists: bool = typer.Option(
        False,
        "--if-not-exists",
        help="Exit successfully if user already exists (idempotent mode)",
    ),
) -> None:
    """Create a new user interactively."""
    asyncio.run(_create_user(email, full_name, password, role, if_not_exists=if_not_exists))


async def _create_user(
    email: str,
    full_name: str,
    password: str,
    role: UserRole,
    *,
    if_not_exists: bool = False,
) -> None:
    """Async implementation of user creation."""
    from hubit_api.core.config import get_settings
    from hubit_api.core.database import dispose_engine, get_session_factory, init_engine
    from hubit_api.core.exceptions import ConflictError
    from hubit_api.schemas.auth import RegisterRequest
    from hubit_api.services.auth_service import register_user

    settings = get_settings()
    init_engine(settings.database_url, schema=settings.database_schema)

    try:
        factory = get_session_factory()
        async with factory() as session:
            request = RegisterRequest(email=email, full_name=full_name, password=password, role=role)
            user = await register_user(session, request)
            typer.echo(f"User '{user.email}' created with role '{user.role}'")
    except ConflictError as e:
        if if_not_exists:
            typer.echo(f"User '{email}' already exists, skipping (--if-not-exists)")
            return
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1) from e
    finally:
        await dispose_engine()


@user_app.command("list")
def list_users() -> None:
    """List all users."""
    asyncio.run(_list_users())


async def _list_users() -> None:
    """Async implementation of user listing."""
    from hubit_api.core.config import get_settings
    from hubit_api.core.database import dispose_engine, get_session_factory, init_engine
    from hubit_api.services.auth_service import list_users

    settings = get_settings()
    init_engine(settings.database_url, schema=settings.database_schema)

    try:
        factory = get_session_factory()
        async with factory() as session:
            users, total = await list_users(session, page_size=1000)
            typer.echo(f"{'Email':<32} {'Name':<24} {'Role':<18} {'Active':<8}")
            typer.echo("-" * 84)
            for user in users:
                typer.echo(f"{user.email:<32} {user.full_name:<24} {user.role:<18} {user.is_active!s:<8}")
            typer.echo(f"\nTotal: {total}")
    finally:
        await dispose_engine()
