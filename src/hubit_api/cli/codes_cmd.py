"""Community code CLI commands."""

import asyncio

import typer

codes_app = typer.Typer()


@codes_app.command("derive")
def derive(
    country: str = typer.Option(..., help="Country"),
    province: str = typer.Option(..., help="Province"),
    city: str = typer.Option(..., help="City"),
    street: str = typer.Option(..., help="Street name"),
    street_number: str = typer.Option(..., "--number", help="Street number (digits)"),
) -> None:
    """Print the community code for an address without touching the database."""
    from hubit_api.core.exceptions import ValidationError
    from hubit_api.lib.community_code import AddressTuple, derive_code, validate_address

    address = AddressTuple(
        country=country,
        province=province,
        city=city,
        street=street,
        street_number=street_number,
    )
    try:
        validate_address(address)
    except ValidationError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1) from e
    typer.echo(derive_code(address))


@codes_app.command("list")
def list_codes() -> None:
    """List stored community codes, newest first."""
    asyncio.run(_list_codes())


async def _list_codes() -> None:
    """Async implementation of community code listing."""
    from hubit_api.core.config import get_settings
    from hubit_api.core.database import dispose_engine, get_session_factory, init_engine
    from hubit_api.services.community_code_service import list_codes as list_stored_codes

    settings = get_settings()
    init_engine(settings.database_url, schema=settings.database_schema)

    try:
        factory = get_session_factory()
        async with factory() as session:
            records = await list_stored_codes(session)
            typer.echo(f"{'Code':<28} {'City':<20} {'Street':<30} {'Number':<8}")
            typer.echo("-" * 88)
            for record in records:
                typer.echo(f"{record.code:<28} {record.city:<20} {record.street:<30} {record.street_number:<8}")
            typer.echo(f"\nTotal: {len(records)}")
    finally:
        await dispose_engine()
