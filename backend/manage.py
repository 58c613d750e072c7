import asyncio
import typer
import uvicorn
from sqlalchemy.ext.asyncio import AsyncSession

import unsaid.db_models # noqa: F401

from fastapi import HTTPException
from unsaid.config import settings
from unsaid.database import async_session_factory, create_tables
from unsaid.users.service import create_user
from unsaid.users.models import User as UserModel

cli = typer.Typer()

async def create_admin_runner(username: str, email: str, password: str, db: AsyncSession) -> UserModel:
    admin_user: UserModel = await create_user(
        db,
        username=username,
        email=email,
        password=password,
        is_admin=True,
    )
    typer.echo("Admin user created successfully")
    typer.echo(f"   ID: {admin_user.id}")
    typer.echo(f"   Username: {admin_user.username}")
    typer.echo(f"   Email: {admin_user.email}")
    return admin_user


@cli.command(name="serve")
def serve(
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes (development only)."),
):
    """
    Runs the API with uvicorn on APP_HOST:APP_PORT.
    """
    uvicorn.run(
        "unsaid.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=reload,
    )


@cli.command(name="init-db")
def init_db():
    """
    Creates any missing tables (users, thoughts, tags, thought_tags).
    """
    asyncio.run(create_tables())
    typer.echo("Database tables created")


@cli.command(name="create-admin")
def createadmin(
    username: str = typer.Option(..., "--username", "-u", help="Admin's username."),
    email: str = typer.Option(..., "--email", "-e", help="Admin's email address."),
    password: str = typer.Option(..., "--password", "-p", help="Admin's secure password."),
):
    """
    Creates a new user with admin privileges in the database.
    """
    async def main():
        async with async_session_factory() as session:
            await create_admin_runner(username=username, email=email, password=password, db=session)

    try:
        asyncio.run(main())
    except HTTPException as e:
        typer.echo(f"Error creating admin user: {e.detail}", err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    cli()
