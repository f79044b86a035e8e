import asyncio

import typer
import uvicorn
from pydantic import ValidationError

from src.core.database import close_db, init_db
from src.core.exceptions import ServiceException
from src.core.logging import configure_logging

app = typer.Typer(help="Management CLI for the posts API.")


# ---------------------------
# Helpers
# ---------------------------
async def _init_db():
    try:
        await init_db()
    finally:
        await close_db()


async def _create_user(username: str, password: str):
    from src.apps.users.routers.auth_router import get_user_service
    from src.apps.users.schemas.user import UserCredentials

    try:
        await init_db()
        credentials = UserCredentials(username=username, password=password)
        return await get_user_service().register(credentials)
    finally:
        await close_db()


# ---------------------------
# Commands
# ---------------------------
@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind address"),
    port: int = typer.Option(8000, help="Bind port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
):
    """Run the API with uvicorn."""
    uvicorn.run("src.main:app", host=host, port=port, reload=reload, log_level="info")


@app.command("init-db")
def init_db_command():
    """Create all database tables."""
    configure_logging()
    asyncio.run(_init_db())
    print("✅ Database tables created")


@app.command()
def create_user(
    username: str,
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
):
    """Register a user that can log in and author posts."""
    configure_logging()
    try:
        user = asyncio.run(_create_user(username, password))
    except ValidationError as e:
        print(f"❌ Invalid credentials: {e.errors()[0]['msg']}")
        raise typer.Exit(1)
    except ServiceException as e:
        print(f"❌ {e.detail}")
        raise typer.Exit(1)
    print(f"✅ Created user {user.username} (id={user.id})")


# ---------------------------
# Entrypoint
# ---------------------------
if __name__ == "__main__":
    app()
