#!/usr/bin/env python3
"""
CLI для обслуживания блога.

Использование:
    personal-blog init-db
    personal-blog reset-db --yes
    personal-blog serve --host 0.0.0.0 --port 8000
"""

import asyncio
import sys

import click
from rich.console import Console

from personal_blog.infrastructure.config.database import get_engine
from personal_blog.infrastructure.config.logging_config import setup_logging
from personal_blog.infrastructure.config.settings import get_settings
from personal_blog.infrastructure.persistence.migrations import init_database, reset_database
from personal_blog.shared.exceptions.infrastructure_exceptions import DatabaseError

console = Console()


async def _run_migration(reset: bool) -> None:
    engine = get_engine()
    try:
        if reset:
            await reset_database(engine)
        else:
            await init_database(engine)
    finally:
        await engine.dispose()


@click.group()
def cli():
    """Personal Blog CLI."""
    setup_logging(get_settings().log_level)


@cli.command("init-db")
def init_db():
    """Создать таблицы и поисковые индексы (повторный запуск безопасен)."""
    console.print("\n🚀 [bold green]Инициализация базы данных[/bold green]")
    try:
        asyncio.run(_run_migration(reset=False))
    except DatabaseError as exc:
        console.print(f"[bold red]❌ {exc.message}[/bold red]\n")
        sys.exit(1)
    console.print("✅ [bold green]Готово![/bold green]\n")


@cli.command("reset-db")
@click.option("--yes", is_flag=True, help="Подтвердить удаление всех данных")
def reset_db(yes: bool):
    """
    Удалить все таблицы и создать заново.

    Пример:
        personal-blog reset-db --yes
    """
    if not yes:
        console.print("[yellow]⚠️  Все данные будут удалены. Повторите с --yes[/yellow]\n")
        sys.exit(1)

    console.print("\n🗑  [bold yellow]Сброс базы данных[/bold yellow]")
    try:
        asyncio.run(_run_migration(reset=True))
    except DatabaseError as exc:
        console.print(f"[bold red]❌ {exc.message}[/bold red]\n")
        sys.exit(1)
    console.print("✅ [bold green]Таблицы пересозданы[/bold green]\n")


@cli.command()
@click.option("--host", default="127.0.0.1", help="Адрес")
@click.option("--port", default=8000, help="Порт")
@click.option("--reload", is_flag=True, help="Перезапуск при изменении кода")
def serve(host: str, port: int, reload: bool):
    """Запустить API (uvicorn)."""
    import uvicorn

    console.print(f"\n🚀 [bold green]Personal Blog API[/bold green] http://{host}:{port}\n")
    uvicorn.run("personal_blog.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    cli()
