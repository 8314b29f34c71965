"""Generate users, store them and print the table."""

import random

import typer
from loguru import logger
from rich.markup import escape
from rich.panel import Panel

from usergen.core.services.database import DbSessionService
from usergen.core.services.user import UserGenerator, UserStore
from usergen.runtime.config.config_data import ConfigData
from usergen.runtime.context import get_config
from usergen.runtime.logging_setup import configure_default_logging, configure_logging

from .display import RULE, render_users
from .utils import console, print_plain, wait_for_keypress

KEYPRESS_PROMPT = "Нажмите Enter для выхода..."

app = typer.Typer(
    help="👥 Generate synthetic users and store them in SQLite",
    add_completion=False,
    rich_markup_mode="rich",
)


def build_generator(config: ConfigData, seed: int | None = None) -> UserGenerator:
    gen_config = config.generator
    return UserGenerator(
        random.Random(seed if seed is not None else gen_config.seed),
        min_age=gen_config.min_age,
        max_age=gen_config.max_age,
        attempts_factor=gen_config.attempts_factor,
    )


def run_pipeline(store: UserStore, generator: UserGenerator, count: int) -> None:
    """Initialize the schema, generate ``count`` users, save them and print all rows."""
    store.init_schema()
    console.print("[green]✅ База данных создана[/green]")

    generation = generator.generate_batch(count)
    console.print(f"Сгенерировано: {len(generation.users)} пользователей")

    if not generation.users:
        console.print("[red]❌ Не удалось сгенерировать пользователей[/red]")
        return

    if not generation.complete:
        console.print(
            f"[yellow]⚠️  Сгенерировано {len(generation.users)} из {generation.requested} "
            f"за {generation.attempts} попыток[/yellow]"
        )

    console.print("\n💾 Сохранение в базу данных...")
    report = store.save_all(generation.users)
    console.print(f"📊 Сохранено: {report} пользователей")
    if report.skipped:
        console.print(f"[yellow]⚠️  Дубликатов пропущено: {report.skipped}[/yellow]")
    if report.failed:
        console.print(f"[red]❌ Ошибок сохранения: {report.failed}[/red]")

    console.print()
    print_plain(render_users(store.list_all()))


def setup_logging() -> None:
    """Apply the configured logging, falling back to console defaults if it is rejected."""
    try:
        configure_logging()
    except Exception as e:
        configure_default_logging()
        logger.warning("Logging configuration rejected, using defaults: {}", e)


@app.command()
def generate(
    count: int | None = typer.Option(
        None, "--count", "-n", min=0, help="Number of users to generate"
    ),
    seed: int | None = typer.Option(None, "--seed", help="Random seed for reproducible output"),
    database_url: str | None = typer.Option(
        None, "--database-url", help="Override the configured database URL"
    ),
    wait: bool = typer.Option(
        True, "--wait/--no-wait", help="Wait for a keypress before exiting"
    ),
) -> None:
    """
    🚀 Generate users, save them to the database and list every stored user.

    Errors, configuration errors included, are reported and the command still
    exits normally.
    """
    setup_logging()

    console.print(
        Panel.fit(
            "[bold cyan]🚀 Генерация пользователей и сохранение в SQLite[/bold cyan]",
            border_style="cyan",
        )
    )

    wait_for_key = True
    try:
        config = get_config()
        wait_for_key = config.cli.wait_for_key

        db_config = config.database
        if database_url:
            db_config = db_config.model_copy(update={"url": database_url})

        db = DbSessionService(db_config)
        try:
            run_pipeline(
                UserStore(db),
                build_generator(config, seed),
                count if count is not None else config.generator.count,
            )
        finally:
            db.dispose()
    except Exception as e:
        logger.exception("Run aborted")
        console.print(f"[red]💥 Ошибка: {escape(str(e))}[/red]")

    console.print(f"\n{RULE}\n🎉 Готово!", highlight=False)
    if wait and wait_for_key:
        wait_for_keypress(KEYPRESS_PROMPT)


def main() -> None:
    """Main entry point for the CLI."""
    app()
