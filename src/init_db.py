import logging

import click
from sqlmodel import Session

from core.config import settings
from core.db import create_tables, get_engine, init_db
from log import setup_logging_to_console, setup_logging_to_file

logger = logging.getLogger("init_db")


@click.command()
@click.option("--seed/--no-seed", default=True, help="Insert demo fund data")
@click.option("--drop", is_flag=True, default=False, help="Drop all tables first")
def main(seed: bool, drop: bool):
    setup_logging_to_console(level=settings.LOG_LEVEL)
    if settings.LOG_DIR:
        setup_logging_to_file("init_db", logger=logger, log_dir=settings.LOG_DIR)

    try:
        engine = get_engine()
        if drop:
            logger.warning("Dropping all tables")
            create_tables(engine, drop=True)

        with Session(engine) as session:
            init_db(session, seed=seed)
        logger.info("Database initialised (seed=%s)", seed)
    except Exception as e:
        logger.error("An error occurred while initialising the database: %s", e, exc_info=True)
        raise e


if __name__ == "__main__":
    main()
