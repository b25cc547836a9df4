"""
Cria as tabelas do modelo no banco configurado (DATABASE_URL).

Executar com: casadf-sync-db [--drop]
"""
import asyncio
import logging

import click

from casadf.domain.entities import Base
from casadf.infrastructure.database import dispose_engine, drop_db, get_engine, init_db
from casadf.infrastructure.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def sync_db(drop: bool = False) -> None:
    engine = get_engine()
    try:
        if drop:
            logger.warning("🧨 Removendo todas as tabelas...")
            await drop_db(engine)
        await init_db(engine)
        logger.info(f"✅ {len(Base.metadata.tables)} tabelas verificadas: {', '.join(sorted(Base.metadata.tables))}")
    finally:
        await dispose_engine()


@click.command()
@click.option("--drop", is_flag=True, help="Remove as tabelas antes de criar")
def main(drop: bool):
    """Sincroniza o schema do CasaDF."""
    setup_logging()
    asyncio.run(sync_db(drop=drop))
    click.echo("✓ Schema sincronizado")


if __name__ == "__main__":
    main()
