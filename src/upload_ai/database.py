"""Engine creation, schema setup and prompt seeding."""


from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine, select

from upload_ai.config import load_config
from upload_ai.db_models import Prompt
from upload_ai.logging import setup_logging

logger = setup_logging()

YOUTUBE_TITLE_TEMPLATE = """Seu papel é gerar três títulos para um vídeo do YouTube.

Abaixo você receberá uma transcrição desse vídeo, use essa transcrição para gerar os títulos.

Os títulos devem ter no máximo 60 caracteres.
Os títulos devem ser chamativos e atrativos para maximizar os cliques.

Retorne APENAS os três títulos em formato de lista como no exemplo abaixo:
'''
- Título 1
- Título 2
- Título 3
'''

Transcrição:
'''
{transcription}
'''"""

YOUTUBE_DESCRIPTION_TEMPLATE = """Seu papel é gerar uma descrição sucinta para um vídeo do YouTube.

Abaixo você receberá uma transcrição desse vídeo, use essa transcrição para gerar a descrição.

A descrição deve possuir no máximo 80 palavras em primeira pessoa contendo os pontos principais do vídeo.

Use palavras chamativas e que cativam a atenção de quem está lendo.

Além disso, no final da descrição inclua uma lista de 3 até 10 hashtags em letra minúscula contendo palavras-chave do vídeo.

O retorno deve seguir o seguinte formato:
'''
Descrição.

#hashtag1 #hashtag2 #hashtag3 ...
'''

Transcrição:
'''
{transcription}
'''"""

DEFAULT_PROMPTS = [
    ("Título do YouTube", YOUTUBE_TITLE_TEMPLATE),
    ("Descrição do YouTube", YOUTUBE_DESCRIPTION_TEMPLATE),
]


def get_engine(url: str) -> Engine:
    return create_engine(url)


def init_db(engine: Engine) -> None:
    SQLModel.metadata.create_all(engine)


def seed_prompts(engine: Engine, prompts=DEFAULT_PROMPTS) -> int:
    """
    Inserts the given prompt templates when the prompts table is empty.

    Returns:
        The number of templates inserted (0 if the table was already seeded).
    """
    with Session(engine) as db_session:
        if db_session.exec(select(Prompt)).first() is not None:
            logger.info("Prompts already seeded")
            return 0

        for title, template in prompts:
            db_session.add(Prompt(title=title, template=template))
        db_session.commit()

    logger.info("Prompts seeded", extra={"count": len(prompts)})
    return len(prompts)


def main():
    """Creates the schema and seeds the default prompt templates."""
    config = load_config()
    engine = get_engine(config.database.url)
    init_db(engine)
    seed_prompts(engine)


if __name__ == "__main__":
    main()
