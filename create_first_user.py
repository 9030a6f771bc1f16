import logging
import os

from sqlalchemy.exc import SQLAlchemyError

from amesp.database import SessionLocal
from amesp.auth import get_password_hash, ROLE_ADMIN
from amesp.models.usuario import Usuario

logger = logging.getLogger(__name__)


def create_first_user():
    """
    Cria o administrador inicial quando ainda não existe nenhum.
    Login e senha vêm de ADMIN_EMAIL / ADMIN_PASSWORD.
    """
    email = os.getenv("ADMIN_EMAIL", "admin@amesp.org.br")
    password = os.getenv("ADMIN_PASSWORD", "admin")

    db = SessionLocal()
    try:
        if db.query(Usuario).filter(Usuario.role == ROLE_ADMIN).first():
            logger.info("Administrador já existe, nada a criar.")
            return None

        db_user = Usuario(
            email=email,
            nome="Administrador AMESP",
            hashed_password=get_password_hash(password),
            role=ROLE_ADMIN
        )
        db.add(db_user)
        db.commit()
        logger.info(f"Administrador inicial criado: {email}")
        if "ADMIN_PASSWORD" not in os.environ:
            logger.warning("ADMIN_PASSWORD não definida; troque a senha padrão do administrador.")
        return db_user.id

    except SQLAlchemyError as e:
        logger.error(f"Erro ao criar administrador inicial: {e}")
        db.rollback()
        return None
    finally:
        db.close()


if __name__ == "__main__":
    from dotenv import load_dotenv

    load_dotenv()
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    create_first_user()
