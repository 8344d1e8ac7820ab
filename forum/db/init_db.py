# forum/db/init_db.py
import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from forum.core.config import Settings
from forum.core.security import hash_password
from forum.db.base import Base

# 👇 importa todos los modelos que deben existir en la DB
from forum.users.models import User, UserRole
from forum.topics.models import Topic  # noqa: F401
from forum.comments.models import Comment  # noqa: F401
from forum.likes.models import Like  # noqa: F401
from forum.users import repository as users_repo

log = logging.getLogger("uvicorn")


async def init_models(engine: AsyncEngine) -> None:
    """
    Crea/verifica todas las tablas declaradas en Base.metadata
    """
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        log.info("✅ DB init: tablas creadas/verificadas.")
    except Exception:
        log.exception("❌ DB init falló")
        raise


async def ensure_admin(
    sessionmaker: async_sessionmaker[AsyncSession],
    cfg: Settings,
) -> User | None:
    """
    Crea el administrador inicial si hay ADMIN_PASSWORD y el email no existe.
    Si ya existe no lo toca (ni rol ni contraseña).
    """
    if not cfg.ADMIN_PASSWORD:
        return None

    email = cfg.ADMIN_EMAIL.strip().lower()
    async with sessionmaker() as db:
        existing = await users_repo.get_by_email(db, email)
        if existing:
            return existing
        admin = await users_repo.create_user(
            db,
            username=cfg.ADMIN_USERNAME,
            email=email,
            hashed_password=hash_password(cfg.ADMIN_PASSWORD),
            role=UserRole.ADMIN.value,
        )
        await db.commit()
        log.info(f"👑 administrador creado: {admin.username} ({admin.email})")
        return admin
