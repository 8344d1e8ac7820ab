# forum/topics/router.py
import logging
from typing import List

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    Request,
    UploadFile,
    File,
    Form,
    status,
)
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from forum.auth.dependencies import current_user
from forum.core.errors import validation_detail
from forum.db.session import get_session
from forum.media.storage import (
    UploadRejected,
    delete_uploads,
    has_file,
    save_attachment,
    save_image,
)
from forum.topics.repository import create_topic, get_topic, list_topics
from forum.topics.schemas import TopicCreate, TopicDetailOut, TopicOut
from forum.topics.service import hydrate_topic_detail, hydrate_topics, topic_to_dict
from forum.users.models import User

log = logging.getLogger("uvicorn")

router = APIRouter(prefix="/api/topics", tags=["topics"])


@router.get("", response_model=List[TopicOut])
async def topics_list(
    author_id: int | None = Query(None, alias="authorId"),
    category: str | None = Query(None),
    db: AsyncSession = Depends(get_session),
):
    topics = await list_topics(db, author_id=author_id, category=category)
    return await hydrate_topics(db, topics)


@router.get("/{topic_id}", response_model=TopicDetailOut)
async def topic_detail(
    topic_id: int,
    db: AsyncSession = Depends(get_session),
):
    topic = await get_topic(db, topic_id)
    if not topic:
        raise HTTPException(status_code=404, detail="topic not found")
    return await hydrate_topic_detail(db, topic)


@router.post("", response_model=TopicOut, status_code=status.HTTP_201_CREATED)
async def publish_topic(
    request: Request,
    title: str | None = Form(None),
    content: str | None = Form(None),
    category: str | None = Form(None),
    image: UploadFile | None = File(None),
    attachment: UploadFile | None = File(None),
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_session),
):
    """
    Crea un tema (multipart: title, content, category, image?, attachment?).
    Si algo falla se borran los ficheros que ya se hayan escrito.
    """
    cfg = request.app.state.settings
    saved: list[str] = []

    try:
        image_path = None
        if has_file(image):
            image_path = save_image(image, cfg.UPLOAD_DIR, cfg.UPLOAD_MAX_BYTES)
            saved.append(image_path)

        attachment_path = attachment_name = None
        if has_file(attachment):
            attachment_path = save_attachment(attachment, cfg.UPLOAD_DIR, cfg.UPLOAD_MAX_BYTES)
            attachment_name = attachment.filename
            saved.append(attachment_path)

        data = TopicCreate(title=title, content=content, category=category)
    except UploadRejected as e:
        delete_uploads(saved, cfg.UPLOAD_DIR)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ValidationError as e:
        delete_uploads(saved, cfg.UPLOAD_DIR)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=validation_detail(e))
    except Exception:
        delete_uploads(saved, cfg.UPLOAD_DIR)
        log.exception("❌ fallo guardando los ficheros del tema")
        raise HTTPException(status_code=500, detail="internal error")

    try:
        topic = await create_topic(
            db,
            author_id=user.id,
            title=data.title,
            content=data.content,
            category=data.category,
            image=image_path,
            attachment=attachment_path,
            attachment_name=attachment_name,
        )
        await db.commit()
    except Exception:
        await db.rollback()
        delete_uploads(saved, cfg.UPLOAD_DIR)
        log.exception("❌ no se pudo crear el tema")
        raise HTTPException(status_code=500, detail="internal error")

    log.info(f"📝 tema {topic.id} creado por {user.username}")
    return topic_to_dict(topic, user)
