# forum/comments/service.py
from forum.comments.models import Comment
from forum.users.models import User
from forum.users.service import author_summary


def comment_to_dict(comment: Comment, author: User | None) -> dict:
    return {
        "id": comment.id,
        "content": comment.content,
        "author_id": comment.author_id,
        "topic_id": comment.topic_id,
        "likes_count": comment.likes_count or 0,
        "created_at": comment.created_at,
        "author": author_summary(author),
    }
