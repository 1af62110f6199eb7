# =============================================================================
# app/routers/articles.py - Article Endpoints
# =============================================================================
# Thin article routes. Handlers acknowledge the request and report the acting
# identity; storage is owned by another service.
#
# Write routes are protected through the registry ("/api/articles/update/:id"
# etc.), not through per-route dependencies.
# =============================================================================

from typing import Any, Optional

from fastapi import APIRouter, Depends, Path
from pydantic import BaseModel, Field

from app.auth import AuthUser, CurrentUser, get_current_user_optional

router = APIRouter()


# =============================================================================
# Request/Response Models
# =============================================================================

class ArticleIn(BaseModel):
    """Article fields accepted on create/update."""
    title: Optional[str] = Field(default=None, examples=["Hello world"])
    body: Optional[str] = Field(default=None, examples=["First post"])
    tags: list[str] = Field(default_factory=list)


class ArticleAck(BaseModel):
    """Acknowledgement returned by article routes."""
    action: str
    article_id: Optional[str] = None
    user_id: Optional[str] = None
    article: Optional[dict[str, Any]] = None


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=ArticleAck)
async def list_articles(
    user: Optional[AuthUser] = Depends(get_current_user_optional),
) -> ArticleAck:
    """List articles. Public."""
    return ArticleAck(action="list", user_id=user.id if user else None)


@router.get("/{article_id}", response_model=ArticleAck)
async def get_article(
    article_id: str = Path(..., description="Article ID"),
    user: Optional[AuthUser] = Depends(get_current_user_optional),
) -> ArticleAck:
    """Get a single article. Public."""
    return ArticleAck(action="get", article_id=article_id, user_id=user.id if user else None)


@router.post("/create", response_model=ArticleAck, status_code=201)
async def create_article(article: ArticleIn, user: CurrentUser) -> ArticleAck:
    """Create an article as the authenticated user."""
    return ArticleAck(action="create", user_id=user.id, article=article.model_dump())


@router.api_route("/update/{article_id}", methods=["PUT", "POST"], response_model=ArticleAck)
async def update_article(
    article: ArticleIn,
    user: CurrentUser,
    article_id: str = Path(..., description="Article ID"),
) -> ArticleAck:
    """Update an article as the authenticated user."""
    return ArticleAck(
        action="update",
        article_id=article_id,
        user_id=user.id,
        article=article.model_dump(exclude_unset=True),
    )


@router.delete("/delete/{article_id}", response_model=ArticleAck)
async def delete_article(
    user: CurrentUser,
    article_id: str = Path(..., description="Article ID"),
) -> ArticleAck:
    """Delete an article as the authenticated user."""
    return ArticleAck(action="delete", article_id=article_id, user_id=user.id)
