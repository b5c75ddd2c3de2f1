"""Post Routes — feed, post lifecycle, likes and comments. All routes require a token.

Invariants:
    - Not-found is reported before ownership (load -> authorize)
    - Liking twice -> 400 "post already liked"; unliking a post never liked ->
      400 "post has not yet been liked"; the like list is unchanged in both cases
    - A comment is removed by its own "_id", by its author or the post owner
    - Malformed post ids are reported as 404 "Post not found"
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from devconnector.api.pipeline import get_posts, get_users, parse_id, pipeline
from devconnector.core.domain_types import Action, RequestContext
from devconnector.core.enforce_ownership import require_allowed
from devconnector.core.errors import ResourceNotFoundError
from devconnector.core.sub_entries import (
    add_like, find_entry, prepend_entry, remove_entry, remove_like,
)
from devconnector.core.validate_payload import required
from devconnector.models.post import Post
from devconnector.repositories.posts import PostRepository
from devconnector.repositories.users import UserRepository
from devconnector.schemas.post import (
    CommentCreate, CommentEntry, LikeEntry, PostCreate, PostResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/posts", tags=["posts"])

TEXT_RULES = (required("text", "text is required"),)


async def get_post_or_404(raw_id: str, posts: PostRepository) -> Post:
    post = await posts.get(parse_id(raw_id, "Post"))
    if post is None:
        raise ResourceNotFoundError("Post", raw_id)
    return post


async def _author_or_404(ctx: RequestContext, users: UserRepository):
    user = await users.get(ctx.user_id)
    if user is None:
        raise ResourceNotFoundError("User", str(ctx.user_id))
    return user


@router.post("", response_model=PostResponse)
async def create_post(
    ctx: RequestContext = Depends(pipeline(*TEXT_RULES, schema=PostCreate)),
    posts: PostRepository = Depends(get_posts),
    users: UserRepository = Depends(get_users),
):
    author = await _author_or_404(ctx, users)
    return await posts.create(
        user_id=author.id, text=ctx.body.text, name=author.name,
        avatar=author.avatar,
    )


@router.get("", response_model=list[PostResponse])
async def list_posts(
    ctx: RequestContext = Depends(pipeline()),
    posts: PostRepository = Depends(get_posts),
):
    return await posts.list_all()


@router.get("/{id}", response_model=PostResponse)
async def get_post(
    ctx: RequestContext = Depends(pipeline()),
    posts: PostRepository = Depends(get_posts),
):
    return await get_post_or_404(ctx.params["id"], posts)


@router.delete("/{id}")
async def delete_post(
    ctx: RequestContext = Depends(pipeline()),
    posts: PostRepository = Depends(get_posts),
):
    post = await get_post_or_404(ctx.params["id"], posts)
    require_allowed(ctx.identity, Action.DELETE_POST, post.user_id)
    await posts.delete(post)
    return {"msg": "Post deleted"}


@router.put("/like/{id}", response_model=list[LikeEntry])
async def like_post(
    ctx: RequestContext = Depends(pipeline()),
    posts: PostRepository = Depends(get_posts),
):
    post = await get_post_or_404(ctx.params["id"], posts)
    post.like = add_like(post.like, ctx.user_id)
    await posts.save(post)
    return post.like


@router.put("/unlike/{id}", response_model=list[LikeEntry])
async def unlike_post(
    ctx: RequestContext = Depends(pipeline()),
    posts: PostRepository = Depends(get_posts),
):
    post = await get_post_or_404(ctx.params["id"], posts)
    post.like = remove_like(post.like, ctx.user_id)
    await posts.save(post)
    return post.like


@router.post("/comment/{id}", response_model=list[CommentEntry])
async def add_comment(
    ctx: RequestContext = Depends(
        pipeline(*TEXT_RULES, schema=CommentCreate),
    ),
    posts: PostRepository = Depends(get_posts),
    users: UserRepository = Depends(get_users),
):
    post = await get_post_or_404(ctx.params["id"], posts)
    author = await _author_or_404(ctx, users)
    post.comments, _ = prepend_entry(post.comments, {
        "user": str(author.id),
        "text": ctx.body.text,
        "name": author.name,
        "avatar": author.avatar,
        "date": datetime.now(timezone.utc).isoformat(),
    })
    await posts.save(post)
    return post.comments


@router.delete("/comment/{id}/{comment_id}", response_model=list[CommentEntry])
async def delete_comment(
    ctx: RequestContext = Depends(pipeline()),
    posts: PostRepository = Depends(get_posts),
):
    post = await get_post_or_404(ctx.params["id"], posts)
    comment = find_entry(post.comments, ctx.params["comment_id"])
    if comment is None:
        raise ResourceNotFoundError("Comment", ctx.params["comment_id"])
    require_allowed(
        ctx.identity, Action.DELETE_COMMENT, post.user_id, comment.get("user"),
    )
    post.comments, _ = remove_entry(post.comments, comment["_id"])
    await posts.save(post)
    return post.comments
